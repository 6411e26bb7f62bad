from fastapi import APIRouter, status
from utils.deps import db_dependency, scope_dependency
from schemas.catalog_schemas import RestaurantResponse, MenuItemResponse
from services.catalog_service import CatalogService


router = APIRouter(
    prefix="/restaurants",
    tags=["restaurants"]
)


@router.get("", status_code=status.HTTP_200_OK, response_model=list[RestaurantResponse])
async def list_restaurants(scope: scope_dependency, db: db_dependency):
    return CatalogService.list_restaurants(db, scope)


@router.get("/{restaurant_id}", status_code=status.HTTP_200_OK, response_model=RestaurantResponse)
async def get_restaurant(restaurant_id: str, scope: scope_dependency, db: db_dependency):
    return CatalogService.get_scoped_restaurant(db, scope, restaurant_id)


@router.get("/{restaurant_id}/menu", status_code=status.HTTP_200_OK, response_model=list[MenuItemResponse])
async def get_menu(restaurant_id: str, scope: scope_dependency, db: db_dependency):
    return CatalogService.list_menu(db, scope, restaurant_id)
