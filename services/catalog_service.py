from sqlalchemy.orm import Session
from fastapi import HTTPException
from starlette import status
from models.restaurants import Restaurant, MenuItem
from services.scope_service import AccessScope
from utils.logger import get_logger

logger = get_logger(__name__)


class CatalogService:
    """
    Read-only restaurant and menu lookups.

    The order core treats what this returns as the truth at the moment an
    item is added; menu CRUD happens elsewhere.
    """

    @staticmethod
    def get_restaurant(db: Session, restaurant_id: str) -> Restaurant | None:
        return db.query(Restaurant).filter(Restaurant.id == restaurant_id).one_or_none()

    @staticmethod
    def get_restaurant_or_404(db: Session, restaurant_id: str) -> Restaurant:
        restaurant = CatalogService.get_restaurant(db, restaurant_id)
        if not restaurant:
            logger.warning("Restaurant not found", extra={"restaurant_id": restaurant_id})
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND,
                                detail="Restaurant not found")
        return restaurant

    @staticmethod
    def get_menu_item(db: Session, menu_item_id: str) -> MenuItem | None:
        return db.query(MenuItem).filter(MenuItem.id == menu_item_id).one_or_none()

    @staticmethod
    def list_restaurants(db: Session, scope: AccessScope) -> list[Restaurant]:
        query = scope.apply(db.query(Restaurant), Restaurant.country)
        restaurants = query.order_by(Restaurant.name).all()

        logger.debug(
            "Listed restaurants",
            extra={**scope.log_context(), "count": len(restaurants)}
        )
        return restaurants

    @staticmethod
    def get_scoped_restaurant(db: Session, scope: AccessScope, restaurant_id: str) -> Restaurant:
        """A restaurant outside the caller's scope is reported as not found."""
        query = scope.apply(
            db.query(Restaurant).filter(Restaurant.id == restaurant_id),
            Restaurant.country
        )
        restaurant = query.one_or_none()
        if restaurant is None:
            logger.warning("Restaurant not found", extra={**scope.log_context(), "restaurant_id": restaurant_id})
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND,
                                detail="Restaurant not found")
        return restaurant

    @staticmethod
    def list_menu(db: Session, scope: AccessScope, restaurant_id: str) -> list[MenuItem]:
        """Available menu items of a restaurant inside the caller's scope."""
        CatalogService.get_scoped_restaurant(db, scope, restaurant_id)

        return (
            db.query(MenuItem)
            .filter(MenuItem.restaurant_id == restaurant_id, MenuItem.available == True)
            .order_by(MenuItem.name)
            .all()
        )
