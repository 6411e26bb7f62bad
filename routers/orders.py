from fastapi import APIRouter, Request, status
from utils.deps import db_dependency, scope_dependency
from schemas.order_schemas import (CreateOrderRequest, AddOrderItemRequest, CheckoutOrderRequest,
    OrderResponse, OrderDetailResponse)
from services.order_service import OrderService
from middleware.rate_limiter import limiter
from utils.logger import get_logger

# Setup logger
logger = get_logger(__name__)


router = APIRouter(
    prefix="/orders",
    tags=["orders"]
)


@router.post("", status_code=status.HTTP_201_CREATED, response_model=OrderResponse)
@limiter.limit("30/minute")
async def create_order(request: Request, body: CreateOrderRequest, scope: scope_dependency, db: db_dependency):
    """
    Open a DRAFT order. The order's country is the caller's home country;
    its currency follows the restaurant.
    """
    return OrderService.create(db, scope, body.restaurant_id)


@router.get("", status_code=status.HTTP_200_OK, response_model=list[OrderResponse])
async def list_orders(scope: scope_dependency, db: db_dependency):
    """
    ADMIN sees every order, MANAGER and MEMBER only orders of their country.
    """
    return OrderService.list_orders(db, scope)


@router.get("/{order_id}", status_code=status.HTTP_200_OK, response_model=OrderDetailResponse)
async def get_order(order_id: str, scope: scope_dependency, db: db_dependency):
    return OrderService.get(db, scope, order_id)


@router.post("/{order_id}/items", status_code=status.HTTP_200_OK, response_model=OrderDetailResponse)
@limiter.limit("60/minute")
async def add_order_item(request: Request, order_id: str, body: AddOrderItemRequest,
    scope: scope_dependency, db: db_dependency):
    """
    Add a menu item, or replace the quantity of the line already holding it.
    """
    return OrderService.add_item(db, scope, order_id, body.menu_item_id, body.quantity)


@router.delete("/{order_id}/items/{item_id}", status_code=status.HTTP_200_OK, response_model=OrderDetailResponse)
@limiter.limit("60/minute")
async def remove_order_item(request: Request, order_id: str, item_id: str,
    scope: scope_dependency, db: db_dependency):
    return OrderService.remove_item(db, scope, order_id, item_id)


@router.post("/{order_id}/checkout", status_code=status.HTTP_200_OK, response_model=OrderDetailResponse)
@limiter.limit("10/minute")
async def checkout_order(request: Request, order_id: str, body: CheckoutOrderRequest,
    scope: scope_dependency, db: db_dependency):
    """
    Settle the order (MANAGER, ADMIN). A declined payment answers 402 and
    leaves the order as it was.
    """
    return OrderService.checkout(db, scope, order_id, body.payment_method_id)


@router.post("/{order_id}/cancel", status_code=status.HTTP_200_OK, response_model=OrderDetailResponse)
@limiter.limit("10/minute")
async def cancel_order(request: Request, order_id: str, scope: scope_dependency, db: db_dependency):
    """
    Cancel the order and its payment (MANAGER, ADMIN).
    """
    return OrderService.cancel(db, scope, order_id)
