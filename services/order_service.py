from sqlalchemy.orm import Session
from fastapi import HTTPException
from starlette import status
from models.orders import Order
from models.enums import OrderStatus, CURRENCY_BY_COUNTRY
from services.scope_service import AccessScope, require_write
from services.catalog_service import CatalogService
from services.order_item_service import OrderItemService
from services import order_state
from utils.logger import get_logger

logger = get_logger(__name__)


class OrderService:
    """
    Entry point for every order use case.

    Each call receives the caller's AccessScope, resolved once per request,
    and looks the order up through it; orders outside the scope are reported
    as not found.
    """

    @staticmethod
    def _get_scoped(db: Session, scope: AccessScope, order_id: str, lock: bool = False) -> Order:
        query = scope.apply(db.query(Order).filter(Order.id == order_id), Order.country)
        if lock:
            query = query.with_for_update()

        order = query.one_or_none()
        if not order:
            logger.warning("Order not found", extra={**scope.log_context(), "order_id": order_id})
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND,
                                detail="Order not found")
        return order

    @staticmethod
    def create(db: Session, scope: AccessScope, restaurant_id: str) -> Order:
        """
        Open a DRAFT order against a restaurant.

        country is the caller's home country while currency follows the
        restaurant, so a US member ordering from an Indian restaurant gets
        country=US, currency=INR.
        """
        restaurant = CatalogService.get_restaurant_or_404(db, restaurant_id)

        order = Order(
            user_id=scope.user_id,
            restaurant_id=restaurant.id,
            country=scope.country,
            currency=CURRENCY_BY_COUNTRY.get(restaurant.country, "USD"),
            status=OrderStatus.DRAFT,
            total_amount_cents=0
        )

        db.add(order)
        db.commit()
        db.refresh(order)

        logger.info(
            "Order created",
            extra={**scope.log_context(), "order_id": order.id, "restaurant_id": restaurant.id,
                   "restaurant_country": restaurant.country, "currency": order.currency}
        )
        return order

    @staticmethod
    def list_orders(db: Session, scope: AccessScope) -> list[Order]:
        query = scope.apply(db.query(Order), Order.country)
        orders = query.order_by(Order.created_at).all()

        logger.debug("Listed orders", extra={**scope.log_context(), "count": len(orders)})
        return orders

    @staticmethod
    def get(db: Session, scope: AccessScope, order_id: str) -> Order:
        return OrderService._get_scoped(db, scope, order_id)

    @staticmethod
    def add_item(db: Session, scope: AccessScope, order_id: str, menu_item_id: str, quantity: int) -> Order:
        order = OrderService._get_scoped(db, scope, order_id, lock=True)
        try:
            OrderItemService.add_item(db, order, menu_item_id, quantity)
        except HTTPException:
            db.rollback()
            raise
        return order

    @staticmethod
    def remove_item(db: Session, scope: AccessScope, order_id: str, item_id: str) -> Order:
        order = OrderService._get_scoped(db, scope, order_id, lock=True)
        try:
            OrderItemService.remove_item(db, order, item_id)
        except HTTPException:
            db.rollback()
            raise
        return order

    @staticmethod
    def checkout(db: Session, scope: AccessScope, order_id: str, payment_method_id: str) -> Order:
        require_write(scope, "checkout")
        order = OrderService._get_scoped(db, scope, order_id, lock=True)

        logger.info(
            "Checking out order",
            extra={**scope.log_context(), "order_id": order.id, "payment_method_id": payment_method_id,
                   "total_amount_cents": order.total_amount_cents, "currency": order.currency}
        )

        try:
            order = order_state.checkout(db, order, payment_method_id)
        except HTTPException:
            db.rollback()
            raise

        logger.info("Order checkout completed", extra={**scope.log_context(), "order_id": order.id})
        return order

    @staticmethod
    def cancel(db: Session, scope: AccessScope, order_id: str) -> Order:
        require_write(scope, "cancel")
        order = OrderService._get_scoped(db, scope, order_id, lock=True)

        previous_status = order.status
        try:
            order = order_state.cancel(db, order)
        except HTTPException:
            db.rollback()
            raise

        logger.info(
            "Order canceled",
            extra={**scope.log_context(), "order_id": order.id, "previous_status": previous_status.value}
        )
        return order
