from sqlalchemy import func
from sqlalchemy.orm import Session
from fastapi import HTTPException
from starlette import status
from models.orders import Order
from models.order_items import OrderItem
from models.enums import OrderStatus
from services.catalog_service import CatalogService
from utils.logger import get_logger

logger = get_logger(__name__)


class OrderItemService:
    """
    The item ledger of a DRAFT order.

    Callers hand in an order row they loaded with a row lock; every mutation
    writes the line, recomputes the total from the database and commits both
    in the same transaction, so concurrent edits of one order never leave a
    total that only reflects one of them.
    """

    @staticmethod
    def calculate_total(db: Session, order_id: str) -> int:
        total = (
            db.query(func.coalesce(func.sum(OrderItem.quantity * OrderItem.unit_price_cents), 0))
            .filter(OrderItem.order_id == order_id)
            .scalar()
        )
        return int(total)

    @staticmethod
    def _ensure_draft(order: Order):
        if order.status != OrderStatus.DRAFT:
            logger.warning(
                "Order is not in DRAFT status",
                extra={"order_id": order.id, "status": order.status.value}
            )
            raise HTTPException(status_code=422,
                                detail="Order is not in DRAFT status and cannot be modified")

    @staticmethod
    def _recalculate_total(db: Session, order: Order):
        db.flush()
        order.total_amount_cents = OrderItemService.calculate_total(db, order.id)

    @staticmethod
    def add_item(db: Session, order: Order, menu_item_id: str, quantity: int) -> OrderItem:
        """
        Add a menu item to the order, or replace the quantity of its existing line.

        A new line snapshots the catalog price; an existing line keeps the price
        it was first added at. Quantities are replaced, never summed.
        """
        OrderItemService._ensure_draft(order)

        if quantity <= 0:
            raise HTTPException(status_code=422,
                                detail="Quantity must be at least 1")

        menu_item = CatalogService.get_menu_item(db, menu_item_id)
        if not menu_item:
            logger.warning("Menu item not found", extra={"order_id": order.id, "menu_item_id": menu_item_id})
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND,
                                detail="Menu item not found")

        if not menu_item.available:
            raise HTTPException(status_code=422,
                                detail="Menu item is not available")

        if menu_item.restaurant_id != order.restaurant_id:
            logger.warning(
                "Menu item from another restaurant",
                extra={
                    "order_id": order.id,
                    "menu_item_id": menu_item_id,
                    "order_restaurant_id": order.restaurant_id,
                    "menu_item_restaurant_id": menu_item.restaurant_id
                }
            )
            raise HTTPException(status_code=422,
                                detail="Menu item does not belong to the order restaurant")

        line = (
            db.query(OrderItem)
            .filter(OrderItem.order_id == order.id, OrderItem.menu_item_id == menu_item_id)
            .one_or_none()
        )

        try:
            if line:
                previous_quantity = line.quantity
                line.quantity = quantity
                logger.info(
                    "Order item quantity replaced",
                    extra={"order_id": order.id, "item_id": line.id,
                           "previous_quantity": previous_quantity, "quantity": quantity}
                )
            else:
                line = OrderItem(
                    order_id=order.id,
                    menu_item_id=menu_item_id,
                    quantity=quantity,
                    unit_price_cents=menu_item.price_cents
                )
                db.add(line)
                logger.info(
                    "Order item added",
                    extra={"order_id": order.id, "menu_item_id": menu_item_id,
                           "quantity": quantity, "unit_price_cents": menu_item.price_cents}
                )

            OrderItemService._recalculate_total(db, order)
            db.commit()
        except Exception:
            db.rollback()
            raise

        db.refresh(line)
        db.refresh(order)

        logger.debug(
            "Order total recalculated",
            extra={"order_id": order.id, "total_amount_cents": order.total_amount_cents}
        )
        return line

    @staticmethod
    def remove_item(db: Session, order: Order, item_id: str) -> None:
        """Remove a line from the order. The line must belong to this order."""
        OrderItemService._ensure_draft(order)

        line = (
            db.query(OrderItem)
            .filter(OrderItem.id == item_id, OrderItem.order_id == order.id)
            .one_or_none()
        )
        if not line:
            logger.warning("Order item not found on order", extra={"order_id": order.id, "item_id": item_id})
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND,
                                detail="Order item not found")

        try:
            db.delete(line)
            OrderItemService._recalculate_total(db, order)
            db.commit()
        except Exception:
            db.rollback()
            raise

        db.refresh(order)

        logger.info(
            "Order item removed",
            extra={"order_id": order.id, "item_id": item_id, "total_amount_cents": order.total_amount_cents}
        )
