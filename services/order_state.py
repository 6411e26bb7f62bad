from sqlalchemy.orm import Session
from fastapi import HTTPException
from starlette import status
from models.orders import Order
from models.enums import OrderStatus, PaymentStatus
from services.payment_service import PaymentService
from utils.logger import get_logger

logger = get_logger(__name__)

# DRAFT -> PAID is the synchronous path taken by the mock provider;
# PENDING is reserved for providers that settle asynchronously.
ALLOWED_TRANSITIONS = {
    OrderStatus.DRAFT: {OrderStatus.PENDING, OrderStatus.PAID, OrderStatus.CANCELED},
    OrderStatus.PENDING: {OrderStatus.PAID, OrderStatus.CANCELED},
    OrderStatus.PAID: {OrderStatus.CANCELED},
    OrderStatus.CANCELED: set(),
}

CHECKOUT_STATUSES = {OrderStatus.DRAFT, OrderStatus.PENDING}


def can_transition(current: OrderStatus, target: OrderStatus) -> bool:
    return target in ALLOWED_TRANSITIONS[current]


def transition(order: Order, target: OrderStatus) -> None:
    if not can_transition(order.status, target):
        raise HTTPException(status_code=422,
                            detail=f"Order cannot move from {order.status.value} to {target.value}")

    logger.info(
        "Order status changed",
        extra={"order_id": order.id, "previous_status": order.status.value, "status": target.value}
    )
    order.status = target


def checkout(db: Session, order: Order, payment_method_id: str) -> Order:
    """
    Settle a DRAFT or PENDING order and move it to PAID.

    The order must be loaded with a row lock. If settlement does not succeed
    the payment record is still committed, the order keeps its status and
    the caller gets a 402 carrying the payment's error.
    """
    if order.status == OrderStatus.PAID:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT,
                            detail="Order has already been paid")

    if order.status not in CHECKOUT_STATUSES:
        logger.warning(
            "Order status is not valid for checkout",
            extra={"order_id": order.id, "status": order.status.value}
        )
        raise HTTPException(status_code=422,
                            detail="Order status must be DRAFT or PENDING for checkout")

    if order.total_amount_cents <= 0:
        raise HTTPException(status_code=422,
                            detail="Order must have at least one item before checkout")

    payment = PaymentService.settle(
        db,
        order_id=order.id,
        payment_method_id=payment_method_id,
        amount_cents=order.total_amount_cents,
        currency=order.currency
    )

    if payment.status != PaymentStatus.SUCCEEDED:
        db.commit()
        logger.error(
            "Payment failed",
            extra={"order_id": order.id, "payment_id": payment.id,
                   "error_code": payment.error_code, "error_message": payment.error_message}
        )
        raise HTTPException(
            status_code=status.HTTP_402_PAYMENT_REQUIRED,
            detail={
                "code": payment.error_code,
                "message": payment.error_message or "Payment processing failed",
                "payment_id": payment.id
            }
        )

    transition(order, OrderStatus.PAID)
    db.commit()
    db.refresh(order)
    return order


def cancel(db: Session, order: Order) -> Order:
    """
    Cancel an order from any status and void its payment, if it has one.

    Canceling an already CANCELED order changes nothing.
    """
    if order.status == OrderStatus.CANCELED:
        logger.info("Order already canceled", extra={"order_id": order.id})
        return order

    transition(order, OrderStatus.CANCELED)

    payment = PaymentService.find_by_order(db, order.id)
    if payment and payment.status != PaymentStatus.CANCELED:
        PaymentService.cancel(db, payment.id)
    elif not payment:
        logger.debug("No payment found for order, skipping payment cancellation", extra={"order_id": order.id})

    db.commit()
    db.refresh(order)
    return order
