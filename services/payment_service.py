from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from fastapi import HTTPException
from starlette import status
from models.payments import Payment
from models.payment_methods import PaymentMethod
from models.enums import PaymentStatus, PaymentProvider
from services.mock_payment_provider import payment_provider
from utils.logger import get_logger

logger = get_logger(__name__)

INACTIVE_PAYMENT_METHOD = "INACTIVE_PAYMENT_METHOD"
PROCESSING_ERROR = "PROCESSING_ERROR"


class PaymentService:
    """
    Settlement of orders against the simulated provider.

    Methods here flush but never commit: the caller owns the transaction so
    the payment row and the order transition land together.
    """

    @staticmethod
    def find_by_order(db: Session, order_id: str) -> Payment | None:
        return db.query(Payment).filter(Payment.order_id == order_id).one_or_none()

    @staticmethod
    def settle(db: Session, order_id: str, payment_method_id: str, amount_cents: int, currency: str) -> Payment:
        """
        Attempt to authorize a payment method for an order amount.

        Declines are returned, not raised: the caller inspects payment.status.
        An inactive method yields FAILED/INACTIVE_PAYMENT_METHOD and a provider
        error yields FAILED/PROCESSING_ERROR; both are persisted for audit.

        An order holds at most one payment. A previous FAILED attempt is reused
        by the new attempt; any other existing payment is a conflict.
        """
        payment_method = db.query(PaymentMethod).filter(PaymentMethod.id == payment_method_id).one_or_none()
        if not payment_method:
            logger.warning("Payment method not found", extra={"order_id": order_id, "payment_method_id": payment_method_id})
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND,
                                detail="Payment method not found")

        existing = PaymentService.find_by_order(db, order_id)
        if existing and existing.status != PaymentStatus.FAILED:
            logger.warning(
                "Order already has a payment",
                extra={"order_id": order_id, "payment_id": existing.id, "payment_status": existing.status.value}
            )
            raise HTTPException(status_code=status.HTTP_409_CONFLICT,
                                detail="A payment already exists for this order")

        provider_reference = None
        error_code = None
        error_message = None

        if not payment_method.active:
            payment_status = PaymentStatus.FAILED
            error_code = INACTIVE_PAYMENT_METHOD
            error_message = "Payment method is not active"
            logger.error(
                "Payment method is not active, failing payment",
                extra={"order_id": order_id, "payment_method_id": payment_method_id}
            )
        else:
            try:
                provider_reference = payment_provider.authorize(payment_method, amount_cents, currency)
                payment_status = PaymentStatus.SUCCEEDED
            except Exception as e:
                payment_status = PaymentStatus.FAILED
                error_code = PROCESSING_ERROR
                error_message = str(e) or type(e).__name__
                logger.error(
                    f"Failed to process payment: {error_message}",
                    extra={"order_id": order_id, "payment_method_id": payment_method_id,
                           "error_type": type(e).__name__},
                    exc_info=True
                )

        payment = existing or Payment(order_id=order_id)
        payment.payment_method_id = payment_method_id
        payment.provider = PaymentProvider.MOCK
        payment.amount_cents = amount_cents
        payment.currency = currency
        payment.status = payment_status
        payment.provider_reference = provider_reference
        payment.error_code = error_code
        payment.error_message = error_message

        if existing is None:
            db.add(payment)

        try:
            db.flush()
        except IntegrityError:
            # Another checkout inserted the payment for this order first
            db.rollback()
            logger.warning("Concurrent settlement for order lost the race", extra={"order_id": order_id})
            raise HTTPException(status_code=status.HTTP_409_CONFLICT,
                                detail="A payment already exists for this order")

        logger.info(
            "Payment settled",
            extra={
                "order_id": order_id,
                "payment_id": payment.id,
                "payment_status": payment.status.value,
                "amount_cents": amount_cents,
                "currency": currency,
                "retried_failed_payment": existing is not None
            }
        )
        return payment

    @staticmethod
    def cancel(db: Session, payment_id: str) -> Payment:
        payment = db.query(Payment).filter(Payment.id == payment_id).one_or_none()
        if not payment:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND,
                                detail="Payment not found")

        previous_status = payment.status
        payment.status = PaymentStatus.CANCELED
        db.flush()

        logger.info(
            "Payment canceled",
            extra={"payment_id": payment.id, "order_id": payment.order_id,
                   "previous_status": previous_status.value}
        )
        return payment
