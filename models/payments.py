from core.database import Base
from sqlalchemy import (Column, String, Integer, ForeignKey, Enum, CheckConstraint)
from sqlalchemy.orm import relationship
from .mixins import CreatedAtMixin, UpdatedAtMixin, new_id
from .enums import PaymentProvider, PaymentStatus

class Payment(Base, CreatedAtMixin, UpdatedAtMixin):
    """
    Outcome of settling one order. The unique order_id is what makes
    checkout single-flight: a second insert for the same order fails.
    """
    __tablename__ = "payments"
    __table_args__ = (
        CheckConstraint("amount_cents >= 0", name="ck_payments_amount_cents"),
    )

    #pk
    id = Column(String(36), primary_key=True, default=new_id)

    #fk
    order_id = Column(String(36), ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, unique=True)
    payment_method_id = Column(String(36), ForeignKey("payment_methods.id", ondelete="RESTRICT"), nullable=False)

    #relationships
    order = relationship("Order", back_populates="payment")
    payment_method = relationship("PaymentMethod")

    provider = Column(Enum(PaymentProvider, name="payment_provider"), nullable=False)
    amount_cents = Column(Integer, nullable=False)
    currency = Column(String(3), nullable=False)
    status = Column(Enum(PaymentStatus, name="payment_status"), default=PaymentStatus.REQUIRES_ACTION,
                    nullable=False, index=True)
    provider_reference = Column(String)
    error_code = Column(String)
    error_message = Column(String)
