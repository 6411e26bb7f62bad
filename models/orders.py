from core.database import Base
from sqlalchemy.orm import relationship
from sqlalchemy import (Column, String, Integer, ForeignKey, Enum, CheckConstraint)
from .mixins import CreatedAtMixin, UpdatedAtMixin, new_id
from .enums import OrderStatus

class Order(Base, CreatedAtMixin, UpdatedAtMixin):
    __tablename__ = "orders"
    __table_args__ = (
        CheckConstraint("total_amount_cents >= 0", name="ck_orders_total_amount_cents"),
    )

    #pk
    id = Column(String(36), primary_key=True, default=new_id)

    #fk
    user_id = Column(String(36), ForeignKey("users.id", ondelete="RESTRICT"), nullable=False, index=True)
    restaurant_id = Column(String(36), ForeignKey("restaurants.id", ondelete="RESTRICT"), nullable=False, index=True)

    #relationships
    user = relationship("User", back_populates="orders")
    restaurant = relationship("Restaurant", back_populates="orders")
    items = relationship("OrderItem", back_populates="order", cascade="all, delete-orphan",
                         order_by="OrderItem.created_at")
    payment = relationship("Payment", back_populates="order", uselist=False)

    # Home country of the ordering user, not of the restaurant
    country = Column(String(2), nullable=False, index=True)
    status = Column(Enum(OrderStatus, name="order_status"), default=OrderStatus.DRAFT, nullable=False, index=True)
    # Always Σ quantity × unit_price_cents over items; recomputed, never patched
    total_amount_cents = Column(Integer, default=0, nullable=False)
    currency = Column(String(3), nullable=False)
