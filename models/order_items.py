from core.database import Base
from sqlalchemy import (Column, String, Integer, ForeignKey, UniqueConstraint, CheckConstraint)
from sqlalchemy.orm import relationship
from .mixins import CreatedAtMixin, new_id

class OrderItem(Base, CreatedAtMixin):
    __tablename__ = "order_items"
    __table_args__ = (
        UniqueConstraint("order_id", "menu_item_id", name="uq_order_items_order_menu_item"),
        CheckConstraint("quantity > 0", name="ck_order_items_quantity"),
        CheckConstraint("unit_price_cents >= 0", name="ck_order_items_unit_price_cents"),
    )

    #pk
    id = Column(String(36), primary_key=True, default=new_id)

    #fk
    order_id = Column(String(36), ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    menu_item_id = Column(String(36), ForeignKey("menu_items.id", ondelete="RESTRICT"), nullable=False)

    #relationships
    order = relationship("Order", back_populates="items")
    menu_item = relationship("MenuItem")

    quantity = Column(Integer, nullable=False)
    # Catalog price at first insertion; later price changes do not touch it
    unit_price_cents = Column(Integer, nullable=False)
