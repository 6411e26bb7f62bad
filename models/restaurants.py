from core.database import Base
from sqlalchemy import (Column, String, Integer, Boolean, ForeignKey, Enum, CheckConstraint)
from sqlalchemy.orm import relationship
from .mixins import CreatedAtMixin, UpdatedAtMixin, new_id
from .enums import RestaurantStatus

class Restaurant(Base, CreatedAtMixin, UpdatedAtMixin):
    __tablename__ = "restaurants"

    #pk
    id = Column(String(36), primary_key=True, default=new_id)

    #relationships
    menu_items = relationship("MenuItem", back_populates="restaurant", cascade="all, delete-orphan")
    orders = relationship("Order", back_populates="restaurant")

    name = Column(String, nullable=False)
    country = Column(String(2), nullable=False, index=True)
    status = Column(Enum(RestaurantStatus, name="restaurant_status"), default=RestaurantStatus.ACTIVE, nullable=False)


class MenuItem(Base, CreatedAtMixin, UpdatedAtMixin):
    __tablename__ = "menu_items"
    __table_args__ = (
        CheckConstraint("price_cents >= 0", name="ck_menu_items_price_cents"),
    )

    #pk
    id = Column(String(36), primary_key=True, default=new_id)

    #fk
    restaurant_id = Column(String(36), ForeignKey("restaurants.id", ondelete="CASCADE"), nullable=False, index=True)

    #relationships
    restaurant = relationship("Restaurant", back_populates="menu_items")

    name = Column(String, nullable=False)
    description = Column(String)
    price_cents = Column(Integer, nullable=False)
    currency = Column(String(3), default="INR", nullable=False)
    available = Column(Boolean, default=True, nullable=False)
