from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator
from models.enums import OrderStatus, PaymentStatus, PaymentProvider


class CreateOrderRequest(BaseModel):
    restaurant_id: str

    @field_validator('restaurant_id')
    @classmethod
    def validate_restaurant_id(cls, value):
        if not value or not value.strip():
            raise ValueError('Restaurant ID is required')
        return value.strip()


class AddOrderItemRequest(BaseModel):
    menu_item_id: str
    quantity: int = Field(ge=1)

    @field_validator('menu_item_id')
    @classmethod
    def validate_menu_item_id(cls, value):
        if not value or not value.strip():
            raise ValueError('Menu item ID is required')
        return value.strip()


class CheckoutOrderRequest(BaseModel):
    payment_method_id: str

    @field_validator('payment_method_id')
    @classmethod
    def validate_payment_method_id(cls, value):
        if not value or not value.strip():
            raise ValueError('Payment method ID is required')
        return value.strip()


class OrderItemResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    order_id: str
    menu_item_id: str
    quantity: int
    unit_price_cents: int
    created_at: datetime


class PaymentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    order_id: str
    payment_method_id: str
    provider: PaymentProvider
    amount_cents: int
    currency: str
    status: PaymentStatus
    provider_reference: Optional[str] = None
    error_code: Optional[str] = None
    error_message: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class OrderResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    user_id: str
    restaurant_id: str
    country: str
    status: OrderStatus
    total_amount_cents: int
    currency: str
    created_at: datetime
    updated_at: datetime


class OrderDetailResponse(OrderResponse):
    items: list[OrderItemResponse] = []
    payment: Optional[PaymentResponse] = None
