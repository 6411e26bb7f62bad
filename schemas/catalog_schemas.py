from typing import Optional
from pydantic import BaseModel, ConfigDict
from models.enums import RestaurantStatus


class RestaurantResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    country: str
    status: RestaurantStatus


class MenuItemResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    restaurant_id: str
    name: str
    description: Optional[str] = None
    price_cents: int
    currency: str
    available: bool
