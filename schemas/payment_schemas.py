from typing import Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator
from models.enums import PaymentProvider, COUNTRIES


class CreatePaymentMethodRequest(BaseModel):
    label: str
    last4: Optional[str] = None
    exp_month: Optional[int] = Field(default=None, ge=1, le=12)
    exp_year: Optional[int] = Field(default=None, ge=2024)
    country: Optional[str] = None
    is_default: bool = False

    @field_validator('label')
    @classmethod
    def validate_label(cls, value):
        if not value or not value.strip():
            raise ValueError('Label is required')
        return value.strip()

    @field_validator('last4')
    @classmethod
    def validate_last4(cls, value):
        if value is None:
            return value
        if len(value) != 4 or not value.isdigit():
            raise ValueError('Last4 must be exactly 4 digits')
        return value

    @field_validator('country')
    @classmethod
    def validate_country(cls, value):
        if value is not None and value not in COUNTRIES:
            raise ValueError(f"Country must be one of: {', '.join(COUNTRIES)}")
        return value


class UpdatePaymentMethodRequest(BaseModel):
    label: Optional[str] = None
    active: Optional[bool] = None
    is_default: Optional[bool] = None

    @field_validator('label')
    @classmethod
    def validate_label(cls, value):
        if value is not None and not value.strip():
            raise ValueError('Label cannot be empty')
        return value


class PaymentMethodResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    provider: PaymentProvider
    label: str
    brand: Optional[str] = None
    last4: Optional[str] = None
    exp_month: Optional[int] = None
    exp_year: Optional[int] = None
    country: Optional[str] = None
    active: bool
    is_default: bool
