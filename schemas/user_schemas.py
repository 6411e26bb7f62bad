from datetime import datetime
from pydantic import BaseModel, ConfigDict, field_validator
from models.enums import Role, COUNTRIES


class UserResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    role: str
    country: str
    is_active: bool
    created_at: datetime


class UpdateUserRoleRequest(BaseModel):
    role: Role


class UpdateUserCountryRequest(BaseModel):
    country: str

    @field_validator('country')
    @classmethod
    def validate_country(cls, value):
        value = value.strip().upper()
        if value not in COUNTRIES:
            raise ValueError(f"Country must be one of: {', '.join(COUNTRIES)}")
        return value
