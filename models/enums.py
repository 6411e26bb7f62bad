import enum


class Role(str, enum.Enum):
    ADMIN = "ADMIN"
    MANAGER = "MANAGER"
    MEMBER = "MEMBER"


class OrderStatus(str, enum.Enum):
    DRAFT = "DRAFT"
    PENDING = "PENDING"
    PAID = "PAID"
    CANCELED = "CANCELED"


class PaymentStatus(str, enum.Enum):
    REQUIRES_ACTION = "REQUIRES_ACTION"
    SUCCEEDED = "SUCCEEDED"
    FAILED = "FAILED"
    CANCELED = "CANCELED"


class PaymentProvider(str, enum.Enum):
    MOCK = "MOCK"
    STRIPE = "STRIPE"


class RestaurantStatus(str, enum.Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"


# Orders are priced in the restaurant's local currency
CURRENCY_BY_COUNTRY = {
    "IN": "INR",
    "US": "USD",
}

COUNTRIES = tuple(CURRENCY_BY_COUNTRY)
