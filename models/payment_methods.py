from core.database import Base
from sqlalchemy import (Column, String, Boolean, SmallInteger, ForeignKey, Enum)
from .mixins import CreatedAtMixin, UpdatedAtMixin, new_id
from .enums import PaymentProvider

class PaymentMethod(Base, CreatedAtMixin, UpdatedAtMixin):
    __tablename__ = "payment_methods"

    #pk
    id = Column(String(36), primary_key=True, default=new_id)

    #fk
    created_by_user_id = Column(String(36), ForeignKey("users.id", ondelete="SET NULL"), nullable=True)

    provider = Column(Enum(PaymentProvider, name="payment_provider"), default=PaymentProvider.MOCK, nullable=False)
    label = Column(String, nullable=False)
    brand = Column(String)
    last4 = Column(String(4))
    exp_month = Column(SmallInteger)
    exp_year = Column(SmallInteger)
    country = Column(String(2))
    active = Column(Boolean, default=True, nullable=False, index=True)
    is_default = Column(Boolean, default=False, nullable=False)
