from core.database import Base
from sqlalchemy import (Column, String, Boolean)
from sqlalchemy.orm import relationship
from .mixins import CreatedAtMixin, UpdatedAtMixin, new_id

class User(Base, CreatedAtMixin, UpdatedAtMixin):
    """
    Local mirror of an identity-provider account.

    Credentials live with the provider; this row only carries what the order
    core needs to build an AccessScope: the role and the home country.
    Role is kept as a plain string so an unexpected value coming from the
    provider is rejected by the scope resolver instead of failing on load.
    """
    __tablename__ = "users"

    #pk
    id = Column(String(36), primary_key=True, default=new_id)

    #relationships
    orders = relationship("Order", back_populates="user")

    email = Column(String, unique=True, nullable=False)
    role = Column(String, default="MEMBER", nullable=False)
    country = Column(String(2), default="IN", nullable=False, index=True)
    is_active = Column(Boolean, default=True, nullable=False)
