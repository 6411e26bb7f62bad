from dataclasses import dataclass
from typing import Optional
from fastapi import HTTPException
from starlette import status
from models.enums import Role, COUNTRIES
from utils.logger import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class AccessScope:
    """
    What one caller may see and do, derived from (role, home country).

    country_filter is None only for ADMIN; in that case queries carry no
    country predicate at all rather than filtering rows after the fact.
    """
    user_id: str
    role: Role
    country: str
    can_read: bool
    can_write: bool
    country_filter: Optional[str]

    def apply(self, query, country_column):
        """Add the country predicate to a SQLAlchemy query when the scope has one."""
        if self.country_filter is None:
            return query
        return query.filter(country_column == self.country_filter)

    def allows_country(self, country: str) -> bool:
        return self.country_filter is None or self.country_filter == country

    def log_context(self) -> dict:
        return {"user_id": self.user_id, "role": self.role.value, "country": self.country}


def resolve_scope(user_id: str, role: str, home_country: str) -> AccessScope:
    """
    Build the AccessScope for a caller.

    Only the three known roles are accepted. Anything else is rejected with
    403; there is no fallback to a broader scope.
    """
    try:
        resolved_role = Role(role)
    except ValueError:
        logger.warning(
            "Rejected caller with unrecognized role",
            extra={"user_id": user_id, "role": role}
        )
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN,
                            detail="User role not recognized")

    if resolved_role != Role.ADMIN and home_country not in COUNTRIES:
        logger.warning(
            "Rejected caller with unrecognized home country",
            extra={"user_id": user_id, "role": role, "country": home_country}
        )
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN,
                            detail="User country not recognized")

    if resolved_role == Role.ADMIN:
        country_filter = None
    else:
        country_filter = home_country

    return AccessScope(
        user_id=user_id,
        role=resolved_role,
        country=home_country,
        can_read=True,
        can_write=resolved_role in (Role.ADMIN, Role.MANAGER),
        country_filter=country_filter,
    )


def require_write(scope: AccessScope, action: str) -> None:
    """Checkout and cancel are reserved to MANAGER and ADMIN."""
    if not scope.can_write:
        logger.warning(
            "Role not allowed to perform action",
            extra={**scope.log_context(), "action": action}
        )
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN,
                            detail="Access denied: Required role(s): ADMIN, MANAGER")


def require_admin(scope: AccessScope, action: str) -> None:
    if scope.role != Role.ADMIN:
        logger.warning(
            "Role not allowed to perform action",
            extra={**scope.log_context(), "action": action}
        )
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN,
                            detail="Access denied: Required role(s): ADMIN")
