from fastapi import APIRouter, Request, status
from utils.deps import user_dependency, scope_dependency, db_dependency
from schemas.user_schemas import UserResponse, UpdateUserRoleRequest, UpdateUserCountryRequest
from services.user_service import UserService
from middleware.rate_limiter import limiter
from utils.logger import get_logger

# Setup logger
logger = get_logger(__name__)


router = APIRouter(
    prefix="/users",
    tags=["users"]
)

@router.get("/me", status_code=status.HTTP_200_OK)
@limiter.limit("30/minute")
async def get_user_info(request: Request, user: user_dependency, scope: scope_dependency):
    """
    Current user as the order core sees it: identity plus resolved scope.
    """
    return {
        "id": user.id,
        "email": user.email,
        "role": scope.role.value,
        "country": user.country,
        "can_checkout": scope.can_write,
        "sees_all_countries": scope.country_filter is None
    }


@router.get("", status_code=status.HTTP_200_OK, response_model=list[UserResponse])
async def list_users(scope: scope_dependency, db: db_dependency):
    """
    All users (ADMIN only).
    """
    return UserService.list_users(db, scope)


@router.patch("/{user_id}/role", status_code=status.HTTP_200_OK, response_model=UserResponse)
@limiter.limit("10/minute")
async def update_user_role(request: Request, user_id: str, body: UpdateUserRoleRequest,
    scope: scope_dependency, db: db_dependency):
    """
    Assign a role (ADMIN only). Admins cannot remove their own ADMIN role.
    """
    return UserService.update_role(db, scope, user_id, body.role)


@router.patch("/{user_id}/country", status_code=status.HTTP_200_OK, response_model=UserResponse)
@limiter.limit("10/minute")
async def update_user_country(request: Request, user_id: str, body: UpdateUserCountryRequest,
    scope: scope_dependency, db: db_dependency):
    return UserService.update_country(db, scope, user_id, body.country)
