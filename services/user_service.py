from sqlalchemy.orm import Session
from fastapi import HTTPException
from starlette import status
from models.users import User
from models.enums import Role
from services.scope_service import AccessScope, require_admin
from utils.logger import get_logger

logger = get_logger(__name__)


class UserService:
    """
    ADMIN management of the role and home country that every AccessScope
    is built from. Changes apply from the user's next request.
    """

    @staticmethod
    def get_user_or_404(db: Session, user_id: str) -> User:
        user = db.query(User).filter(User.id == user_id).one_or_none()
        if not user:
            logger.warning("User not found", extra={"user_id": user_id})
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND,
                                detail="User not found")
        return user

    @staticmethod
    def list_users(db: Session, scope: AccessScope) -> list[User]:
        require_admin(scope, "list_users")

        users = db.query(User).order_by(User.created_at).all()
        logger.info("Listed users", extra={**scope.log_context(), "count": len(users)})
        return users

    @staticmethod
    def update_role(db: Session, scope: AccessScope, user_id: str, role: Role) -> User:
        """
        Assign a role. An admin cannot remove their own ADMIN role.
        """
        require_admin(scope, "update_user_role")

        if user_id == scope.user_id and role != Role.ADMIN:
            logger.warning(
                "Admin attempted to remove own ADMIN role",
                extra={**scope.log_context(), "new_role": role.value}
            )
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST,
                                detail="Cannot remove your own ADMIN role")

        user = UserService.get_user_or_404(db, user_id)
        previous_role = user.role
        user.role = role.value

        db.commit()
        db.refresh(user)

        logger.info(
            "User role updated",
            extra={**scope.log_context(), "target_user_id": user.id,
                   "previous_role": previous_role, "new_role": user.role}
        )
        return user

    @staticmethod
    def update_country(db: Session, scope: AccessScope, user_id: str, country: str) -> User:
        require_admin(scope, "update_user_country")

        user = UserService.get_user_or_404(db, user_id)
        previous_country = user.country
        user.country = country

        db.commit()
        db.refresh(user)

        logger.info(
            "User country updated",
            extra={**scope.log_context(), "target_user_id": user.id,
                   "previous_country": previous_country, "new_country": user.country}
        )
        return user
