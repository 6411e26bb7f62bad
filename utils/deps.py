from core.database import SessionLocal
from typing import Annotated
from fastapi import Depends, HTTPException
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session
from jose import JWTError, jwt
from starlette import status
from core.config import settings
from models.users import User
from services.scope_service import AccessScope, resolve_scope
from utils.logger import get_logger, sanitize_log_data

logger = get_logger(__name__)

# Tokens are issued by the external identity provider; tokenUrl only feeds the OpenAPI docs
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/token")


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

db_dependency = Annotated[Session, Depends(get_db)]


def get_current_user(token: Annotated[str, Depends(oauth2_scheme)], db: db_dependency) -> User:
    """
    Verify the bearer token and load the local user row.

    The token proves identity; role and home country always come from the
    database so a stale token cannot widen the caller's scope.
    """
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        logger.warning(
            "Token validation failed",
            extra=sanitize_log_data({"access_token": token})
        )
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED,
                            detail="Could not validate credentials.")

    user_id: str = payload.get("sub")
    token_type: str = payload.get("type")

    if user_id is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED,
                            detail="Could not validate credentials.")

    if token_type != "access":
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED,
                            detail="Invalid token type. Access token required.")

    user = db.query(User).filter(User.id == str(user_id), User.is_active == True).one_or_none()
    if user is None:
        logger.warning("Authenticated subject has no active user record", extra={"user_id": user_id})
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED,
                            detail="User not found in database.")

    return user

user_dependency = Annotated[User, Depends(get_current_user)]


def get_scope(user: user_dependency) -> AccessScope:
    """Resolve the caller's scope once per request; everything downstream receives it."""
    return resolve_scope(user_id=user.id, role=user.role, home_country=user.country)

scope_dependency = Annotated[AccessScope, Depends(get_scope)]
