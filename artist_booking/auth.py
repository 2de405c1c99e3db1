import logging
from typing import Callable, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from .database import get_db
from .errors import AuthenticationError, AuthorizationError, NotFoundError
from .models import User
from .security_utils import verify_jwt_token

logger = logging.getLogger(__name__)

ARTIST = "artist"
VENUE = "venue"
USER_TYPES = (ARTIST, VENUE)

# auto_error=False so a missing header reaches our own 401 envelope
security = HTTPBearer(auto_error=False)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db),
) -> User:
    """Resolve the authenticated principal from the Bearer token"""
    if not credentials:
        raise AuthenticationError("No token provided")

    payload = verify_jwt_token(credentials.credentials)
    if not payload or payload.get("id") is None:
        raise AuthenticationError("Invalid token")

    user = db.query(User).filter(User.id == payload["id"]).first()
    if not user:
        logger.warning(f"Token for unknown user id {payload['id']}")
        raise NotFoundError("User not found")

    logger.debug(f"User authenticated: {user.id} ({user.user_type})")
    return user


def require_user_type(user_type: str, message: str) -> Callable:
    """
    Build a dependency that admits only one account type.

    The role comes from the user directory, never from the token claims.
    """

    async def dependency(user: User = Depends(get_current_user)) -> User:
        if user.user_type != user_type:
            logger.warning(f"User {user.id} ({user.user_type}) denied: {message}")
            raise AuthorizationError(message)
        return user

    return dependency
