"""
Access token helpers.

Tokens are issued by the identity service; this module signs and verifies
them with the shared SECRET_KEY so the booking API can trust the principal.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from jose import ExpiredSignatureError, JWTError, jwt

from .config import ACCESS_TOKEN_EXPIRE_MINUTES, JWT_ALGORITHM, SECRET_KEY

logger = logging.getLogger(__name__)


def create_jwt_token(claims: dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    """
    Sign a token carrying the given claims.

    Args:
        claims: Principal claims (id, email, userType)
        expires_delta: Lifetime; defaults to ACCESS_TOKEN_EXPIRE_MINUTES. A negative
            delta yields an already expired token.
    """
    lifetime = expires_delta if expires_delta is not None else timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    payload = {**claims, "exp": datetime.now(timezone.utc) + lifetime}
    return jwt.encode(payload, SECRET_KEY, algorithm=JWT_ALGORITHM)


def create_access_token_for_user(user) -> str:
    return create_jwt_token({"id": user.id, "email": user.email, "userType": user.user_type})


def verify_jwt_token(token: str) -> Optional[dict[str, Any]]:
    """Decoded claims, or None when the signature is bad or the token has expired"""
    try:
        return jwt.decode(token, SECRET_KEY, algorithms=[JWT_ALGORITHM])
    except ExpiredSignatureError:
        logger.info("Rejected expired access token")
    except JWTError as e:
        logger.warning(f"Rejected access token: {e}")
    return None
