import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
from fastapi import Depends, Header
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from core.config import Settings, get_app_settings
from core.database import get_db
from core.errors import InvalidToken, MissingToken
from crud.user_crud import get_user
from schemas.auth_schema import TokenIdentity

logger = logging.getLogger(__name__)

# bcrypt silently ignores (or, in newer releases, rejects) anything past this
BCRYPT_MAX_BYTES = 72


def password_too_long(password: str) -> bool:
    return len(password.encode("utf-8")) > BCRYPT_MAX_BYTES


def hash_password(password: str, rounds: int = 10) -> str:
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    if password_too_long(password):
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Stored hash is not a bcrypt hash
        return False


def create_access_token(user_id: str, username: str, settings: Settings, now: Optional[datetime] = None) -> str:
    issued_at = now or datetime.now(timezone.utc)
    claims = {
        "id": user_id,
        "username": username,
        "iat": issued_at,
        "exp": issued_at + timedelta(hours=settings.ACCESS_TOKEN_EXPIRE_HOURS),
    }
    return jwt.encode(claims, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str, settings: Settings) -> TokenIdentity:
    """Verify signature and expiry, then pull the identity out of the claims.

    Raises InvalidToken for anything that is not a live token we signed.
    """
    try:
        payload = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except JWTError as exc:
        logger.info("Rejected token: %s", exc)
        raise InvalidToken()

    user_id = payload.get("id")
    username = payload.get("username")
    if not isinstance(user_id, str) or not isinstance(username, str):
        raise InvalidToken()
    return TokenIdentity(id=user_id, username=username)


def _extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    if not authorization:
        return None
    parts = authorization.split()
    if len(parts) == 2 and parts[0].lower() == "bearer":
        return parts[1]
    return None


def get_current_user(
    authorization: Optional[str] = Header(None),
    settings: Settings = Depends(get_app_settings),
    db: Session = Depends(get_db),
) -> TokenIdentity:
    token = _extract_bearer_token(authorization)
    if not token:
        raise MissingToken()
    identity = decode_access_token(token, settings)

    # A validly signed token must still name a user we know
    if not get_user(db, identity.id):
        raise InvalidToken("User not found")
    return identity
