import logging
from typing import Any

from fastapi import APIRouter, Body, Depends
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.auth import create_access_token, get_current_user, hash_password, password_too_long, verify_password
from core.config import Settings, get_app_settings
from core.database import get_db
from core.errors import DuplicateUsername, InvalidCredentials, InvalidInput
from crud.user_crud import create_user, get_user_by_username
from schemas.auth_schema import LoginRequest, MessageResponse, TokenIdentity, TokenResponse
from schemas.user_schema import UserCreate, UserResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Authentication"])


@router.post("/register", response_model=MessageResponse)
def register(
    body: UserCreate,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    if not body.username or not body.password:
        raise InvalidInput("Username and password required")
    if password_too_long(body.password):
        raise InvalidInput("Password too long")

    if get_user_by_username(db, body.username):
        raise DuplicateUsername()

    password_hash = hash_password(body.password, rounds=settings.BCRYPT_ROUNDS)
    try:
        create_user(db, body.username, password_hash)
    except IntegrityError:
        # Lost a race with a concurrent registration of the same name
        db.rollback()
        raise DuplicateUsername()

    logger.info("Registered user %s", body.username)
    return MessageResponse(message="User registered successfully")


@router.post("/login", response_model=TokenResponse)
def login(
    body: Any = Body(None),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    """
    Verify credentials and issue a signed bearer token.
    Unknown user and wrong password fail identically.
    """
    username, password = LoginRequest.model_validate(body if isinstance(body, dict) else {}).credentials()
    user = get_user_by_username(db, username) if username else None
    if not user or not password or not verify_password(password, user.password_hash):
        logger.warning("Failed login for %r", username)
        raise InvalidCredentials()

    token = create_access_token(user.id, user.username, settings)
    logger.info("User %s logged in", user.id)
    return TokenResponse(token=token)


@router.get("/me", response_model=UserResponse)
def get_me(current_user: TokenIdentity = Depends(get_current_user)):
    return current_user
