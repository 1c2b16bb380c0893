"""
Authentication endpoints.

``/login`` exchanges an email and password for a signed bearer token;
``/me`` returns the account the presented token belongs to.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from conference_api.app.core.config import Settings
from conference_api.app.core.deps import get_settings, get_store
from conference_api.app.core.security import create_access_token, get_current_user, public_user
from conference_api.app.schemas.user import LoginRequest, LoginResponse, UserRead
from conference_api.app.services.user_service import UserService
from conference_api.app.storage.base import RecordStore

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/login", response_model=LoginResponse)
async def login(
    credentials: LoginRequest,
    store: RecordStore = Depends(get_store),
    app_settings: Settings = Depends(get_settings),
) -> LoginResponse:
    """Authenticate a user and return an access token.

    Wrong passwords, unknown emails and deactivated accounts all get
    the same 401 response.
    """
    user = await UserService(store).authenticate(credentials.email, credentials.password)
    if not user:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")
    token = create_access_token(
        {"sub": user["id"], "email": user["email"]},
        secret_key=app_settings.secret_key,
        expires_delta=app_settings.access_token_expire_minutes * 60,
    )
    logger.info("User %s logged in", user["email"])
    return LoginResponse(access_token=token, user=UserRead.model_validate(public_user(user)))


@router.get("/me", response_model=UserRead)
async def me(current_user: dict = Depends(get_current_user)) -> dict:
    return current_user
