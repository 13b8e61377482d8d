from typing import Optional

import structlog
from fastapi import APIRouter, Depends, HTTPException, Response

from ..schemas.auth import LoginRequest, LoginResponse, MessageResponse, UserOut
from ..storage import StorageProvider, get_storage
from .security import (
    GUEST_ROLE,
    GUEST_USER,
    GUEST_USER_ID,
    SessionContext,
    end_session,
    get_session,
    sanitize_user,
    start_session,
    verify_password,
)
from .sessions import SessionStore, SessionStoreError, get_session_store


router = APIRouter(prefix="/api/auth", tags=["auth"])
logger = structlog.get_logger(__name__)


@router.post("/login", response_model=LoginResponse)
def login(
    req: LoginRequest,
    response: Response,
    storage: StorageProvider = Depends(get_storage),
    store: SessionStore = Depends(get_session_store),
):
    if not req.username or not req.password:
        raise HTTPException(status_code=400, detail="Username and password required")
    user = storage.get_user_by_username(req.username)
    if not user or not verify_password(req.password, user.password_hash):
        logger.info("login_failed", username=req.username)
        raise HTTPException(status_code=401, detail="Invalid credentials")
    start_session(response, store, user.id, user.role)
    logger.info("login_succeeded", user_id=user.id, role=user.role)
    return LoginResponse(user=sanitize_user(user))


@router.post("/guest", response_model=LoginResponse)
def guest_login(response: Response, store: SessionStore = Depends(get_session_store)):
    start_session(response, store, GUEST_USER_ID, GUEST_ROLE)
    return LoginResponse(user=GUEST_USER)


@router.post("/logout", response_model=MessageResponse)
def logout(
    response: Response,
    session: Optional[SessionContext] = Depends(get_session),
    store: SessionStore = Depends(get_session_store),
):
    try:
        end_session(response, store, session)
    except SessionStoreError as e:
        logger.error("logout_failed", error=str(e))
        raise HTTPException(status_code=500, detail="Logout failed")
    return MessageResponse(message="Logged out successfully")


@router.get("/user", response_model=UserOut)
def current_user(
    session: Optional[SessionContext] = Depends(get_session),
    storage: StorageProvider = Depends(get_storage),
):
    if session is None or not session.user_id:
        raise HTTPException(status_code=401, detail="Not authenticated")
    user = storage.get_user(session.user_id)
    if user is None:
        raise HTTPException(status_code=401, detail="User not found")
    return sanitize_user(user)
