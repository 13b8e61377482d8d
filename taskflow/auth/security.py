import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from fastapi import Depends, HTTPException, Request, Response, status
from passlib.context import CryptContext

from ..config import settings
from ..schemas.auth import UserOut, UserRecord
from .sessions import SessionStore, get_session_store


pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

GUEST_USER_ID = "guest"
GUEST_ROLE = "guest"
ADMIN_ROLES = ("admin", "super_admin")

GUEST_USER = UserOut(
    id=GUEST_USER_ID,
    username="Guest User",
    first_name="Guest",
    last_name="User",
    email=None,
    role=GUEST_ROLE,
)


def get_password_hash(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain: str, hashed: Optional[str]) -> bool:
    if not hashed:
        return False
    try:
        return pwd_context.verify(plain, hashed)
    except (ValueError, TypeError):
        return False


def sanitize_user(user: UserRecord) -> UserOut:
    return UserOut(
        id=user.id,
        username=user.username,
        first_name=user.first_name,
        last_name=user.last_name,
        email=user.email,
        role=user.role,
    )


def encode_session_cookie(sid: str) -> str:
    now = datetime.now(tz=timezone.utc)
    payload = {
        "sid": sid,
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(seconds=settings.session_ttl_seconds)).timestamp()),
    }
    return jwt.encode(payload, settings.session_secret, algorithm=settings.session_algorithm)


def decode_session_cookie(token: str) -> Optional[str]:
    try:
        payload = jwt.decode(token, settings.session_secret, algorithms=[settings.session_algorithm])
    except jwt.InvalidTokenError:
        return None
    sid = payload.get("sid")
    return str(sid) if sid else None


class SessionContext:
    """The request's session: its id and the key/value bag stored for it."""

    def __init__(self, sid: str, data: dict):
        self.sid = sid
        self.data = data

    @property
    def user_id(self) -> Optional[str]:
        return self.data.get("userId")

    @property
    def user_role(self) -> Optional[str]:
        return self.data.get("userRole")


def start_session(response: Response, store: SessionStore, user_id: str, role: str) -> SessionContext:
    """Create a fresh session for the user and attach its cookie to the response."""
    sid = secrets.token_urlsafe(32)
    data = {"userId": user_id, "userRole": role}
    store.save(sid, data, settings.session_ttl_seconds)
    response.set_cookie(
        key=settings.session_cookie_name,
        value=encode_session_cookie(sid),
        max_age=settings.session_ttl_seconds,
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
    )
    return SessionContext(sid, data)


def end_session(response: Response, store: SessionStore, session: Optional[SessionContext]) -> None:
    if session is not None:
        store.destroy(session.sid)
    response.delete_cookie(settings.session_cookie_name)


def get_session(request: Request, store: SessionStore = Depends(get_session_store)) -> Optional[SessionContext]:
    token = request.cookies.get(settings.session_cookie_name)
    if not token:
        return None
    sid = decode_session_cookie(token)
    if not sid:
        return None
    data = store.load(sid)
    if data is None:
        return None
    return SessionContext(sid, data)


def require_authenticated(session: Optional[SessionContext] = Depends(get_session)) -> SessionContext:
    if session is None or not session.user_id:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Unauthorized")
    return session


def require_role(*allowed_roles: str):
    """Allow the request only when the role captured at login is one of `allowed_roles`.

    The role is read from the session, not re-fetched, so a role change takes
    effect at the next login.
    """
    def _dep(session: SessionContext = Depends(require_authenticated)):
        if not session.user_role or session.user_role not in allowed_roles:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Insufficient permissions")
        return session

    return _dep
