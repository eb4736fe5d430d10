import logging
import time
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer
from fastapi.security.utils import get_authorization_scheme_param
from jose import JWTError, jwt
from passlib.context import CryptContext

from portal.api.deps import get_sessions, get_settings, get_storage
from portal.auth.sessions import SessionDirectory
from portal.configs.settings import Settings
from portal.errors import AuthenticationError
from portal.models import EntityKind, User
from portal.schemas.user_schema import UserResponse
from portal.services.storage import Storage

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/login", auto_error=False)


def verify_password(plain_password, hashed_password):
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password):
    return pwd_context.hash(password)


def authenticate_user(storage: Storage, username: str, password: str) -> Optional[User]:
    user = storage.get_user_by_username(username)
    if not user or not verify_password(password, user.password):
        return None
    return user


def create_session_token(sid: str, user_id: int, secret: str) -> str:
    """Sign the opaque session id; expiry is tracked by the session directory."""
    to_encode = {"sid": sid, "sub": str(user_id), "iat": int(time.time())}
    return jwt.encode(to_encode, secret, algorithm=ALGORITHM)


def read_session_token(token: str, secret: str) -> str:
    try:
        payload = jwt.decode(token, secret, algorithms=[ALGORITHM])
    except JWTError:
        raise AuthenticationError("Invalid session")
    sid = payload.get("sid")
    if not sid:
        raise AuthenticationError("Invalid session")
    return sid


def login_session(sessions: SessionDirectory, settings: Settings, user: User) -> str:
    sid = sessions.create(user.id)
    logger.info(f"Session opened for user {user.username}")
    return create_session_token(sid, user.id, settings.SESSION_SECRET)


def _resolve_user(request: Request, token: Optional[str], storage: Storage, sessions: SessionDirectory,
                  settings: Settings) -> UserResponse:
    if not token:
        logger.info(f"Rejected unauthenticated request to {request.url.path}")
        raise AuthenticationError()
    sid = read_session_token(token, settings.SESSION_SECRET)
    user_id = sessions.resolve(sid)
    if user_id is None:
        logger.info(f"Rejected expired or revoked session on {request.url.path}")
        raise AuthenticationError("Session expired")
    user = storage.get(EntityKind.users, user_id)
    if not user:
        sessions.revoke(sid)
        raise AuthenticationError("Session user no longer exists")
    request.state.sid = sid
    return UserResponse.from_user(user)


def get_current_user(
    request: Request,
    bearer_token: Optional[str] = Depends(oauth2_scheme),
    storage: Storage = Depends(get_storage),
    sessions: SessionDirectory = Depends(get_sessions),
    settings: Settings = Depends(get_settings),
) -> UserResponse:
    token = bearer_token or request.cookies.get(settings.SESSION_COOKIE_NAME)
    return _resolve_user(request, token, storage, sessions, settings)


def user_from_request(request: Request) -> UserResponse:
    """Resolve the caller without dependency injection, from the same header or cookie."""
    settings = get_settings(request)
    scheme, bearer_token = get_authorization_scheme_param(request.headers.get("Authorization"))
    if scheme.lower() != "bearer":
        bearer_token = None
    token = bearer_token or request.cookies.get(settings.SESSION_COOKIE_NAME)
    return _resolve_user(request, token, get_storage(request), get_sessions(request), settings)
