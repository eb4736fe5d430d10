import logging

from fastapi import APIRouter, Depends, Request, Response

from portal.api.deps import get_sessions, get_settings, get_storage
from portal.auth.auth_handler import authenticate_user, get_current_user, login_session
from portal.auth.gate import GatedRoute
from portal.auth.sessions import SessionDirectory
from portal.configs.settings import Settings
from portal.errors import AuthenticationError
from portal.models import User
from portal.schemas.token import AuthResponse
from portal.schemas.user_schema import LoginRequest, RegisterRequest, UserResponse
from portal.services import user_service
from portal.services.storage import Storage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Auth"], route_class=GatedRoute)


def _open_session(response: Response, sessions: SessionDirectory, settings: Settings, user: User) -> AuthResponse:
    token = login_session(sessions, settings, user)
    response.set_cookie(
        settings.SESSION_COOKIE_NAME,
        token,
        max_age=settings.SESSION_TTL_SECONDS,
        httponly=True,
        secure=settings.SESSION_COOKIE_SECURE,
        samesite="lax",
    )
    return AuthResponse(access_token=token, user=UserResponse.from_user(user))


@router.post("/register", response_model=AuthResponse, status_code=201)
def register(
    registration: RegisterRequest,
    response: Response,
    storage: Storage = Depends(get_storage),
    sessions: SessionDirectory = Depends(get_sessions),
    settings: Settings = Depends(get_settings),
):
    user = user_service.register_user(storage, settings, registration)
    return _open_session(response, sessions, settings, user)


@router.post("/login", response_model=AuthResponse)
def login(
    credentials: LoginRequest,
    response: Response,
    storage: Storage = Depends(get_storage),
    sessions: SessionDirectory = Depends(get_sessions),
    settings: Settings = Depends(get_settings),
):
    user = authenticate_user(storage, credentials.username, credentials.password)
    if not user:
        logger.info(f"Failed login for {credentials.username}")
        raise AuthenticationError("Invalid username or password")
    return _open_session(response, sessions, settings, user)


@router.post("/logout", status_code=204)
def logout(
    request: Request,
    current_user: UserResponse = Depends(get_current_user),
    sessions: SessionDirectory = Depends(get_sessions),
    settings: Settings = Depends(get_settings),
):
    sessions.revoke(request.state.sid)
    logger.info(f"Session closed for user {current_user.username}")
    response = Response(status_code=204)
    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    return response


@router.get("/user", response_model=UserResponse)
def read_current_user(current_user: UserResponse = Depends(get_current_user)):
    return current_user
