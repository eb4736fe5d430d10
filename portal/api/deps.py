from fastapi import Request

from portal.auth.sessions import SessionDirectory
from portal.configs.settings import Settings
from portal.services.storage import Storage


def get_storage(request: Request) -> Storage:
    return request.app.state.storage


def get_sessions(request: Request) -> SessionDirectory:
    return request.app.state.sessions


def get_settings(request: Request) -> Settings:
    return request.app.state.settings
