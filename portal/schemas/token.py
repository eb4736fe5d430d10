from pydantic import BaseModel

from portal.schemas.user_schema import UserResponse


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"


class AuthResponse(Token):
    user: UserResponse
