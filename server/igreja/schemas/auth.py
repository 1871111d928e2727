from pydantic import BaseModel

from igreja.schemas.user import UserPublic, UserSummary


# Fields stay optional so missing input is reported as a 400 validation error
# by the account service instead of a 422 from request parsing.
class RegisterRequest(BaseModel):
    name: str | None = None
    email: str | None = None
    role: str | None = None
    password: str | None = None


class RegisterResponse(BaseModel):
    message: str
    user: UserSummary


class LoginRequest(BaseModel):
    email: str | None = None
    password: str | None = None


class LoginResponse(BaseModel):
    token: str
    user: UserPublic


class MessageResponse(BaseModel):
    message: str
