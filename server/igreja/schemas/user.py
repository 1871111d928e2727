from datetime import datetime

from pydantic import BaseModel

from igreja.auth.roles import Role


class UserSummary(BaseModel):
    id: str
    email: str
    role: Role

    class Config:
        from_attributes = True


class UserPublic(UserSummary):
    name: str


class UserOut(UserPublic):
    created_at: datetime | None = None
    updated_at: datetime | None = None
