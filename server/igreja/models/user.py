from __future__ import annotations

from uuid import uuid4

from sqlalchemy import Column, DateTime, Enum, String
from sqlalchemy.sql import func

from igreja.auth.roles import DEFAULT_ROLE, ROLE_VALUES
from igreja.core.db import Base

UserRole = Enum(*ROLE_VALUES, name="user_role")


def _new_id() -> str:
    return str(uuid4())


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=_new_id)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    role = Column(UserRole, nullable=False, default=DEFAULT_ROLE.value)
    hashed_password = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
