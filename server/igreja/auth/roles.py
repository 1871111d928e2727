"""Static role hierarchy: membro < lider < pastor < admin."""

from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    MEMBRO = "membro"
    LIDER = "lider"
    PASTOR = "pastor"
    ADMIN = "admin"


ROLE_RANK: dict[Role, int] = {
    Role.MEMBRO: 1,
    Role.LIDER: 2,
    Role.PASTOR: 3,
    Role.ADMIN: 4,
}

DEFAULT_ROLE = Role.MEMBRO
ROLE_VALUES = tuple(role.value for role in Role)


def parse_role(value: Role | str) -> Role:
    if isinstance(value, Role):
        return value
    try:
        return Role(value)
    except ValueError as exc:
        raise ValueError(f"Role must be one of: {', '.join(ROLE_VALUES)}") from exc


def rank(role: Role | str) -> int:
    return ROLE_RANK[parse_role(role)]


def has_permission(user_role: Role | str | None, required_role: Role | str) -> bool:
    """Higher ranks inherit every permission of the lower ones."""
    if user_role is None:
        return False
    return rank(user_role) >= rank(required_role)
