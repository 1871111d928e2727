from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError
from jose import JWTError, jwt

from igreja.auth.roles import Role, parse_role
from igreja.core.config import settings
from igreja.core.errors import InvalidToken

_password_hasher = PasswordHasher(
    time_cost=settings.PASSWORD_HASH_TIME_COST,
    memory_cost=settings.PASSWORD_HASH_MEMORY_COST,
)


@dataclass(frozen=True)
class TokenClaims:
    subject: str
    role: Role
    issued_at: datetime
    expires_at: datetime


def now_utc() -> datetime:
    return datetime.now(timezone.utc)


def hash_password(password: str) -> str:
    return _password_hasher.hash(password)


def verify_password(password: str, hashed_password: str) -> bool:
    try:
        return _password_hasher.verify(hashed_password, password)
    except (VerifyMismatchError, VerificationError, InvalidHashError):
        return False


def create_access_token(
    subject: str,
    role: Role | str,
    issued_at: datetime | None = None,
    expires_delta: timedelta | None = None,
) -> str:
    issued = issued_at or now_utc()
    lifetime = expires_delta if expires_delta is not None else timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    payload = {
        "sub": subject,
        "role": parse_role(role).value,
        "iat": int(issued.timestamp()),
        "exp": int((issued + lifetime).timestamp()),
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALG)


def decode_access_token(token: str, now: datetime | None = None) -> TokenClaims:
    """Verify signature and expiry of ``token`` and return its claims.

    A token is valid only while ``now < exp``. Expiry is compared here rather
    than inside the JWT library so callers can pin the clock.
    """
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALG],
            options={"verify_exp": False},
        )
    except JWTError as exc:
        raise InvalidToken() from exc

    subject = payload.get("sub")
    role_value = payload.get("role")
    expires = payload.get("exp")
    if not subject or not role_value or not isinstance(expires, (int, float)):
        raise InvalidToken("Invalid token payload")
    try:
        role = parse_role(role_value)
    except ValueError as exc:
        raise InvalidToken("Invalid token payload") from exc

    current = now or now_utc()
    if current.timestamp() >= expires:
        raise InvalidToken("Token expired")

    issued = payload.get("iat")
    return TokenClaims(
        subject=str(subject),
        role=role,
        issued_at=datetime.fromtimestamp(issued, timezone.utc) if isinstance(issued, (int, float)) else current,
        expires_at=datetime.fromtimestamp(expires, timezone.utc),
    )
