from __future__ import annotations

import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from igreja.auth.roles import DEFAULT_ROLE, Role, parse_role
from igreja.auth.security import hash_password, verify_password
from igreja.core.errors import ConflictError, InternalError, InvalidCredentials, ValidationError
from igreja.models.user import User

logger = logging.getLogger(__name__)

# Verified against when the email is unknown so both failure paths cost one hash.
_DUMMY_HASH = hash_password("igreja-dummy-password")


def normalize_email(email: str) -> str:
    return email.strip().lower()


def _require(**fields: str | None) -> None:
    missing = [name for name, value in fields.items() if value is None or not str(value).strip()]
    if missing:
        raise ValidationError(f"Missing required fields: {', '.join(missing)}")


def resolve_role(value: str | None) -> Role:
    if value is None or not value.strip():
        return DEFAULT_ROLE
    try:
        return parse_role(value.strip())
    except ValueError as exc:
        raise ValidationError(str(exc)) from exc


def get_user(db: Session, user_id: str) -> User | None:
    return db.get(User, user_id)


def get_user_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(User.email == normalize_email(email)).first()


def register_user(
    db: Session,
    name: str | None,
    email: str | None,
    password: str | None,
    role: str | None = None,
) -> User:
    _require(name=name, email=email, password=password)
    resolved_role = resolve_role(role)
    normalized = normalize_email(email)

    if get_user_by_email(db, normalized) is not None:
        raise ConflictError()

    user = User(
        name=name.strip(),
        email=normalized,
        role=resolved_role.value,
        hashed_password=hash_password(password),
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError as exc:
        # A concurrent registration won the unique constraint.
        db.rollback()
        raise ConflictError() from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("user_register_failed", extra={"email": normalized})
        raise InternalError() from exc
    db.refresh(user)
    logger.info("user_registered", extra={"user_id": user.id, "role": user.role})
    return user


def authenticate_user(db: Session, email: str | None, password: str | None) -> User:
    _require(email=email, password=password)
    normalized = normalize_email(email)
    user = get_user_by_email(db, normalized)
    if user is None:
        verify_password(password, _DUMMY_HASH)
        logger.info("login_failed", extra={"reason": "unknown_email", "email": normalized})
        raise InvalidCredentials()
    if not verify_password(password, user.hashed_password):
        logger.info("login_failed", extra={"reason": "password_mismatch", "user_id": user.id})
        raise InvalidCredentials()
    return user
