from __future__ import annotations

import argparse
import getpass

from sqlalchemy.orm import Session

from igreja.auth.roles import ROLE_VALUES, Role, parse_role
from igreja.auth.security import hash_password
from igreja.core.db import Base, SessionLocal, engine
from igreja.models.user import User
from igreja.services.user_accounts import get_user_by_email, register_user


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create or promote an account directly in the database.")
    parser.add_argument("--email", required=True)
    parser.add_argument("--name", default="Administrador")
    parser.add_argument("--role", choices=ROLE_VALUES, default=Role.ADMIN.value)
    parser.add_argument("--password", help="Prompted for when omitted")
    parser.add_argument(
        "--reset-password",
        action="store_true",
        help="Replace the password of an existing account",
    )
    return parser.parse_args(argv)


def ensure_user(
    db: Session,
    email: str,
    name: str,
    password: str,
    role: str,
    reset_password: bool = False,
) -> User:
    user = get_user_by_email(db, email)
    if user is None:
        return register_user(db, name=name, email=email, password=password, role=role)

    user.role = parse_role(role).value
    if reset_password:
        user.hashed_password = hash_password(password)
    db.commit()
    db.refresh(user)
    return user


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    password = args.password or getpass.getpass("Password: ")
    if engine.dialect.name == "sqlite":
        Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        user = ensure_user(db, args.email, args.name, password, args.role, reset_password=args.reset_password)
    finally:
        db.close()
    print(f"{user.email} ready with role {user.role}")


if __name__ == "__main__":
    main()
