from typing import Callable

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from igreja.auth.roles import Role, has_permission, parse_role
from igreja.auth.security import TokenClaims, decode_access_token
from igreja.core.db import get_db
from igreja.core.errors import Forbidden, NotFound, Unauthenticated
from igreja.models.user import User
from igreja.services.user_accounts import get_user

# HTTPBearer matches the scheme keyword case-insensitively, so both
# "Bearer <token>" and "bearer <token>" are accepted.
bearer_scheme = HTTPBearer(auto_error=False)


def get_token_claims(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer_scheme),
) -> TokenClaims:
    if not credentials or not credentials.credentials:
        raise Unauthenticated()
    return decode_access_token(credentials.credentials)


def get_current_user(
    claims: TokenClaims = Depends(get_token_claims),
    db: Session = Depends(get_db),
) -> User:
    user = get_user(db, claims.subject)
    if user is None:
        raise NotFound()
    return user


def require_role(minimum: Role | str) -> Callable[[TokenClaims], TokenClaims]:
    required = parse_role(minimum)

    def checker(claims: TokenClaims = Depends(get_token_claims)) -> TokenClaims:
        if not has_permission(claims.role, required):
            raise Forbidden()
        return claims

    return checker
