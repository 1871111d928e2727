import logging

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from igreja.auth.deps import get_current_user, get_token_claims
from igreja.auth.security import TokenClaims, create_access_token
from igreja.core.db import get_db
from igreja.models.user import User
from igreja.schemas.auth import LoginRequest, LoginResponse, MessageResponse, RegisterRequest, RegisterResponse
from igreja.schemas.user import UserOut, UserPublic, UserSummary
from igreja.services.user_accounts import authenticate_user, register_user

router = APIRouter(prefix="/auth", tags=["auth"])

logger = logging.getLogger(__name__)


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
def register(payload: RegisterRequest, db: Session = Depends(get_db)) -> RegisterResponse:
    user = register_user(
        db,
        name=payload.name,
        email=payload.email,
        password=payload.password,
        role=payload.role,
    )
    return RegisterResponse(message="User created successfully", user=UserSummary.model_validate(user))


@router.post("/login", response_model=LoginResponse)
def login(payload: LoginRequest, db: Session = Depends(get_db)) -> LoginResponse:
    user = authenticate_user(db, payload.email, payload.password)
    token = create_access_token(subject=user.id, role=user.role)
    logger.info("login_succeeded", extra={"user_id": user.id, "role": user.role})
    return LoginResponse(token=token, user=UserPublic.model_validate(user))


@router.get("/me", response_model=UserOut)
def me(user: User = Depends(get_current_user)) -> UserOut:
    return UserOut.model_validate(user)


@router.post("/logout", response_model=MessageResponse)
def logout(claims: TokenClaims = Depends(get_token_claims)) -> MessageResponse:
    # Tokens are not revoked server side; the client discards its copy.
    logger.info("logout", extra={"user_id": claims.subject})
    return MessageResponse(message="Logged out")
