import logging

import igreja.models  # noqa: F401
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from igreja.core.config import settings
from igreja.core.db import Base, engine
from igreja.core.errors import AuthError, InternalError, Unauthenticated, ValidationError
from igreja.routers import auth as auth_router

app = FastAPI(title="Igreja API", version="0.1.0")

logger = logging.getLogger(__name__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth_router.router)


def _error_response(exc: AuthError) -> JSONResponse:
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == Unauthenticated.status_code else None
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "code": exc.code},
        headers=headers,
    )


@app.exception_handler(AuthError)
async def handle_auth_error(request: Request, exc: AuthError) -> JSONResponse:
    return _error_response(exc)


@app.exception_handler(RequestValidationError)
async def handle_request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    # Missing or mistyped input answers 400 like every other validation failure.
    fields = set()
    for error in exc.errors():
        location = [str(part) for part in error.get("loc", ()) if part != "body"]
        fields.add(".".join(location) or "body")
    return _error_response(ValidationError(f"Invalid or missing fields: {', '.join(sorted(fields))}"))


@app.exception_handler(SQLAlchemyError)
async def handle_database_error(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error("database_error", exc_info=exc, extra={"path": request.url.path})
    return _error_response(InternalError("Unexpected server error, try again later"))


@app.on_event("startup")
def ensure_local_schema() -> None:
    """Create tables for SQLite runs; Postgres deployments use Alembic."""

    if engine.dialect.name != "sqlite":
        return
    Base.metadata.create_all(bind=engine)


@app.get("/health", tags=["health"])
def health() -> dict[str, str]:
    return {"status": "ok"}
