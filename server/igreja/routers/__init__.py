"""API routers for the Igreja application."""

from igreja.routers import auth  # noqa: F401
