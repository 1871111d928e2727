from __future__ import annotations

from enum import Enum

from igreja.auth.roles import Role
from igreja.client.session import SessionManager


class RouteDecision(str, Enum):
    LOADING = "loading"
    LOGIN = "login"
    HOME = "home"
    ALLOW = "allow"


def guard(session: SessionManager, required_role: Role | str | None = None) -> RouteDecision:
    """Decide what a protected view shows for the current session.

    Unauthenticated sessions go to the login view, authenticated ones lacking
    ``required_role`` go back home.
    """
    if session.is_loading:
        return RouteDecision.LOADING
    if not session.is_authenticated:
        return RouteDecision.LOGIN
    if required_role is not None and not session.has_permission(required_role):
        return RouteDecision.HOME
    return RouteDecision.ALLOW
