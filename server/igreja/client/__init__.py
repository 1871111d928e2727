"""Client-side session handling for the Igreja API."""

from igreja.client.api import AuthApi, SessionUser  # noqa: F401
from igreja.client.routing import RouteDecision, guard  # noqa: F401
from igreja.client.session import SessionManager, SessionState  # noqa: F401
from igreja.client.storage import AUTH_TOKEN_KEY, FileTokenStore, MemoryTokenStore, TokenStore  # noqa: F401
