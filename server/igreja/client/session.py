"""Client-side custodian of authentication state.

``SessionManager`` is handed explicitly to the views that need it. It owns the
persisted token, the ``Authorization`` header of its ``AuthApi`` and the three
state fields views read: ``current_user``, ``is_authenticated`` and
``is_loading``.

Every state-changing call takes a new generation number. An asynchronous call
applies its result only if no other call started after it, so a ``logout``
issued while a ``login`` is in flight always wins.
"""

from __future__ import annotations

import logging
from enum import Enum

from igreja.auth.roles import Role, has_permission
from igreja.client.api import AuthApi, SessionUser
from igreja.client.storage import AUTH_TOKEN_KEY, TokenStore
from igreja.core.errors import AuthError, ValidationError

logger = logging.getLogger(__name__)


class SessionState(str, Enum):
    LOADING = "loading"
    AUTHENTICATED = "authenticated"
    UNAUTHENTICATED = "unauthenticated"


class SessionManager:
    def __init__(self, api: AuthApi, store: TokenStore, token_key: str = AUTH_TOKEN_KEY) -> None:
        self._api = api
        self._store = store
        self._token_key = token_key
        self._generation = 0
        self._bootstrapped = False
        self.current_user: SessionUser | None = None
        self.is_authenticated = False
        self.is_loading = True

    @property
    def state(self) -> SessionState:
        if self.is_loading:
            return SessionState.LOADING
        if self.is_authenticated:
            return SessionState.AUTHENTICATED
        return SessionState.UNAUTHENTICATED

    def _next_generation(self) -> int:
        self._generation += 1
        return self._generation

    def _is_current(self, generation: int) -> bool:
        return generation == self._generation

    async def bootstrap(self) -> None:
        """Restore the persisted session, validating it against the server."""
        if self._bootstrapped:
            raise RuntimeError("Session already bootstrapped")
        self._bootstrapped = True
        generation = self._next_generation()
        self.is_loading = True
        try:
            token = self._store.get(self._token_key)
            if not token:
                return
            self._api.set_token(token)
            try:
                user = await self._api.me()
            except AuthError as exc:
                logger.info("session_restore_failed", extra={"code": exc.code})
                if self._is_current(generation):
                    self.logout()
                return
            if self._is_current(generation):
                self.current_user = user
                self.is_authenticated = True
            else:
                logger.debug("session_restore_discarded")
        finally:
            self.is_loading = False

    async def login(self, email: str, password: str) -> SessionUser | None:
        """Authenticate and persist the session.

        Returns the signed-in user, or ``None`` when a later ``login`` or
        ``logout`` superseded this call while it awaited the server. Server
        errors propagate unchanged.
        """
        if not email or not password:
            raise ValidationError("E-mail and password are required.")
        generation = self._next_generation()
        user, token = await self._api.login(email, password)
        if not self._is_current(generation):
            logger.debug("login_result_discarded")
            return None
        self._store.set(self._token_key, token)
        self._api.set_token(token)
        self.current_user = user
        self.is_authenticated = True
        return user

    def logout(self) -> None:
        self._next_generation()
        self.current_user = None
        self.is_authenticated = False
        self.is_loading = False
        self._store.remove(self._token_key)
        self._api.clear_token()

    def has_permission(self, required_role: Role | str) -> bool:
        if self.current_user is None:
            return False
        return has_permission(self.current_user.role, required_role)
