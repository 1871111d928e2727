from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from igreja.auth.roles import Role, parse_role
from igreja.core.errors import InternalError, error_for

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SessionUser:
    id: str
    email: str
    role: Role
    name: str = ""

    @classmethod
    def from_payload(cls, payload: Any) -> "SessionUser":
        try:
            return cls(
                id=str(payload["id"]),
                email=payload["email"],
                role=parse_role(payload["role"]),
                name=payload.get("name") or "",
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise InternalError("Malformed user payload") from exc


class AuthApi:
    """Owned HTTP client for the ``/auth`` endpoints.

    The bearer token is attached to this instance's default headers only.
    ``SessionManager`` is its single writer.
    """

    def __init__(
        self,
        base_url: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._client = httpx.AsyncClient(base_url=base_url, timeout=timeout, transport=transport)

    async def __aenter__(self) -> "AuthApi":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    @property
    def token(self) -> str | None:
        header = self._client.headers.get("Authorization")
        if not header:
            return None
        return header.split(" ", 1)[1] if " " in header else None

    def set_token(self, token: str) -> None:
        self._client.headers["Authorization"] = f"Bearer {token}"

    def clear_token(self) -> None:
        self._client.headers.pop("Authorization", None)

    async def _request(self, method: str, path: str, json: dict[str, Any] | None = None) -> Any:
        try:
            response = await self._client.request(method, path, json=json)
        except httpx.HTTPError as exc:
            logger.warning("auth_request_failed", extra={"path": path, "error": type(exc).__name__})
            raise InternalError("Unable to reach the server") from exc

        try:
            body = response.json()
        except ValueError:
            body = None

        if response.is_success:
            if body is None:
                raise InternalError("Malformed server response")
            return body

        code = body.get("code") if isinstance(body, dict) else None
        detail = None
        if isinstance(body, dict):
            detail = body.get("detail") or body.get("message")
        raise error_for(response.status_code, code, detail if isinstance(detail, str) else None)

    async def register(self, name: str, email: str, password: str, role: Role | str | None = None) -> SessionUser:
        payload: dict[str, Any] = {"name": name, "email": email, "password": password}
        if role is not None:
            payload["role"] = role.value if isinstance(role, Role) else role
        body = await self._request("POST", "/auth/register", json=payload)
        user = body.get("user") if isinstance(body, dict) else None
        if not isinstance(user, dict):
            raise InternalError("Malformed server response")
        # The register answer omits the display name.
        return SessionUser.from_payload({**user, "name": name})

    async def login(self, email: str, password: str) -> tuple[SessionUser, str]:
        body = await self._request("POST", "/auth/login", json={"email": email, "password": password})
        token = body.get("token") if isinstance(body, dict) else None
        if not isinstance(token, str) or not token:
            raise InternalError("Malformed server response")
        return SessionUser.from_payload(body.get("user")), token

    async def me(self) -> SessionUser:
        return SessionUser.from_payload(await self._request("GET", "/auth/me"))

    async def logout(self) -> str:
        body = await self._request("POST", "/auth/logout")
        return body.get("message", "") if isinstance(body, dict) else ""
