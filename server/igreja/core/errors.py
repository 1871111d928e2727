"""Error taxonomy shared by the token issuer and the client session manager.

Every failure of the authentication core is one of these classes. Each carries
the HTTP status it is rendered with and a stable ``code`` that travels in the
JSON body, so the client can map an answer back onto the same class.
"""

from __future__ import annotations


class AuthError(Exception):
    status_code: int = 500
    code: str = "internal_error"
    default_message: str = "Unexpected error"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AuthError):
    status_code = 400
    code = "validation_error"
    default_message = "Invalid request"


class ConflictError(AuthError):
    status_code = 400
    code = "conflict"
    default_message = "Email is already in use"


class InvalidCredentials(AuthError):
    status_code = 400
    code = "invalid_credentials"
    default_message = "Invalid credentials"


class Unauthenticated(AuthError):
    status_code = 401
    code = "unauthenticated"
    default_message = "Not authenticated"


class InvalidToken(AuthError):
    status_code = 401
    code = "invalid_token"
    default_message = "Invalid token"


class Forbidden(AuthError):
    status_code = 403
    code = "forbidden"
    default_message = "Insufficient permissions"


class NotFound(AuthError):
    status_code = 404
    code = "not_found"
    default_message = "User not found"


class InternalError(AuthError):
    pass


ERRORS_BY_CODE: dict[str, type[AuthError]] = {
    cls.code: cls
    for cls in (
        ValidationError,
        ConflictError,
        InvalidCredentials,
        Unauthenticated,
        InvalidToken,
        Forbidden,
        NotFound,
        InternalError,
    )
}

_ERRORS_BY_STATUS: dict[int, type[AuthError]] = {
    400: ValidationError,
    401: Unauthenticated,
    403: Forbidden,
    404: NotFound,
}


def error_for(status_code: int, code: str | None, message: str | None = None) -> AuthError:
    """Rebuild the taxonomy member for an error answer received over HTTP."""
    cls = ERRORS_BY_CODE.get(code or "") or _ERRORS_BY_STATUS.get(status_code, InternalError)
    return cls(message)
