"""Authentication and authorization failures.

Every failure is terminal for the request that raised it. The HTTP layer
turns each one into the response envelope with its status_code.
"""


class AuthError(Exception):
    """Base class; carries a client-safe message and an HTTP status."""

    status_code: int = 400
    default_message: str = "Request failed."
    # Add WWW-Authenticate: Bearer to the response
    challenge: bool = False

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class MissingToken(AuthError):
    status_code = 401
    default_message = "Access denied. No token provided."
    challenge = True


class InvalidToken(AuthError):
    status_code = 401
    default_message = "Invalid token."
    challenge = True


class TokenExpired(AuthError):
    status_code = 401
    default_message = "Token expired."
    challenge = True


class StaleIdentity(AuthError):
    """Token verified but its subject no longer resolves in the core partition."""

    status_code = 401
    default_message = "Invalid token: User not found."
    challenge = True


class NotServiceStaff(AuthError):
    status_code = 403
    default_message = "Access denied: Not a registered Service Staff account."


class InvalidCredentials(AuthError):
    status_code = 401
    default_message = "Invalid credentials."


class AccountPending(AuthError):
    status_code = 403
    default_message = "Account pending approval."


class DuplicateIdentity(AuthError):
    status_code = 409
    default_message = "Email or Username already exists."


class Forbidden(AuthError):
    status_code = 403
    default_message = "Forbidden."


class AuthServiceUnavailable(AuthError):
    status_code = 503
    default_message = "Authentication service unavailable."


class WeakPassword(AuthError):
    status_code = 422
    default_message = "Password does not meet the password policy."


class NotFound(AuthError):
    status_code = 404
    default_message = "Not found."
