"""
Error taxonomy for authentication, authorization and uploads.

Every AppError carries the HTTP status it maps to and a message that is safe
to show to the caller. The exception handler in app.main renders them as
{"success": false, "msg": message}.
"""


class AppError(Exception):
    """Base class for errors whose message is returned to the client."""

    status_code: int = 400
    default_message: str = "Bad request"

    def __init__(self, message: str | None = None) -> None:
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(AppError):
    """Malformed input: bad email, short password, missing admin code."""

    default_message = "Invalid input"


class DuplicateIdentityError(AppError):
    default_message = "User already exists"


class LoginFailedError(AppError):
    """
    Base for login failures.

    Subclasses share one client-facing message so the response does not reveal
    whether the email is registered. Logs keep the distinction.
    """

    default_message = "Invalid email or password"
    reason = "login_failed"

    def __init__(self) -> None:
        super().__init__(self.default_message)


class AccountNotFoundError(LoginFailedError):
    reason = "not_found"


class InvalidCredentialsError(LoginFailedError):
    reason = "invalid_password"


class AuthenticationError(AppError):
    """Base for 401 rejections at the access guard."""

    status_code = 401
    default_message = "Authentication failed"
    reason = "unauthenticated"


class TokenMissingError(AuthenticationError):
    default_message = "Authorization token required"
    reason = "token_missing"


class TokenMalformedError(AuthenticationError):
    default_message = "Malformed token"
    reason = "token_malformed"


class TokenExpiredError(AuthenticationError):
    default_message = "Token expired"
    reason = "token_expired"


class TokenSignatureError(AuthenticationError):
    default_message = "Invalid token"
    reason = "token_signature_invalid"


class UserNotFoundError(AuthenticationError):
    default_message = "User not found or token invalid"
    reason = "user_not_found"


class AccessDeniedError(AppError):
    """Base for 403 rejections at the access guard."""

    status_code = 403
    default_message = "Access denied"
    reason = "forbidden"


class InactiveAccountError(AccessDeniedError):
    default_message = "Account is not active"
    reason = "inactive"


class InsufficientRoleError(AccessDeniedError):
    default_message = "Insufficient privileges"
    reason = "insufficient_role"


class NotFoundError(AppError):
    status_code = 404
    default_message = "Not found"


class StoreUnavailableError(AppError):
    """Persistence layer unreachable or timed out. Details stay in the logs."""

    status_code = 503
    default_message = "Service temporarily unavailable"


class PayloadTooLargeError(AppError):
    status_code = 413
    default_message = "Upload too large"


class UnsupportedMediaTypeError(AppError):
    status_code = 415
    default_message = "Content-Type must be multipart/form-data"
