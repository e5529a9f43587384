"""Error taxonomy shared by the services and rendered by the API layer."""

FieldErrors = dict[str, list[str]]


class ApiError(Exception):
    """Base exception for errors that map onto an API response."""

    status_code = 500
    default_message = "Server Error"

    def __init__(self, message: str | None = None, errors: FieldErrors | None = None):
        self.message = message or self.default_message
        self.errors = errors
        super().__init__(self.message)


class ValidationError(ApiError):
    """One or more input fields are missing or malformed."""

    status_code = 422
    default_message = "The given data was invalid."

    def __init__(self, errors: FieldErrors, message: str | None = None):
        super().__init__(message, errors)


class ConflictError(ApiError):
    """A unique constraint would be violated."""

    status_code = 422
    default_message = "The given data was invalid."

    def __init__(self, field: str, reason: str):
        self.field = field
        super().__init__(errors={field: [reason]})


class AuthenticationError(ApiError):
    """Credentials or bearer token are missing, unknown or revoked."""

    status_code = 401
    default_message = "Unauthenticated."


class AuthorizationError(ApiError):
    """The caller is authenticated but does not own the resource."""

    status_code = 403
    default_message = "This action is unauthorized."


class NotFoundError(ApiError):
    """The requested resource does not exist."""

    status_code = 404
    default_message = "Not found"
