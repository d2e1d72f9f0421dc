"""Domain errors raised by the services and translated to HTTP by the API layer."""


class ServiceError(Exception):
    """Base class for service-level errors. Not an HTTP error."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class DuplicateUsernameError(ServiceError):
    """Registration attempted with a username that already exists."""

    def __init__(self, username: str) -> None:
        self.username = username
        super().__init__("Username already exists")


class InvalidCredentialsError(ServiceError):
    """
    Login failed. The same message is used for an unknown username and a wrong
    password so callers cannot tell which usernames exist.
    """

    def __init__(self) -> None:
        super().__init__("Invalid credentials")


class UnauthenticatedError(ServiceError):
    """No usable identity on a protected call."""


class MissingTokenError(ServiceError):
    """Refresh requested without a refresh token."""

    def __init__(self) -> None:
        super().__init__("Refresh token required")


class InvalidTokenError(ServiceError):
    """Token is malformed, expired, wrongly signed, or superseded."""


class InsufficientRoleError(ServiceError):
    """Authenticated, but the role does not allow the operation."""

    def __init__(self) -> None:
        super().__init__("Not authorized")


class DuplicateArticleError(ServiceError):
    """An article with the same content hash already exists."""

    def __init__(self, content_hash: str) -> None:
        self.content_hash = content_hash
        super().__init__("Article already exists")


class StoreUnavailableError(ServiceError):
    """The database could not be reached or failed mid-operation."""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        self.cause = cause
        super().__init__(message)
