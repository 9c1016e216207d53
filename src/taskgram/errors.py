"""Error types shared across taskgram."""


class TaskgramError(Exception):
    """Base class for taskgram errors."""

    pass


class ConfigError(TaskgramError):
    """Raised when configuration is missing, invalid or contradictory."""

    pass


class NotFound(TaskgramError):
    """Raised when a search finishes without a match. Not a failure."""

    pass


class AccountNotFound(NotFound):
    """Raised when a display name does not resolve to any account."""

    def __init__(self, username: str):
        super().__init__(f"User {username!r} not found in Notion")
        self.username = username


class TitleUnavailable(TaskgramError):
    """Raised when a work item has no usable title property."""

    pass


class RemoteCallError(TaskgramError):
    """Raised when a single remote call fails."""

    def __init__(
        self,
        operation: str,
        message: str,
        status: int | None = None,
        timed_out: bool = False,
    ):
        super().__init__(f"{operation}: {message}")
        self.operation = operation
        self.status = status
        self.timed_out = timed_out
