"""Exceptions raised by issuefeed."""


class IssueFeedError(Exception):
    """Base class for issuefeed errors."""

    pass


class TrackerError(IssueFeedError):
    """Raised when an issue tracker API call fails or returns an unusable response."""

    pass


class RegistrationError(IssueFeedError):
    """Raised when a repository cannot be registered (metadata fetch failed)."""

    pass


class InvalidTokenError(IssueFeedError):
    """Raised when a feed token does not resolve to a registered feed."""

    def __init__(self, message: str = "invalid feed hash") -> None:
        super().__init__(message)


class FeedRenderError(IssueFeedError):
    """Raised when a feed cannot be serialized to the requested format."""

    pass
