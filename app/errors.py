class ContentSourceError(Exception):
    """Raised when the content backend fails or returns an unusable payload."""


class LoadMoreError(Exception):
    """Raised when fetching the next listing page fails."""


class InvalidTransition(Exception):
    """Raised when a detail page is loaded again after reaching a terminal state."""
