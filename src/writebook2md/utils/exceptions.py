"""Custom exception hierarchy for writebook2md."""


class WritebookError(Exception):
    """Base exception for all writebook2md errors."""


class InvalidBookURLError(WritebookError):
    """Raised when a book URL has no scheme or host."""


class NetworkError(WritebookError):
    """Raised when a network/HTTP request fails."""


class PageNotFoundError(NetworkError):
    """Raised when the server answers 404 for a page or asset."""


class ParsingError(WritebookError):
    """Raised when an HTML document cannot be parsed."""


class AssetDownloadError(WritebookError):
    """Raised when an image cannot be fetched or written to disk."""
