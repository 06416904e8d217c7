"""HTTP transport for writebook2md."""

from .http import FetchResult, WritebookClient


__all__ = ["FetchResult", "WritebookClient"]
