"""URI utility functions."""

from urllib.parse import urlparse, unquote


def uri_to_path(uri: str) -> str:
    """Convert a file URI to a file path. Plain paths are returned unchanged."""
    parsed = urlparse(uri)
    if not parsed.scheme:
        return uri
    return unquote(parsed.path)
