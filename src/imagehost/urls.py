"""URL helpers."""

from urllib.parse import unquote


def purify_url(url: str) -> str:
    """Strip query string and fragment from ``url`` and percent-decode the rest."""
    for sep in ("?", "#"):
        idx = url.find(sep)
        if idx > -1:
            url = url[:idx]
    return unquote(url)
