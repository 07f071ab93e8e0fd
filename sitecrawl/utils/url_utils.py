from urllib.parse import urlparse

HTTP_SCHEMES = ("http", "https")


def is_valid_url(url) -> bool:
    """Return True for an absolute http(s) URL with a host."""
    if not isinstance(url, str) or not url.strip():
        return False
    try:
        parsed = urlparse(url.strip())
        # accessing .port validates the netloc (raises on e.g. "host:abc")
        parsed.port
    except ValueError:
        return False
    return parsed.scheme.lower() in HTTP_SCHEMES and bool(parsed.hostname)


def extract_domain(url: str) -> str:
    """Return the hostname of `url`, or `url` itself when it cannot be parsed."""
    try:
        hostname = urlparse(url).hostname
    except ValueError:
        return url
    return hostname or url
