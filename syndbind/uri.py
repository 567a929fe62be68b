"""URI normalization for feed and entry identifiers."""

from urllib.parse import urlsplit, urlunsplit

DEFAULT_PORTS = {"http": 80, "https": 443, "ftp": 21}


def normalize(uri: str | None) -> str | None:
    """Normalize a URI for comparison.

    Surrounding whitespace is removed, scheme and host are lowercased and a
    port equal to the scheme default is dropped. Values that are not
    hierarchical URIs (``urn:``, ``tag:``, plain GUIDs) only get their scheme
    lowercased.

    Args:
        uri: URI to normalize, may be None

    Returns:
        The normalized URI, None if ``uri`` is None
    """
    if uri is None:
        return None

    uri = uri.strip()
    try:
        parts = urlsplit(uri)
    except ValueError:
        return uri

    if not parts.scheme:
        return uri

    scheme = parts.scheme.lower()
    if not parts.netloc:
        return f"{scheme}:{uri[len(parts.scheme) + 1:]}"

    host = parts.hostname or ""
    try:
        port = parts.port
    except ValueError:
        return uri

    netloc = host
    if ":" in host:
        netloc = f"[{host}]"
    if port is not None and DEFAULT_PORTS.get(scheme) != port:
        netloc = f"{netloc}:{port}"
    if parts.username is not None:
        userinfo = parts.username
        if parts.password is not None:
            userinfo = f"{userinfo}:{parts.password}"
        netloc = f"{userinfo}@{netloc}"

    return urlunsplit((scheme, netloc, parts.path, parts.query, parts.fragment))
