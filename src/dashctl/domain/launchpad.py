"""Launchpad URL canonicalization and field limits.

Canonical URLs make duplicate detection a plain string comparison:
``HTTPS://Example.com`` and ``https://example.com/`` are the same shortcut.
"""

from __future__ import annotations

from typing import Any
from urllib.parse import urlsplit, urlunsplit

LAUNCHPAD_NAME_MAX = 80
LAUNCHPAD_DESCRIPTION_MAX = 280

ALLOWED_SCHEMES = frozenset({"http", "https"})

_DEFAULT_PORTS = {"http": 80, "https": 443}


def normalize_launchpad_url(value: Any) -> str | None:
    """Return the canonical absolute http/https form of *value*, or None.

    Scheme and host are lower-cased, default ports dropped and an empty
    path becomes ``/``. Userinfo, path, query and fragment are kept as
    given. Re-normalizing a canonical URL returns it unchanged.

    Examples:
        >>> normalize_launchpad_url("  HTTPS://Example.COM ")
        'https://example.com/'
        >>> normalize_launchpad_url("ftp://example.com") is None
        True
    """
    if not isinstance(value, str):
        return None
    text = value.strip()
    if not text or any(ch.isspace() for ch in text):
        return None

    try:
        parts = urlsplit(text)
        port = parts.port
    except ValueError:
        return None

    scheme = parts.scheme.lower()
    host = parts.hostname
    if scheme not in ALLOWED_SCHEMES or not host:
        return None

    if ":" in host:
        host = f"[{host}]"
    netloc = host
    if port is not None and port != _DEFAULT_PORTS[scheme]:
        netloc = f"{host}:{port}"
    if "@" in parts.netloc:
        userinfo = parts.netloc.rsplit("@", 1)[0]
        netloc = f"{userinfo}@{netloc}"

    return urlunsplit((scheme, netloc, parts.path or "/", parts.query, parts.fragment))


def clip(text: str, limit: int) -> str:
    """Truncate *text* to at most *limit* characters, dropping trailing space."""
    if len(text) <= limit:
        return text
    return text[:limit].rstrip()
