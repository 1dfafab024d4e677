"""Identifier generation.

Two strategies:
- Fresh ids (new entities): coarse millisecond timestamp plus a short
  random base36 suffix. Not guaranteed unique; collisions are negligible at
  a handful of requests per second.
- Derived ids (stored entities with a missing, blank, or duplicate id):
  SHA-256 of the entity's position and content, 8 hex chars, so
  re-normalizing the same input always yields the same id.
"""

from __future__ import annotations

import hashlib
import random
import string
import time
from collections.abc import Collection as AbstractCollection

from dashctl.domain.types import ID_PREFIXES, Collection

_BASE36 = string.digits + string.ascii_lowercase
_SUFFIX_LENGTH = 6


def make_id() -> str:
    """Return an opaque id of the form ``{epoch_ms}-{6 base36 chars}``."""
    suffix = "".join(random.choices(_BASE36, k=_SUFFIX_LENGTH))
    return f"{time.time_ns() // 1_000_000}-{suffix}"


def derive_id(collection: Collection, index: int, content: str) -> str:
    """Deterministic id for the entity at *index* of *collection*.

    Returns ``{prefix}-{8 hex chars}``.
    """
    digest = hashlib.sha256(f"{collection}:{index}:{content}".encode()).hexdigest()[:8]
    return f"{ID_PREFIXES[collection]}-{digest}"


def claim_id(
    candidate: str | None,
    taken: AbstractCollection[str],
    *,
    collection: Collection,
    index: int,
    content: str,
) -> str:
    """Return *candidate* if usable, else a derived id not present in *taken*.

    A candidate is usable when it is non-blank and not already taken. Derived
    ids that collide get a ``-2``, ``-3``, ... suffix.
    """
    if candidate and candidate not in taken:
        return candidate
    base = derive_id(collection, index, content)
    result = base
    n = 2
    while result in taken:
        result = f"{base}-{n}"
        n += 1
    return result
