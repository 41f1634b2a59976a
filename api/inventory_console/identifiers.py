# inventory_console/identifiers.py
"""
Record identifiers.

Handles:
- Fresh id generation per backend (random token, timestamp+token, uuid)
- Translation between the public ``id`` and a backend-native key (``_id``)

Every adapter that stores records under a native key goes through
``to_native`` / ``from_native`` and nothing else.
"""
from __future__ import annotations
import secrets
import string
import time
import uuid
from typing import Any, Callable, Dict, Mapping, Optional

NATIVE_KEY = "_id"
PUBLIC_KEY = "id"

_ALPHABET = string.ascii_lowercase + string.digits


# =========================================================================
# Generation
# =========================================================================

def random_token(length: int = 8) -> str:
    """Base-36 style token, ``length`` characters."""
    return "".join(secrets.choice(_ALPHABET) for _ in range(length))


def prefixed_id(collection: str) -> str:
    """
    In-memory ids: first three letters of the collection plus a token.

    Example:
        prefixed_id("products") -> "pro_k3j9x0qa"
    """
    return f"{collection[:3]}_{random_token(8)}"


def timestamp_id() -> str:
    """Local slot ids: millisecond timestamp followed by a 7 char token."""
    return f"{int(time.time() * 1000)}{random_token(7)}"


def uuid_id() -> str:
    return uuid.uuid4().hex


# =========================================================================
# Translation
# =========================================================================

def to_native(
    doc: Mapping[str, Any],
    *,
    key: str = NATIVE_KEY,
    new_id: Optional[Callable[[], Any]] = None,
) -> Dict[str, Any]:
    """
    Public record -> stored document.

    ``id`` is renamed to ``key``. When the record has no id and ``new_id`` is
    given, a fresh one is generated; without ``new_id`` the key is left out so
    the backend can assign it.
    """
    out = {k: v for k, v in doc.items() if k not in (PUBLIC_KEY, key)}
    ident = doc.get(PUBLIC_KEY) or doc.get(key)
    if ident is None and new_id is not None:
        ident = new_id()
    if ident is not None:
        out[key] = ident
    return out


def from_native(doc: Optional[Mapping[str, Any]], *, key: str = NATIVE_KEY) -> Optional[Dict[str, Any]]:
    """Stored document -> public record with a string ``id`` (``None`` passes through)."""
    if doc is None:
        return None
    out: Dict[str, Any] = {}
    native = doc.get(key)
    if native is not None:
        out[PUBLIC_KEY] = str(native)
    for k, v in doc.items():
        if k != key:
            out[k] = v
    return out


def native_query(query: Optional[Mapping[str, Any]], *, key: str = NATIVE_KEY,
                 convert: Optional[Callable[[str], Any]] = None) -> Dict[str, Any]:
    """Equality filter on public fields -> filter on stored documents."""
    out: Dict[str, Any] = {}
    for k, v in (query or {}).items():
        if k == PUBLIC_KEY:
            out[key] = convert(v) if convert and v is not None else v
        else:
            out[k] = v
    return out
