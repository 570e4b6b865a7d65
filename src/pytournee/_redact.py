"""Helpers for safe debug logging.

Stop definitions carry customer contact details (name, phone) and
confirmation codes handed to the driver. This module masks those fields
before actions or state fragments are emitted in DEBUG logs.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

_SENSITIVE_VALUE_KEYS: frozenset[str] = frozenset(
    {
        "phone",
        "clientname",
        "client_name",
        "confirmationcode",
        "confirmation_code",
    }
)

# Photo references can be large inline data URIs.
_PHOTO_KEYS: frozenset[str] = frozenset({"photo", "uri"})


def _mask_phone(value: str) -> str:
    digits = [c for c in value if c.isdigit()]
    if len(digits) <= 2:
        return "<redacted>"
    return f"<redacted:…{''.join(digits[-2:])}>"


def redact_for_log(value: Any, *, max_string: int = 512, _depth: int = 0) -> Any:
    """Return a redacted copy of *value* suitable for debug logs."""
    if _depth > 20:
        return "<max-depth>"

    if value is None:
        return None

    if isinstance(value, str):
        if len(value) > max_string:
            return f"{value[:max_string]}…<truncated>"
        return value

    if isinstance(value, (int, float, bool)):
        return value

    if isinstance(value, bytes):
        return f"<bytes:{len(value)}b>"

    if isinstance(value, Mapping):
        redacted: dict[str, Any] = {}
        for k, v in value.items():
            key = str(k)
            lowered = key.lower()
            if lowered in _SENSITIVE_VALUE_KEYS and v is not None:
                redacted[key] = _mask_phone(str(v)) if lowered == "phone" else "<redacted>"
            elif lowered in _PHOTO_KEYS and isinstance(v, str) and v.startswith("data:"):
                redacted[key] = f"<data-uri:{len(v)} chars>"
            else:
                redacted[key] = redact_for_log(v, max_string=max_string, _depth=_depth + 1)
        return redacted

    if isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray)):
        return [redact_for_log(v, max_string=max_string, _depth=_depth + 1) for v in value]

    # Fallback: represent unknown objects without dumping internals.
    return repr(value)
