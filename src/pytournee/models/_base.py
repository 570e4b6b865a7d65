"""Base model shared by every pytournee record.

Every model inherits from :class:`TourneeBaseModel` which provides:

* ``frozen=True``: records are never mutated in place. Transitions build
  new records with ``model_copy(update=...)``, which is shallow, so the
  parts of the tree an action does not touch keep their identity.
* ``alias_generator=to_camel`` so camelCase static data (``clientName``,
  ``timeWindow``...) maps to snake_case fields, and
  ``model_dump(by_alias=True)`` produces the camelCase shape the UI uses.
"""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


def utcnow() -> datetime:
    """Default clock: timezone-aware current UTC time."""
    return datetime.now(UTC)


class TourneeBaseModel(BaseModel):
    """Base for all round records and actions."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        populate_by_name=True,
        alias_generator=to_camel,
    )
