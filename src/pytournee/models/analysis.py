"""AI analysis result for a photographed parcel.

The vision call itself lives outside this library. Its result reaches the
round through :class:`ParcelAnalysis`, whose validators round and clamp the
scores to the inclusive range [1, 10] so that the reducer only ever stores
bounded values.
"""

from __future__ import annotations

import json
import logging
import math
import re
from typing import Any

from pydantic import ConfigDict, ValidationError, field_validator

from pytournee._constants import DEFAULT_SCORE, SCORE_MAX, SCORE_MIN
from pytournee.models._base import TourneeBaseModel

_logger = logging.getLogger(__name__)

_FENCE_RE = re.compile(r"```(?:json)?\s*", re.IGNORECASE)

FALLBACK_NAME = "Objet non identifié"
FALLBACK_BRAND = "Marque inconnue"
_FALLBACK_DESCRIPTION_CHARS = 200


def clamp_score(value: Any) -> int | None:
    """Round half up and clamp *value* to [1, 10]; ``None`` when not numeric."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(number):
        return None
    return max(SCORE_MIN, min(SCORE_MAX, math.floor(number + 0.5)))


class ParcelAnalysis(TourneeBaseModel):
    """Identification and scoring of a parcel from its photo.

    ``recycling_score`` rates how easily the object can be recycled,
    ``condition_score`` its apparent condition (10 = as new). Either may be
    ``None`` when the analysis did not produce it.
    """

    model_config = ConfigDict(extra="ignore")

    name: str = ""
    brand: str = ""
    description: str = ""
    recycling_score: int | None = None
    recycling_comment: str = ""
    condition_score: int | None = None
    condition_comment: str = ""
    tips: str = ""

    @field_validator("recycling_score", "condition_score", mode="before")
    @classmethod
    def _clamp_scores(cls, value: Any) -> int | None:
        return clamp_score(value)

    @classmethod
    def fallback(cls, raw_text: str) -> ParcelAnalysis:
        """Analysis used when the vision response cannot be interpreted."""
        return cls(
            name=FALLBACK_NAME,
            brand=FALLBACK_BRAND,
            description=raw_text[:_FALLBACK_DESCRIPTION_CHARS],
            recycling_score=DEFAULT_SCORE,
            recycling_comment="Impossible d'évaluer le recyclage automatiquement.",
            condition_score=DEFAULT_SCORE,
            condition_comment="Impossible d'évaluer l'état automatiquement.",
            tips=raw_text,
        )


def parse_analysis_response(text: str) -> ParcelAnalysis:
    """Parse the raw text returned by the vision model.

    The model is asked for bare JSON but sometimes wraps it in Markdown code
    fences; those are stripped first. Anything that still does not parse
    into a :class:`ParcelAnalysis` yields :meth:`ParcelAnalysis.fallback`.
    """
    cleaned = _FENCE_RE.sub("", text).strip()
    try:
        decoded = json.loads(cleaned)
        return ParcelAnalysis.model_validate(decoded)
    except (json.JSONDecodeError, ValidationError):
        _logger.debug("Unparseable analysis response, using fallback", exc_info=True)
        return ParcelAnalysis.fallback(text)
