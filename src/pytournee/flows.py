"""Asynchronous calling flows around the round.

The vision analysis and the QR decoder are slow, external collaborators.
These flows await them first and only then dispatch one synchronous action
with the complete result, so an abandoned or failed call never leaves the
round half-updated.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from pytournee._constants import scan_key
from pytournee.dispatch import RoundDispatcher
from pytournee.models.analysis import ParcelAnalysis, parse_analysis_response
from pytournee.models.state import Round, ScannedParcel, UnloadingStatus
from pytournee.state.selectors import all_stops_terminal, resolve_parcel_from_qr

_logger = logging.getLogger(__name__)

AnalysisResult = ParcelAnalysis | Mapping[str, Any] | str
Analyzer = Callable[[str], Awaitable[AnalysisResult]]
"""``analyzer(photo_ref)``: vision analysis of a photo (model, dict or raw model text)."""

QrScanner = Callable[[], Awaitable[str]]
"""``scanner()``: decoded content of the next QR code."""


def coerce_analysis(result: AnalysisResult) -> ParcelAnalysis:
    """Normalise an analyzer result; scores are clamped to [1, 10] on the way."""
    if isinstance(result, ParcelAnalysis):
        return result
    if isinstance(result, str):
        return parse_analysis_response(result)
    return ParcelAnalysis.model_validate(dict(result))


async def _analyze(analyzer: Analyzer, photo: str, stop_id: int, parcel_name: str) -> ParcelAnalysis:
    try:
        result = await analyzer(photo)
    except Exception:
        _logger.debug("Analysis failed for %r at stop_id=%s", parcel_name, stop_id, exc_info=True)
        raise
    return coerce_analysis(result)


async def collect_parcel_with_analysis(
    dispatcher: RoundDispatcher,
    analyzer: Analyzer,
    stop_id: int,
    parcel_name: str,
    photo: str,
) -> Round:
    """Analyse *photo*, then collect the parcel with the analysis attached.

    If the analyzer raises, the error propagates and the parcel is left untouched.
    """
    analysis = await _analyze(analyzer, photo, stop_id, parcel_name)
    return dispatcher.collect_parcel(stop_id, parcel_name, photo, analysis)


async def analyze_collected_parcel(
    dispatcher: RoundDispatcher,
    analyzer: Analyzer,
    stop_id: int,
    parcel_name: str,
    photo: str,
) -> Round:
    """Attach (or replace) the analysis of a parcel without changing its status."""
    analysis = await _analyze(analyzer, photo, stop_id, parcel_name)
    return dispatcher.set_parcel_analysis(stop_id, parcel_name, analysis)


def unlock_unloading_if_ready(dispatcher: RoundDispatcher) -> bool:
    """Unlock the unloading stage once every stop is finished.

    Returns whether the unloading stage is unlocked after the call.
    """
    state = dispatcher.state
    if state.unloading.status != UnloadingStatus.LOCKED:
        return True
    if not all_stops_terminal(state):
        return False
    dispatcher.unlock_unloading()
    return True


class ScanStatus(StrEnum):
    SCANNED = "scanned"
    ALREADY_SCANNED = "already_scanned"
    NOT_FOUND = "not_found"
    UNLOADING_NOT_STARTED = "unloading_not_started"


@dataclass(frozen=True, slots=True)
class ScanOutcome:
    """What happened to one QR scan at the depot.

    ``record`` is the stored :class:`ScannedParcel` for ``SCANNED`` and
    ``ALREADY_SCANNED`` (the first scan's record), otherwise ``None``.
    """

    status: ScanStatus
    code: str
    stop_id: int | None = None
    parcel_name: str | None = None
    record: ScannedParcel | None = None


def register_scan(dispatcher: RoundDispatcher, code: str) -> ScanOutcome:
    """Route the parcel identified by QR payload *code* at the depot."""
    state = dispatcher.state
    if state.unloading.status != UnloadingStatus.STARTED:
        return ScanOutcome(status=ScanStatus.UNLOADING_NOT_STARTED, code=code)

    found = resolve_parcel_from_qr(state, code)
    if found is None:
        _logger.debug("No collected parcel matches QR code %r", code)
        return ScanOutcome(status=ScanStatus.NOT_FOUND, code=code)

    key = scan_key(found.stop_id, found.parcel_name)
    existing = state.unloading.scanned_parcels.get(key)
    if existing is not None:
        return ScanOutcome(
            status=ScanStatus.ALREADY_SCANNED,
            code=code,
            stop_id=found.stop_id,
            parcel_name=found.parcel_name,
            record=existing,
        )

    new_state = dispatcher.scan_parcel_at_unloading(found.stop_id, found.parcel_name)
    return ScanOutcome(
        status=ScanStatus.SCANNED,
        code=code,
        stop_id=found.stop_id,
        parcel_name=found.parcel_name,
        record=new_state.unloading.scanned_parcels[key],
    )


async def scan_for_unloading(dispatcher: RoundDispatcher, scanner: QrScanner) -> ScanOutcome:
    """Await the next QR code and register it."""
    code = await scanner()
    return register_scan(dispatcher, code)
