"""Custom exception hierarchy for pytournee."""

from __future__ import annotations


class TourneeError(Exception):
    """Base exception for all pytournee errors."""


class TourneeConfigError(TourneeError):
    """Invalid or missing configuration."""


class TourneeActionError(TourneeError, ValueError):
    """An action could not be built from the given arguments.

    Raised by :class:`pytournee.dispatch.RoundDispatcher` when an argument
    has the wrong shape (non-integer stop id, empty parcel name, unknown
    completion result...). Business preconditions are never checked here:
    an action about a stop that does not exist is still dispatched and is
    a no-op in the reducer.
    """

    def __init__(self, message: str, *, action_type: str = "") -> None:
        self.action_type = action_type
        super().__init__(message)


class RoundDataError(TourneeError):
    """Static round data could not be loaded or breaks the builder precondition.

    Covers malformed JSON, definitions failing validation, duplicate stop ids
    and duplicate parcel names within a stop.
    """
