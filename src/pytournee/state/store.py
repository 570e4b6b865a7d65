"""In-memory owner of the current round.

One :class:`RoundStore` is created per session and handed to every consumer
(dispatcher, selectors, UI bindings). Actions are applied one at a time in
submission order.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from datetime import datetime

from pytournee._redact import redact_for_log
from pytournee.config import TourneeConfig
from pytournee.models._base import utcnow
from pytournee.models.actions import Action, Reset
from pytournee.models.definitions import StopDefinition
from pytournee.models.state import Round
from pytournee.state.builder import build_round
from pytournee.state.reducer import reduce

_logger = logging.getLogger(__name__)

Listener = Callable[[Round, Round], None]


class RoundStore:
    """Holds the current :class:`Round` and applies actions to it.

    Parameters
    ----------
    definitions : sequence of StopDefinition
        Static round data the round is built from (and rebuilt from on reset).
    config : TourneeConfig or None
        Round configuration. Defaults to ``TourneeConfig()``.
    clock : callable
        Source of the timestamps stamped by transitions.
    """

    def __init__(
        self,
        definitions: Sequence[StopDefinition],
        *,
        config: TourneeConfig | None = None,
        clock: Callable[[], datetime] = utcnow,
    ) -> None:
        self._config = config or TourneeConfig()
        self._clock = clock
        self._definitions = tuple(definitions)
        self._state = build_round(self._definitions, self._config)
        self._listeners: list[Listener] = []

    @property
    def state(self) -> Round:
        return self._state

    @property
    def config(self) -> TourneeConfig:
        return self._config

    @property
    def definitions(self) -> tuple[StopDefinition, ...]:
        return self._definitions

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register ``listener(previous, current)``, called after each state change.

        Returns a callable that unregisters the listener.
        """
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def apply(self, action: Action) -> Round:
        """Apply *action* and return the resulting round."""
        if self._config.debug_actions:
            _logger.debug("Applying %s", redact_for_log(action.model_dump(mode="json")))

        previous = self._state
        current = reduce(previous, action, clock=self._clock, config=self._config)
        if current is previous:
            _logger.debug("%s left the round unchanged", action.type)
            return current

        if isinstance(action, Reset):
            self._definitions = action.definitions
        self._state = current
        _logger.debug("%s applied to round %s", action.type, current.id)
        self._notify(previous, current)
        return current

    def reset(self, definitions: Sequence[StopDefinition] | None = None) -> Round:
        """Rebuild the round from *definitions* (default: the current static data)."""
        new_definitions = self._definitions if definitions is None else tuple(definitions)
        return self.apply(Reset(definitions=new_definitions))

    def _notify(self, previous: Round, current: Round) -> None:
        for listener in list(self._listeners):
            try:
                listener(previous, current)
            except Exception:
                _logger.debug("Round listener %r failed", listener, exc_info=True)
