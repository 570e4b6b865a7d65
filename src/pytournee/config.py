"""Configuration for pytournee."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pytournee._constants import (
    DEFAULT_DEPOT_ADDRESS,
    DEFAULT_DEPOT_CITY,
    DEFAULT_DEPOT_TIME_WINDOW,
    DEFAULT_ROUND_ID,
)
from pytournee.exceptions import TourneeConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


@dataclasses.dataclass(frozen=True)
class TourneeConfig:
    """Round configuration.

    Parameters
    ----------
    round_id : str
        Identifier given to every round built from static data.
    depot_address : str
        Depot street address, used for the unloading stage when no stop
        definition is flagged as the unloading stop.
    depot_city : str
        Depot city (same fallback rule as ``depot_address``).
    depot_time_window : str
        Time-window label shown for the unloading stage.
    depot_notes : str or None
        Free-form notes for the unloading stage.
    debug_actions : bool
        Log every applied action payload (redacted) at DEBUG level.
    """

    round_id: str = DEFAULT_ROUND_ID
    depot_address: str = DEFAULT_DEPOT_ADDRESS
    depot_city: str = DEFAULT_DEPOT_CITY
    depot_time_window: str = DEFAULT_DEPOT_TIME_WINDOW
    depot_notes: str | None = None
    debug_actions: bool = False

    def __post_init__(self) -> None:
        if not self.round_id or not self.round_id.strip():
            raise TourneeConfigError("round_id must be non-empty")
        if not self.depot_address.strip():
            raise TourneeConfigError("depot_address must be non-empty")

    @classmethod
    def from_env(cls, **overrides: Any) -> TourneeConfig:
        """Create configuration from environment variables.

        Reads optional ``TOURNEE_*`` variables. Explicit keyword arguments
        override environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        TourneeConfig
            Populated configuration.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "TOURNEE_ROUND_ID": "round_id",
            "TOURNEE_DEPOT_ADDRESS": "depot_address",
            "TOURNEE_DEPOT_CITY": "depot_city",
            "TOURNEE_DEPOT_TIME_WINDOW": "depot_time_window",
            "TOURNEE_DEPOT_NOTES": "depot_notes",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        if "debug_actions" not in overrides:
            config_kwargs["debug_actions"] = _env_bool(env.get("TOURNEE_DEBUG_ACTIONS"), False)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
