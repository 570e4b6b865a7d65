"""Round state layer.

This package is the single source of truth for the round: the builder creates
it from static data, the reducer is the only code that derives new rounds
from actions, and the selectors project read-only views of it.
"""

from pytournee.state.builder import build_round
from pytournee.state.reducer import reduce
from pytournee.state.store import RoundStore

__all__ = ["RoundStore", "build_round", "reduce"]
