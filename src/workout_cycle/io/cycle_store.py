"""
Persistent cycle state with a short-lived read cache.

Next-workout lookups tend to come in bursts (several screens asking at
once), so reads are served from an in-process cache for a few seconds.
The cache is keyed on the weekly plan and dropped on every write.

A missing, corrupt or mismatched stored state is never an error: a fresh
state is initialized and written back.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import replace
from datetime import date

from ..core.config import CYCLE_CACHE_TTL_SECONDS
from ..core.cycle import new_cycle_state
from ..core.models import CycleState
from .serializers import ValidationError, cycle_state_to_dict, dict_to_cycle_state
from .stores import KeyValueStore

logger = logging.getLogger(__name__)

CYCLE_STATE_KEY = "workout_cycle_state"


def _copy(state: CycleState) -> CycleState:
    return replace(state, weekly_plan=list(state.weekly_plan))


class CycleStateStore:
    """
    Reads and writes the CycleState.

    Args:
        kv: Backing key-value store
        ttl_seconds: How long a cached read stays valid
        clock: Monotonic clock in seconds (injectable for tests)
    """

    def __init__(
        self,
        kv: KeyValueStore,
        ttl_seconds: float = CYCLE_CACHE_TTL_SECONDS,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.kv = kv
        self.ttl_seconds = ttl_seconds
        self.clock = clock
        self._cached: CycleState | None = None
        self._cached_at = 0.0
        self.store_reads = 0

    def invalidate(self) -> None:
        """Drop the cached state."""
        self._cached = None

    def _cache_hit(self, weekly_plan: list[str]) -> CycleState | None:
        if self._cached is None:
            return None
        if self._cached.weekly_plan != list(weekly_plan):
            return None
        if self.clock() - self._cached_at >= self.ttl_seconds:
            return None
        return self._cached

    def read_stored(self) -> CycleState | None:
        """
        Read the stored state, bypassing the cache.

        Returns:
            The stored state, or None if absent or unreadable (logged as a warning)
        """
        self.store_reads += 1
        try:
            raw = self.kv.get(CYCLE_STATE_KEY)
            if raw is None:
                return None
            return dict_to_cycle_state(raw)
        except (ValidationError, ValueError, TypeError, KeyError, OSError) as e:
            # json.JSONDecodeError is a ValueError
            logger.warning("Stored cycle state is corrupt, reinitializing: %s", e)
            return None

    def load(self, weekly_plan: list[str], today: date) -> CycleState:
        """
        Return the state for ``weekly_plan``.

        Served from the cache when a read for the same plan happened less
        than ``ttl_seconds`` ago.  Otherwise the store is read; a missing or
        corrupt state, or one built for a different plan, is replaced by a
        fresh state starting today.
        """
        cached = self._cache_hit(weekly_plan)
        if cached is not None:
            return _copy(cached)

        state = self.read_stored()
        if state is not None and state.weekly_plan != list(weekly_plan):
            logger.info(
                "Weekly plan changed (%s -> %s); starting a new cycle",
                state.weekly_plan,
                weekly_plan,
            )
            state = None

        if state is None:
            state = new_cycle_state(weekly_plan, today)
            self._write(state)

        self._cached = _copy(state)
        self._cached_at = self.clock()
        return _copy(state)

    def _write(self, state: CycleState) -> None:
        try:
            self.kv.set(CYCLE_STATE_KEY, cycle_state_to_dict(state))
        except (OSError, TypeError, ValueError) as e:
            logger.warning("Could not persist cycle state: %s", e)

    def save(self, state: CycleState) -> None:
        """Persist the state and invalidate the cache."""
        self.invalidate()
        self.kv.set(CYCLE_STATE_KEY, cycle_state_to_dict(state))
        logger.debug("Saved cycle state: %s", cycle_state_to_dict(state))

    def reset(self) -> None:
        """Remove the stored state and invalidate the cache."""
        self.invalidate()
        self.kv.delete(CYCLE_STATE_KEY)
