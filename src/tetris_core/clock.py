"""Timing contract between a host scheduler and the engine.

A host drives two cadences: a fast frame tick, on which it only reads engine
state to draw it, and a slower drop tick that calls ``gravity_tick()``.  The
engine never assumes a tick rate.  :class:`GravityTimer` is a small driver for
the drop cadence that hosts can feed with elapsed milliseconds from their own
loop.
"""

from __future__ import annotations

from typing import Protocol

from .engine import GameState


# Default cadences, in milliseconds.
FRAME_INTERVAL_MS = 1000.0 / 30
DROP_INTERVAL_MS = 1000.0


class TickTarget(Protocol):
    """The part of the engine a drop timer needs."""

    @property
    def state(self) -> GameState:
        ...

    def gravity_tick(self) -> bool:
        ...


class GravityTimer:
    """Turn elapsed time into gravity ticks.

    While the target is paused or over, no ticks fire and the accumulated time
    is discarded, so a resumed game does not drop several rows at once.
    """

    def __init__(self, target: TickTarget, interval_ms: float = DROP_INTERVAL_MS) -> None:
        if interval_ms <= 0:
            raise ValueError(f"interval_ms must be positive, got {interval_ms!r}")
        self.target = target
        self.interval_ms = interval_ms
        self.elapsed_ms = 0.0

    def reset(self) -> None:
        """Discard accumulated time."""

        self.elapsed_ms = 0.0

    def advance(self, elapsed_ms: float) -> int:
        """Account for ``elapsed_ms`` and return how many ticks fired."""

        if self.target.state is not GameState.RUNNING:
            self.reset()
            return 0
        self.elapsed_ms += elapsed_ms
        fired = 0
        while self.elapsed_ms >= self.interval_ms:
            self.elapsed_ms -= self.interval_ms
            self.target.gravity_tick()
            fired += 1
            if self.target.state is not GameState.RUNNING:
                self.reset()
                break
        return fired
