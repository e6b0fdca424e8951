"""Construction-time settings for a game."""

from __future__ import annotations

from dataclasses import dataclass

from .errors import ConfigurationError


# Points awarded for each completed line.  There is no multi-line bonus.
SCORE_PER_LINE = 10

# A piece that cannot descend while its anchor is above this row ends the game.
GAME_OVER_ROW = 2


@dataclass(frozen=True)
class GameConfig:
    """Field dimensions and the presentation block size.

    ``block_size`` is carried for hosts that draw the field; the engine never
    reads it.
    """

    columns: int = 10
    rows: int = 20
    block_size: float = 20.0

    def __post_init__(self) -> None:
        for name in ("columns", "rows"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise ConfigurationError(f"{name} must be a positive integer, got {value!r}")
        if self.block_size <= 0:
            raise ConfigurationError(f"block_size must be positive, got {self.block_size!r}")

    @property
    def window_width(self) -> float:
        """Width of the playable area in points."""

        return self.block_size * self.columns

    @property
    def window_height(self) -> float:
        """Height of the playable area in points."""

        return self.block_size * self.rows
