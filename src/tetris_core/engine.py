"""Game engine: state machine, commands and gravity.

The engine owns its :class:`~tetris_core.field.Field` and active
:class:`~tetris_core.tetromino.Tetromino` exclusively.  Hosts read them through
the query accessors and change them only through the command methods.  The
engine has no internal locking; a host that issues commands from several
threads must serialise them itself.
"""

from __future__ import annotations

import logging
import random
from enum import Enum
from typing import Callable, Dict, List, NamedTuple, Optional, Protocol

from .config import GAME_OVER_ROW, SCORE_PER_LINE, GameConfig
from .field import Field, Grid
from .tetromino import TETRO_SIZE, Tetromino, TetrominoType
from .utils import can_move, placement_is_valid, render_grid


LOGGER = logging.getLogger(__name__)


class RandomSource(Protocol):
    """Anything able to pick the next shape, e.g. :class:`random.Random`."""

    def randrange(self, stop: int) -> int:
        ...


class GameState(Enum):
    RUNNING = "running"
    PAUSED = "paused"
    GAME_OVER = "game_over"


class Command(Enum):
    """Discrete commands a host may deliver through :meth:`GameEngine.dispatch`."""

    MOVE_LEFT = "move_left"
    MOVE_RIGHT = "move_right"
    SOFT_DROP = "soft_drop"
    ROTATE = "rotate"
    TOGGLE_PAUSE = "toggle_pause"
    RESTART = "restart"
    GRAVITY_TICK = "gravity_tick"


class BlockCell(NamedTuple):
    """A field coordinate of the active piece with its colour."""

    x: int
    y: int
    color: int


class GameEngine:
    """Deterministic falling-block engine for a single game session.

    Parameters
    ----------
    config:
        Field dimensions.  Defaults to a 10x20 field.
    rng:
        Source for the next shape.  Inject a seeded :class:`random.Random`
        for reproducible piece sequences.
    """

    def __init__(
        self,
        config: Optional[GameConfig] = None,
        *,
        rng: Optional[RandomSource] = None,
    ) -> None:
        self._config = config or GameConfig()
        self._rng: RandomSource = rng if rng is not None else random.Random()
        self._handlers: Dict[Command, Callable[[], object]] = {
            Command.MOVE_LEFT: self.move_left,
            Command.MOVE_RIGHT: self.move_right,
            Command.SOFT_DROP: self.soft_drop,
            Command.ROTATE: self.rotate,
            Command.TOGGLE_PAUSE: self.toggle_pause,
            Command.RESTART: self.restart,
            Command.GRAVITY_TICK: self.gravity_tick,
        }
        self.restart()

    # Queries ----------------------------------------------------------
    @property
    def config(self) -> GameConfig:
        return self._config

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def score(self) -> int:
        return self._score

    @property
    def completed_lines(self) -> int:
        return self._completed_lines

    @property
    def field(self) -> Field:
        return self._field

    @property
    def active(self) -> Tetromino:
        return self._active

    @property
    def upcoming(self) -> TetrominoType:
        """Shape that becomes active on the next spawn."""

        return self._upcoming

    def field_snapshot(self) -> Grid:
        """Return a copy of the field grid, without the active piece."""

        return self._field.snapshot()

    def active_piece_cells(self) -> List[BlockCell]:
        """Return the four field coordinates of the active piece."""

        color = self._active.color
        return [BlockCell(x, y, color) for x, y in self._active.cells()]

    def render_grid(self) -> Grid:
        """Return a copy of the field grid with the active piece drawn in."""

        return render_grid(self._field, self._active)

    # Lifecycle --------------------------------------------------------
    def restart(self) -> bool:
        """Start a new game from scratch.

        The field, counters, pending shape and active piece are all rebuilt and
        the state returns to :attr:`GameState.RUNNING`.
        """

        self._field = Field(self._config.columns, self._config.rows)
        self._score = 0
        self._completed_lines = 0
        self._state = GameState.RUNNING
        self._upcoming = self._random_type()
        self._spawn_next()
        LOGGER.info(
            "New game on a %dx%d field", self._config.columns, self._config.rows
        )
        return True

    def toggle_pause(self) -> bool:
        """Switch between running and paused.  Ignored once the game is over."""

        if self._state is GameState.RUNNING:
            self._state = GameState.PAUSED
        elif self._state is GameState.PAUSED:
            self._state = GameState.RUNNING
        else:
            return False
        LOGGER.debug("Game %s", self._state.value)
        return True

    def spawn(self, shape: TetrominoType) -> Tetromino:
        """Make ``shape`` the active piece at the top centre of the field.

        Overlap is not checked here; a piece that spawns into settled blocks
        is caught by the next downward move, which ends the game.
        """

        self._active = Tetromino(
            TetrominoType(shape),
            x=self._config.columns // 2 - TETRO_SIZE // 2,
            y=0,
        )
        return self._active

    def _random_type(self) -> TetrominoType:
        return TetrominoType(self._rng.randrange(len(TetrominoType)))

    def _spawn_next(self) -> Tetromino:
        shape = self._upcoming
        self._upcoming = self._random_type()
        return self.spawn(shape)

    # Commands ---------------------------------------------------------
    def dispatch(self, command: Command) -> bool:
        """Run the method bound to ``command`` and return its result."""

        return bool(self._handlers[Command(command)]())

    def move_left(self) -> bool:
        return self.move_horizontal(-1)

    def move_right(self) -> bool:
        return self.move_horizontal(1)

    def move_horizontal(self, dx: int) -> bool:
        """Shift the active piece one column left (``-1``) or right (``+1``).

        Returns ``True`` if the piece moved.  Blocked moves, any other ``dx``
        and moves outside :attr:`GameState.RUNNING` leave everything unchanged.
        """

        if self._state is not GameState.RUNNING:
            return False
        if dx not in (-1, 1):
            LOGGER.debug("Rejected horizontal move by %r", dx)
            return False
        if not can_move(self._field, self._active, dx, 0):
            return False
        self._active.move(dx, 0)
        return True

    def rotate(self) -> bool:
        """Rotate the active piece in place.

        There are no wall kicks: if the next rotation state does not fit at the
        current anchor the previous rotation is restored.
        """

        if self._state is not GameState.RUNNING:
            return False
        self._active.rotate()
        if not placement_is_valid(self._field, self._active):
            self._active.rotate(-1)
            return False
        return True

    def move_down(self) -> bool:
        """Drop the active piece by one row.

        Returns ``True`` if the piece descended.  A blocked piece whose anchor
        is still within the top rows ends the game and leaves the field
        untouched.  Otherwise it settles where it stands, completed lines are
        cleared and scored, and the pending shape spawns.
        """

        if self._state is not GameState.RUNNING:
            return False
        if can_move(self._field, self._active, 0, 1):
            self._active.move(0, 1)
            return True

        if self._active.y < GAME_OVER_ROW:
            self._state = GameState.GAME_OVER
            LOGGER.info(
                "Game over. Score: %d, lines: %d", self._score, self._completed_lines
            )
            return False

        self._field.settle(self._active.cells(), self._active.color)
        cleared = self._field.clear_completed_lines()
        if cleared:
            self._completed_lines += cleared
            self._score += cleared * SCORE_PER_LINE
            LOGGER.info("Cleared %d row(s). Score: %d", cleared, self._score)
        self._spawn_next()
        return False

    def soft_drop(self) -> bool:
        """Player-requested one-row descent; same as a gravity tick."""

        return self.move_down()

    def gravity_tick(self) -> bool:
        """Forced one-row descent driven by the host's timer."""

        return self.move_down()


def new_game(
    columns: int = 10, rows: int = 20, *, rng: Optional[RandomSource] = None
) -> GameEngine:
    """Create a running game on a ``columns`` x ``rows`` field."""

    return GameEngine(GameConfig(columns=columns, rows=rows), rng=rng)
