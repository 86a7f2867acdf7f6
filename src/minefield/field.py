"""
Minefield module: the board engine.

Owns the tile grid and the game state machine. Mines are placed lazily when
the game starts so the first opened tile is always safe; opening a tile with
no adjacent mines clears the whole connected empty region.

State machine::

    WAITING --start--> PLAYING --reveal(mine)--> LOST
                               \\--reveal(last safe tile)--> WON
    any state --reset/configure--> WAITING
"""
import logging
import time
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Callable, Iterable, List, Optional, Tuple

import numpy as np

from .settings import BEGINNER, BoardSettings
from .stopwatch import Stopwatch
from .tile import Tile, TileState


logger = logging.getLogger(__name__)

Position = Tuple[int, int]
Listener = Callable[["MineField"], None]


# ============================================================================
# Constants
# ============================================================================

class GameState(Enum):
    """Phases of a game."""

    WAITING = auto()
    PLAYING = auto()
    WON = auto()
    LOST = auto()


# ============================================================================
# MineField Class
# ============================================================================

@dataclass(eq=False)
class MineField:
    """
    Minesweeper board engine.

    Tiles are stored row-major (index = row * width + col). Gameplay calls
    that do not apply in the current phase or position are ignored and
    return False; queries never mutate.

    Attributes:
        settings: Board dimensions and mine count.
        rng: Source of randomness for mine placement. Anything with numpy's
            ``Generator.choice`` signature works.
        clock: Seconds clock used by the play-time stopwatch.
    """

    settings: BoardSettings = BEGINNER
    rng: np.random.Generator = field(
        default_factory=np.random.default_rng, repr=False
    )
    clock: Callable[[], float] = field(default=time.monotonic, repr=False)
    _tiles: List[Tile] = field(init=False, default_factory=list, repr=False)
    _game_state: GameState = field(init=False, default=GameState.WAITING)
    _tiles_opened: int = field(init=False, default=0)
    _revision: int = field(init=False, default=0)
    _listeners: List[Listener] = field(
        init=False, default_factory=list, repr=False
    )

    def __post_init__(self) -> None:
        """Create the stopwatch and an empty grid."""
        self._stopwatch = Stopwatch(self.clock)
        self._init_tiles()

    # ========================================================================
    # Grid Initialization (Low-level)
    # ========================================================================

    def _init_tiles(self) -> None:
        """Create closed, mine-free tiles and return to WAITING."""
        self._tiles = [Tile() for _ in range(self.settings.tile_count)]
        self._game_state = GameState.WAITING
        self._tiles_opened = 0
        self._stopwatch.reset()

    def _place_mines(self, exclude: int) -> None:
        """
        Place mines on distinct tiles chosen uniformly at random.

        Args:
            exclude: Index of the tile that must stay mine-free.
        """
        candidates = np.delete(np.arange(self.settings.tile_count), exclude)
        chosen = self.rng.choice(
            candidates, size=self.settings.mine_count, replace=False
        )
        for index in chosen:
            self._tiles[int(index)].has_mine = True

    def _calculate_adjacent_mines(self) -> None:
        """Store the neighbouring mine count on every tile."""
        for row in range(self.height):
            for col in range(self.width):
                tile = self._tiles[self._index(row, col)]
                tile.adjacent_mines = self._count_neighbors(
                    row, col, lambda t: t.has_mine
                )

    def _count_neighbors(
        self, row: int, col: int, predicate: Callable[[Tile], bool]
    ) -> int:
        """Count neighbours of a position matching a predicate."""
        return sum(
            1
            for neighbor_row, neighbor_col in self._get_neighbors(row, col)
            if predicate(self._tiles[self._index(neighbor_row, neighbor_col)])
        )

    # ========================================================================
    # Neighbor Utilities (Low-level)
    # ========================================================================

    def _get_neighbors(self, row: int, col: int) -> List[Position]:
        """
        Get valid neighbouring positions, clipped at the board edges.

        Args:
            row: Row index of center tile.
            col: Column index of center tile.

        Returns:
            List of (row, col) tuples for valid neighbours.
        """
        neighbors = []
        for delta_row in (-1, 0, 1):
            for delta_col in (-1, 0, 1):
                if delta_row == 0 and delta_col == 0:
                    continue
                new_row = row + delta_row
                new_col = col + delta_col
                if self._is_valid_position(new_row, new_col):
                    neighbors.append((new_row, new_col))
        return neighbors

    def _is_valid_position(self, row: int, col: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= row < self.height and 0 <= col < self.width

    def _index(self, row: int, col: int) -> int:
        return row * self.width + col

    # ========================================================================
    # Change Notification
    # ========================================================================

    def add_listener(self, listener: Listener) -> None:
        """Call ``listener(field)`` after every mutating operation."""
        self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        """Stop notifying a listener; unknown listeners are ignored."""
        if listener in self._listeners:
            self._listeners.remove(listener)

    @property
    def revision(self) -> int:
        """Counter bumped on every mutation, for views that poll."""
        return self._revision

    def _changed(self) -> None:
        self._revision += 1
        for listener in list(self._listeners):
            listener(self)

    # ========================================================================
    # Game Actions (Mid-level)
    # ========================================================================

    def reset(self) -> None:
        """Start over with fresh closed tiles and a cleared timer."""
        self._init_tiles()
        logger.debug("Field reset: %s", self.settings.description)
        self._changed()

    def configure(self, settings: BoardSettings) -> None:
        """Switch to new settings; always resets the field."""
        self.settings = settings
        self.reset()

    def start(self, row: int, col: int) -> bool:
        """
        Place mines around a first activation and start the clock.

        Only acts while WAITING; later calls are ignored.

        Args:
            row: Row of the first activated tile, which stays safe.
            col: Column of the first activated tile.

        Returns:
            True if the game started, False otherwise.
        """
        if self._game_state != GameState.WAITING:
            return False
        if not self._is_valid_position(row, col):
            return False

        self._place_mines(self._index(row, col))
        self._calculate_adjacent_mines()
        self._stopwatch.start()
        self._game_state = GameState.PLAYING
        logger.debug("Game started at (%d, %d)", row, col)
        self._changed()
        return True

    def reveal(self, row: int, col: int) -> bool:
        """
        Open a tile.

        Opening a mine loses the game and exposes every mine. Opening the
        last safe tile wins and flags the remaining mines. Opening a tile
        with no adjacent mines also opens its neighbours, spreading through
        the whole empty region.

        Args:
            row: Row index to open.
            col: Column index to open.

        Returns:
            True if at least one tile was opened, False otherwise.
        """
        if not self._can_reveal(row, col):
            return False
        opened = self._open_from([(row, col)])
        if opened:
            self._changed()
        return opened

    def activate(self, row: int, col: int) -> bool:
        """Primary gesture on a tile: start the game if needed, then open it."""
        started = self.start(row, col)
        return self.reveal(row, col) or started

    def _can_reveal(self, row: int, col: int) -> bool:
        """Check if a tile can be opened."""
        if not self._is_valid_position(row, col):
            return False
        if self._game_state != GameState.PLAYING:
            return False
        return self._tiles[self._index(row, col)].is_closed

    def _open_from(self, seeds: Iterable[Position]) -> bool:
        """
        Open tiles from a work list until it drains or the game ends.

        Args:
            seeds: Positions to open first.

        Returns:
            True if any tile was opened.
        """
        pending = list(seeds)
        opened_any = False
        while pending and self._game_state == GameState.PLAYING:
            row, col = pending.pop()
            tile = self._tiles[self._index(row, col)]
            if not tile.open():
                continue
            opened_any = True
            self._tiles_opened += 1

            if tile.has_mine:
                self._lose(tile)
            elif self._all_safe_tiles_opened():
                self._win()
            elif tile.adjacent_mines == 0:
                pending.extend(
                    (neighbor_row, neighbor_col)
                    for neighbor_row, neighbor_col in self._get_neighbors(row, col)
                    if self._tiles[self._index(neighbor_row, neighbor_col)].is_closed
                )
        return opened_any

    def _all_safe_tiles_opened(self) -> bool:
        """Check if only mines remain unopened."""
        remaining = self.settings.tile_count - self._tiles_opened
        return remaining == self.settings.mine_count

    def _lose(self, exploded: Tile) -> None:
        """Expose the minefield around the tile that blew up."""
        self._stopwatch.stop()
        for tile in self._tiles:
            if tile.has_mine:
                tile.state = TileState.OPENED
        exploded.exploded = True
        self._game_state = GameState.LOST
        logger.debug("Game lost after %ds", self.elapsed_seconds)

    def _win(self) -> None:
        """Flag every mine that is still unopened."""
        self._stopwatch.stop()
        for tile in self._tiles:
            if tile.has_mine and not tile.is_opened:
                tile.state = TileState.FLAGGED
        self._game_state = GameState.WON
        logger.debug("Game won after %ds", self.elapsed_seconds)

    def toggle_flag(self, row: int, col: int) -> bool:
        """
        Toggle a flag on a tile.

        Args:
            row: Row index.
            col: Column index.

        Returns:
            True if flag was toggled, False otherwise.
        """
        if self._game_state != GameState.PLAYING:
            return False
        if not self._is_valid_position(row, col):
            return False
        toggled = self._tiles[self._index(row, col)].toggle_flag()
        if toggled:
            self._changed()
        return toggled

    def chord(self, row: int, col: int) -> bool:
        """
        Open every closed neighbour of a satisfied numbered tile.

        A numbered tile is satisfied when as many of its neighbours are
        flagged as it has adjacent mines. A wrong flag makes this lose.

        Args:
            row: Row index.
            col: Column index.

        Returns:
            True if any tile was opened, False otherwise.
        """
        if not self._can_chord(row, col):
            return False
        opened = self._open_from(
            (neighbor_row, neighbor_col)
            for neighbor_row, neighbor_col in self._get_neighbors(row, col)
            if self._tiles[self._index(neighbor_row, neighbor_col)].is_closed
        )
        if opened:
            self._changed()
        return opened

    def _can_chord(self, row: int, col: int) -> bool:
        """Check if chord action is valid."""
        if self._game_state != GameState.PLAYING:
            return False
        if not self._is_valid_position(row, col):
            return False
        tile = self._tiles[self._index(row, col)]
        if not tile.is_opened or tile.adjacent_mines == 0:
            return False
        flags = self._count_neighbors(row, col, lambda t: t.is_flagged)
        return flags == tile.adjacent_mines

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    @property
    def state(self) -> GameState:
        """Get current game state."""
        return self._game_state

    @property
    def is_waiting(self) -> bool:
        return self._game_state == GameState.WAITING

    @property
    def is_playing(self) -> bool:
        return self._game_state == GameState.PLAYING

    @property
    def is_won(self) -> bool:
        return self._game_state == GameState.WON

    @property
    def is_lost(self) -> bool:
        return self._game_state == GameState.LOST

    @property
    def width(self) -> int:
        return self.settings.width

    @property
    def height(self) -> int:
        return self.settings.height

    @property
    def mine_count(self) -> int:
        return self.settings.mine_count

    @property
    def elapsed_seconds(self) -> int:
        """Whole seconds since the first activation, frozen once the game ends."""
        return self._stopwatch.elapsed_seconds

    @property
    def mines_remaining(self) -> int:
        """Mines not yet accounted for by a flag; negative if over-flagged."""
        return self.mine_count - self.count_tiles(TileState.FLAGGED)

    @property
    def tiles(self) -> Tuple[Tile, ...]:
        """All tiles in row-major order, for display only."""
        return tuple(self._tiles)

    def tile_at(self, row: int, col: int) -> Tile:
        """
        Get the tile at a position.

        Raises:
            IndexError: If the position is off the board.
        """
        if not self._is_valid_position(row, col):
            raise IndexError(f"({row}, {col}) is outside the board")
        return self._tiles[self._index(row, col)]

    def get_tile(self, row: int, col: int) -> Optional[Tile]:
        """Get tile at position, or None if invalid."""
        if not self._is_valid_position(row, col):
            return None
        return self._tiles[self._index(row, col)]

    def count_tiles(self, state: Optional[TileState] = None) -> int:
        """
        Count tiles, optionally only those in a given state.

        Args:
            state: Restrict the count to this tile state.

        Returns:
            Number of matching tiles.
        """
        if state is None:
            return len(self._tiles)
        return sum(1 for tile in self._tiles if tile.state == state)

    def get_observation(self) -> np.ndarray:
        """
        Get the visible board as a numpy array.

        Returns:
            2D int8 array of shape (height, width) where:
                -1 = closed
                -2 = flagged
                0-8 = opened with adjacent count
                9 = opened mine
        """
        codes = [tile.to_observation() for tile in self._tiles]
        return np.array(codes, dtype=np.int8).reshape(self.height, self.width)

    def get_valid_actions(self) -> List[Position]:
        """
        Get positions that can still be opened.

        Returns:
            List of (row, col) positions of closed tiles.
        """
        return [
            divmod(index, self.width)
            for index, tile in enumerate(self._tiles)
            if tile.is_closed
        ]
