"""
Tile module for the minefield engine.

A tile is one cell of the grid: whether it hides a mine, how many of its
neighbours do, and what the player currently sees of it.
"""
from enum import Enum, auto
from dataclasses import dataclass


# ============================================================================
# Constants
# ============================================================================

class TileState(Enum):
    """What the player sees of a tile."""

    CLOSED = auto()
    OPENED = auto()
    FLAGGED = auto()


# ============================================================================
# Tile Data Class
# ============================================================================

@dataclass
class Tile:
    """
    A single tile of the minefield.

    Attributes:
        has_mine: Whether a mine sits under this tile.
        adjacent_mines: Mines among the up to 8 neighbours (0-8).
        exploded: True only for the mine whose opening lost the game.
        state: Closed, opened or flagged.
    """

    has_mine: bool = False
    adjacent_mines: int = 0
    exploded: bool = False
    state: TileState = TileState.CLOSED

    def open(self) -> bool:
        """
        Open this tile.

        Returns:
            True if the tile went from closed to opened, False if it was
            already opened or is flagged.
        """
        if self.state != TileState.CLOSED:
            return False
        self.state = TileState.OPENED
        return True

    def toggle_flag(self) -> bool:
        """
        Cycle between closed and flagged.

        Returns:
            True if the flag was toggled, False if the tile is opened.
        """
        if self.state == TileState.OPENED:
            return False
        if self.state == TileState.CLOSED:
            self.state = TileState.FLAGGED
        else:
            self.state = TileState.CLOSED
        return True

    @property
    def is_closed(self) -> bool:
        """Check if tile is closed."""
        return self.state == TileState.CLOSED

    @property
    def is_opened(self) -> bool:
        """Check if tile is opened."""
        return self.state == TileState.OPENED

    @property
    def is_flagged(self) -> bool:
        """Check if tile is flagged."""
        return self.state == TileState.FLAGGED

    def to_observation(self) -> int:
        """
        Encode the visible part of the tile as a small integer.

        Returns:
            -1: Closed tile
            -2: Flagged tile
            0-8: Opened tile with its adjacent mine count
            9: Opened mine (lost game)
        """
        if self.state == TileState.CLOSED:
            return -1
        if self.state == TileState.FLAGGED:
            return -2
        if self.has_mine:
            return 9
        return self.adjacent_mines
