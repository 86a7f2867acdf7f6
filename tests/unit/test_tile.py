"""
Unit tests for Tile.

Tests tile state changes, flagging and observation codes.
"""
import pytest
from minefield import Tile, TileState


# ============================================================================
# Tile Initialization Tests
# ============================================================================

class TestTileInitialization:
    """Test tile creation and default values."""

    def test_default_tile_is_closed_and_safe(self) -> None:
        """New tile is closed, mine-free and not exploded."""
        tile = Tile()
        assert tile.state == TileState.CLOSED
        assert tile.is_closed is True
        assert tile.has_mine is False
        assert tile.exploded is False
        assert tile.adjacent_mines == 0

    def test_mine_tile_creation(self, mine_tile: Tile) -> None:
        assert mine_tile.has_mine is True


# ============================================================================
# Tile Open Tests
# ============================================================================

class TestTileOpen:
    """Test opening a tile."""

    def test_open_closed_tile(self, closed_tile: Tile) -> None:
        """Opening a closed tile succeeds and changes its state."""
        assert closed_tile.open() is True
        assert closed_tile.is_opened is True

    def test_open_twice_fails(self, closed_tile: Tile) -> None:
        closed_tile.open()
        assert closed_tile.open() is False

    def test_open_flagged_tile_fails(self, closed_tile: Tile) -> None:
        """Flags protect a tile from being opened."""
        closed_tile.toggle_flag()
        assert closed_tile.open() is False
        assert closed_tile.is_flagged is True


# ============================================================================
# Tile Flag Tests
# ============================================================================

class TestTileFlag:
    """Test flag toggling."""

    def test_flag_closed_tile(self, closed_tile: Tile) -> None:
        assert closed_tile.toggle_flag() is True
        assert closed_tile.state == TileState.FLAGGED

    def test_double_toggle_restores_closed(self, closed_tile: Tile) -> None:
        closed_tile.toggle_flag()
        closed_tile.toggle_flag()
        assert closed_tile.state == TileState.CLOSED

    def test_flag_opened_tile_fails(self, closed_tile: Tile) -> None:
        closed_tile.open()
        assert closed_tile.toggle_flag() is False
        assert closed_tile.is_opened is True


# ============================================================================
# Tile Observation Tests
# ============================================================================

class TestTileObservation:
    """Test observation codes."""

    def test_closed_is_negative_one(self, closed_tile: Tile) -> None:
        assert closed_tile.to_observation() == -1

    def test_flagged_is_negative_two(self, closed_tile: Tile) -> None:
        closed_tile.toggle_flag()
        assert closed_tile.to_observation() == -2

    @pytest.mark.parametrize("count", range(0, 9))
    def test_opened_tile_shows_count(self, count: int) -> None:
        tile = Tile(adjacent_mines=count)
        tile.open()
        assert tile.to_observation() == count

    def test_opened_mine_is_nine(self, mine_tile: Tile) -> None:
        mine_tile.open()
        assert mine_tile.to_observation() == 9
