"""
Pytest configuration and shared fixtures.
"""
import pytest
import sys
from pathlib import Path
from typing import Callable, Sequence

import numpy as np

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
# Repository root, for the command line entry point
sys.path.insert(0, str(Path(__file__).parent.parent))

from minefield import BoardSettings, MineField, Tile


# ============================================================================
# Deterministic Mine Placement
# ============================================================================

class FixedMines:
    """Stand-in generator whose ``choice`` returns a chosen mine layout."""

    def __init__(self, indices: Sequence[int]) -> None:
        self.indices = list(indices)

    def choice(self, candidates, size=None, replace=True):
        assert not replace
        assert size == len(self.indices)
        assert all(index in candidates for index in self.indices)
        return np.array(self.indices)


class FakeClock:
    """Clock advanced by hand."""

    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def make_field(fake_clock: FakeClock) -> Callable[..., MineField]:
    """Build a field whose mines land on the given indices."""

    def build(width: int, height: int, mines: Sequence[int]) -> MineField:
        settings = BoardSettings.custom(width, height, len(mines))
        return MineField(settings, rng=FixedMines(mines), clock=fake_clock)

    return build


# ============================================================================
# Field Fixtures
# ============================================================================

@pytest.fixture
def default_field() -> MineField:
    """Create a beginner 9x9 field with 10 mines."""
    return MineField()


@pytest.fixture
def seeded_field() -> MineField:
    """Beginner field with a reproducible layout."""
    return MineField(rng=np.random.default_rng(1234))


@pytest.fixture
def corner_mine_field(make_field) -> MineField:
    """
    4x4 field with a single mine in the bottom-right corner.

    Counts:
        0 0 0 0
        0 0 0 0
        0 0 1 1
        0 0 1 *
    """
    return make_field(4, 4, [15])


@pytest.fixture
def split_field(make_field) -> MineField:
    """
    5x3 field with a wall of mines in the middle column.

    Layout (row-major):
        0 2 * 2 0
        0 3 * 3 0
        0 2 * 2 0
    """
    return make_field(5, 3, [2, 7, 12])


# ============================================================================
# Tile Fixtures
# ============================================================================

@pytest.fixture
def closed_tile() -> Tile:
    return Tile()


@pytest.fixture
def mine_tile() -> Tile:
    return Tile(has_mine=True)


# ============================================================================
# Settings Fixtures
# ============================================================================

@pytest.fixture
def valid_settings() -> BoardSettings:
    return BoardSettings.custom(9, 9, 10)
