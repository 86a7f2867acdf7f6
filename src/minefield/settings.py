"""
Board settings for the minefield engine.

Holds the immutable width/height/mine-count triple a game is played with,
the three classic presets and a constructor for custom boards.
"""
from dataclasses import dataclass
from typing import Tuple


CUSTOM_LABEL = "Custom"


class InvalidConfiguration(ValueError):
    """Raised when board settings cannot describe a playable board."""


# ============================================================================
# Board Settings
# ============================================================================

@dataclass(frozen=True)
class BoardSettings:
    """
    Dimensions and mine count of a board.

    Attributes:
        width: Number of columns.
        height: Number of rows.
        mine_count: Mines to place; at least one safe tile must remain.
        label: Human readable name of the setting.
    """

    width: int = 9
    height: int = 9
    mine_count: int = 10
    label: str = CUSTOM_LABEL

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure the settings describe a playable board."""
        if self.width < 1 or self.height < 1:
            raise InvalidConfiguration("Board dimensions must be positive")
        if self.mine_count < 1:
            raise InvalidConfiguration("Mine count must be positive")
        max_mines = self.width * self.height - 1
        if self.mine_count > max_mines:
            raise InvalidConfiguration(f"Too many mines (max {max_mines})")

    @property
    def tile_count(self) -> int:
        """Total number of tiles on the board."""
        return self.width * self.height

    @property
    def description(self) -> str:
        """Label and dimensions, e.g. ``Beginner (9 x 9 / Mines x 10)``."""
        return (
            f"{self.label} ({self.width} x {self.height} "
            f"/ Mines x {self.mine_count})"
        )

    # ========================================================================
    # Named Constructors
    # ========================================================================

    @classmethod
    def beginner(cls) -> "BoardSettings":
        return BEGINNER

    @classmethod
    def intermediate(cls) -> "BoardSettings":
        return INTERMEDIATE

    @classmethod
    def expert(cls) -> "BoardSettings":
        return EXPERT

    @classmethod
    def custom(cls, width: int, height: int, mine_count: int) -> "BoardSettings":
        """Build settings for an arbitrary board labelled ``Custom``."""
        return cls(width, height, mine_count, CUSTOM_LABEL)


# Preset difficulty levels
BEGINNER = BoardSettings(9, 9, 10, "Beginner")
INTERMEDIATE = BoardSettings(16, 16, 40, "Intermediate")
EXPERT = BoardSettings(30, 16, 99, "Expert")

PRESETS: Tuple[BoardSettings, ...] = (BEGINNER, INTERMEDIATE, EXPERT)


def preset(name: str) -> BoardSettings:
    """
    Look up a preset by its label, ignoring case.

    Raises:
        KeyError: If no preset carries that label.
    """
    for settings in PRESETS:
        if settings.label.lower() == name.lower():
            return settings
    raise KeyError(name)
