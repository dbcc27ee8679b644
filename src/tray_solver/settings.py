"""
Settings Module for the tray solver

Provides search defaults stored as JSON, and the SearchConfig built from
them and from command-line flags.
"""

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

# Settings file location (working directory)
SETTINGS_FILE = Path("config.json")

AUTO = "auto"
FRINGE_CHOICES = (AUTO, "dfs", "bfs")
GENERATOR_CHOICES = (AUTO, "piece", "gap")

# Default settings
DEFAULT_SETTINGS: Dict[str, Any] = {
    "fringe": AUTO,
    "generator": AUTO,
    "check_invariants": False,
    "breadth_first_threshold": 50,
    "piece_centric_ratio": 1.0,
    "timeout_sec": None,
    "max_states": None,
    "progress_interval": 10000,
}


def load_settings(path: Union[str, Path, None] = None) -> Dict[str, Any]:
    """
    Load settings from a JSON file.

    The default config.json is optional: when it is missing or invalid the
    defaults are used. A file named explicitly must exist and parse.

    Args:
        path: Settings file (default: config.json)

    Returns:
        Settings dictionary merged over the defaults

    Raises:
        ConfigurationError: If an explicit path is missing or not a JSON object
    """
    explicit = path is not None
    settings_file = Path(path) if explicit else SETTINGS_FILE
    if not settings_file.exists():
        if explicit:
            raise ConfigurationError(f"Settings file not found: {settings_file}")
        logger.debug("Settings file not found, using defaults")
        return DEFAULT_SETTINGS.copy()

    try:
        with open(settings_file, 'r', encoding='utf-8') as f:
            settings = json.load(f)
        if not isinstance(settings, dict):
            raise ValueError("top-level JSON value must be an object")
    except (ValueError, IOError) as e:
        if explicit:
            raise ConfigurationError(f"Failed to load settings from {settings_file}: {e}")
        logger.warning(f"Failed to load settings: {e}, using defaults")
        return DEFAULT_SETTINGS.copy()

    # Merge with defaults to handle missing keys
    result = DEFAULT_SETTINGS.copy()
    result.update(settings)
    logger.debug(f"Settings loaded: {result}")
    return result


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


@dataclass
class SearchConfig:
    """
    Strategy choices for one search.

    "auto" defers the choice to the board: breadth-first when both
    dimensions exceed breadth_first_threshold, and piece-centric when
    pieces < piece_centric_ratio * free cells (gap-centric otherwise).

    Attributes:
        fringe: "auto", "dfs" or "bfs"
        generator: "auto", "piece" or "gap"
        check_invariants: Re-validate boards after every mutation
        breadth_first_threshold: Dimension above which auto picks BFS
        piece_centric_ratio: Weight of free cells in the auto generator rule
        timeout_sec: Search time limit, or None
        max_states: Expansion limit, or None
        progress_interval: Expansions between progress reports
    """
    fringe: str = AUTO
    generator: str = AUTO
    check_invariants: bool = False
    breadth_first_threshold: int = 50
    piece_centric_ratio: float = 1.0
    timeout_sec: Optional[float] = None
    max_states: Optional[int] = None
    progress_interval: int = 10000

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        """
        Raises:
            ConfigurationError: If any field has the wrong type or an
                unsupported value
        """
        if self.fringe not in FRINGE_CHOICES:
            raise ConfigurationError(f"fringe must be one of {FRINGE_CHOICES}, got {self.fringe!r}")
        if self.generator not in GENERATOR_CHOICES:
            raise ConfigurationError(f"generator must be one of {GENERATOR_CHOICES}, got {self.generator!r}")
        if not isinstance(self.check_invariants, bool):
            raise ConfigurationError(f"check_invariants must be true or false, got {self.check_invariants!r}")
        if not _is_int(self.breadth_first_threshold) or self.breadth_first_threshold < 0:
            raise ConfigurationError(
                f"breadth_first_threshold must be a non-negative integer, got {self.breadth_first_threshold!r}"
            )
        if not _is_number(self.piece_centric_ratio) or self.piece_centric_ratio <= 0:
            raise ConfigurationError(
                f"piece_centric_ratio must be a positive number, got {self.piece_centric_ratio!r}"
            )
        if self.timeout_sec is not None and (not _is_number(self.timeout_sec) or self.timeout_sec <= 0):
            raise ConfigurationError(f"timeout_sec must be a positive number or null, got {self.timeout_sec!r}")
        if self.max_states is not None and (not _is_int(self.max_states) or self.max_states <= 0):
            raise ConfigurationError(f"max_states must be a positive integer or null, got {self.max_states!r}")
        if not _is_int(self.progress_interval) or self.progress_interval <= 0:
            raise ConfigurationError(
                f"progress_interval must be a positive integer, got {self.progress_interval!r}"
            )

    @classmethod
    def from_settings(cls, settings: Dict[str, Any]) -> "SearchConfig":
        """
        Build a config from a settings dictionary, ignoring unknown keys.

        Raises:
            ConfigurationError: If a value is unsupported
        """
        known = {key: settings[key] for key in DEFAULT_SETTINGS if key in settings}
        return cls(**known)

    @classmethod
    def from_flags(cls, piece_only: bool = False, gap_only: bool = False,
                   breadth_first: Optional[bool] = None, check_invariants: bool = False,
                   base: Optional["SearchConfig"] = None) -> "SearchConfig":
        """
        Build a config from command-line style flags.

        Args:
            piece_only: Force piece-centric generation
            gap_only: Force gap-centric generation
            breadth_first: True forces BFS, False forces DFS, None keeps base
            check_invariants: Enable invariant self-checking
            base: Config supplying the other values (default: defaults)

        Raises:
            ConfigurationError: If both piece_only and gap_only are set
        """
        if piece_only and gap_only:
            raise ConfigurationError("piece-centric and gap-centric generation are mutually exclusive")
        base = base or cls()

        generator = base.generator
        if piece_only:
            generator = "piece"
        elif gap_only:
            generator = "gap"

        fringe = base.fringe
        if breadth_first is not None:
            fringe = "bfs" if breadth_first else "dfs"

        return cls(
            fringe=fringe,
            generator=generator,
            check_invariants=check_invariants or base.check_invariants,
            breadth_first_threshold=base.breadth_first_threshold,
            piece_centric_ratio=base.piece_centric_ratio,
            timeout_sec=base.timeout_sec,
            max_states=base.max_states,
            progress_interval=base.progress_interval,
        )
