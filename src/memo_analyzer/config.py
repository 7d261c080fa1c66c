"""Analysis configuration."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any


@dataclass(frozen=True)
class AnalysisConfig:
    """Tunable parameters for analysis and insights.

    Attributes:
        chord_fallback_window: Chord window in seconds when tempo is unknown.
        melody_window: Melody slice length in seconds.
        bass_window: Bass-line slice length in seconds.
        triple_meter_bias: Margin by which 3/4 must outscore 4/4.
        max_local_progressions: Recurring progressions kept per recording.
        min_progression_length: Shortest progression mined across recordings.
        max_common_progressions: Common progressions returned.
        max_similar_pairs: Similar recording pairs returned.
        max_chord_frequency: Chords returned in the frequency table.
    """

    chord_fallback_window: float = 0.5
    melody_window: float = 0.1
    bass_window: float = 0.25
    triple_meter_bias: float = 1.15
    max_local_progressions: int = 5
    min_progression_length: int = 3
    max_common_progressions: int = 20
    max_similar_pairs: int = 15
    max_chord_frequency: int = 20

    def __post_init__(self) -> None:
        """Validate ranges."""
        for name in ("chord_fallback_window", "melody_window", "bass_window"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive")
        if self.min_progression_length < 2:
            raise ValueError("min_progression_length must be at least 2")

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AnalysisConfig:
        """Build a configuration from overrides of the defaults.

        Raises:
            ValueError: If an unknown option is given.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(f"Unknown configuration options: {', '.join(unknown)}")
        return replace(cls(), **data)


DEFAULT_CONFIG = AnalysisConfig()


def load_config(path: Path | str | None) -> AnalysisConfig:
    """Load configuration overrides from a JSON file.

    Args:
        path: Path to a JSON object of overrides, or None for defaults.

    Returns:
        The resulting configuration.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file is not a JSON object of known options.
    """
    if path is None:
        return DEFAULT_CONFIG

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    try:
        data = json.loads(path.read_text())
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid config file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a JSON object: {path}")

    return AnalysisConfig.from_dict(data)
