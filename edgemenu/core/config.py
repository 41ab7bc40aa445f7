"""Configuration loading, saving, and defaults for the edge menu."""

from __future__ import annotations

import json
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from edgemenu.core.edge import EdgeSide
from edgemenu.core.geometry import DEFAULT_TOP_MARGIN, BounceOffsets
from edgemenu.log import get_logger

log = get_logger(name="config")

DEFAULT_CONFIG_DIR = (
    Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")) / "edgemenu"
)
DEFAULT_CONFIG_FILE = DEFAULT_CONFIG_DIR / "menu.json"

DEFAULT_EDGES: list[str] = [EdgeSide.NEAR.value]


@dataclass
class Config:
    """Menu configuration with sensible defaults."""

    # Screen edges that trigger the gesture; the first one opens the menu
    edges: list[str] = field(default_factory=lambda: list(DEFAULT_EDGES))
    # Whether the menu may be dragged past its natural travel bounds
    allow_offscreen: bool = True
    # Gap between the resting indicator and the screen edge
    border_margin: float = 5.0
    # Overshoot/settle offsets for the indicator bounce, [from, to]
    bounce_offsets: list[float] = field(default_factory=lambda: [15.0, 5.0])
    # Indicator [width, height] in pixels
    indicator_size: list[float] = field(default_factory=lambda: [50.0, 40.0])
    # Height of each menu row
    row_height: float = 44.0
    # Resting indicator position, percent of host height
    initial_indicator_position_percent: float = 50.0
    # Highest menu-top position when off-screen travel is disallowed
    travel_top_margin: float = DEFAULT_TOP_MARGIN

    @property
    def edge_sides(self) -> list[EdgeSide]:
        """Edges as enums."""
        return [EdgeSide(e) for e in self.edges]

    @property
    def bounce(self) -> BounceOffsets:
        return BounceOffsets(from_=self.bounce_offsets[0], to=self.bounce_offsets[1])

    @property
    def indicator_width(self) -> float:
        return self.indicator_size[0]

    @property
    def indicator_height(self) -> float:
        return self.indicator_size[1]

    def __post_init__(self) -> None:
        self._path: Path = DEFAULT_CONFIG_FILE

    @classmethod
    def load(cls, path: Path | str | None = None) -> Config:
        """Load config from JSON file, falling back to defaults for missing keys."""
        path = Path(path) if path else DEFAULT_CONFIG_FILE
        if not path.exists():
            config = cls()
            config._path = path
            config.save(path)
            return config

        data: dict[str, Any] = json.loads(path.read_text())
        known = {name: value for name, value in data.items() if name in _FIELD_NAMES}
        config = cls(**known)
        config._path = path
        if not _valid_edges(config.edges):
            log.warning("Invalid edges %r in %s, using %s", config.edges, path, DEFAULT_EDGES)
            config.edges = list(DEFAULT_EDGES)
        return config

    def save(self, path: Path | str | None = None) -> None:
        """Save config to JSON file."""
        path = Path(path) if path else self._path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(asdict(self), indent=2) + "\n")


_FIELD_NAMES = frozenset(Config.__dataclass_fields__)


def _valid_edges(edges: Any) -> bool:
    """True for a non-empty list of known edge names."""
    if not isinstance(edges, list) or not edges:
        return False
    values = {side.value for side in EdgeSide}
    return all(isinstance(edge, str) and edge in values for edge in edges)
