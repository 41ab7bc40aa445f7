"""Shared geometry types and clamping helpers -- pure functions, no GTK."""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple

from edgemenu.core.errors import InvalidGeometry

# Gap kept between the host's top edge and the highest menu position.
DEFAULT_TOP_MARGIN = 20.0


class BounceOffsets(NamedTuple):
    """Overshoot-then-settle pair: move to `from_` first, then to `to`."""

    from_: float = 15.0
    to: float = 5.0


def clamp(value: float, lower: float, upper: float) -> float:
    """Clamp value into [lower, upper], inclusive."""
    if value < lower:
        return lower
    if value > upper:
        return upper
    return value


def require_positive(**values: float) -> None:
    """Raise InvalidGeometry naming the first non-positive value."""
    for name, value in values.items():
        if not value > 0:
            raise InvalidGeometry(f"{name} must be positive, got {value!r}")


@dataclass(frozen=True)
class VerticalRange:
    """Inclusive range of allowed menu-top positions."""

    lower: float
    upper: float

    def __post_init__(self) -> None:
        if self.lower > self.upper:
            raise InvalidGeometry(
                f"Inverted travel range: lower={self.lower} > upper={self.upper}"
            )

    @classmethod
    def for_host(
        cls,
        host_height: float,
        menu_height: float,
        top_margin: float = DEFAULT_TOP_MARGIN,
    ) -> VerticalRange:
        """Travel range keeping the whole menu inside the host.

        The menu top may go from `top_margin` down to the point where the
        menu's bottom touches the host's bottom edge.
        """
        require_positive(host_height=host_height, menu_height=menu_height)
        return cls(lower=top_margin, upper=host_height - menu_height)

    def contains(self, value: float) -> bool:
        return self.lower <= value <= self.upper

    def clamp(self, value: float) -> float:
        return clamp(value=value, lower=self.lower, upper=self.upper)
