"""Screen edge types and helpers."""

from __future__ import annotations

import enum


class EdgeSide(str, enum.Enum):
    """Screen edge the menu is pulled from.

    Sign convention for horizontal math:
      NEAR -- left edge, offsets grow toward the host interior (+1)
      FAR  -- right edge, offsets grow away from the host interior (-1)
    """

    NEAR = "near"
    FAR = "far"


def multiplier(edge: EdgeSide) -> float:
    """+1.0 for NEAR, -1.0 for FAR."""
    return 1.0 if edge == EdgeSide.NEAR else -1.0


def opposite(edge: EdgeSide) -> EdgeSide:
    """The edge across the host from `edge`."""
    return EdgeSide.FAR if edge == EdgeSide.NEAR else EdgeSide.NEAR
