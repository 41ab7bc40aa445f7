"""Indicator appearance -- color, font, size, and the cairo shape path.

The animation core never imports this module: it only consumes the scalar
size, border margin and bounce offsets. Hosts may supply any object
satisfying IndicatorStyle to customize the look.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, NamedTuple, Protocol

import cairo

from edgemenu.core.edge import EdgeSide
from edgemenu.core.geometry import BounceOffsets

if TYPE_CHECKING:
    from edgemenu.core.config import Config

# Cairo-compatible floats (0.0-1.0)
RGBA = tuple[float, float, float, float]

DEFAULT_COLOR: RGBA = (0.07, 0.73, 0.86, 1.0)
DEFAULT_FONT = "Sans Bold 20"
DEFAULT_SIZE = (50.0, 40.0)

# Horizontal distances (px) of the shape's control points from the flat side
_CURVE_NEAR = 9.0
_CURVE_MID = 20.0
_CURVE_FAR = 31.0


class Frame(NamedTuple):
    x: float
    y: float
    width: float
    height: float

    @property
    def max_x(self) -> float:
        return self.x + self.width

    @property
    def max_y(self) -> float:
        return self.y + self.height


class IconMargins(NamedTuple):
    top: float = 0.0
    right: float = 0.0
    bottom: float = 0.0
    left: float = 0.0


class IndicatorStyle(Protocol):
    """Capabilities a custom indicator appearance must provide."""

    color: RGBA
    font: str
    size: tuple[float, float]
    border_margin: float
    bounce_offsets: BounceOffsets

    def shape(self, cr: cairo.Context, edge: EdgeSide, frame: Frame) -> None: ...

    def icon_margins(self, edge: EdgeSide) -> IconMargins: ...


def trace_indicator_path(cr: cairo.Context, edge: EdgeSide, frame: Frame) -> None:
    """Trace the default rounded tab shape into cr's current path.

    The flat side hugs the screen edge and the rounded belly points into
    the host: for NEAR the flat side is at max_x, for FAR at x.
    """
    # sign flips the control points around the flat side
    flat_x = frame.max_x if edge == EdgeSide.NEAR else frame.x
    belly_x = frame.x if edge == EdgeSide.NEAR else frame.max_x
    sign = -1.0 if edge == EdgeSide.NEAR else 1.0
    top, bottom, h = frame.y, frame.max_y, frame.height
    mid_y = top + 0.5 * h

    cr.new_path()
    cr.move_to(flat_x, mid_y)
    cr.curve_to(
        flat_x,
        top + 0.22 * h,
        flat_x + sign * _CURVE_NEAR,
        top,
        flat_x + sign * _CURVE_MID,
        top,
    )
    cr.curve_to(
        flat_x + sign * _CURVE_FAR,
        top,
        belly_x,
        top + 0.3 * h,
        belly_x,
        mid_y,
    )
    cr.curve_to(
        belly_x,
        top + 0.7 * h,
        flat_x + sign * _CURVE_FAR,
        bottom,
        flat_x + sign * _CURVE_MID,
        bottom,
    )
    cr.curve_to(
        flat_x + sign * _CURVE_NEAR,
        bottom,
        flat_x,
        top + 0.78 * h,
        flat_x,
        mid_y,
    )
    cr.close_path()


class DefaultIndicatorStyle:
    """Stock indicator look: a cyan tab with a bold label."""

    def __init__(
        self,
        color: RGBA = DEFAULT_COLOR,
        font: str = DEFAULT_FONT,
        size: tuple[float, float] = DEFAULT_SIZE,
        border_margin: float = 5.0,
        bounce_offsets: BounceOffsets = BounceOffsets(),
    ) -> None:
        self.color = color
        self.font = font
        self.size = size
        self.border_margin = border_margin
        self.bounce_offsets = bounce_offsets

    @classmethod
    def from_config(cls, config: Config) -> DefaultIndicatorStyle:
        return cls(
            size=(config.indicator_width, config.indicator_height),
            border_margin=config.border_margin,
            bounce_offsets=config.bounce,
        )

    def shape(self, cr: cairo.Context, edge: EdgeSide, frame: Frame) -> None:
        trace_indicator_path(cr=cr, edge=edge, frame=frame)

    def icon_margins(self, edge: EdgeSide) -> IconMargins:
        return IconMargins()

    def draw(self, cr: cairo.Context, edge: EdgeSide) -> None:
        """Fill the indicator shape at the origin of cr."""
        width, height = self.size
        self.shape(cr=cr, edge=edge, frame=Frame(x=0.0, y=0.0, width=width, height=height))
        cr.set_source_rgba(*self.color)
        cr.fill()
