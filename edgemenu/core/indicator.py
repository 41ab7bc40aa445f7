"""Indicator docking/bouncing animation math -- pure functions, no GTK.

The indicator is pinned horizontally by two opposing anchors, one measured
from the near (left) host edge and one from the far (right) edge. Only the
dominant anchor drives layout; the other has a lower priority. Revealing the
indicator animates the main anchor (the one on the edge being pulled) in two
steps, an ease-in step followed by an ease-out step:

    reveal, in place          reveal, traversing           restore
    |<-)                      |<-)                  (->|   |(->   |<-)
     overshoot, settle         cross the host, dock far     bounce back

Animations are returned as plans (targets and durations); timing and
interpolation belong to the presentation layer.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, NamedTuple

from edgemenu.core.edge import EdgeSide, multiplier, opposite
from edgemenu.core.geometry import BounceOffsets, clamp, require_positive
from edgemenu.log import get_logger

if TYPE_CHECKING:
    from edgemenu.core.config import Config

log = get_logger(name="indicator")

# Step durations in seconds
FIRST_STEP_DURATION = 0.15
SECOND_STEP_DURATION = 0.25
TRAVERSE_STEP_DURATION = 0.3
RESTORE_STEP_DURATION = 0.4

# Layout priorities of the two horizontal anchors
DOMINANT_PRIORITY = 100.0
SUBORDINATE_PRIORITY = 50.0


@dataclass(frozen=True)
class IndicatorPositionSet:
    """All horizontal anchor constants used by the animations."""

    start: float
    start_bounce: BounceOffsets
    end: BounceOffsets


class AnimationStep(NamedTuple):
    target: float
    duration: float


@dataclass(frozen=True)
class AnimationPlan:
    """Ordered anchor animation to be executed by the presentation layer.

    presets are applied immediately (no animation) before the first step.
    dominant_after, when set, is the anchor that takes layout priority once
    the last step completes.
    """

    anchor: EdgeSide
    steps: tuple[AnimationStep, ...]
    presets: tuple[tuple[EdgeSide, float], ...] = ()
    dominant_after: EdgeSide | None = None

    def preset_for(self, side: EdgeSide) -> float | None:
        """Constant applied to `side` before the first step, if any."""
        for preset_side, value in self.presets:
            if preset_side == side:
                return value
        return None

    @property
    def final_target(self) -> float:
        return self.steps[-1].target

    @property
    def total_duration(self) -> float:
        return sum(step.duration for step in self.steps)


@dataclass
class Anchor:
    """One horizontal positioning constraint."""

    side: EdgeSide
    priority: float = SUBORDINATE_PRIORITY
    active: bool = False
    constant: float = 0.0


class AnchorPair:
    """Near and far anchors; exactly one is dominant at any time."""

    def __init__(self) -> None:
        self.near = Anchor(side=EdgeSide.NEAR)
        self.far = Anchor(side=EdgeSide.FAR)
        self.make_dominant(side=EdgeSide.NEAR)

    def get(self, side: EdgeSide) -> Anchor:
        return self.near if side == EdgeSide.NEAR else self.far

    @property
    def dominant(self) -> EdgeSide:
        if self.near.priority > self.far.priority:
            return EdgeSide.NEAR
        return EdgeSide.FAR

    def make_dominant(self, side: EdgeSide) -> None:
        self.get(side=side).priority = DOMINANT_PRIORITY
        self.get(side=opposite(side)).priority = SUBORDINATE_PRIORITY


def compute_positions(
    host_width: float,
    indicator_width: float,
    edge: EdgeSide,
    border_margin: float,
    bounce_offsets: BounceOffsets,
) -> IndicatorPositionSet:
    """Compute the anchor constants for every animation phase.

    start        -- resting offset, border_margin away from the edge
    start_bounce -- overshoot past the edge, then a short bounce inward
    end          -- overshoot past the opposite edge, then dock there
    """
    require_positive(host_width=host_width, indicator_width=indicator_width)
    mult = multiplier(edge)
    inverse = -mult

    start = border_margin * inverse
    start_bounce = BounceOffsets(
        from_=start + bounce_offsets.from_ * inverse,
        to=start + bounce_offsets.to * mult,
    )
    end = BounceOffsets(
        from_=(host_width - indicator_width + bounce_offsets.from_) * mult,
        to=(host_width - indicator_width - border_margin) * mult,
    )
    return IndicatorPositionSet(start=start, start_bounce=start_bounce, end=end)


def move_indicator_to(index: int, row_height: float, indicator_height: float) -> float:
    """Top offset centering the indicator on row `index` (no clamping)."""
    require_positive(row_height=row_height, indicator_height=indicator_height)
    return index * row_height + (row_height - indicator_height) / 2.0


def vertical_anchor_for(
    percentage: float, host_height: float, indicator_height: float
) -> float:
    """Resting top offset at `percentage` of the host height.

    Half the indicator height is kept free at the top, and the indicator's
    bottom stays half its height above the host's bottom edge.
    """
    require_positive(host_height=host_height, indicator_height=indicator_height)
    half = indicator_height / 2.0
    desired = (host_height / 100.0) * percentage - half
    return clamp(value=desired, lower=half, upper=host_height - (indicator_height + half))


class IndicatorAnimator:
    """Builds reveal/restore plans and tracks anchor dominance."""

    def __init__(
        self,
        host_width: float,
        indicator_width: float,
        border_margin: float = 5.0,
        bounce_offsets: BounceOffsets = BounceOffsets(),
        edge: EdgeSide = EdgeSide.NEAR,
        indicator_height: float = 40.0,
    ) -> None:
        require_positive(
            host_width=host_width,
            indicator_width=indicator_width,
            indicator_height=indicator_height,
        )
        self.host_width = host_width
        self.indicator_width = indicator_width
        self.indicator_height = indicator_height
        self.border_margin = border_margin
        self.bounce_offsets = bounce_offsets
        self.edge = edge
        self.anchors = AnchorPair()

    @classmethod
    def from_config(cls, config: Config, host_width: float) -> IndicatorAnimator:
        return cls(
            host_width=host_width,
            indicator_width=config.indicator_width,
            indicator_height=config.indicator_height,
            border_margin=config.border_margin,
            bounce_offsets=config.bounce,
            edge=config.edge_sides[0],
        )

    def set_host_width(self, host_width: float) -> None:
        require_positive(host_width=host_width)
        self.host_width = host_width

    def positions(self, edge: EdgeSide | None = None) -> IndicatorPositionSet:
        return compute_positions(
            host_width=self.host_width,
            indicator_width=self.indicator_width,
            edge=edge or self.edge,
            border_margin=self.border_margin,
            bounce_offsets=self.bounce_offsets,
        )

    def reveal(self, edge: EdgeSide, traverse: bool) -> AnimationPlan:
        """Plan the reveal animation for a drag starting at `edge`.

        traverse sends the indicator across the host to dock on the
        opposite edge; the opposite anchor becomes dominant on completion.
        """
        self.edge = edge
        positions = self.positions(edge=edge)
        secondary = opposite(edge)
        main_anchor = self.anchors.get(side=edge)
        second_anchor = self.anchors.get(side=secondary)

        self.anchors.make_dominant(side=edge)
        main_anchor.active = True
        second_anchor.active = traverse
        main_anchor.constant = positions.start_bounce.from_
        presets = ((edge, positions.start_bounce.from_),)

        if traverse:
            second_anchor.constant = positions.start
            presets += ((secondary, positions.start),)
            steps = (
                AnimationStep(target=positions.end.from_, duration=TRAVERSE_STEP_DURATION),
                AnimationStep(target=positions.end.to, duration=SECOND_STEP_DURATION),
            )
            dominant_after: EdgeSide | None = secondary
        else:
            steps = (
                AnimationStep(
                    target=positions.start_bounce.from_, duration=FIRST_STEP_DURATION
                ),
                AnimationStep(
                    target=positions.start_bounce.to, duration=SECOND_STEP_DURATION
                ),
            )
            dominant_after = None

        log.debug("reveal: edge=%s traverse=%s steps=%s", edge.value, traverse, steps)
        return AnimationPlan(
            anchor=edge, steps=steps, presets=presets, dominant_after=dominant_after
        )

    def restore(self, edge: EdgeSide | None = None) -> AnimationPlan:
        """Plan the bounce back to the resting position on the current edge."""
        edge = edge or self.edge
        self.edge = edge
        positions = self.positions(edge=edge)

        self.anchors.make_dominant(side=edge)
        self.anchors.get(side=edge).active = True
        self.anchors.get(side=opposite(edge)).active = False

        steps = (
            AnimationStep(target=positions.start_bounce.from_, duration=RESTORE_STEP_DURATION),
            AnimationStep(target=positions.start, duration=SECOND_STEP_DURATION),
        )
        log.debug("restore: edge=%s steps=%s", edge.value, steps)
        return AnimationPlan(anchor=edge, steps=steps)

    def complete(self, plan: AnimationPlan) -> None:
        """Apply a finished plan: final constant and any priority swap."""
        self.anchors.get(side=plan.anchor).constant = plan.final_target
        if plan.dominant_after is not None:
            self.anchors.make_dominant(side=plan.dominant_after)
            log.debug("complete: %s anchor now dominant", plan.dominant_after.value)

    def move_to(self, index: int, row_height: float) -> float:
        return move_indicator_to(
            index=index, row_height=row_height, indicator_height=self.indicator_height
        )

    def vertical_anchor(self, percentage: float, host_height: float) -> float:
        return vertical_anchor_for(
            percentage=percentage,
            host_height=host_height,
            indicator_height=self.indicator_height,
        )
