"""Animation plan player -- steps an AnimationPlan on GLib frame timers."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable

from edgemenu.log import get_logger

log = get_logger(name="player")

import gi

gi.require_version("GLib", "2.0")
from gi.repository import GLib  # noqa: E402

if TYPE_CHECKING:
    from edgemenu.core.edge import EdgeSide
    from edgemenu.core.indicator import AnimationPlan, IndicatorAnimator

FRAME_INTERVAL_MS = 16  # ~60fps


def ease_in_cubic(t: float) -> float:
    """Cubic ease-in: slow start, accelerating."""
    return t * t * t


def ease_out_cubic(t: float) -> float:
    """Cubic ease-out: fast start, decelerating."""
    return 1.0 - (1.0 - t) ** 3


def step_easing(step_index: int) -> Callable[[float], float]:
    """First step eases in, later steps ease out."""
    return ease_in_cubic if step_index == 0 else ease_out_cubic


class PlanPlayer:
    """Plays indicator plans by pushing anchor constants to the host.

    apply(side, value) is called with each interpolated anchor constant;
    the host writes it into its own layout and queues a redraw.
    """

    def __init__(
        self,
        animator: IndicatorAnimator,
        apply: Callable[[EdgeSide, float], None],
    ) -> None:
        self._animator = animator
        self._apply = apply
        self._plan: AnimationPlan | None = None
        self._on_finished: Callable[[], None] | None = None
        self._timer_id: int = 0
        self._step_index: int = 0
        self._step_from: float = 0.0
        self._frame: int = 0
        self.value: float = 0.0

    @property
    def running(self) -> bool:
        return self._plan is not None

    def play(
        self,
        plan: AnimationPlan,
        on_finished: Callable[[], None] | None = None,
    ) -> None:
        """Start plan, replacing any plan still running."""
        self.stop()
        for side, value in plan.presets:
            self._apply(side, value)
        self._plan = plan
        self._on_finished = on_finished
        self._step_index = 0
        self._frame = 0
        preset = plan.preset_for(side=plan.anchor)
        if preset is None:
            preset = self._animator.anchors.get(side=plan.anchor).constant
        self.value = preset
        self._step_from = self.value
        log.debug("play: anchor=%s steps=%d", plan.anchor.value, len(plan.steps))
        self._timer_id = GLib.timeout_add(FRAME_INTERVAL_MS, self._tick)

    def stop(self) -> None:
        """Drop the running plan without completing it. Safe when idle.

        The anchor keeps the value the plan had reached, so a following plan
        without a preset continues from there.
        """
        if self._timer_id:
            GLib.source_remove(self._timer_id)
            self._timer_id = 0
        if self._plan is not None:
            self._animator.anchors.get(side=self._plan.anchor).constant = self.value
        self._plan = None
        self._on_finished = None

    # Progress is derived from the frame count (frame * FRAME_INTERVAL_MS /
    # duration) so a step always ends on a whole frame. When a step reaches
    # 1.0 the next one starts from the value the previous one ended on.

    def _tick(self) -> bool:
        """Single animation frame."""
        plan = self._plan
        if plan is None:
            self._timer_id = 0
            return False

        step = plan.steps[self._step_index]
        duration_ms = step.duration * 1000.0
        self._frame += 1
        if duration_ms > 0:
            progress = min(1.0, self._frame * FRAME_INTERVAL_MS / duration_ms)
        else:
            progress = 1.0

        eased = step_easing(step_index=self._step_index)(progress)
        self.value = self._step_from + (step.target - self._step_from) * eased
        self._apply(plan.anchor, self.value)

        if progress < 1.0:
            return True

        self._step_index += 1
        if self._step_index < len(plan.steps):
            self._step_from = step.target
            self._frame = 0
            return True

        self._finish(plan=plan)
        return False

    def _finish(self, plan: AnimationPlan) -> None:
        on_finished = self._on_finished
        self._timer_id = 0
        self._plan = None
        self._on_finished = None
        self._animator.complete(plan)
        log.debug("finished: anchor=%s value=%.1f", plan.anchor.value, self.value)
        if on_finished:
            on_finished()
