"""Edge gesture manager -- routes raw pan samples to the drag tracker.

The host's gesture recognizer reports (state, edge, y) samples; the manager
turns them into menu offsets and selection changes and fans them out to
registered listeners.
"""

from __future__ import annotations

import enum
import math
import weakref
from dataclasses import dataclass
from typing import TYPE_CHECKING

from edgemenu.core.drag import DragTracker, DragUpdate
from edgemenu.core.edge import EdgeSide
from edgemenu.core.errors import EdgeMenuError
from edgemenu.core.geometry import VerticalRange
from edgemenu.log import get_logger

if TYPE_CHECKING:
    from edgemenu.core.config import Config

log = get_logger(name="gesture")

# Used as the travel range when off-screen travel is allowed
UNBOUNDED = VerticalRange(lower=-math.inf, upper=math.inf)


class GestureState(enum.Enum):
    POSSIBLE = "possible"
    BEGAN = "began"
    CHANGED = "changed"
    ENDED = "ended"
    CANCELLED = "cancelled"
    FAILED = "failed"


# States reported to listeners as structured events rather than handled
_REPORTED_STATES = (GestureState.POSSIBLE, GestureState.CANCELLED, GestureState.FAILED)


@dataclass(frozen=True)
class GestureEvent:
    """A recognizer state change with no menu effect of its own."""

    state: GestureState
    edge: EdgeSide
    y_location: float


class GestureListener:
    """Receives menu lifecycle notifications. Override what you need."""

    def will_open(self, edge: EdgeSide) -> None:
        pass

    def show_menu(self) -> None:
        pass

    def did_update_y(self, menu_top_offset: float) -> None:
        pass

    def did_update_selection(self, index: int) -> None:
        pass

    def did_select(self, index: int) -> None:
        pass

    def hide_menu(self) -> None:
        pass

    def gesture_state(self, event: GestureEvent) -> None:
        pass


class EdgeGestureManager:
    """Drives a DragTracker from edge-pan samples.

    Listeners are held weakly; the manager never keeps one alive.
    """

    def __init__(
        self,
        config: Config,
        host_height: float,
        menu_height: float,
        row_count: int,
        tracker: DragTracker | None = None,
    ) -> None:
        self._config = config
        self._tracker = tracker or DragTracker()
        self._listeners: weakref.WeakSet[GestureListener] = weakref.WeakSet()
        self.host_height = host_height
        self.menu_height = menu_height
        self.row_count = row_count
        self.selected_index = 0

    @property
    def edges(self) -> list[EdgeSide]:
        return self._config.edge_sides

    @property
    def opening_edge(self) -> EdgeSide:
        return self.edges[0]

    @property
    def tracker(self) -> DragTracker:
        return self._tracker

    def add_listener(self, listener: GestureListener) -> None:
        self._listeners.add(listener)

    def remove_listener(self, listener: GestureListener) -> None:
        self._listeners.discard(listener)

    def set_host_height(self, height: float) -> None:
        self.host_height = height

    def set_menu_height(self, height: float) -> None:
        self.menu_height = height

    def set_row_count(self, count: int) -> None:
        self.row_count = count
        if count > 0:
            self.selected_index = min(self.selected_index, count - 1)

    def travel_range(self) -> VerticalRange:
        """Allowed menu-top positions for the current geometry."""
        if self._config.allow_offscreen:
            return UNBOUNDED
        return VerticalRange.for_host(
            host_height=self.host_height,
            menu_height=self.menu_height,
            top_margin=self._config.travel_top_margin,
        )

    def handle(
        self, state: GestureState, edge: EdgeSide, y_location: float
    ) -> DragUpdate | None:
        """Process one recognizer sample. Returns the move result, if any."""
        if edge not in self.edges:
            log.debug("Ignoring %s from unconfigured edge %s", state.value, edge.value)
            return None

        if state in _REPORTED_STATES:
            self._emit(
                "gesture_state",
                GestureEvent(state=state, edge=edge, y_location=y_location),
            )

        try:
            if state == GestureState.BEGAN:
                self._emit("will_open", edge)
                self._tracker.begin(
                    y_location=y_location, selected_index=self.selected_index
                )
            elif state == GestureState.CHANGED:
                return self._on_changed(y_location=y_location)
            elif state == GestureState.ENDED:
                self._on_ended()
            elif state == GestureState.CANCELLED:
                self._abort()
        except EdgeMenuError as exc:
            log.warning("Aborting drag on %s: %s", edge.value, exc)
            self._abort()
        return None

    def _on_changed(self, y_location: float) -> DragUpdate:
        self._emit("show_menu")
        update = self._tracker.move(
            y_location=y_location,
            menu_height=self.menu_height,
            row_height=self._config.row_height,
            row_count=self.row_count,
            travel_range=self.travel_range(),
            allow_offscreen=self._config.allow_offscreen,
        )
        self._emit("did_update_y", update.menu_top_offset)
        self._emit("did_update_selection", update.selected_index)
        return update

    def _on_ended(self) -> None:
        if not self._tracker.is_dragging:
            log.debug("ENDED without an open drag")
            return
        self.selected_index = self._tracker.end()
        self._emit("did_select", self.selected_index)
        self._emit("hide_menu")

    def _abort(self) -> None:
        self._tracker.cancel()
        self._emit("hide_menu")

    def _emit(self, hook: str, *args: object) -> None:
        for listener in list(self._listeners):
            getattr(listener, hook)(*args)
