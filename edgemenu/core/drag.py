"""Drag tracking math -- pure functions plus a small per-gesture state holder.

Translates the finger's Y position during an edge drag into the menu's
top offset and the row currently under the finger.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import NamedTuple

from edgemenu.core.errors import InvalidState
from edgemenu.core.geometry import VerticalRange, require_positive
from edgemenu.log import get_logger

log = get_logger(name="drag")


@dataclass(frozen=True)
class DragSession:
    """State captured when a drag begins."""

    origin_y: float
    selected_index: int


class DragUpdate(NamedTuple):
    """Result of a single move event."""

    menu_top_offset: float
    selected_index: int


def menu_top_offset(
    y_location: float,
    origin_y: float,
    row_height: float,
    pivot_index: int,
    travel_range: VerticalRange,
    allow_offscreen: bool,
) -> float:
    """Compute the menu's top offset for the current finger position.

    The pivot row is centered on the point where the drag began, then the
    whole menu shifts by the drag delta. origin_y appears both as the anchor
    and inside the delta, so the delta counts twice:

        offset = origin_y - row_height * pivot - row_height / 2
                 + (origin_y - y_location)

    With allow_offscreen False the result is clamped into travel_range.
    """
    offset = (
        origin_y
        - (row_height * pivot_index)
        - (row_height / 2.0)
        + origin_y
        - y_location
    )
    if not allow_offscreen:
        offset = travel_range.clamp(value=offset)
    return offset


def matching_index(
    y_location: float,
    menu_top: float,
    row_height: float,
    row_count: int,
) -> int:
    """Row index under y_location, clamped to [0, row_count - 1]."""
    index = int(math.floor((y_location - menu_top) / row_height))
    return max(0, min(index, row_count - 1))


class DragTracker:
    """Tracks one edge drag at a time.

    State machine:

        Idle --begin--> Dragging --move*--> Dragging --end|cancel--> Idle

    `strict` makes a second `begin` while dragging raise InvalidState
    instead of silently replacing the open session.
    """

    def __init__(self, strict: bool = False) -> None:
        self.strict = strict
        self._session: DragSession | None = None
        self._last_index: int = 0

    @property
    def session(self) -> DragSession | None:
        return self._session

    @property
    def is_dragging(self) -> bool:
        return self._session is not None

    @property
    def selected_index(self) -> int:
        """Last computed selection (pivot until the first move)."""
        return self._last_index

    def begin(self, y_location: float, selected_index: int) -> DragSession:
        """Open a drag session pivoting on selected_index."""
        if self._session is not None:
            if self.strict:
                raise InvalidState("begin() called while a drag is already open")
            log.debug("begin: replacing open session %s", self._session)
        self._session = DragSession(origin_y=y_location, selected_index=selected_index)
        self._last_index = selected_index
        log.debug("begin: origin_y=%.1f pivot=%d", y_location, selected_index)
        return self._session

    def move(
        self,
        y_location: float,
        menu_height: float,
        row_height: float,
        row_count: int,
        travel_range: VerticalRange,
        allow_offscreen: bool,
    ) -> DragUpdate:
        """Compute the menu offset and highlighted row for a move event.

        menu_height is part of the static geometry the caller derives
        travel_range from; it is validated but not otherwise used here.
        """
        session = self._session
        if session is None:
            raise InvalidState("move() called without an open drag")
        require_positive(
            menu_height=menu_height, row_height=row_height, row_count=row_count
        )

        offset = menu_top_offset(
            y_location=y_location,
            origin_y=session.origin_y,
            row_height=row_height,
            pivot_index=session.selected_index,
            travel_range=travel_range,
            allow_offscreen=allow_offscreen,
        )
        index = matching_index(
            y_location=y_location,
            menu_top=offset,
            row_height=row_height,
            row_count=row_count,
        )
        self._last_index = index
        return DragUpdate(menu_top_offset=offset, selected_index=index)

    def end(self) -> int:
        """Close the session and return the last computed index."""
        if self._session is not None:
            log.debug("end: selected=%d", self._last_index)
            self._session = None
        return self._last_index

    def cancel(self) -> None:
        """Close the session, reverting the selection to the pivot."""
        if self._session is None:
            return
        log.debug("cancel: reverting to pivot %d", self._session.selected_index)
        self._last_index = self._session.selected_index
        self._session = None
