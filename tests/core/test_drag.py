"""Tests for drag tracking math and the drag state machine."""

import pytest

from edgemenu.core.drag import (
    DragSession,
    DragTracker,
    matching_index,
    menu_top_offset,
)
from edgemenu.core.errors import InvalidGeometry, InvalidState
from edgemenu.core.geometry import VerticalRange

WIDE = VerticalRange(lower=-1e9, upper=1e9)
RANGE = VerticalRange(lower=20.0, upper=500.0)


def _move(tracker, y, row_height=44.0, row_count=6, travel=WIDE, offscreen=True):
    return tracker.move(
        y_location=y,
        menu_height=row_height * row_count,
        row_height=row_height,
        row_count=row_count,
        travel_range=travel,
        allow_offscreen=offscreen,
    )


class TestMenuTopOffset:
    def test_no_movement_centers_pivot_row(self):
        # Given / When
        result = menu_top_offset(300.0, 300.0, 44.0, 2, WIDE, True)
        # Then -- 300 - 88 - 22 + 0
        assert result == pytest.approx(190.0)

    def test_drag_delta_counts_twice(self):
        # Given / When -- finger moved up by 50
        result = menu_top_offset(250.0, 300.0, 44.0, 2, WIDE, True)
        # Then -- 300 - 88 - 22 + (300 - 250)
        assert result == pytest.approx(240.0)

    def test_clamped_to_upper_bound(self):
        # Given / When
        result = menu_top_offset(-10000.0, 300.0, 44.0, 0, RANGE, False)
        # Then
        assert result == pytest.approx(500.0)

    def test_clamped_to_lower_bound(self):
        # Given / When
        result = menu_top_offset(10000.0, 300.0, 44.0, 0, RANGE, False)
        # Then
        assert result == pytest.approx(20.0)

    def test_offscreen_allowed_ignores_range(self):
        # Given / When
        result = menu_top_offset(10000.0, 300.0, 44.0, 0, RANGE, True)
        # Then
        assert result < RANGE.lower


class TestMatchingIndex:
    def test_middle_of_row(self):
        # Given / When -- floor((300 - 190) / 44) = floor(2.5)
        result = matching_index(300.0, 190.0, 44.0, 6)
        # Then
        assert result == 2

    def test_above_menu_clamps_to_zero(self):
        assert matching_index(100.0, 190.0, 44.0, 6) == 0

    def test_below_menu_clamps_to_last(self):
        assert matching_index(5000.0, 190.0, 44.0, 6) == 5

    def test_row_boundary_belongs_to_lower_row(self):
        # Given / When -- exactly 44px below the top
        result = matching_index(234.0, 190.0, 44.0, 6)
        # Then
        assert result == 1


class TestDragTrackerLifecycle:
    def test_initially_idle(self):
        # Given / When
        tracker = DragTracker()
        # Then
        assert tracker.is_dragging is False
        assert tracker.session is None

    def test_begin_opens_session(self):
        # Given
        tracker = DragTracker()
        # When
        session = tracker.begin(y_location=300.0, selected_index=2)
        # Then
        assert session == DragSession(origin_y=300.0, selected_index=2)
        assert tracker.is_dragging is True

    def test_move_while_idle_raises(self):
        # Given
        tracker = DragTracker()
        # When / Then
        with pytest.raises(InvalidState):
            _move(tracker, 300.0)

    def test_move_after_end_raises(self):
        # Given
        tracker = DragTracker()
        tracker.begin(y_location=300.0, selected_index=2)
        tracker.end()
        # When / Then
        with pytest.raises(InvalidState):
            _move(tracker, 300.0)

    def test_begin_twice_replaces_session(self):
        # Given
        tracker = DragTracker()
        tracker.begin(y_location=300.0, selected_index=2)
        # When
        tracker.begin(y_location=100.0, selected_index=0)
        # Then
        assert tracker.session == DragSession(origin_y=100.0, selected_index=0)

    def test_strict_begin_twice_raises(self):
        # Given
        tracker = DragTracker(strict=True)
        tracker.begin(y_location=300.0, selected_index=2)
        # When / Then
        with pytest.raises(InvalidState):
            tracker.begin(y_location=100.0, selected_index=0)
        assert tracker.session.origin_y == 300.0

    def test_strict_begin_after_end_is_allowed(self):
        # Given
        tracker = DragTracker(strict=True)
        tracker.begin(y_location=300.0, selected_index=2)
        tracker.end()
        # When
        tracker.begin(y_location=100.0, selected_index=1)
        # Then
        assert tracker.is_dragging is True


class TestDragTrackerMove:
    def test_golden_no_movement(self):
        # Given
        tracker = DragTracker()
        tracker.begin(y_location=300.0, selected_index=2)
        # When
        update = _move(tracker, 300.0)
        # Then
        assert update.menu_top_offset == pytest.approx(190.0)
        assert update.selected_index == 2

    def test_selection_can_differ_from_pivot(self):
        # Given
        tracker = DragTracker()
        tracker.begin(y_location=250.0, selected_index=3)
        # When -- offset = 250 - 132 - 22 + 50 = 146; (200 - 146) / 44 = 1.2
        update = _move(tracker, 200.0)
        # Then
        assert update.menu_top_offset == pytest.approx(146.0)
        assert update.selected_index == 1

    @pytest.mark.parametrize("y", [-10000.0, -50.0, 0.0, 123.4, 900.0, 10000.0])
    def test_index_always_in_range(self, y):
        # Given
        tracker = DragTracker()
        tracker.begin(y_location=300.0, selected_index=4)
        # When
        update = _move(tracker, y)
        # Then
        assert 0 <= update.selected_index <= 5

    @pytest.mark.parametrize("y", [-10000.0, 0.0, 300.0, 10000.0])
    def test_offset_within_range_when_offscreen_disallowed(self, y):
        # Given
        tracker = DragTracker()
        tracker.begin(y_location=300.0, selected_index=2)
        # When
        update = _move(tracker, y, travel=RANGE, offscreen=False)
        # Then
        assert RANGE.contains(update.menu_top_offset)

    @pytest.mark.parametrize(
        "row_height,row_count", [(0.0, 6), (-44.0, 6), (44.0, 0), (44.0, -1)]
    )
    def test_degenerate_geometry_raises(self, row_height, row_count):
        # Given
        tracker = DragTracker()
        tracker.begin(y_location=300.0, selected_index=0)
        # When / Then
        with pytest.raises(InvalidGeometry):
            tracker.move(
                y_location=300.0,
                menu_height=264.0,
                row_height=row_height,
                row_count=row_count,
                travel_range=WIDE,
                allow_offscreen=True,
            )


class TestDragTrackerEndCancel:
    def test_end_returns_last_move_index_not_pivot(self):
        # Given
        tracker = DragTracker()
        tracker.begin(y_location=250.0, selected_index=3)
        moved = _move(tracker, 200.0)
        # When
        result = tracker.end()
        # Then
        assert result == moved.selected_index
        assert result != 3
        assert tracker.is_dragging is False

    def test_end_without_move_returns_pivot(self):
        # Given
        tracker = DragTracker()
        tracker.begin(y_location=250.0, selected_index=3)
        # When / Then
        assert tracker.end() == 3

    def test_end_twice_returns_same_index(self):
        # Given
        tracker = DragTracker()
        tracker.begin(y_location=250.0, selected_index=3)
        _move(tracker, 200.0)
        # When
        first = tracker.end()
        second = tracker.end()
        # Then
        assert first == second

    def test_end_when_idle_returns_previous_index(self):
        # Given / When / Then
        assert DragTracker().end() == 0

    def test_cancel_discards_selection(self):
        # Given
        tracker = DragTracker()
        tracker.begin(y_location=250.0, selected_index=3)
        _move(tracker, 200.0)
        # When
        tracker.cancel()
        # Then
        assert tracker.is_dragging is False
        assert tracker.selected_index == 3

    def test_cancel_twice_is_noop(self):
        # Given
        tracker = DragTracker()
        tracker.begin(y_location=250.0, selected_index=3)
        tracker.cancel()
        # When
        tracker.cancel()
        # Then
        assert tracker.is_dragging is False
        assert tracker.selected_index == 3

    def test_cancel_when_idle_is_safe(self):
        # Given
        tracker = DragTracker()
        # When
        tracker.cancel()
        # Then
        assert tracker.is_dragging is False
