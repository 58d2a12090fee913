"""Tests for termkey.input_state"""
from Xlib import XK

from termkey.input_state import ModifierTracker, MouseButtonTracker
from termkey.keymap import X11_TABLE, ModifierId


class TestModifierTracker:
    def test_starts_released(self):
        tracker = ModifierTracker(X11_TABLE)
        assert not any(tracker.snapshot().values())
        assert tracker.held() == []

    def test_press_release_round_trip(self):
        tracker = ModifierTracker(X11_TABLE)
        for code in X11_TABLE.modifiers:
            before = tracker.snapshot()
            tracker.update(code, True)
            assert tracker.is_pressed(tracker.modifier_for(code))
            tracker.update(code, False)
            assert tracker.snapshot() == before

    def test_non_modifier_is_ignored(self):
        tracker = ModifierTracker(X11_TABLE)
        assert tracker.update(XK.XK_a, True) is False
        assert not tracker.is_modifier(XK.XK_a)
        assert tracker.held() == []

    def test_update_reports_change(self):
        tracker = ModifierTracker(X11_TABLE)
        assert tracker.update(XK.XK_Shift_L, True) is True
        assert tracker.update(XK.XK_Shift_L, True) is False

    def test_held_in_display_order(self):
        tracker = ModifierTracker(X11_TABLE)
        tracker.update(XK.XK_Super_L, True)
        tracker.update(XK.XK_Shift_L, True)
        tracker.update(XK.XK_Control_L, True)
        assert tracker.held() == [ModifierId.CTRL_L, ModifierId.SHIFT_L, ModifierId.SUPER_L]

    def test_snapshot_is_a_copy(self):
        tracker = ModifierTracker(X11_TABLE)
        snap = tracker.snapshot()
        tracker.update(XK.XK_Alt_L, True)
        assert snap[ModifierId.ALT_L] is False


class TestMouseButtonTracker:
    def test_empty_label(self):
        assert MouseButtonTracker().active_label() == ""

    def test_simultaneous_buttons(self):
        tracker = MouseButtonTracker()
        tracker.press(1, 0.0)
        tracker.press(3, 0.01)
        assert tracker.active_label() == "LEFT CLICK + RIGHT CLICK"
        assert tracker.active_count == 2

    def test_ascending_order_regardless_of_press_order(self):
        tracker = MouseButtonTracker()
        tracker.press(3, 0.0)
        tracker.press(1, 0.01)
        assert tracker.active_label() == "LEFT CLICK + RIGHT CLICK"

    def test_release_one_of_two(self):
        tracker = MouseButtonTracker()
        tracker.press(1, 0.0)
        tracker.press(3, 0.01)
        assert tracker.release(1) is True
        assert tracker.active_label() == "RIGHT CLICK"

    def test_release_unknown_button(self):
        tracker = MouseButtonTracker()
        assert tracker.release(2) is False

    def test_button_counted_once(self):
        tracker = MouseButtonTracker()
        tracker.press(1, 0.0)
        tracker.press(1, 0.01)
        assert tracker.active_count == 1

    def test_gesture_window(self):
        tracker = MouseButtonTracker(window=0.05)
        assert tracker.press(1, 0.0) is False
        assert tracker.press(3, 0.02) is True
        tracker.release(1)
        tracker.release(3)

        # Fully released and a long pause: new gesture
        assert tracker.press(2, 1.0) is False
        assert tracker.gesture_start == 1.0

    def test_held_buttons_accumulate_after_pause(self):
        tracker = MouseButtonTracker(window=0.05)
        tracker.press(3, 0.0)
        assert tracker.press(1, 2.0) is True
        assert tracker.pressed == {1, 3}
        assert tracker.gesture_start == 0.0
