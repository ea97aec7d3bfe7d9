"""
signaturepad/tests/test_stroke_capture.py

State machine tests for StrokeCapture. Timers are driven manually except
for the threading scheduler checks at the end.
"""

from __future__ import annotations

import threading
import time
import unittest

from signaturepad.logic.stroke_capture import StrokeCapture
from signaturepad.logic.timers import ThreadingTimerScheduler
from signaturepad.models.geometry import Point, Segment
from signaturepad.models.signature_enums import CapturePhase, InputMode
from signaturepad.tests.fakes import ManualScheduler


def seg(fx: int, fy: int, tx: int, ty: int) -> Segment:
    return Segment(Point(fx, fy), Point(tx, ty))


class CaptureTestCase(unittest.TestCase):
    def setUp(self) -> None:
        self.scheduler = ManualScheduler()
        self.draws = 0
        self.draw_ends = 0

        def on_draw(_cap) -> None:
            self.draws += 1

        def on_draw_end(_cap) -> None:
            self.draw_ends += 1

        self.cap = StrokeCapture(scheduler=self.scheduler, on_draw=on_draw, on_draw_end=on_draw_end)

    @property
    def segments(self) -> list:
        return list(self.cap.signature)


class TestPointerStrokes(CaptureTestCase):
    def test_tap_leaves_a_single_dot(self) -> None:
        self.cap.on_pointer_down((10, 10))
        self.cap.on_pointer_up()
        self.assertEqual(self.segments, [seg(10, 10, 10, 11)])
        self.assertEqual(self.draw_ends, 1)
        self.assertEqual(self.cap.phase, CapturePhase.IDLE)
        self.assertIsNone(self.cap.stroke)

    def test_identical_points_are_ignored(self) -> None:
        self.cap.on_pointer_down((10, 10))
        self.cap.on_pointer_move((12, 12))
        self.cap.on_pointer_move((12, 12))
        self.assertEqual(self.segments, [seg(10, 10, 10, 11), seg(10, 11, 12, 12)])
        self.assertEqual(self.draws, 2)

    def test_move_onto_dot_end_is_ignored(self) -> None:
        self.cap.on_pointer_down((4, 4))
        self.cap.on_pointer_move((4, 5))
        self.assertEqual(len(self.segments), 1)

    def test_stroke_end_is_marked(self) -> None:
        self.cap.on_pointer_down((10, 10))
        self.cap.on_pointer_move((15, 10))
        self.cap.on_pointer_up()
        self.assertEqual(self.segments, [seg(10, 10, 10, 11), seg(10, 11, 15, 10), seg(15, 10, 15, 11)])
        self.assertEqual(self.draw_ends, 1)

    def test_no_zero_length_segments(self) -> None:
        self.cap.on_pointer_down((0, 0))
        for p in [(0, 0), (0, 1), (1, 1), (1, 1), (2, 3)]:
            self.cap.on_pointer_move(p)
        self.cap.on_pointer_up()
        self.assertTrue(all(not s.is_zero_length for s in self.segments))

    def test_coordinates_are_floored_and_clamped(self) -> None:
        self.cap.on_pointer_down((3.7, 8.2))
        self.cap.on_pointer_move((-2, 20.9))
        self.assertEqual(self.segments, [seg(3, 8, 3, 9), seg(3, 9, 0, 20)])

    def test_move_before_down_is_noop(self) -> None:
        self.cap.on_pointer_move((5, 5))
        self.cap.on_pointer_up()
        self.cap.on_pointer_leave()
        self.assertEqual(self.segments, [])
        self.assertEqual(self.draws + self.draw_ends, 0)
        self.assertEqual(self.cap.input_mode, InputMode.UNDETERMINED)

    def test_second_stroke_does_not_connect(self) -> None:
        self.cap.on_pointer_down((1, 1))
        self.cap.on_pointer_up()
        self.cap.on_pointer_down((30, 30))
        self.cap.on_pointer_up()
        self.assertEqual(self.segments, [seg(1, 1, 1, 2), seg(30, 30, 30, 31)])
        self.assertEqual(self.draw_ends, 2)

    def test_press_without_release_finalizes_previous_stroke(self) -> None:
        self.cap.on_pointer_down((1, 1))
        self.cap.on_pointer_move((8, 1))
        self.cap.on_pointer_down((30, 30))
        self.assertEqual(self.draw_ends, 1)
        self.assertEqual(self.segments, [seg(1, 1, 1, 2), seg(1, 2, 8, 1), seg(8, 1, 8, 2),
                                         seg(30, 30, 30, 31)])
        self.cap.on_pointer_up()
        self.assertEqual(self.draw_ends, 2)


class TestInputModeLatch(CaptureTestCase):
    def test_touch_latches_session(self) -> None:
        self.cap.on_touch_start((5, 5))
        self.assertEqual(self.cap.input_mode, InputMode.TOUCH)
        self.cap.on_pointer_move((9, 9))
        self.cap.on_pointer_up()
        self.assertEqual(len(self.segments), 1)
        self.assertTrue(self.cap.is_active)
        self.cap.on_touch_end()
        self.cap.on_pointer_down((20, 20))
        self.assertEqual(len(self.segments), 1)
        self.assertEqual(self.cap.input_mode, InputMode.TOUCH)

    def test_pointer_latches_session(self) -> None:
        self.cap.on_pointer_down((5, 5))
        self.cap.on_pointer_up()
        self.cap.on_touch_start((7, 7))
        self.cap.on_touch_end()
        self.assertEqual(self.segments, [seg(5, 5, 5, 6)])
        self.assertEqual(self.cap.input_mode, InputMode.POINTER)

    def test_touch_end_with_lift_position(self) -> None:
        self.cap.on_touch_start((5, 5))
        self.cap.on_touch_end((8, 8))
        self.assertEqual(self.segments, [seg(5, 5, 5, 6), seg(5, 6, 8, 8), seg(8, 8, 8, 9)])
        self.assertEqual(self.cap.phase, CapturePhase.IDLE)

    def test_touch_has_no_grace_period(self) -> None:
        self.cap.on_touch_start((5, 5))
        self.cap.on_pointer_leave()
        self.assertEqual(self.scheduler.pending, {})
        self.assertEqual(self.cap.phase, CapturePhase.DRAWING)
        self.cap.on_touch_cancel()
        self.assertEqual(self.cap.phase, CapturePhase.IDLE)
        self.assertEqual(self.draw_ends, 1)


class TestLeaveGrace(CaptureTestCase):
    def _draw_and_leave(self) -> None:
        self.cap.on_pointer_down((10, 10))
        self.cap.on_pointer_move((20, 10))
        self.cap.on_pointer_leave()

    def test_leave_finalizes_and_arms_timer(self) -> None:
        self._draw_and_leave()
        self.assertEqual(self.segments[-1], seg(20, 10, 20, 11))
        self.assertEqual(self.draw_ends, 1)
        self.assertEqual(self.cap.phase, CapturePhase.LEAVE_GRACE)
        self.assertEqual(len(self.scheduler.pending), 1)
        delay, _cb = next(iter(self.scheduler.pending.values()))
        self.assertAlmostEqual(delay, 0.5)

    def test_second_leave_does_not_rearm(self) -> None:
        self._draw_and_leave()
        self.cap.on_pointer_leave()
        self.assertEqual(len(self.scheduler.pending), 1)
        self.assertEqual(self.draw_ends, 1)

    def test_timer_clears_active_state(self) -> None:
        self._draw_and_leave()
        self.scheduler.fire_all()
        self.assertEqual(self.cap.phase, CapturePhase.IDLE)
        self.assertFalse(self.cap.is_active)
        count = len(self.segments)
        self.cap.on_pointer_move((25, 25))
        self.assertEqual(len(self.segments), count)

    def test_press_again_cancels_timer(self) -> None:
        self._draw_and_leave()
        handle = next(iter(self.scheduler.pending))
        self.cap.on_pointer_down((40, 40))
        self.assertIn(handle, self.scheduler.cancelled)
        self.assertEqual(self.scheduler.pending, {})
        self.assertEqual(self.segments[-1], seg(40, 40, 40, 41))
        self.assertEqual(self.cap.phase, CapturePhase.DRAWING)

    def test_reentry_with_button_held_starts_new_stroke(self) -> None:
        self._draw_and_leave()
        self.cap.on_pointer_move((3, 30))
        self.assertEqual(self.scheduler.pending, {})
        self.assertEqual(self.segments[-1], seg(3, 30, 3, 31))
        self.cap.on_pointer_move((6, 30))
        self.assertEqual(self.segments[-1], seg(3, 31, 6, 30))

    def test_release_outside_cancels_timer(self) -> None:
        self._draw_and_leave()
        count = len(self.segments)
        self.cap.on_pointer_up()
        self.assertEqual(self.scheduler.pending, {})
        self.assertEqual(len(self.segments), count)
        self.assertEqual(self.draw_ends, 1)
        self.assertEqual(self.cap.phase, CapturePhase.IDLE)

    def test_stale_timer_callback_is_ignored(self) -> None:
        self._draw_and_leave()
        _delay, stale = next(iter(self.scheduler.pending.values()))
        self.cap.on_pointer_down((40, 40))
        stale()
        self.assertTrue(self.cap.is_active)
        self.assertEqual(self.cap.phase, CapturePhase.DRAWING)


class TestSessionControl(CaptureTestCase):
    def test_reset_cancels_pending_timer(self) -> None:
        self.cap.on_pointer_down((1, 1))
        self.cap.on_pointer_leave()
        self.cap.reset()
        self.assertEqual(self.scheduler.pending, {})
        self.assertEqual(self.cap.phase, CapturePhase.IDLE)
        self.assertEqual(len(self.segments), 1)

    def test_disabled_capture_ignores_input(self) -> None:
        self.cap.disable()
        self.cap.on_pointer_down((1, 1))
        self.cap.on_pointer_up()
        self.assertEqual(self.segments, [])
        self.cap.enable()
        self.cap.on_pointer_down((1, 1))
        self.assertEqual(len(self.segments), 1)

    def test_segment_hook_sees_every_segment(self) -> None:
        seen = []
        self.cap.on_segment = seen.append
        self.cap.on_pointer_down((1, 1))
        self.cap.on_pointer_move((4, 4))
        self.cap.on_pointer_up()
        self.assertEqual(seen, self.segments)


class TestThreadingTimerScheduler(unittest.TestCase):
    def test_fires_and_cancels(self) -> None:
        sched = ThreadingTimerScheduler()
        fired = threading.Event()
        sched.call_later(0.01, fired.set)
        self.assertTrue(fired.wait(2))

        never = threading.Event()
        handle = sched.call_later(0.05, never.set)
        sched.cancel(handle)
        sched.cancel(None)
        self.assertFalse(never.wait(0.2))

    def test_leave_grace_expires_on_timer_thread(self) -> None:
        cap = StrokeCapture(scheduler=ThreadingTimerScheduler(), leave_grace_ms=10)
        cap.on_pointer_down((1, 1))
        cap.on_pointer_leave()
        deadline = time.monotonic() + 2
        while cap.phase is not CapturePhase.IDLE and time.monotonic() < deadline:
            time.sleep(0.01)
        self.assertIs(cap.phase, CapturePhase.IDLE)
        self.assertIsNone(cap.stroke)


if __name__ == "__main__":
    unittest.main()
