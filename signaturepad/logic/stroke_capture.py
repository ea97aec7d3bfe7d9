# signaturepad/logic/stroke_capture.py
"""
Stroke capture state machine.

Turns surface-local pointer/touch positions into an ordered, de-duplicated
sequence of segments on the owned Signature.

    IDLE -> AWAITING_MODE -> DRAWING -> (LEAVE_GRACE) -> IDLE

The first press of a session latches the device family (touch or pointer);
events of the other family are ignored afterwards. Malformed ordering (move
before press, release without press) is ignored; no entry point raises.
"""
from __future__ import annotations

import math
from threading import RLock
from typing import Callable, Optional, Tuple, Union

from core.contracts.scheduling import ITimerScheduler

from ..models.geometry import Point, Segment
from ..models.signature import Signature
from ..models.signature_enums import CapturePhase, InputMode
from ..models.stroke_state import StrokeState
from .timers import ThreadingTimerScheduler

PointLike = Union[Point, Tuple[float, float]]
CaptureCallback = Callable[["StrokeCapture"], None]

DEFAULT_LEAVE_GRACE_MS = 500
DOT_OFFSET = 1   # pixels added on the y axis for dots and stroke end marks


def _to_point(value: PointLike) -> Point:
    """Floor to whole pixels; coordinates never go below the surface origin."""
    if isinstance(value, Point):
        x, y = value.x, value.y
    else:
        x, y = value
    return Point(max(0, int(math.floor(x))), max(0, int(math.floor(y))))


class StrokeCapture:
    """
    Capture session for one drawing surface.

    Callbacks:
        on_segment(segment): every recorded segment, in order (live rendering).
        on_draw(capture): after each recorded segment.
        on_draw_end(capture): after a stroke ended, if the signature is not empty.
    """

    def __init__(
        self,
        signature: Optional[Signature] = None,
        *,
        scheduler: Optional[ITimerScheduler] = None,
        leave_grace_ms: int = DEFAULT_LEAVE_GRACE_MS,
        on_segment: Optional[Callable[[Segment], None]] = None,
        on_draw: Optional[CaptureCallback] = None,
        on_draw_end: Optional[CaptureCallback] = None,
    ) -> None:
        self.signature = signature if signature is not None else Signature()
        self.leave_grace_ms = leave_grace_ms
        self.on_segment = on_segment
        self.on_draw = on_draw
        self.on_draw_end = on_draw_end

        self._scheduler: ITimerScheduler = scheduler or ThreadingTimerScheduler()
        self._lock = RLock()
        self._input_mode = InputMode.UNDETERMINED
        self._phase = CapturePhase.IDLE
        self._stroke: Optional[StrokeState] = None
        self._timer_token: Optional[object] = None
        self._enabled = True

    # -------- Introspection --------------------------------------------------
    @property
    def input_mode(self) -> InputMode:
        return self._input_mode

    @property
    def phase(self) -> CapturePhase:
        return self._phase

    @property
    def stroke(self) -> Optional[StrokeState]:
        return self._stroke

    @property
    def is_active(self) -> bool:
        return self._stroke is not None and self._stroke.pointer_active

    @property
    def enabled(self) -> bool:
        return self._enabled

    # -------- Pointer (mouse/pen) entry points -------------------------------
    def on_pointer_down(self, point: PointLike) -> None:
        self._press(point, InputMode.POINTER)

    def on_pointer_move(self, point: PointLike) -> None:
        self._move(point, InputMode.POINTER)

    def on_pointer_up(self) -> None:
        self._release(InputMode.POINTER)

    def on_pointer_leave(self) -> None:
        """Finalize the stroke and give the pointer a grace period to come back."""
        with self._lock:
            stroke = self._stroke
            if stroke is None or stroke.input_mode is not InputMode.POINTER:
                return
            if not stroke.pointer_active or stroke.leave_timer is not None:
                return
            self._finalize_stroke(stroke)
            self._arm_leave_timer(stroke)
            self._phase = CapturePhase.LEAVE_GRACE

    # -------- Touch entry points --------------------------------------------
    def on_touch_start(self, point: PointLike) -> None:
        self._press(point, InputMode.TOUCH)

    def on_touch_move(self, point: PointLike) -> None:
        self._move(point, InputMode.TOUCH)

    def on_touch_end(self, point: Optional[PointLike] = None) -> None:
        """Touch end finalizes synchronously; *point* is the lift position if known."""
        with self._lock:
            if point is not None:
                self._move(point, InputMode.TOUCH)
            self._release(InputMode.TOUCH)

    def on_touch_cancel(self) -> None:
        self._release(InputMode.TOUCH)

    # -------- Session control -----------------------------------------------
    def reset(self) -> None:
        """Drop any active stroke and pending timer. The signature is left alone."""
        with self._lock:
            if self._stroke is not None:
                self._cancel_leave_timer(self._stroke)
            self._stroke = None
            self._phase = CapturePhase.IDLE

    def disable(self) -> None:
        with self._lock:
            self.reset()
            self._enabled = False

    def enable(self) -> None:
        with self._lock:
            self._enabled = True

    # -------- State machine --------------------------------------------------
    def _accepts(self, mode: InputMode) -> bool:
        return self._input_mode is InputMode.UNDETERMINED or self._input_mode is mode

    def _press(self, raw: PointLike, mode: InputMode) -> None:
        with self._lock:
            if not self._enabled or not self._accepts(mode):
                return
            previous = self._stroke
            if previous is not None:
                if previous.leave_timer is not None:
                    self._cancel_leave_timer(previous)
                elif previous.pointer_active:
                    # press without the matching release: close that stroke first
                    self._finalize_stroke(previous)
                    previous.pointer_active = False

            self._phase = CapturePhase.AWAITING_MODE
            if self._input_mode is InputMode.UNDETERMINED:
                self._input_mode = mode
            stroke = StrokeState(input_mode=self._input_mode, pointer_active=True)
            self._stroke = stroke
            self._start_with_dot(stroke, _to_point(raw))

    def _move(self, raw: PointLike, mode: InputMode) -> None:
        with self._lock:
            stroke = self._stroke
            if not self._enabled or stroke is None or stroke.input_mode is not mode:
                return
            if not stroke.pointer_active:
                return
            point = _to_point(raw)

            if stroke.leave_timer is not None or stroke.last_point is None:
                # back on the surface with the button still held: new stroke
                self._cancel_leave_timer(stroke)
                self._start_with_dot(stroke, point)
                return

            if point == stroke.last_point:
                return
            stroke.moved = True
            self._record(stroke, Segment(stroke.last_point, point))

    def _release(self, mode: InputMode) -> None:
        with self._lock:
            stroke = self._stroke
            if stroke is None or stroke.input_mode is not mode:
                return
            if stroke.leave_timer is not None:
                # already finalized when the pointer left
                self._cancel_leave_timer(stroke)
            else:
                self._finalize_stroke(stroke)
            stroke.pointer_active = False
            self._stroke = None
            self._phase = CapturePhase.IDLE

    def _start_with_dot(self, stroke: StrokeState, point: Point) -> None:
        stroke.moved = False
        self._phase = CapturePhase.DRAWING
        self._record(stroke, Segment(point, point.offset(dy=DOT_OFFSET)))

    def _finalize_stroke(self, stroke: StrokeState) -> None:
        last = stroke.last_point
        if last is not None and stroke.moved:
            self._record(stroke, Segment(last, last.offset(dy=DOT_OFFSET)))
        stroke.last_point = None
        stroke.moved = False
        if len(self.signature) > 0 and self.on_draw_end:
            self.on_draw_end(self)

    def _record(self, stroke: StrokeState, segment: Segment) -> None:
        self.signature.append(segment)
        stroke.last_point = segment.end
        if self.on_segment:
            self.on_segment(segment)
        if self.on_draw:
            self.on_draw(self)

    # -------- Leave grace timer ----------------------------------------------
    def _arm_leave_timer(self, stroke: StrokeState) -> None:
        if stroke.leave_timer is not None:
            return
        token = object()
        self._timer_token = token
        stroke.leave_timer = self._scheduler.call_later(
            self.leave_grace_ms / 1000.0, lambda: self._on_leave_timeout(token)
        )

    def _cancel_leave_timer(self, stroke: StrokeState) -> None:
        if stroke.leave_timer is not None:
            self._scheduler.cancel(stroke.leave_timer)
            stroke.leave_timer = None
        self._timer_token = None

    def _on_leave_timeout(self, token: object) -> None:
        with self._lock:
            if token is not self._timer_token:
                return
            self._timer_token = None
            stroke = self._stroke
            if stroke is not None:
                stroke.leave_timer = None
                stroke.pointer_active = False
            self._stroke = None
            self._phase = CapturePhase.IDLE
