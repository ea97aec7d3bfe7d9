# signaturepad/models/stroke_state.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Optional

from .geometry import Point
from .signature_enums import InputMode


@dataclass
class StrokeState:
    """
    Transient per-stroke state. Exists only while a stroke is active.

    last_point is None right after a stroke was finalized by leaving the surface;
    the next move then starts a fresh stroke with a dot.
    """
    input_mode: InputMode
    last_point: Optional[Point] = None
    pointer_active: bool = False
    leave_timer: Optional[Any] = None      # scheduler handle, see ITimerScheduler
    moved: bool = False                    # recorded more than the initial dot
