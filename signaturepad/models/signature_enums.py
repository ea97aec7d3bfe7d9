# signaturepad/models/signature_enums.py
from __future__ import annotations
from enum import Enum


class InputMode(str, Enum):
    """Device family driving a capture session. Latched on the first interaction."""
    UNDETERMINED = "undetermined"
    TOUCH = "touch"
    POINTER = "pointer"


class CapturePhase(str, Enum):
    IDLE = "idle"
    AWAITING_MODE = "awaiting_mode"
    DRAWING = "drawing"
    LEAVE_GRACE = "leave_grace"   # pointer left while pressed; grace timer armed


class PenCap(str, Enum):
    BUTT = "butt"
    ROUND = "round"
    SQUARE = "square"
