from .geometry import Point, Segment
from .signature import Signature
from .signature_enums import CapturePhase, InputMode, PenCap
from .stroke_state import StrokeState
from .pad_config import SignaturePadConfig

__all__ = [
    "Point",
    "Segment",
    "Signature",
    "CapturePhase",
    "InputMode",
    "PenCap",
    "StrokeState",
    "SignaturePadConfig",
]
