# signaturepad/models/pad_config.py
from __future__ import annotations
from dataclasses import dataclass

from .signature_enums import PenCap


@dataclass
class SignaturePadConfig:
    """
    Persisted configuration of a signature pad (section [SignaturePad]).

    Attributes:
        pen_width (int): Thickness of the pen in pixels; encoded into every payload.
        pen_colour (str): Ink colour (#RGB / #RRGGBB).
        pen_cap (PenCap): How line ends are drawn by sinks that support it.
        bg_colour (str): Background fill of the surface.
        line_colour (str): Colour of the signature guide line.
        line_width (int): Thickness of the guide line; 0 disables it.
        line_margin (int): Left/right margin of the guide line.
        line_top (int): Distance of the guide line from the top edge.
        compress (bool): Write the compact encoding (True) or legacy JSON (False).
        display_only (bool): Ignore input; used to show stored signatures.
        leave_grace_ms (int): Delay before a pointer that left the surface is released.
        surface_width (int): Width of the capture surface in pixels.
        surface_height (int): Height of the capture surface in pixels.
    """
    pen_width: int = 2
    pen_colour: str = "#145394"
    pen_cap: PenCap = PenCap.ROUND
    bg_colour: str = "#ffffff"
    line_colour: str = "#ccc"
    line_width: int = 2
    line_margin: int = 5
    line_top: int = 35
    compress: bool = True
    display_only: bool = False
    leave_grace_ms: int = 500
    surface_width: int = 198
    surface_height: int = 55

    def __post_init__(self) -> None:
        # a zero pen would encode as '[' and read back as legacy JSON
        if self.pen_width < 1:
            raise ValueError(f"pen_width must be at least 1, got {self.pen_width}")
