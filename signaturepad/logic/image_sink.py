# signaturepad/logic/image_sink.py
from __future__ import annotations

import io
from typing import List, Optional, Tuple

from PIL import Image, ImageDraw

from core.contracts.rendering import IClearableSink, IPenWidthAware, IRenderSink

from ..models.geometry import Point


def _hex_to_rgb(hexstr: str) -> Tuple[int, int, int]:
    """
    Convert hex color (#RRGGBB or #RGB) into an RGB tuple for PIL.
    """
    s = (hexstr or "#000000").strip()
    if not s.startswith("#"):
        s = "#" + s
    if len(s) == 4:
        r = int(s[1] * 2, 16); g = int(s[2] * 2, 16); b = int(s[3] * 2, 16)
    else:
        r = int(s[1:3], 16); g = int(s[3:5], 16); b = int(s[5:7], 16)
    return (r, g, b)


class PilImageSink(IRenderSink, IClearableSink, IPenWidthAware):
    """
    Renders segments into a Pillow image.

    bg_colour=None gives a transparent background (RGBA) so the image can be
    laid over documents.
    """

    def __init__(self, size: Tuple[int, int], *, pen_width: int = 2,
                 pen_colour: str = "#145394", bg_colour: Optional[str] = None) -> None:
        self.size = size
        self.pen_width = pen_width
        self.pen_colour = pen_colour
        self.bg_colour = bg_colour
        self._path: List[Tuple[int, int]] = []
        self.clear()

    # -------- IRenderSink ----------------------------------------------------
    def begin_stroke(self) -> None:
        self._path = []

    def move_to(self, point: Point) -> None:
        self._path = [(point.x, point.y)]

    def line_to(self, point: Point) -> None:
        self._path.append((point.x, point.y))

    def end_stroke(self) -> None:
        if len(self._path) >= 2:
            self._draw.line(self._path, fill=(*_hex_to_rgb(self.pen_colour), 255),
                            width=self.pen_width, joint="curve")
            # round caps
            if self.pen_width > 2:
                r = self.pen_width / 2
                for x, y in (self._path[0], self._path[-1]):
                    self._draw.ellipse((x - r, y - r, x + r, y + r),
                                       fill=(*_hex_to_rgb(self.pen_colour), 255))
        self._path = []

    # -------- Optional capabilities -----------------------------------------
    def clear(self) -> None:
        bg = (0, 0, 0, 0) if self.bg_colour is None else (*_hex_to_rgb(self.bg_colour), 255)
        self.image = Image.new("RGBA", self.size, bg)
        self._draw = ImageDraw.Draw(self.image)
        self._path = []

    def set_pen_width(self, width: int) -> None:
        self.pen_width = max(1, int(width))

    # -------- Export ---------------------------------------------------------
    def to_png_bytes(self) -> bytes:
        buf = io.BytesIO()
        self.image.save(buf, format="PNG")
        return buf.getvalue()
