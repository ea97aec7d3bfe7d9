# signaturepad/gui/tk_adapters.py
"""
Tk glue for the signature pad: a canvas render sink, an ``after``-based
scheduler (timers fire on the Tk loop) and mouse event binding.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, List, Optional, Tuple

from core.contracts.rendering import IClearableSink, IPenWidthAware, IRenderSink
from core.contracts.scheduling import ITimerScheduler

from ..models.geometry import Point
from ..models.pad_config import SignaturePadConfig
from ..models.signature_enums import PenCap

if TYPE_CHECKING:
    import tkinter as tk
    from ..logic.signature_pad import SignaturePad

# Tk has no "square" cap; "projecting" is the same shape.
_TK_CAPSTYLE = {PenCap.BUTT: "butt", PenCap.ROUND: "round", PenCap.SQUARE: "projecting"}


class TkCanvasSink(IRenderSink, IClearableSink, IPenWidthAware):
    """Draws segments as canvas line items."""

    def __init__(self, canvas: "tk.Canvas", config: Optional[SignaturePadConfig] = None) -> None:
        self.canvas = canvas
        self.config = config or SignaturePadConfig()
        self.pen_width = self.config.pen_width
        self._coords: List[int] = []

    def begin_stroke(self) -> None:
        self._coords = []

    def move_to(self, point: Point) -> None:
        self._coords = [point.x, point.y]

    def line_to(self, point: Point) -> None:
        self._coords.extend((point.x, point.y))

    def end_stroke(self) -> None:
        if len(self._coords) >= 4:
            self.canvas.create_line(
                *self._coords,
                fill=self.config.pen_colour,
                width=self.pen_width,
                capstyle=_TK_CAPSTYLE[PenCap(self.config.pen_cap)],
                tags=("ink",),
            )
        self._coords = []

    def clear(self) -> None:
        """Wipe the canvas, repaint the background and the signature guide line."""
        c = self.config
        self.canvas.delete("all")
        self.canvas.create_rectangle(
            0, 0, c.surface_width, c.surface_height,
            fill=c.bg_colour, outline="", tags=("background",),
        )
        if c.line_width and not c.display_only:
            self.canvas.create_line(
                c.line_margin, c.line_top, c.surface_width - c.line_margin, c.line_top,
                fill=c.line_colour, width=c.line_width, tags=("guide",),
            )

    def set_pen_width(self, width: int) -> None:
        self.pen_width = max(1, int(width))


class TkAfterScheduler(ITimerScheduler):
    """Runs callbacks on the Tk event loop via ``widget.after``."""

    def __init__(self, widget: "tk.Misc") -> None:
        self.widget = widget

    def call_later(self, delay_s: float, callback: Callable[[], None]) -> Any:
        return self.widget.after(int(round(delay_s * 1000)), callback)

    def cancel(self, handle: Any) -> None:
        if handle is not None:
            self.widget.after_cancel(handle)


def bind_canvas(canvas: "tk.Canvas", pad: "SignaturePad") -> List[Tuple[str, str]]:
    """
    Route canvas mouse events into the pad's capture session.

    Tk keeps delivering <B1-Motion> outside the widget while the button is
    held; those positions are dropped so that re-entering starts a new stroke.
    Returns (sequence, funcid) pairs for unbind_canvas().
    """
    cap = pad.capture
    w, h = pad.config.surface_width, pad.config.surface_height

    def inside(e) -> bool:
        return 0 <= e.x < w and 0 <= e.y < h

    def on_down(e) -> None:
        cap.on_pointer_down((e.x, e.y))

    def on_move(e) -> None:
        if inside(e):
            cap.on_pointer_move((e.x, e.y))

    def on_up(_e) -> None:
        cap.on_pointer_up()

    def on_leave(_e) -> None:
        cap.on_pointer_leave()

    bindings = []
    for seq, fn in (("<ButtonPress-1>", on_down), ("<B1-Motion>", on_move),
                    ("<ButtonRelease-1>", on_up), ("<Leave>", on_leave)):
        bindings.append((seq, canvas.bind(seq, fn)))
    return bindings


def unbind_canvas(canvas: "tk.Canvas", bindings: List[Tuple[str, str]]) -> None:
    for seq, funcid in bindings:
        canvas.unbind(seq, funcid)
