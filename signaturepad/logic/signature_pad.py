# signaturepad/logic/signature_pad.py
from __future__ import annotations

import dataclasses
import logging
from typing import Callable, Iterable, Optional, Union

from core.contracts.persistence import IStringField
from core.contracts.rendering import IClearableSink, IPenWidthAware, IRenderSink
from core.contracts.scheduling import ITimerScheduler

from ..models.geometry import Segment
from ..models.pad_config import SignaturePadConfig
from ..models.signature import Signature
from . import codec
from .fields import MemoryField
from .replay import draw_segment, replay
from .stroke_capture import StrokeCapture

log = logging.getLogger(__name__)

PadCallback = Callable[["SignaturePad"], None]


class SignaturePad:
    """
    One capture/replay session: owns the live Signature, the StrokeCapture
    feeding it, and writes the encoded signature into the output slot after
    every completed stroke.

    Input adapters call ``pad.capture.on_pointer_down(...)`` and friends; each
    recorded segment is drawn on the sink immediately.
    """

    def __init__(
        self,
        sink: IRenderSink,
        *,
        config: Optional[SignaturePadConfig] = None,
        output: Optional[IStringField] = None,
        scheduler: Optional[ITimerScheduler] = None,
        on_draw: Optional[PadCallback] = None,
        on_draw_end: Optional[PadCallback] = None,
    ) -> None:
        self.config = config or SignaturePadConfig()
        self.sink = sink
        self.output: IStringField = output if output is not None else MemoryField()
        self.on_draw = on_draw
        self.on_draw_end = on_draw_end

        self.signature = Signature()
        self._pen_width = self.config.pen_width
        self.capture = StrokeCapture(
            self.signature,
            scheduler=scheduler,
            leave_grace_ms=self.config.leave_grace_ms,
            on_segment=self._draw_live,
            on_draw=self._handle_draw,
            on_draw_end=self._handle_draw_end,
        )
        if self.config.display_only:
            self.capture.disable()

    # -------- Properties -----------------------------------------------------
    @property
    def surface_width(self) -> int:
        return self.config.surface_width

    @property
    def pen_width(self) -> int:
        """Effective pen width; differs from the config after a rescaled regenerate."""
        return self._pen_width

    # -------- Accessors ------------------------------------------------------
    def get_signature(self) -> Signature:
        return self.signature

    def get_signature_string(self) -> str:
        return self.signature.to_json()

    def get_encoded(self) -> str:
        return codec.encode(self.signature, self._pen_width, self.surface_width,
                            compress_output=self.config.compress)

    # -------- Operations -----------------------------------------------------
    def clear(self) -> None:
        """Blank the surface, drop all segments and empty the output slot."""
        self.capture.reset()
        self.signature.clear()
        self._pen_width = self.config.pen_width
        self._clear_surface()
        self.output.set("")
        log.debug("Signature pad cleared")

    def regenerate(self, source: Union[str, Signature, Iterable[Segment]]) -> Signature:
        """
        Show a stored signature and adopt it as the live one.

        *source* is an encoded payload (compact or legacy JSON) or segments.
        Compact payloads are rescaled to this pad's surface width; codec
        errors propagate before anything is changed.
        """
        pen: Optional[int] = None
        if isinstance(source, str):
            decoded = codec.decode_payload(source, self.surface_width)
            segments = list(decoded.signature)
            pen = decoded.pen_width
        else:
            segments = list(source)

        self.capture.reset()
        self.signature.clear()
        self._clear_surface()
        if pen is not None:
            self._pen_width = pen
            if isinstance(self.sink, IPenWidthAware):
                self.sink.set_pen_width(pen)

        replay(segments, self.sink)
        self.signature.replace(segments)
        self._write_output()
        log.debug("Regenerated %d segments (pen %s)", len(segments), self._pen_width)
        return self.signature

    def update_options(self, **changes) -> SignaturePadConfig:
        """Change configuration after construction (unknown keys raise TypeError)."""
        self.config = dataclasses.replace(self.config, **changes)
        self.capture.leave_grace_ms = self.config.leave_grace_ms
        if "pen_width" in changes:
            self._pen_width = self.config.pen_width
            if isinstance(self.sink, IPenWidthAware):
                self.sink.set_pen_width(self._pen_width)
        if self.config.display_only:
            self.capture.disable()
        else:
            self.capture.enable()
        return self.config

    # -------- Internal -------------------------------------------------------
    def _clear_surface(self) -> None:
        if isinstance(self.sink, IClearableSink):
            self.sink.clear()

    def _draw_live(self, segment: Segment) -> None:
        draw_segment(segment, self.sink)

    def _handle_draw(self, _capture: StrokeCapture) -> None:
        if self.on_draw:
            self.on_draw(self)

    def _handle_draw_end(self, _capture: StrokeCapture) -> None:
        self._write_output()
        if self.on_draw_end:
            self.on_draw_end(self)

    def _write_output(self) -> None:
        self.output.set(self.get_encoded())
