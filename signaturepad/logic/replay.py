# signaturepad/logic/replay.py
from __future__ import annotations

from typing import Iterable

from core.contracts.rendering import IRenderSink

from ..models.geometry import Segment


def draw_segment(segment: Segment, sink: IRenderSink) -> None:
    sink.begin_stroke()
    sink.move_to(segment.start)
    sink.line_to(segment.end)
    sink.end_stroke()


def replay(signature: Iterable[Segment], sink: IRenderSink) -> int:
    """
    Draw every segment in order onto *sink*; the signature is not modified.

    Returns the number of segments drawn.
    """
    count = 0
    for segment in signature:
        draw_segment(segment, sink)
        count += 1
    return count
