# signaturepad/logic/codec.py
"""
Compact signature codec.

Every integer becomes exactly one character, ``chr(n + CHAR_OFFSET)``. A
non-empty payload starts with the pen width and the surface width it was
drawn on, followed by four characters per segment (to.x, to.y, from.x, from.y).
Decoding onto a surface of a different width rescales coordinates and damps
the pen width so enlarged copies do not look too heavy.

The codec is stateless and never logs; errors propagate to the caller.
"""
from __future__ import annotations

import json
import math
from dataclasses import dataclass
from typing import Final, Iterable, Optional, Union

from ..exceptions.errors import MalformedPayloadError, ScaleError, TooSmallSurfaceError
from ..models.geometry import Point, Segment
from ..models.signature import Signature

CHAR_OFFSET: Final[int] = 91
# '[' is chr(91): a legacy JSON payload can never be mistaken for a compact
# header as long as the pen width is at least 1.
LEGACY_SENTINEL: Final[str] = "["
# Largest value chr() accepts after the offset. Not validated: values inside
# the surrogate block or close to this bound will not survive UTF-8 storage.
MAX_ENCODABLE: Final[int] = 0x10FFFF - CHAR_OFFSET

HEADER_LENGTH: Final[int] = 2
FIELDS_PER_SEGMENT: Final[int] = 4

PEN_DAMPING: Final[float] = 0.8
MIN_PEN_WIDTH: Final[float] = 0.5

Encodable = Union[Signature, Iterable[Segment]]


@dataclass(frozen=True)
class DecodedPayload:
    """Result of reading either payload format."""
    signature: Signature
    pen_width: Optional[int]   # scaled pen width; None for legacy JSON
    compact: bool


# -------- Character mapping ------------------------------------------------
def to_char(value: int) -> str:
    return chr(int(value) + CHAR_OFFSET)


def from_char(char: str) -> int:
    return ord(char) - CHAR_OFFSET


def _round_half_up(value: float) -> int:
    # Python's round() is banker's rounding; coordinates must round .5 upwards.
    return int(math.floor(value + 0.5))


# -------- Compact format ---------------------------------------------------
def compress(signature: Encodable, pen_width: int, surface_width: int) -> str:
    """
    Encode *signature* into the compact string form.

    An empty signature yields "" without header, so callers can tell
    "untouched" from "drawn then cleared".
    """
    body = "".join(
        to_char(seg.end.x) + to_char(seg.end.y) + to_char(seg.start.x) + to_char(seg.start.y)
        for seg in signature
    )
    if not body:
        return ""
    if pen_width < 1:
        raise ValueError(f"pen_width must be at least 1, got {pen_width}")
    return to_char(pen_width) + to_char(surface_width) + body


def scaled_pen_width(orig_pen: int, scale: float) -> int:
    """
    Damped pen scaling: the pen grows at 80% of the geometry rate.

    Raises TooSmallSurfaceError below half a pixel; otherwise at least 1.
    """
    new_pen = orig_pen * (PEN_DAMPING * (scale - 1) + 1)
    if new_pen < MIN_PEN_WIDTH:
        raise TooSmallSurfaceError(orig_pen, new_pen)
    return max(_round_half_up(new_pen), 1)


def _decompress(encoded: str, surface_width: float) -> tuple[Signature, int]:
    if len(encoded) < HEADER_LENGTH:
        raise MalformedPayloadError(f"Incomplete header in compact payload ({len(encoded)} chars)")
    body_len = len(encoded) - HEADER_LENGTH
    if body_len % FIELDS_PER_SEGMENT:
        raise MalformedPayloadError(
            f"Compact payload body is not a whole number of segments ({body_len} chars)"
        )

    orig_pen = from_char(encoded[0])
    orig_width = from_char(encoded[1])
    if orig_width == 0:
        raise ScaleError(orig_width, surface_width)
    scale = surface_width / orig_width
    if not math.isfinite(scale) or scale == 0:
        raise ScaleError(orig_width, surface_width)

    pen = scaled_pen_width(orig_pen, scale)

    def coord(pos: int) -> int:
        return _round_half_up(from_char(encoded[pos]) * scale)

    sig = Signature()
    for i in range(HEADER_LENGTH, len(encoded), FIELDS_PER_SEGMENT):
        sig.append(Segment(
            start=Point(coord(i + 2), coord(i + 3)),
            end=Point(coord(i), coord(i + 1)),
        ))
    return sig, pen


def decompress(encoded: str, surface_width: float) -> Union[Signature, str]:
    """
    Decode a compact payload for a surface *surface_width* pixels wide.

    Returns the input string unchanged when it is a legacy JSON payload, so
    callers can support both formats; see decode_payload() for a reader that
    handles that case transparently.
    """
    if not encoded:
        return Signature()
    if encoded[0] == LEGACY_SENTINEL:
        return encoded
    sig, _pen = _decompress(encoded, surface_width)
    return sig


def is_legacy_payload(encoded: str) -> bool:
    return bool(encoded) and encoded[0] == LEGACY_SENTINEL


# -------- Legacy JSON format -----------------------------------------------
def to_json(signature: Encodable) -> str:
    if isinstance(signature, Signature):
        return signature.to_json()
    return Signature(signature).to_json()


def from_json(text: str) -> Signature:
    try:
        return Signature.from_json(text)
    except (ValueError, KeyError, TypeError) as ex:
        raise MalformedPayloadError(f"Invalid legacy signature payload: {ex}") from ex


# -------- Format-agnostic helpers -----------------------------------------
def encode(signature: Encodable, pen_width: int, surface_width: int, *, compress_output: bool = True) -> str:
    """Write the output field value: compact form, or legacy JSON when compression is off."""
    if compress_output:
        return compress(signature, pen_width, surface_width)
    return to_json(signature)


def decode_payload(payload: str, surface_width: float) -> DecodedPayload:
    """Read either format. Compact payloads are rescaled to *surface_width*."""
    if not payload:
        return DecodedPayload(signature=Signature(), pen_width=None, compact=True)
    if is_legacy_payload(payload):
        return DecodedPayload(signature=from_json(payload), pen_width=None, compact=False)
    sig, pen = _decompress(payload, surface_width)
    return DecodedPayload(signature=sig, pen_width=pen, compact=True)
