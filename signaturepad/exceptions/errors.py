"""Signature pad exceptions.

Capture never raises; everything here comes out of payload decoding.
"""
from __future__ import annotations


class SignaturePadError(Exception):
    """Base exception for the signature pad feature."""


class CodecError(SignaturePadError, ValueError):
    """Raised when an encoded signature cannot be turned back into segments."""


class ScaleError(CodecError):
    """Original or target surface width makes the scale factor unusable."""

    def __init__(self, orig_width: int, new_width: float) -> None:
        super().__init__(
            "There is a problem with the width of the new surface compared to the original "
            f"(ow: {orig_width}, nw: {new_width})"
        )
        self.orig_width = orig_width
        self.new_width = new_width


class TooSmallSurfaceError(CodecError):
    """Scaled pen width falls below half a pixel."""

    def __init__(self, orig_pen: int, new_pen: float) -> None:
        super().__init__(f"Too small a surface for signature representation (op: {orig_pen}, np: {new_pen})")
        self.orig_pen = orig_pen
        self.new_pen = new_pen


class MalformedPayloadError(CodecError):
    """Payload is truncated or is neither compact nor valid legacy JSON."""
