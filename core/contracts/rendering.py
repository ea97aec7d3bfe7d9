"""core/contracts/rendering.py
============================

Rendering contract for drawing surfaces.

The signature pad only ever issues these four directives per segment:
begin_stroke, move_to, line_to, end_stroke. Clearing the surface and
pen-width changes are optional capabilities; callers check for them with
``isinstance`` against the small mixin ABCs below.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from signaturepad.models.geometry import Point


class IRenderSink(ABC):
    """Abstract 2D drawing sink."""

    @abstractmethod
    def begin_stroke(self) -> None:
        """Start a new path."""

    @abstractmethod
    def move_to(self, point: "Point") -> None:
        """Move the pen without drawing."""

    @abstractmethod
    def line_to(self, point: "Point") -> None:
        """Draw a line from the current pen position."""

    @abstractmethod
    def end_stroke(self) -> None:
        """Stroke and close the current path."""


class IClearableSink(ABC):
    """Sink that can wipe its surface (background + guide line are its own business)."""

    @abstractmethod
    def clear(self) -> None:
        """Reset the surface to its blank state."""


class IPenWidthAware(ABC):
    """Sink whose pen width can be changed after construction."""

    @abstractmethod
    def set_pen_width(self, width: int) -> None:
        """Use *width* for subsequent strokes."""
