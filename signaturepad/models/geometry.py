# signaturepad/models/geometry.py
from __future__ import annotations
from dataclasses import dataclass


@dataclass(frozen=True)
class Point:
    """
    Integer pixel position relative to the top-left corner of the capture surface.
    """
    x: int
    y: int

    def offset(self, dx: int = 0, dy: int = 0) -> "Point":
        return Point(self.x + dx, self.y + dy)


@dataclass(frozen=True)
class Segment:
    """
    One drawn line: moveTo(start) followed by lineTo(end).

    Legacy JSON names: mx/my = start, lx/ly = end.
    """
    start: Point
    end: Point

    @property
    def is_zero_length(self) -> bool:
        return self.start == self.end

    def as_legacy_dict(self) -> dict[str, int]:
        return {"lx": self.end.x, "ly": self.end.y, "mx": self.start.x, "my": self.start.y}

    @classmethod
    def from_legacy_dict(cls, data: dict) -> "Segment":
        return cls(
            start=Point(int(data["mx"]), int(data["my"])),
            end=Point(int(data["lx"]), int(data["ly"])),
        )
