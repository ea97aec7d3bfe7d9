# signaturepad/models/signature.py
from __future__ import annotations

import json
from typing import Iterable, Iterator, List

from .geometry import Segment


class Signature:
    """
    Ordered collection of segments across all strokes of a session.

    Insertion order is replay order. An empty signature means "nothing drawn yet".
    """

    def __init__(self, segments: Iterable[Segment] = ()) -> None:
        self._segments: List[Segment] = list(segments)

    # -------- Mutation -------------------------------------------------------
    def append(self, segment: Segment) -> None:
        self._segments.append(segment)

    def extend(self, segments: Iterable[Segment]) -> None:
        self._segments.extend(segments)

    def clear(self) -> None:
        self._segments.clear()

    def replace(self, segments: Iterable[Segment]) -> None:
        """Adopt another segment sequence as the live content (used by regenerate)."""
        self._segments = list(segments)

    # -------- Sequence protocol ----------------------------------------------
    def __len__(self) -> int:
        return len(self._segments)

    def __iter__(self) -> Iterator[Segment]:
        return iter(self._segments)

    def __getitem__(self, index: int) -> Segment:
        return self._segments[index]

    def __bool__(self) -> bool:
        return bool(self._segments)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Signature):
            return self._segments == other._segments
        if isinstance(other, list):
            return self._segments == other
        return NotImplemented

    def __repr__(self) -> str:
        return f"Signature({self._segments!r})"

    @property
    def segments(self) -> tuple[Segment, ...]:
        return tuple(self._segments)

    # -------- Legacy structured form -----------------------------------------
    def to_json(self) -> str:
        """Serialize as the legacy JSON array [{"lx", "ly", "mx", "my"}, ...]."""
        return json.dumps([s.as_legacy_dict() for s in self._segments], separators=(",", ":"))

    @classmethod
    def from_json(cls, text: str) -> "Signature":
        data = json.loads(text) if text else []
        return cls(Segment.from_legacy_dict(item) for item in data if isinstance(item, dict))
