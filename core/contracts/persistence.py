"""core/contracts/persistence.py
==============================

A single opaque string slot (the "output field" of a signature pad).
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class IStringField(ABC):
    """Holds one encoded value; written after every completed stroke."""

    @abstractmethod
    def get(self) -> str:
        """Return the stored value ("" when empty)."""

    @abstractmethod
    def set(self, value: str) -> None:
        """Replace the stored value."""
