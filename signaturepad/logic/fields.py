# signaturepad/logic/fields.py
from __future__ import annotations

from typing import TYPE_CHECKING

from core.contracts.persistence import IStringField

if TYPE_CHECKING:
    from .signature_repository import SignatureRepository


class MemoryField(IStringField):
    """In-process output slot."""

    def __init__(self, value: str = "") -> None:
        self._value = value

    def get(self) -> str:
        return self._value

    def set(self, value: str) -> None:
        self._value = value


class RepositoryField(IStringField):
    """
    Output slot bound to one owner in a SignatureRepository.

    Writing "" deletes the stored row so "cleared" and "never drawn" read the same.
    """

    def __init__(self, repository: "SignatureRepository", owner_id: str) -> None:
        self._repo = repository
        self._owner_id = owner_id

    @property
    def owner_id(self) -> str:
        return self._owner_id

    @property
    def repository(self) -> "SignatureRepository":
        return self._repo

    def get(self) -> str:
        return self._repo.load(self._owner_id) or ""

    def set(self, value: str) -> None:
        if value:
            self._repo.save(self._owner_id, value)
        else:
            self._repo.delete(self._owner_id)
