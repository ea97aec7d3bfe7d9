"""
Signature pad feature package.

Captures hand-drawn signatures as ordered line segments, stores them in a
compact one-character-per-number encoding and redraws them on surfaces of a
different width.

Use ``create_signature_pad`` to get a session wired to the configured
settings and, optionally, to a stored signature of one owner.
"""

from __future__ import annotations

from typing import Optional

from core.contracts.rendering import IRenderSink
from core.contracts.scheduling import ITimerScheduler

from .logic.fields import MemoryField, RepositoryField
from .logic.pad_settings_repository import PadSettingsRepository
from .logic.signature_pad import SignaturePad
from .logic.signature_repository import SignatureRepository
from .models.pad_config import SignaturePadConfig


def create_signature_pad(
    sink: IRenderSink,
    *,
    owner_id: Optional[str] = None,
    repository: Optional[SignatureRepository] = None,
    config: Optional[SignaturePadConfig] = None,
    scheduler: Optional[ITimerScheduler] = None,
) -> SignaturePad:
    """
    Factory for a signature pad session.

    Args:
        sink: Rendering collaborator to draw on.
        owner_id: When given, a stored signature of this owner is shown and
            the output slot is bound to the owner in *repository*. Only
            drawing or clearing writes back; opening leaves the row as is.
        repository: Signature store; defaults to the configured database.
        config: Pad settings; defaults to the [SignaturePad] configuration.
        scheduler: Timer source for the pointer-leave grace period.

    Returns:
        SignaturePad: the wired session.
    """
    config = config or PadSettingsRepository().load()
    if owner_id is None:
        return SignaturePad(sink, config=config, output=MemoryField(), scheduler=scheduler)

    repository = repository or SignatureRepository.from_config()
    field = RepositoryField(repository, owner_id)
    stored = field.get()
    pad = SignaturePad(sink, config=config, output=MemoryField(), scheduler=scheduler)
    if stored:
        # rescaled copy stays in memory; the stored payload is not rewritten
        pad.regenerate(stored)
    pad.output = field
    return pad


__all__ = ["create_signature_pad", "SignaturePad", "SignaturePadConfig"]
