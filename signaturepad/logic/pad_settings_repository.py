"""
PadSettingsRepository
---------------------
Loads and saves SignaturePadConfig in the [SignaturePad] section.

Reading goes through the layered ConfigService (defaults, env, machine and
user INI); writing only touches the machine config.ini, atomically
(temp file + replace).
"""

from __future__ import annotations

import configparser
from pathlib import Path
from typing import Optional

from core.config.config_service import ConfigService

from ..models.pad_config import SignaturePadConfig
from ..models.signature_enums import PenCap


class PadSettingsRepository:
    SECTION = "SignaturePad"

    def __init__(self, service: Optional[ConfigService] = None) -> None:
        if service is None:
            from core.config.config_service import config_service  # lazy
            service = config_service
        self._service = service

    # --- Public API ---------------------------------------------------------

    def load(self) -> SignaturePadConfig:
        """
        Returns the merged settings; values missing in every layer fall back to
        the dataclass defaults.
        """
        d = SignaturePadConfig()
        g = self._service.get
        s = self.SECTION

        def _get(key: str, cast, default):
            val = g(s, key, cast=cast)
            return default if val is None else val

        cap_raw = _get("pen_cap", str, d.pen_cap.value)
        try:
            cap = PenCap(cap_raw.strip().lower())
        except ValueError:
            cap = d.pen_cap

        pen_width = _get("pen_width", int, d.pen_width)
        if pen_width < 1:
            pen_width = d.pen_width

        return SignaturePadConfig(
            pen_width=pen_width,
            pen_colour=_get("pen_colour", str, d.pen_colour),
            pen_cap=cap,
            bg_colour=_get("bg_colour", str, d.bg_colour),
            line_colour=_get("line_colour", str, d.line_colour),
            line_width=_get("line_width", int, d.line_width),
            line_margin=_get("line_margin", int, d.line_margin),
            line_top=_get("line_top", int, d.line_top),
            compress=_get("compress", bool, d.compress),
            display_only=_get("display_only", bool, d.display_only),
            leave_grace_ms=_get("leave_grace_ms", int, d.leave_grace_ms),
            surface_width=_get("surface_width", int, d.surface_width),
            surface_height=_get("surface_height", int, d.surface_height),
        )

    def save(self, c: SignaturePadConfig) -> None:
        """
        Persists settings atomically into the machine config and reloads the service.
        """
        path = self._service.machine_ini
        cfg = configparser.ConfigParser()
        cfg.read(path, encoding="utf-8")
        if not cfg.has_section(self.SECTION):
            cfg.add_section(self.SECTION)

        s = self.SECTION
        cfg.set(s, "pen_width", str(int(c.pen_width)))
        cfg.set(s, "pen_colour", c.pen_colour)
        cfg.set(s, "pen_cap", PenCap(c.pen_cap).value)
        cfg.set(s, "bg_colour", c.bg_colour)
        cfg.set(s, "line_colour", c.line_colour)
        cfg.set(s, "line_width", str(int(c.line_width)))
        cfg.set(s, "line_margin", str(int(c.line_margin)))
        cfg.set(s, "line_top", str(int(c.line_top)))
        cfg.set(s, "compress", str(bool(c.compress)))
        cfg.set(s, "display_only", str(bool(c.display_only)))
        cfg.set(s, "leave_grace_ms", str(int(c.leave_grace_ms)))
        cfg.set(s, "surface_width", str(int(c.surface_width)))
        cfg.set(s, "surface_height", str(int(c.surface_height)))

        self._atomic_write(cfg, path)
        self._service.reload()

    # --- Internal helpers ---------------------------------------------------

    @staticmethod
    def _atomic_write(cfg: configparser.ConfigParser, path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp = path.with_suffix(path.suffix + ".tmp")
        with tmp.open("w", encoding="utf-8") as f:
            cfg.write(f)
        tmp.replace(path)
