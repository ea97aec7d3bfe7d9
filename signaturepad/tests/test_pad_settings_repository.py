"""
signaturepad/tests/test_pad_settings_repository.py

[SignaturePad] settings: defaults, layering, atomic save.
"""

from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from core.config.config_service import ConfigService
from signaturepad.logic.pad_settings_repository import PadSettingsRepository
from signaturepad.models.pad_config import SignaturePadConfig
from signaturepad.models.signature_enums import PenCap


class TestPadSettingsRepository(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)
        self.env: dict = {}

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _repo(self) -> PadSettingsRepository:
        svc = ConfigService(
            defaults_ini=self.root / "defaults.ini",
            machine_ini=self.root / "config.ini",
            user_ini=self.root / "user.ini",
            environ=self.env,
        )
        return PadSettingsRepository(svc)

    def test_defaults(self) -> None:
        self.assertEqual(self._repo().load(), SignaturePadConfig())

    def test_environment_overrides_defaults(self) -> None:
        self.env["SIGPAD_SIGNATUREPAD__PEN_WIDTH"] = "5"
        self.env["SIGPAD_SIGNATUREPAD__COMPRESS"] = "no"
        cfg = self._repo().load()
        self.assertEqual(cfg.pen_width, 5)
        self.assertFalse(cfg.compress)

    def test_save_round_trip(self) -> None:
        repo = self._repo()
        cfg = SignaturePadConfig(pen_width=4, pen_colour="#000", pen_cap=PenCap.BUTT,
                                 surface_width=400, leave_grace_ms=250, display_only=True)
        repo.save(cfg)
        self.assertEqual(repo.load(), cfg)
        self.assertTrue((self.root / "config.ini").exists())
        self.assertFalse((self.root / "config.ini.tmp").exists())
        # a fresh service sees the machine file too
        self.assertEqual(self._repo().load(), cfg)

    def test_machine_file_beats_environment(self) -> None:
        self._repo().save(SignaturePadConfig(pen_width=7))
        self.env["SIGPAD_SIGNATUREPAD__PEN_WIDTH"] = "3"
        self.assertEqual(self._repo().load().pen_width, 7)

    def test_unknown_pen_cap_falls_back(self) -> None:
        (self.root / "user.ini").write_text("[SignaturePad]\npen_cap = wobbly\n", encoding="utf-8")
        self.assertEqual(self._repo().load().pen_cap, PenCap.ROUND)

    def test_non_positive_pen_width_falls_back(self) -> None:
        (self.root / "user.ini").write_text("[SignaturePad]\npen_width = 0\n", encoding="utf-8")
        self.assertEqual(self._repo().load().pen_width, SignaturePadConfig().pen_width)

    def test_config_rejects_zero_pen_width(self) -> None:
        with self.assertRaises(ValueError):
            SignaturePadConfig(pen_width=0)


if __name__ == "__main__":
    unittest.main()
