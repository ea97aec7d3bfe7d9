"""
Signature pad launcher.

    python main.py [owner_id]

Opens the capture dialog for *owner_id* (default "default") and stores the
result in the configured signature database.
"""
import sys
import tkinter as tk

from core.logging.logic.logger import logger
from signaturepad.gui.signature_pad_dialog import SignaturePadDialog
from signaturepad.logic.pad_settings_repository import PadSettingsRepository
from signaturepad.logic.signature_repository import SignatureRepository


def main() -> None:
    owner_id = sys.argv[1] if len(sys.argv) > 1 else "default"

    root = tk.Tk()
    root.withdraw()

    repo = SignatureRepository.from_config(logger=logger)
    dlg = SignaturePadDialog(root, repository=repo, owner_id=owner_id,
                             config=PadSettingsRepository().load())
    root.wait_window(dlg)
    if dlg.result:
        print(dlg.result.encode("unicode_escape").decode("ascii"))
    root.destroy()


if __name__ == "__main__":
    main()
