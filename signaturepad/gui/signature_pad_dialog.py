# signaturepad/gui/signature_pad_dialog.py
from __future__ import annotations

import dataclasses
import tkinter as tk
from tkinter import ttk, messagebox
from typing import Optional

from ..exceptions.errors import CodecError
from ..logic.signature_pad import SignaturePad
from ..logic.signature_repository import SignatureRepository
from ..models.pad_config import SignaturePadConfig
from .tk_adapters import TkAfterScheduler, TkCanvasSink, bind_canvas


class SignaturePadDialog(tk.Toplevel):
    """
    Signature capture on a Tk canvas, adjustable pen width, stored as an
    encoded signature per owner via SignatureRepository.

    - An existing signature is regenerated (rescaled to this canvas) on open.
    - Overwriting an existing signature requires confirmation.
    - Nothing is written to the repository before Save.
    """

    def __init__(self, parent: tk.Misc, *, repository: SignatureRepository, owner_id: str,
                 config: Optional[SignaturePadConfig] = None) -> None:
        super().__init__(parent)
        self.title("Create Signature")
        self.transient(parent)
        self.grab_set()
        self.resizable(False, False)

        self._repo = repository
        self._owner_id = owner_id
        self._config = config or SignaturePadConfig()
        self.result: Optional[str] = None

        self.columnconfigure(0, weight=1)

        # Toolbar
        bar = ttk.Frame(self)
        bar.grid(row=0, column=0, sticky="ew", padx=10, pady=(10, 4))
        ttk.Label(bar, text="Pen width").pack(side="left")
        self.pen_var = tk.IntVar(value=self._config.pen_width)
        ttk.Scale(bar, from_=1, to=10, variable=self.pen_var, orient="horizontal", length=160,
                  command=self._on_pen_width).pack(side="left", padx=(6, 12))
        ttk.Button(bar, text="Clear", command=self._clear).pack(side="left")

        # Canvas
        self.canvas = tk.Canvas(
            self, width=self._config.surface_width, height=self._config.surface_height,
            bg=self._config.bg_colour, highlightthickness=1, highlightbackground="#888"
        )
        self.canvas.grid(row=1, column=0, sticky="nsew", padx=10, pady=4)

        self.pad = SignaturePad(
            TkCanvasSink(self.canvas, self._config),
            config=self._config,
            scheduler=TkAfterScheduler(self),
        )
        self.pad.clear()
        bind_canvas(self.canvas, self.pad)

        # Footer
        btns = ttk.Frame(self)
        btns.grid(row=2, column=0, sticky="e", padx=10, pady=(4, 10))
        ttk.Button(btns, text="Cancel", command=self._cancel).pack(side="right", padx=(6, 0))
        ttk.Button(btns, text="Save", command=self._save).pack(side="right")

        self._existing = self._repo.load(self._owner_id)
        if self._existing:
            try:
                self.pad.regenerate(self._existing)
            except CodecError as ex:
                messagebox.showwarning(
                    title="Stored signature",
                    message=f"The stored signature cannot be shown on this canvas:\n{ex}",
                    parent=self,
                )

    # Actions
    def _on_pen_width(self, _value=None) -> None:
        width = max(1, int(float(self.pen_var.get())))
        if width != self.pad.pen_width:
            self.pad.update_options(pen_width=width)
            self._config = dataclasses.replace(self._config, pen_width=width)

    def _clear(self) -> None:
        self.pad.clear()

    def _cancel(self) -> None:
        self.pad.capture.disable()
        self.destroy()

    def _save(self) -> None:
        payload = self.pad.get_encoded()
        if not self.pad.get_signature():
            messagebox.showerror(title="Error", message="Please sign first.", parent=self)
            return

        if self._existing and payload != self._existing:
            if not messagebox.askyesno(
                title="Overwrite signature?",
                message="A signature already exists. Overwrite?",
                parent=self
            ):
                return

        self._repo.save(self._owner_id, payload)
        self.result = payload
        messagebox.showinfo(title="Saved", message="Signature saved.", parent=self)
        self.pad.capture.disable()
        self.destroy()
