"""Боковая панель: открытие файла, информация об изображении, результат и сохранение.

Принципы:
- SRP: управляет только UI, не содержит логики конвертации.
- ISP: состояние выставляется через компактные методы `set_*`, события через `on_*`.
"""
from __future__ import annotations

from typing import Callable, Optional, Sequence

import customtkinter as ctk

from iconpack.models.image_model import SourceImage


class Sidebar(ctk.CTkFrame):
    """Панель инструментов с блоками: файл, информация, результат."""
    def __init__(self, master: ctk.CTk, **kwargs) -> None:
        super().__init__(master, width=280, **kwargs)

        self.grid_columnconfigure(0, weight=1)

        # Callbacks
        self.on_open_file: Optional[Callable[[], None]] = None
        self.on_save_archive: Optional[Callable[[], None]] = None

        # Controls
        self._title = ctk.CTkLabel(self, text="PWA Icon Generator", font=ctk.CTkFont(size=16, weight="bold"))
        self._title.grid(row=0, column=0, padx=8, pady=(8, 4), sticky="w")

        self._open_btn = ctk.CTkButton(self, text="Открыть PNG…", command=self._emit_open_file)
        self._open_btn.grid(row=1, column=0, padx=8, pady=(0, 12), sticky="ew")

        # Info section
        self._info_title = ctk.CTkLabel(self, text="Изображение", font=ctk.CTkFont(size=16, weight="bold"))
        self._info_title.grid(row=2, column=0, padx=8, pady=(8, 4), sticky="w")

        self._path_val = ctk.StringVar(value="—")
        self._size_val = ctk.StringVar(value="—")
        self._dims_val = ctk.StringVar(value="—")

        self._info_path = ctk.CTkLabel(self, textvariable=self._path_val, wraplength=250, anchor="w", justify="left")
        self._info_size = ctk.CTkLabel(self, textvariable=self._size_val, anchor="w", justify="left")
        self._info_dims = ctk.CTkLabel(self, textvariable=self._dims_val, anchor="w", justify="left")

        self._info_path.grid(row=3, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._info_size.grid(row=4, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._info_dims.grid(row=5, column=0, padx=8, pady=(0, 10), sticky="ew")

        # Result section
        self._result_title = ctk.CTkLabel(self, text="Результат", font=ctk.CTkFont(size=16, weight="bold"))
        self._result_title.grid(row=6, column=0, padx=8, pady=(8, 4), sticky="w")

        self._sizes_val = ctk.StringVar(value="—")
        self._message_val = ctk.StringVar(value="")
        self._info_sizes = ctk.CTkLabel(self, textvariable=self._sizes_val, wraplength=250, anchor="w", justify="left")
        self._info_message = ctk.CTkLabel(
            self, textvariable=self._message_val, wraplength=250, anchor="w", justify="left", text_color="#ef4444"
        )
        self._info_sizes.grid(row=7, column=0, padx=8, pady=(0, 2), sticky="ew")
        self._info_message.grid(row=8, column=0, padx=8, pady=(0, 8), sticky="ew")

        # filler
        self.grid_rowconfigure(99, weight=1)

        self._save_btn = ctk.CTkButton(self, text="Сохранить ZIP…", command=self._emit_save_archive, state="disabled")
        self._save_btn.grid(row=100, column=0, padx=8, pady=(0, 8), sticky="ew")

    # ---- Public API ----
    def set_image_info(self, image: Optional[SourceImage]) -> None:
        if image is None:
            self._path_val.set("—")
            self._size_val.set("—")
            self._dims_val.set("—")
            return
        self._path_val.set(f"Файл: {image.path.name if image.path else '—'}")
        self._size_val.set(f"Размер: {self._format_size(image.size_bytes)}")
        self._dims_val.set(f"Разрешение: {image.width}×{image.height} ({image.mode})")

    def set_icon_sizes(self, sizes: Sequence[int]) -> None:
        if not sizes:
            self._sizes_val.set("—")
            return
        listed = ", ".join(f"{s}×{s}" for s in sizes)
        self._sizes_val.set(f"favicon.ico: {listed}\n+ 192.png, 512.png, manifest.json")

    def set_error(self, message: Optional[str]) -> None:
        self._message_val.set(message or "")

    def set_busy(self, busy: bool) -> None:
        self._open_btn.configure(state="disabled" if busy else "normal")
        if busy:
            self.set_archive_ready(False)

    def set_archive_ready(self, ready: bool) -> None:
        self._save_btn.configure(state="normal" if ready else "disabled")

    # ---- Events ----
    def _emit_open_file(self) -> None:
        if self.on_open_file:
            self.on_open_file()

    def _emit_save_archive(self) -> None:
        if self.on_save_archive:
            self.on_save_archive()

    # ---- Helpers ----
    def _format_size(self, size_bytes: Optional[int]) -> str:
        if size_bytes is None:
            return "—"
        thresholds = [("Б", 1024), ("КБ", 1024**2), ("МБ", 1024**3), ("ГБ", 1024**4)]
        for label, limit in thresholds:
            if size_bytes < limit:
                if label == "Б":
                    return f"{size_bytes} {label}"
                value = size_bytes / (limit // 1024)
                return f"{value:.1f} {label}"
        value = size_bytes / (1024**4)
        return f"{value:.1f} ГБ"
