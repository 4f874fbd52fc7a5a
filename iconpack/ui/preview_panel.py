"""Виджет предпросмотра выбранного PNG: вписывание в доступную область.

Принципы:
- SRP: отвечает только за отображение картинки, без логики конвертации.
- Чистый код: чёткое разделение публичного API и внутренних обработчиков событий.
"""
from __future__ import annotations

from typing import Optional

import customtkinter as ctk
import tkinter as tk
from PIL import Image, ImageTk


class PreviewPanel(ctk.CTkFrame):
    """Канва с изображением, вписанным по центру (не больше 100%)."""
    def __init__(self, master: ctk.CTk | tk.Misc, **kwargs) -> None:
        super().__init__(master, **kwargs)
        self.grid_rowconfigure(0, weight=1)
        self.grid_columnconfigure(0, weight=1)

        self._canvas = tk.Canvas(self, highlightthickness=0, bg=self._get_canvas_bg())
        self._canvas.grid(row=0, column=0, sticky="nsew")

        self._image: Optional[Image.Image] = None
        self._tk_image: Optional[ImageTk.PhotoImage] = None
        self._placeholder = "Выберите PNG-файл (минимум 16x16)"

        self._canvas.bind("<Configure>", self._on_canvas_resize)

    # ---- Public API ----
    def set_image(self, image: Image.Image) -> None:
        """Устанавливает изображение и перерисовывает его по размеру канвы."""
        self._image = image
        self._render()

    def clear(self, placeholder: Optional[str] = None) -> None:
        """Убирает изображение (например, при неверном типе файла)."""
        self._image = None
        self._tk_image = None
        if placeholder is not None:
            self._placeholder = placeholder
        self._render()

    # ---- Internals ----
    def _on_canvas_resize(self, _event: tk.Event) -> None:
        self._render()

    def _render(self) -> None:
        self._canvas.delete("all")
        canvas_w = max(1, int(self._canvas.winfo_width()))
        canvas_h = max(1, int(self._canvas.winfo_height()))

        if self._image is None:
            self._canvas.create_text(
                canvas_w // 2, canvas_h // 2, text=self._placeholder, fill=self._get_text_color()
            )
            return

        img_w, img_h = self._image.size
        scale = min(1.0, canvas_w / img_w, canvas_h / img_h)
        scaled_w = max(1, int(img_w * scale))
        scaled_h = max(1, int(img_h * scale))
        resized = self._image.resize((scaled_w, scaled_h), Image.Resampling.LANCZOS)

        self._tk_image = ImageTk.PhotoImage(resized)
        x = (canvas_w - scaled_w) // 2
        y = (canvas_h - scaled_h) // 2
        self._canvas.create_image(x, y, image=self._tk_image, anchor="nw")

    def _get_canvas_bg(self) -> str:
        # CTk does not expose canvas theme, so pick neutral
        return "#1f1f1f" if ctk.get_appearance_mode().lower() == "dark" else "#f2f2f2"

    def _get_text_color(self) -> str:
        return "#9ca3af" if ctk.get_appearance_mode().lower() == "dark" else "#4b5563"
