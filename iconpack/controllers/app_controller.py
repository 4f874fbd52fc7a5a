"""Контроллер приложения: оркестрация UI и конвейера.

SOLID:
- SRP: класс управляет связями между UI и конвейером (без логики обработки изображений).
- DIP: зависит от `PipelineController` как от роли; конкретные сервисы инкапсулированы в нём.
Clean Code:
- Обработчики компактны; конвертация идёт в фоновом потоке, UI обновляется через `after`.
"""
from __future__ import annotations

import logging
import mimetypes
import threading
from dataclasses import dataclass, field
from pathlib import Path
from tkinter import filedialog, TclError
from typing import Optional

import customtkinter as ctk

from iconpack.config import ARCHIVE_NAME
from iconpack.controllers.pipeline_controller import PipelineController
from iconpack.models.errors import IconPipelineError
from iconpack.models.image_model import SourceImage
from iconpack.models.pipeline_model import PipelineRun, PipelineState
from iconpack.ui.preview_panel import PreviewPanel
from iconpack.ui.sidebar import Sidebar
from iconpack.ui.status_bar import StatusBar

logger = logging.getLogger(__name__)


@dataclass
class AppController:
    """Связывает элементы UI с прикладной логикой.

    Ответственности:
    - Инициализация и бинд событий (UI -> контроллер).
    - Выбор файла, предпросмотр и запуск конвертации через `PipelineController`.
    - Сохранение готового архива.
    """
    preview: PreviewPanel
    sidebar: Sidebar
    status: StatusBar
    window: ctk.CTk
    pipeline: PipelineController = field(default_factory=PipelineController)

    _current_image: Optional[SourceImage] = None
    _last_run: Optional[PipelineRun] = None
    _busy: bool = False

    def bind_events(self) -> None:
        """Регистрирует обработчики событий между UI-компонентами."""
        self.sidebar.on_open_file = self._handle_open_file
        self.sidebar.on_save_archive = self._handle_save_archive

    # ---- Handlers ----
    def _handle_open_file(self) -> None:
        if self._busy:
            return
        try:
            file_path = filedialog.askopenfilename(
                title="Выберите PNG-изображение",
                filetypes=(("PNG", "*.png"), ("All files", "*.*")),
            )
        except TclError:
            # Silent fail if dialog cannot open
            return

        if not file_path:
            return

        self._reset()
        path = Path(file_path)
        declared_type, _encoding = mimetypes.guess_type(path.name)
        try:
            data = path.read_bytes()
            image = self.pipeline.image_service.load_bytes(data, declared_type=declared_type, path=path)
        except IconPipelineError as exc:
            self._show_failure(exc.message)
            return
        except OSError as exc:
            logger.error("Failed to read %s: %s", path, exc)
            self._show_failure(f"Не удалось прочитать файл: {exc}")
            return

        self._current_image = image
        self.preview.set_image(image.pil_image)
        self.sidebar.set_image_info(image)
        # конвертируем те же байты, что показаны в предпросмотре
        self._start_conversion(data, declared_type, path)

    def _handle_save_archive(self) -> None:
        run = self._last_run
        if run is None or not run.succeeded or run.archive is None:
            return
        try:
            target = filedialog.asksaveasfilename(
                title="Сохранить архив",
                initialfile=ARCHIVE_NAME,
                defaultextension=".zip",
                filetypes=(("ZIP", "*.zip"),),
            )
        except TclError:
            return
        if not target:
            return
        try:
            Path(target).write_bytes(run.archive)
        except OSError as exc:
            logger.error("Failed to save archive to %s: %s", target, exc)
            self.sidebar.set_error(f"Не удалось сохранить архив: {exc}")
            return
        logger.info("Archive saved to %s", target)

    # ---- Helpers ----
    def _start_conversion(self, data: bytes, declared_type: Optional[str], path: Path) -> None:
        self._busy = True
        self.sidebar.set_busy(True)
        self.status.set_state(PipelineState.RUNNING)
        worker = threading.Thread(target=self._convert_worker, args=(data, declared_type, path), daemon=True)
        worker.start()

    def _convert_worker(self, data: bytes, declared_type: Optional[str], path: Path) -> None:
        try:
            run = self.pipeline.run(data, declared_type=declared_type, path=path)
        except Exception as exc:
            # UI must always leave the busy state
            logger.exception("Conversion of %s crashed", path)
            self.window.after(0, self._show_failure, f"An unknown error occurred during conversion: {exc}")
            return
        self.window.after(0, self._finish_conversion, run)

    def _finish_conversion(self, run: PipelineRun) -> None:
        self._busy = False
        self._last_run = run
        self.sidebar.set_busy(False)
        if run.succeeded:
            self.sidebar.set_icon_sizes(run.icon_sizes)
            self.sidebar.set_archive_ready(True)
            self.status.set_state(PipelineState.SUCCEEDED)
        else:
            self._show_failure(run.message or "An unknown error occurred during conversion.")

    def _show_failure(self, message: str) -> None:
        self._busy = False
        self.sidebar.set_busy(False)
        if self._current_image is None:
            # no preview for an invalid file
            self.preview.clear()
        self.sidebar.set_error(message)
        self.status.set_state(PipelineState.FAILED, message)

    def _reset(self) -> None:
        self._current_image = None
        self._last_run = None
        self.sidebar.set_image_info(None)
        self.sidebar.set_icon_sizes(())
        self.sidebar.set_error(None)
        self.sidebar.set_archive_ready(False)
        self.status.set_state(PipelineState.IDLE)
