"""Константы политики и настройки запуска конвейера.

Принципы:
- Размеры и имена файлов — политика, а не конфигурация: менять их не нужно.
- Настраивается только «как» выполнять (потоки, источник manifest.json).
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

# Кандидаты для favicon.ico, строго по убыванию
ICON_SIZES: tuple[int, ...] = (256, 128, 64, 48, 32, 16)
MIN_ICON_SIZE = 16
MAX_ICON_SIZE = 256

# Отдельные PNG для веб-приложения
STANDALONE_SIZES: tuple[int, int] = (192, 512)

ICON_FILENAME = "favicon.ico"
PNG192_FILENAME = "192.png"
PNG512_FILENAME = "512.png"
MANIFEST_FILENAME = "manifest.json"
ARCHIVE_FILENAMES: tuple[str, ...] = (ICON_FILENAME, PNG192_FILENAME, PNG512_FILENAME, MANIFEST_FILENAME)
ARCHIVE_NAME = "icons.zip"

ACCEPTED_MIME_TYPE = "image/png"
PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"

RESOURCES_DIR = Path(__file__).resolve().parent / "resources"
MANIFEST_PATH = RESOURCES_DIR / MANIFEST_FILENAME


@dataclass(frozen=True)
class PipelineSettings:
    """Параметры выполнения конвейера.

    Fields:
        max_workers: Размер пула потоков для параллельных шагов.
        descriptor_url: URL manifest.json; если не задан — берётся встроенный файл.
        descriptor_timeout: Таймаут загрузки manifest.json, секунды.
    """
    max_workers: int = 4
    descriptor_url: Optional[str] = None
    descriptor_timeout: float = 10.0

    @classmethod
    def from_env(cls) -> "PipelineSettings":
        """Читает настройки из переменных окружения `ICONPACK_*`."""
        defaults = cls()
        max_workers = os.environ.get("ICONPACK_MAX_WORKERS")
        timeout = os.environ.get("ICONPACK_DESCRIPTOR_TIMEOUT")
        return cls(
            max_workers=max(1, int(max_workers)) if max_workers else defaults.max_workers,
            descriptor_url=os.environ.get("ICONPACK_DESCRIPTOR_URL") or None,
            descriptor_timeout=float(timeout) if timeout else defaults.descriptor_timeout,
        )
