"""Загрузка изображений (с диска или из памяти) и упаковка метаданных.

Принципы:
- SRP: класс отвечает только за проверку типа, декодирование и базовые свойства.
- OCP: новые источники (стрим, URL) можно добавить отдельными методами.
- LSP/ISP: возвращает `SourceImage` с предсказуемыми полями; интерфейс узкий и конкретный.
"""
from __future__ import annotations

import io
import logging
import mimetypes
from pathlib import Path
from typing import Optional

from PIL import Image, UnidentifiedImageError

from iconpack.config import ACCEPTED_MIME_TYPE, PNG_SIGNATURE
from iconpack.models.errors import DecodeError, InvalidFileType
from iconpack.models.image_model import SourceImage

logger = logging.getLogger(__name__)


class ImageService:
    def validate_type(self, data: bytes, declared_type: Optional[str] = None) -> None:
        """Пропускает только PNG: по заявленному MIME-типу и по сигнатуре файла.

        Raises:
            InvalidFileType: если тип не `image/png` или сигнатура не PNG.
        """
        if declared_type is not None and declared_type.lower() != ACCEPTED_MIME_TYPE:
            raise InvalidFileType("Invalid file type. Please upload a PNG file.")
        if not data.startswith(PNG_SIGNATURE):
            raise InvalidFileType("Invalid file type. Please upload a PNG file.")

    def decode(self, data: bytes, path: Optional[Path] = None) -> SourceImage:
        """Декодирует байты изображения и возвращает его вместе с метаданными.

        Args:
            data: Содержимое файла изображения.
            path: Путь к файлу, если он известен (для отображения).

        Returns:
            `SourceImage` c `PIL.Image.Image` (в режиме RGBA), размерами, режимом и размером данных.

        Raises:
            DecodeError: если данные не распознаны как изображение или повреждены.
        """
        if not data:
            raise DecodeError("Failed to load image. The file is empty.")

        try:
            with Image.open(io.BytesIO(data)) as opened:
                opened.load()
                mode = opened.mode
                pil_image = opened.convert("RGBA")
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError, SyntaxError, ValueError) as exc:
            raise DecodeError("Failed to load image. The file might be corrupted.") from exc

        width, height = pil_image.size
        logger.debug("Decoded image %dx%d (mode %s, %d bytes)", width, height, mode, len(data))
        return SourceImage(
            pil_image=pil_image,
            width=width,
            height=height,
            mode=mode,
            size_bytes=len(data),
            path=path,
        )

    def load_bytes(
        self, data: bytes, declared_type: Optional[str] = None, path: Optional[Path] = None
    ) -> SourceImage:
        """Проверяет тип и декодирует изображение из памяти."""
        self.validate_type(data, declared_type)
        return self.decode(data, path=path)

    def load_image(self, file_path: str | Path) -> SourceImage:
        """Загружает PNG с диска.

        Raises:
            FileNotFoundError: если путь не существует или не указывает на файл.
            InvalidFileType: если файл не PNG.
            DecodeError: если файл не удалось декодировать.
        """
        path = Path(file_path)
        if not path.exists() or not path.is_file():
            raise FileNotFoundError(f"Файл не найден: {path}")

        declared_type, _encoding = mimetypes.guess_type(path.name)
        return self.load_bytes(path.read_bytes(), declared_type=declared_type, path=path)
