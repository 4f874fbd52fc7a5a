"""Ошибки конвейера генерации иконок.

Каждая ошибка несёт категорию (`category`) и понятное пользователю сообщение.
Любая из них завершает текущий запуск; повторов нет.
"""
from __future__ import annotations


class IconPipelineError(Exception):
    """Базовая ошибка конвейера."""
    category = "PipelineError"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class DecodeError(IconPipelineError, ValueError):
    """Байты не удалось декодировать как растровое изображение."""
    category = "DecodeError"


class InvalidFileType(IconPipelineError):
    """Тип входного файла не PNG."""
    category = "InvalidFileType"


class ImageTooSmall(IconPipelineError):
    """Изображение меньше 16 пикселей по ширине или высоте."""
    category = "ImageTooSmall"

    def __init__(self, width: int, height: int) -> None:
        super().__init__("Image too small. Please use an image that is at least 16x16 pixels.")
        self.width = width
        self.height = height


class NoEligibleSizes(IconPipelineError):
    category = "NoEligibleSizes"


class InvalidDimension(IconPipelineError, ValueError):
    category = "InvalidDimension"


class EncodeError(IconPipelineError):
    category = "EncodeError"


class DescriptorFetchError(IconPipelineError):
    category = "DescriptorFetchError"


class PackagingError(IconPipelineError):
    category = "PackagingError"
