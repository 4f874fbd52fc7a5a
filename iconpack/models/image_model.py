"""Модели данных для изображений и артефактов.

Принципы:
- SRP: только структура данных, без логики обработки.
- Чистый код: неизменяемость (`frozen=True`) для предсказуемости.
"""
from __future__ import annotations

import struct
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Iterator, Mapping, Optional, Tuple

import numpy as np
from PIL import Image

# reserved, type, count
ICON_HEADER = struct.Struct("<HHH")
# width, height, palette, reserved, planes, bpp, size, offset
ICON_DIR_ENTRY = struct.Struct("<BBBBHHII")


@dataclass(frozen=True)
class SourceImage:
    """Неизменяемая модель декодированного изображения и его метаданные.

    Fields:
        pil_image: Загруженное изображение PIL (всегда RGBA).
        width: Ширина, px.
        height: Высота, px.
        mode: Режим PIL исходного файла, например "P" или "RGBA".
        size_bytes: Размер исходных данных, если известен.
        path: Путь к исходному файлу, если изображение пришло с диска.
    """
    pil_image: Image.Image
    width: int
    height: int
    mode: str
    size_bytes: Optional[int] = None
    path: Optional[Path] = None

    @property
    def pixels(self) -> np.ndarray:
        """Сетка пикселей `(height, width, 4)` uint8, только для чтения."""
        arr = np.asarray(self.pil_image, dtype=np.uint8)
        arr.flags.writeable = False
        return arr

    def pixel(self, x: int, y: int) -> Tuple[int, int, int, int]:
        """Возвращает RGBA пикселя (x, y)."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"Пиксель ({x}, {y}) вне изображения {self.width}x{self.height}")
        r, g, b, a = self.pil_image.getpixel((x, y))
        return r, g, b, a


@dataclass(frozen=True)
class RasterVariant:
    """Одна квадратная версия изображения, уже закодированная в PNG."""
    size: int
    encoded: bytes

    @property
    def data_size(self) -> int:
        return len(self.encoded)


@dataclass(frozen=True)
class IconDirectoryEntry:
    """Строка каталога ICO (16 байт).

    `size` хранится как есть (1..256); в байтовом поле 256 записывается как 0.
    """
    size: int
    data_size: int
    data_offset: int
    color_count: int = 0
    reserved: int = 0
    color_planes: int = 0
    bits_per_pixel: int = 0

    @property
    def width_byte(self) -> int:
        return 0 if self.size == 256 else self.size

    @property
    def height_byte(self) -> int:
        return self.width_byte

    def pack(self) -> bytes:
        return ICON_DIR_ENTRY.pack(
            self.width_byte,
            self.height_byte,
            self.color_count,
            self.reserved,
            self.color_planes,
            self.bits_per_pixel,
            self.data_size,
            self.data_offset,
        )

    @classmethod
    def unpack(cls, raw: bytes) -> "IconDirectoryEntry":
        width, _height, colors, reserved, planes, bpp, data_size, offset = ICON_DIR_ENTRY.unpack(raw)
        return cls(
            size=width or 256,
            data_size=data_size,
            data_offset=offset,
            color_count=colors,
            reserved=reserved,
            color_planes=planes,
            bits_per_pixel=bpp,
        )


@dataclass(frozen=True)
class ArtifactBundle(Mapping[str, bytes]):
    """Имя файла -> содержимое; порядок ключей фиксирован при создании."""
    files: Mapping[str, bytes] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "files", MappingProxyType(dict(self.files)))

    def __getitem__(self, name: str) -> bytes:
        return self.files[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self.files)

    def __len__(self) -> int:
        return len(self.files)
