"""Сборка многоразмерного ICO из PNG-версий изображения.

Формат (little-endian):
- заголовок 6 байт: reserved=0, type=1 (иконка), count;
- каталог: по 16 байт на каждую версию, в порядке убывания размера;
- данные: PNG-версии подряд, в том же порядке, что и каталог.

Размер 256 в однобайтовых полях ширины/высоты записывается как 0.
"""
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, List, Optional, Sequence, Tuple

from iconpack.config import ICON_SIZES, MAX_ICON_SIZE, MIN_ICON_SIZE
from iconpack.models.errors import DecodeError, ImageTooSmall, InvalidDimension, NoEligibleSizes
from iconpack.models.image_model import (
    ICON_DIR_ENTRY,
    ICON_HEADER,
    IconDirectoryEntry,
    RasterVariant,
    SourceImage,
)
from iconpack.services.raster_service import RasterService

logger = logging.getLogger(__name__)

ICON_RESERVED = 0
ICON_TYPE = 1


class IconService:
    def __init__(self, raster_service: Optional[RasterService] = None, max_workers: int = 4) -> None:
        self._raster_service = raster_service or RasterService()
        self._max_workers = max(1, max_workers)

    def select_sizes(self, width: int, height: int, candidates: Iterable[int] = ICON_SIZES) -> Tuple[int, ...]:
        """Размеры из `candidates`, не превышающие ни ширину, ни высоту исходника.

        Raises:
            ImageTooSmall: если ширина или высота меньше 16 (проверяется до отбора).
            NoEligibleSizes: если ни один кандидат не подошёл.
        """
        if width < MIN_ICON_SIZE or height < MIN_ICON_SIZE:
            raise ImageTooSmall(width, height)
        sizes = tuple(s for s in candidates if s <= width and s <= height)
        if not sizes:
            raise NoEligibleSizes("Could not determine appropriate icon sizes for the given image.")
        return sizes

    def render_variants(self, source: SourceImage, sizes: Sequence[int]) -> List[RasterVariant]:
        """Ресэмплинг и PNG-кодирование для каждого размера (параллельно).

        Порядок результата совпадает с порядком `sizes`; первая ошибка пробрасывается.
        """
        if len(sizes) <= 1 or self._max_workers == 1:
            return [self._raster_service.render_variant(source, size) for size in sizes]
        with ThreadPoolExecutor(max_workers=min(self._max_workers, len(sizes))) as pool:
            futures = [pool.submit(self._raster_service.render_variant, source, size) for size in sizes]
            try:
                return [f.result() for f in futures]
            finally:
                for f in futures:
                    f.cancel()

    def encode_container(self, variants: Sequence[RasterVariant]) -> bytes:
        """Собирает заголовок, каталог и данные в один буфер.

        Длина результата: 6 + 16 * count + сумма длин PNG.
        """
        if not variants:
            raise NoEligibleSizes("Could not determine appropriate icon sizes for the given image.")

        count = len(variants)
        offset = ICON_HEADER.size + ICON_DIR_ENTRY.size * count
        entries: List[IconDirectoryEntry] = []
        for variant in variants:
            if not (1 <= variant.size <= MAX_ICON_SIZE):
                raise InvalidDimension(f"Icon size out of range: {variant.size}")
            entries.append(IconDirectoryEntry(size=variant.size, data_size=variant.data_size, data_offset=offset))
            offset += variant.data_size

        parts = [ICON_HEADER.pack(ICON_RESERVED, ICON_TYPE, count)]
        parts.extend(entry.pack() for entry in entries)
        parts.extend(variant.encoded for variant in variants)
        data = b"".join(parts)
        logger.debug("Encoded icon container: %d entries, %d bytes", count, len(data))
        return data

    def create_icon(self, source: SourceImage) -> bytes:
        sizes = self.select_sizes(source.width, source.height)
        variants = self.render_variants(source, sizes)
        return self.encode_container(variants)

    def read_directory(self, data: bytes) -> List[IconDirectoryEntry]:
        """Разбирает каталог готового ICO; проверяет, что данные не выходят за файл."""
        if len(data) < ICON_HEADER.size:
            raise DecodeError("Icon container is truncated.")
        reserved, icon_type, count = ICON_HEADER.unpack_from(data, 0)
        if reserved != ICON_RESERVED or icon_type != ICON_TYPE:
            raise DecodeError("Not an icon container.")

        dir_end = ICON_HEADER.size + ICON_DIR_ENTRY.size * count
        if len(data) < dir_end:
            raise DecodeError("Icon directory is truncated.")

        entries = []
        for index in range(count):
            start = ICON_HEADER.size + ICON_DIR_ENTRY.size * index
            entry = IconDirectoryEntry.unpack(data[start:start + ICON_DIR_ENTRY.size])
            if entry.data_offset < dir_end or entry.data_offset + entry.data_size > len(data):
                raise DecodeError(f"Icon entry {index} points outside the file.")
            entries.append(entry)
        return entries

    def entry_payload(self, data: bytes, entry: IconDirectoryEntry) -> bytes:
        return data[entry.data_offset:entry.data_offset + entry.data_size]
