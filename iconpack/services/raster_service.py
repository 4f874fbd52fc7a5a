from __future__ import annotations

import io
import logging

from PIL import Image

from iconpack.models.errors import EncodeError, InvalidDimension
from iconpack.models.image_model import RasterVariant, SourceImage

logger = logging.getLogger(__name__)


class RasterService:
    # Всегда качественная интерполяция, без «быстрого» пути для больших исходников
    resample_filter = Image.Resampling.LANCZOS

    def resample(self, source: SourceImage, target_size: int) -> Image.Image:
        """
        Квадратное RGBA-изображение target_size x target_size.
        Пропорции исходника не сохраняются; увеличение допустимо.
        """
        if isinstance(target_size, bool) or not isinstance(target_size, int) or target_size <= 0:
            raise InvalidDimension(f"Invalid target size: {target_size!r}")
        return source.pil_image.resize((target_size, target_size), self.resample_filter)

    def encode_png(self, image: Image.Image, size: int) -> bytes:
        """
        PNG-кодирование в память. Без текстовых чанков и дат, поэтому
        результат одинаков от запуска к запуску.
        """
        buffer = io.BytesIO()
        try:
            image.save(buffer, format="PNG", optimize=False)
        except (OSError, ValueError) as exc:
            raise EncodeError(f"Failed to create PNG for size {size}x{size}") from exc
        data = buffer.getvalue()
        if not data:
            raise EncodeError(f"Failed to create PNG for size {size}x{size}")
        return data

    def render_variant(self, source: SourceImage, size: int) -> RasterVariant:
        resized = self.resample(source, size)
        encoded = self.encode_png(resized, size)
        logger.debug("Rendered %dx%d PNG (%d bytes)", size, size, len(encoded))
        return RasterVariant(size=size, encoded=encoded)
