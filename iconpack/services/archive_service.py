"""Упаковка артефактов в ZIP.

Принципы:
- SRP: собрать набор файлов с фиксированными именами и сериализовать его.
- Одинаковый набор файлов всегда даёт побайтно одинаковый архив.
"""
from __future__ import annotations

import io
import logging
import zipfile

from iconpack.config import ICON_FILENAME, MANIFEST_FILENAME, PNG192_FILENAME, PNG512_FILENAME
from iconpack.models.errors import PackagingError
from iconpack.models.image_model import ArtifactBundle

logger = logging.getLogger(__name__)

# минимальная дата, которую допускает ZIP
ZIP_EPOCH = (1980, 1, 1, 0, 0, 0)
ZIP_FILE_MODE = 0o644 << 16


class ArchiveService:
    def package(self, icon: bytes, png192: bytes, png512: bytes, descriptor: bytes) -> ArtifactBundle:
        """Собирает `ArtifactBundle` с фиксированными именами файлов.

        Raises:
            PackagingError: если пуста иконка или одна из PNG.
        """
        images = {ICON_FILENAME: icon, PNG192_FILENAME: png192, PNG512_FILENAME: png512}
        for name, data in images.items():
            if not data:
                raise PackagingError(f"Nothing to package for {name}.")
        if descriptor is None:
            raise PackagingError(f"Nothing to package for {MANIFEST_FILENAME}.")
        # manifest.json кладётся как есть, даже пустой
        return ArtifactBundle({**images, MANIFEST_FILENAME: bytes(descriptor)})

    def write_archive(self, bundle: ArtifactBundle) -> bytes:
        """Сериализует набор в ZIP (deflate) в памяти."""
        buffer = io.BytesIO()
        try:
            with zipfile.ZipFile(buffer, "w", zipfile.ZIP_DEFLATED) as archive:
                for name, data in bundle.items():
                    info = zipfile.ZipInfo(name, date_time=ZIP_EPOCH)
                    info.compress_type = zipfile.ZIP_DEFLATED
                    info.external_attr = ZIP_FILE_MODE
                    archive.writestr(info, data)
        except (zipfile.BadZipFile, zipfile.LargeZipFile, OSError, ValueError) as exc:
            raise PackagingError(f"Failed to create archive: {exc}") from exc
        data = buffer.getvalue()
        logger.debug("Wrote archive with %d entries (%d bytes)", len(bundle), len(data))
        return data
