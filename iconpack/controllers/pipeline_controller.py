"""Оркестрация конвейера: PNG -> favicon.ico + 192.png + 512.png + manifest.json -> ZIP.

SOLID:
- SRP: только порядок шагов и переходы состояний; форматы и алгоритмы — в сервисах.
- DIP: сервисы и источник manifest.json передаются снаружи и легко подменяются в тестах.
Состояния: IDLE -> RUNNING -> SUCCEEDED | FAILED. Запуск не возобновляется;
при первой ошибке остальные шаги отменяются, частичные результаты не отдаются.
"""
from __future__ import annotations

import logging
import mimetypes
from concurrent.futures import FIRST_EXCEPTION, Future, ThreadPoolExecutor, wait
from pathlib import Path
from typing import Callable, Dict, Optional, Tuple, Type

from iconpack.config import STANDALONE_SIZES, PipelineSettings
from iconpack.models.errors import (
    DescriptorFetchError,
    EncodeError,
    IconPipelineError,
    PackagingError,
)
from iconpack.models.image_model import ArtifactBundle, SourceImage
from iconpack.models.pipeline_model import PipelineRun, PipelineState
from iconpack.services.archive_service import ArchiveService
from iconpack.services.descriptor_service import DescriptorSource, descriptor_source_for
from iconpack.services.icon_service import IconService
from iconpack.services.image_service import ImageService
from iconpack.services.raster_service import RasterService

logger = logging.getLogger(__name__)

# категория ошибки для неожиданных исключений каждого шага
_STEP_ERRORS: Dict[str, Type[IconPipelineError]] = {
    "icon": EncodeError,
    "png192": EncodeError,
    "png512": EncodeError,
    "descriptor": DescriptorFetchError,
}


class PipelineController:
    def __init__(
        self,
        image_service: Optional[ImageService] = None,
        raster_service: Optional[RasterService] = None,
        icon_service: Optional[IconService] = None,
        archive_service: Optional[ArchiveService] = None,
        descriptor_source: Optional[DescriptorSource] = None,
        settings: Optional[PipelineSettings] = None,
        on_state_change: Optional[Callable[[PipelineState], None]] = None,
    ) -> None:
        self.settings = settings or PipelineSettings()
        self.image_service = image_service or ImageService()
        self.raster_service = raster_service or RasterService()
        self.icon_service = icon_service or IconService(self.raster_service, max_workers=self.settings.max_workers)
        self.archive_service = archive_service or ArchiveService()
        self.descriptor_source = descriptor_source or descriptor_source_for(self.settings)
        self.on_state_change = on_state_change

    def run(self, data: bytes, declared_type: Optional[str] = None, path: Optional[Path] = None) -> PipelineRun:
        """Выполняет один запуск и возвращает его итоговое состояние.

        Ошибки конвейера не пробрасываются: они записываются в `PipelineRun.error`.
        """
        run = PipelineRun()
        try:
            source = self.image_service.load_bytes(data, declared_type=declared_type, path=path)
            # проверка размера до любого ресэмплинга
            run.icon_sizes = self.icon_service.select_sizes(source.width, source.height)
            self._transition(run, PipelineState.RUNNING)
            artifacts = self._produce(source)
            bundle, archive = self._package(artifacts)
        except IconPipelineError as exc:
            logger.warning("Conversion failed (%s): %s", exc.category, exc.message)
            run.error = exc
            self._transition(run, PipelineState.FAILED)
            return run

        run.bundle = bundle
        run.archive = archive
        self._transition(run, PipelineState.SUCCEEDED)
        return run

    def convert_file(self, file_path: str | Path) -> PipelineRun:
        """Запуск для файла на диске; отсутствие файла — `FileNotFoundError`."""
        path = Path(file_path)
        if not path.exists() or not path.is_file():
            raise FileNotFoundError(f"Файл не найден: {path}")
        declared_type, _encoding = mimetypes.guess_type(path.name)
        return self.run(path.read_bytes(), declared_type=declared_type, path=path)

    # ---- Helpers ----
    def _produce(self, source: SourceImage) -> Dict[str, bytes]:
        """Четыре независимых шага параллельно; ждём все, первая ошибка побеждает."""
        png192_size, png512_size = STANDALONE_SIZES
        steps: Dict[str, Callable[[], bytes]] = {
            "icon": lambda: self.icon_service.create_icon(source),
            "png192": lambda: self.raster_service.render_variant(source, png192_size).encoded,
            "png512": lambda: self.raster_service.render_variant(source, png512_size).encoded,
            "descriptor": self.descriptor_source.fetch,
        }
        pool = ThreadPoolExecutor(max_workers=max(1, min(self.settings.max_workers, len(steps))))
        try:
            futures: Dict[Future, str] = {pool.submit(step): name for name, step in steps.items()}
            done, pending = wait(futures, return_when=FIRST_EXCEPTION)
            for future in done:
                if future.exception() is not None:
                    for other in pending:
                        other.cancel()
                    self._raise_step_error(futures[future], future.exception())
            return {name: future.result() for future, name in futures.items()}
        finally:
            pool.shutdown(wait=False, cancel_futures=True)

    def _raise_step_error(self, step: str, exc: BaseException) -> None:
        if isinstance(exc, IconPipelineError):
            raise exc
        error_cls = _STEP_ERRORS[step]
        raise error_cls(f"Step '{step}' failed: {exc}") from exc

    def _package(self, artifacts: Dict[str, bytes]) -> Tuple[ArtifactBundle, bytes]:
        try:
            bundle = self.archive_service.package(
                icon=artifacts["icon"],
                png192=artifacts["png192"],
                png512=artifacts["png512"],
                descriptor=artifacts["descriptor"],
            )
            return bundle, self.archive_service.write_archive(bundle)
        except IconPipelineError:
            raise
        except Exception as exc:
            raise PackagingError(f"Failed to create archive: {exc}") from exc

    def _transition(self, run: PipelineRun, state: PipelineState) -> None:
        logger.info("Pipeline %s -> %s", run.state.value, state.value)
        run.state = state
        if self.on_state_change:
            self.on_state_change(state)
