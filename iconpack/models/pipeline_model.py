"""Состояние одного запуска конвейера."""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple

from iconpack.models.errors import IconPipelineError
from iconpack.models.image_model import ArtifactBundle


class PipelineState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


@dataclass
class PipelineRun:
    """Результат запуска. Новый запуск — новый экземпляр, продолжения нет.

    `archive` и `bundle` заполняются только в состоянии SUCCEEDED.
    """
    state: PipelineState = PipelineState.IDLE
    archive: Optional[bytes] = None
    bundle: Optional[ArtifactBundle] = None
    icon_sizes: Tuple[int, ...] = field(default_factory=tuple)
    error: Optional[IconPipelineError] = None

    @property
    def succeeded(self) -> bool:
        return self.state is PipelineState.SUCCEEDED

    @property
    def finished(self) -> bool:
        return self.state in (PipelineState.SUCCEEDED, PipelineState.FAILED)

    @property
    def category(self) -> Optional[str]:
        return self.error.category if self.error is not None else None

    @property
    def message(self) -> Optional[str]:
        return self.error.message if self.error is not None else None
