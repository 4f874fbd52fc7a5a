"""Получение статического manifest.json.

Содержимое не генерируется: файл берётся как есть из ресурсов пакета
или по URL, если он задан в настройках.
"""
from __future__ import annotations

import logging
import urllib.error
import urllib.request
from pathlib import Path
from typing import Optional, Protocol

from iconpack.config import MANIFEST_FILENAME, MANIFEST_PATH, PipelineSettings
from iconpack.models.errors import DescriptorFetchError

logger = logging.getLogger(__name__)


class DescriptorSource(Protocol):
    def fetch(self) -> bytes: ...


class PackagedDescriptorSource:
    """manifest.json, поставляемый вместе с пакетом."""
    def __init__(self, path: Optional[Path] = None) -> None:
        self.path = Path(path) if path is not None else MANIFEST_PATH

    def fetch(self) -> bytes:
        try:
            data = self.path.read_bytes()
        except OSError as exc:
            raise DescriptorFetchError(f"Failed to fetch {MANIFEST_FILENAME}: {exc.strerror or exc}") from exc
        logger.debug("Read %s (%d bytes)", self.path, len(data))
        return data


class UrlDescriptorSource:
    """manifest.json по HTTP(S). Любой статус вне 2xx — ошибка."""
    def __init__(self, url: str, timeout: float = 10.0) -> None:
        self.url = url
        self.timeout = timeout

    def fetch(self) -> bytes:
        request = urllib.request.Request(self.url, headers={"Accept": "application/json"})
        try:
            with urllib.request.urlopen(request, timeout=self.timeout) as response:
                status = getattr(response, "status", 200)
                if not 200 <= status < 300:
                    raise DescriptorFetchError(
                        f"Failed to fetch {MANIFEST_FILENAME}: {status} {getattr(response, 'reason', '')}".rstrip()
                    )
                data = response.read()
        except urllib.error.HTTPError as exc:
            raise DescriptorFetchError(f"Failed to fetch {MANIFEST_FILENAME}: {exc.code} {exc.reason}") from exc
        except (urllib.error.URLError, OSError) as exc:
            reason = getattr(exc, "reason", exc)
            raise DescriptorFetchError(f"Failed to fetch {MANIFEST_FILENAME}: {reason}") from exc
        logger.debug("Fetched %s (%d bytes)", self.url, len(data))
        return data


def descriptor_source_for(settings: PipelineSettings) -> DescriptorSource:
    if settings.descriptor_url:
        return UrlDescriptorSource(settings.descriptor_url, timeout=settings.descriptor_timeout)
    return PackagedDescriptorSource()
