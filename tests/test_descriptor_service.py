import json
import urllib.error

import pytest

from iconpack.config import PipelineSettings
from iconpack.models.errors import DescriptorFetchError
from iconpack.services import descriptor_service
from iconpack.services.descriptor_service import (
    PackagedDescriptorSource,
    UrlDescriptorSource,
    descriptor_source_for,
)


class FakeResponse:
    def __init__(self, body, status=200, reason="OK"):
        self._body = body
        self.status = status
        self.reason = reason

    def read(self):
        return self._body

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        return False


def test_packaged_manifest_is_valid_json():
    data = PackagedDescriptorSource().fetch()
    manifest = json.loads(data)
    assert {"src": "192.png", "sizes": "192x192", "type": "image/png"} in manifest["icons"]


def test_packaged_manifest_missing(tmp_path):
    with pytest.raises(DescriptorFetchError):
        PackagedDescriptorSource(tmp_path / "manifest.json").fetch()


def test_url_source_returns_body(monkeypatch):
    monkeypatch.setattr(descriptor_service.urllib.request, "urlopen", lambda req, timeout: FakeResponse(b"{}"))
    assert UrlDescriptorSource("https://example.invalid/manifest.json").fetch() == b"{}"


def test_url_source_non_success_status(monkeypatch):
    monkeypatch.setattr(
        descriptor_service.urllib.request, "urlopen", lambda req, timeout: FakeResponse(b"", 304, "Not Modified")
    )
    with pytest.raises(DescriptorFetchError, match="304"):
        UrlDescriptorSource("https://example.invalid/manifest.json").fetch()


def test_url_source_http_error(monkeypatch):
    def fail(req, timeout):
        raise urllib.error.HTTPError(req.full_url, 404, "Not Found", {}, None)

    monkeypatch.setattr(descriptor_service.urllib.request, "urlopen", fail)
    with pytest.raises(DescriptorFetchError, match="404 Not Found"):
        UrlDescriptorSource("https://example.invalid/manifest.json").fetch()


def test_url_source_network_error(monkeypatch):
    def fail(req, timeout):
        raise urllib.error.URLError("timed out")

    monkeypatch.setattr(descriptor_service.urllib.request, "urlopen", fail)
    with pytest.raises(DescriptorFetchError, match="timed out"):
        UrlDescriptorSource("https://example.invalid/manifest.json").fetch()


def test_source_selection_follows_settings():
    assert isinstance(descriptor_source_for(PipelineSettings()), PackagedDescriptorSource)
    source = descriptor_source_for(PipelineSettings(descriptor_url="https://example.invalid/m.json"))
    assert isinstance(source, UrlDescriptorSource)


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("ICONPACK_MAX_WORKERS", "2")
    monkeypatch.setenv("ICONPACK_DESCRIPTOR_URL", "https://example.invalid/m.json")
    monkeypatch.setenv("ICONPACK_DESCRIPTOR_TIMEOUT", "3.5")
    settings = PipelineSettings.from_env()
    assert settings == PipelineSettings(max_workers=2, descriptor_url="https://example.invalid/m.json", descriptor_timeout=3.5)
