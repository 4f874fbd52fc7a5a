from types import SimpleNamespace

import pytest

pytest.importorskip("customtkinter")

from iconpack.controllers import app_controller
from iconpack.controllers.app_controller import AppController
from iconpack.controllers.pipeline_controller import PipelineController
from iconpack.models.pipeline_model import PipelineState
from tests.helpers import StaticDescriptor, make_png


class FakePreview:
    def __init__(self):
        self.image = None
        self.cleared = 0

    def set_image(self, image):
        self.image = image

    def clear(self, placeholder=None):
        self.image = None
        self.cleared += 1


class FakeSidebar:
    def __init__(self):
        self.busy = False
        self.archive_ready = False
        self.error = None
        self.sizes = ()
        self.info = None

    def set_image_info(self, image):
        self.info = image

    def set_icon_sizes(self, sizes):
        self.sizes = tuple(sizes)

    def set_error(self, message):
        self.error = message

    def set_busy(self, busy):
        self.busy = busy

    def set_archive_ready(self, ready):
        self.archive_ready = ready


class FakeStatus:
    def __init__(self):
        self.state = PipelineState.IDLE
        self.detail = None

    def set_state(self, state, detail=None):
        self.state = state
        self.detail = detail


class InlineWindow:
    """`after` сразу вызывает колбэк, как если бы главный цикл уже дошёл до него."""
    def after(self, _delay, callback, *args):
        callback(*args)


class InlineThread:
    def __init__(self, target, args=(), daemon=None):
        self._target = target
        self._args = args

    def start(self):
        self._target(*self._args)


class RecordingPipeline(PipelineController):
    def __init__(self):
        super().__init__(descriptor_source=StaticDescriptor())
        self.received = []

    def run(self, data, declared_type=None, path=None):
        self.received.append(data)
        return super().run(data, declared_type=declared_type, path=path)

    def convert_file(self, file_path):
        raise AssertionError("file must not be read a second time")


def _controller(pipeline):
    return AppController(
        preview=FakePreview(), sidebar=FakeSidebar(), status=FakeStatus(), window=InlineWindow(), pipeline=pipeline
    )


@pytest.fixture
def pick_file(monkeypatch):
    def pick(path):
        monkeypatch.setattr(app_controller.filedialog, "askopenfilename", lambda **kwargs: str(path))

    # only the controller sees the inline thread; the pipeline keeps its real pool
    monkeypatch.setattr(app_controller, "threading", SimpleNamespace(Thread=InlineThread))
    return pick


def test_conversion_uses_bytes_already_read(pick_file, tmp_path):
    path = tmp_path / "logo.png"
    data = make_png(64, 64)
    path.write_bytes(data)
    pick_file(path)
    pipeline = RecordingPipeline()
    controller = _controller(pipeline)

    controller._handle_open_file()

    assert pipeline.received == [data]
    assert controller.status.state is PipelineState.SUCCEEDED
    assert controller.sidebar.sizes == (64, 48, 32, 16)
    assert controller.sidebar.archive_ready
    assert not controller._busy


def test_unreadable_file_reports_failure(pick_file, tmp_path):
    # a directory path makes read_bytes raise an OSError
    pick_file(tmp_path)
    controller = _controller(RecordingPipeline())

    controller._handle_open_file()

    assert controller.status.state is PipelineState.FAILED
    assert controller.preview.cleared == 1
    assert not controller._busy and not controller.sidebar.busy


def test_crashing_worker_leaves_busy_state(tmp_path):
    class CrashingPipeline(PipelineController):
        def run(self, data, declared_type=None, path=None):
            raise PermissionError("denied")

    controller = _controller(CrashingPipeline(descriptor_source=StaticDescriptor()))
    controller._busy = True
    controller.sidebar.busy = True

    controller._convert_worker(b"data", "image/png", tmp_path / "logo.png")

    assert not controller._busy
    assert not controller.sidebar.busy
    assert controller.status.state is PipelineState.FAILED
    assert "denied" in controller.sidebar.error
