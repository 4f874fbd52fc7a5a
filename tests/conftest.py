import pytest

from iconpack.controllers.pipeline_controller import PipelineController
from iconpack.services.image_service import ImageService
from tests.helpers import StaticDescriptor, make_png


@pytest.fixture
def image_service():
    return ImageService()


@pytest.fixture
def source_512(image_service):
    return image_service.decode(make_png(512, 512))


@pytest.fixture
def pipeline():
    return PipelineController(descriptor_source=StaticDescriptor())
