import pytest

from iconpack.models.errors import EncodeError, InvalidDimension
from iconpack.services.raster_service import RasterService
from tests.helpers import make_png, png_size


def test_resample_always_square(image_service):
    """Пропорции исходника отбрасываются: результат всегда квадратный."""
    source = image_service.decode(make_png(300, 40))
    resized = RasterService().resample(source, 32)
    assert resized.size == (32, 32)
    assert resized.mode == "RGBA"


def test_resample_upscales_without_error(image_service):
    source = image_service.decode(make_png(16, 16))
    assert RasterService().resample(source, 512).size == (512, 512)


@pytest.mark.parametrize("size", [0, -16, 1.5, True])
def test_resample_rejects_invalid_size(image_service, size):
    source = image_service.decode(make_png(16, 16))
    with pytest.raises(InvalidDimension):
        RasterService().resample(source, size)


def test_render_variant_produces_png_of_claimed_size(source_512):
    variant = RasterService().render_variant(source_512, 192)
    assert variant.size == 192
    assert png_size(variant.encoded) == (192, 192)
    assert variant.data_size == len(variant.encoded)


def test_encode_png_is_deterministic(source_512):
    service = RasterService()
    assert service.render_variant(source_512, 64).encoded == service.render_variant(source_512, 64).encoded


def test_encode_failure_is_reported(source_512):
    class BrokenImage:
        def save(self, fp, format=None, **params):
            raise OSError("encoder not available")

    with pytest.raises(EncodeError, match="48x48"):
        RasterService().encode_png(BrokenImage(), 48)
