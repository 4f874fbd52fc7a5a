import io

import numpy as np
from PIL import Image

from iconpack.models.errors import DescriptorFetchError

MANIFEST_BYTES = b'{"name": "Test App", "icons": []}'


def make_png(width, height, mode="RGBA", opaque=True):
    """PNG в памяти с градиентом, чтобы ресэмплинг был не тривиальным."""
    xs = np.linspace(0, 255, width, dtype=np.float32)
    ys = np.linspace(0, 255, height, dtype=np.float32)
    arr = np.zeros((height, width, 4), dtype=np.uint8)
    arr[..., 0] = xs[np.newaxis, :].astype(np.uint8)
    arr[..., 1] = ys[:, np.newaxis].astype(np.uint8)
    arr[..., 2] = 128
    arr[..., 3] = 255 if opaque else 100
    image = Image.fromarray(arr)
    if mode != "RGBA":
        image = image.convert(mode)
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


def png_size(data):
    with Image.open(io.BytesIO(data)) as image:
        assert image.format == "PNG"
        return image.size


class StaticDescriptor:
    def __init__(self, data=MANIFEST_BYTES):
        self.data = data
        self.calls = 0

    def fetch(self):
        self.calls += 1
        return self.data


class FailingDescriptor:
    def fetch(self):
        raise DescriptorFetchError("Failed to fetch manifest.json: 404 Not Found")
