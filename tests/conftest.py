from struct import pack
import zlib

import pytest

from pngme import Png, PngChunk


def build_chunks():
    ihdr = PngChunk('IHDR', pack('>IIBBBBB', 1, 1, 8, 0, 0, 0, 0))
    idat = PngChunk('IDAT', zlib.compress(b'\x00\x00'))
    text = PngChunk('tEXt', b'Comment\x00made for tests')
    iend = PngChunk('IEND')
    return [ihdr, text, idat, iend]


@pytest.fixture
def chunks():
    return build_chunks()


@pytest.fixture
def image():
    return Png(build_chunks())


@pytest.fixture
def png_file(tmp_path, image):
    path = tmp_path / 'image.png'
    path.write_bytes(image.bytes)
    return path
