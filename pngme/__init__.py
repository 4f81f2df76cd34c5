"""
A pure python package to hide messages in the chunks of a PNG file.
"""

__version__ = "1.0.0"

from .chunktype import ChunkType
from .png import Png, PngChunk, PNG_SIGNATURE, open, read_png_signature, create_chunk
from .pngexceptions import PngException, FormatError, NotFoundError, PngIOError
