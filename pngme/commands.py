"""
The four operations of the pngme command line tool.
Every function here loads a whole file, works on it in memory and writes it back in one go.
"""

import logging
from typing import Optional

from . import png
from .png import PngChunk, create_chunk, is_url
from .pngexceptions import PngIOError

logger = logging.getLogger(__name__)


def load(file_path: str) -> png.Png:
    logger.info("Reading %s", file_path)
    image = png.open(file_path)
    logger.debug("Found %d chunks in %s", len(image), file_path)
    return image


def save(image: png.Png, file_path: str) -> None:
    if is_url(file_path):
        raise PngIOError(file_path, "can't write to a url, give an output file")
    try:
        image.save(file_path)
    except OSError as e:
        raise PngIOError(file_path, e) from e
    logger.info("Wrote %d chunks to %s", len(image), file_path)


def encode(file_path: str, chunk_type: str, message: str, output_file: Optional[str] = None) -> PngChunk:
    """
    Hides message in a chunk of the given type.
    A previous chunk of that type is replaced.

    :param file_path: the png to read.
    :param chunk_type: the type of the chunk that will hold the message.
    :param message: the message to hide.
    :param output_file: where to write the result, file_path is overwritten if this is None.
    :returns: the new chunk.
    """
    image = load(file_path)
    chunk = create_chunk(chunk_type, message)
    if image.chunk_by_type(chunk.type) is not None:
        old = image.remove_chunk(chunk.type)
        logger.info("Replacing existing %s chunk (%d bytes)", old.type, old.length)
    image.append_chunk(chunk)
    save(image, output_file if output_file is not None else file_path)
    return chunk


def decode(file_path: str, chunk_type: str) -> Optional[str]:
    """
    :returns: the message held by the first chunk of the given type, or None if there is no such chunk.
    :raises FormatError: if the chunk does not hold utf-8 text.
    """
    image = load(file_path)
    chunk = image.chunk_by_type(chunk_type)
    if chunk is None:
        return None
    return chunk.data_as_string()


def remove(file_path: str, chunk_type: str) -> PngChunk:
    """
    Removes the first chunk of the given type and saves the file in place.

    :returns: the removed chunk.
    :raises NotFoundError: if there is no chunk of that type.
    """
    image = load(file_path)
    chunk = image.remove_chunk(chunk_type)
    save(image, file_path)
    return chunk


def print_chunks(file_path: str) -> str:
    return str(load(file_path))
