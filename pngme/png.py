from struct import unpack, pack
from typing import Iterator, Optional, Union
from zlib import crc32 as crc

import requests

from .chunktype import ChunkType
from .pngexceptions import FormatError, NotFoundError, PngIOError
from .utils import as_data, Data as _Data


"""
This is the main pngme module, and contains the structures that make up a PNG file.
"""

# Type aliases for annotations
_Png = "Png"
_Chunk = "PngChunk"
_ChunkTypeLike = Union[ChunkType, _Data, str]

PNG_SIGNATURE = b'\x89PNG\r\n\x1a\n'

# length, type and crc fields around the data of a chunk
_CHUNK_OVERHEAD = 12
_MAX_CHUNK_LENGTH = 0xFFFFFFFF


class Png:

    """
    Represents a PNG file according to the PNG specification: https://www.w3.org/TR/PNG/.
    A PNG file starts with the PNG signature.
    It then contains a stream of PNG chunks, each starting with a four bytes length,
    followed by a four bytes ascii type and then by a payload of the specified length, followed by a CRC checksum.
    A valid image starts with an IHDR chunk and ends with an IEND chunk,
    but this is not enforced here: chunks are kept in the order they are given.
    """

    def __init__(self, chunks=()) -> None:
        """
        Constructs a :class:`Png` object from a list of chunks.
        To read a PNG file from disc or http, prefer the :func:`open` function.
        To decode raw bytes, use :meth:`Png.from_bytes`.

        :param chunks: the chunks that make up the image, in order.
        :raises TypeError: if one of the chunks is not a :class:`PngChunk`.
        """
        chunks = list(chunks)
        for chunk in chunks:
            if not isinstance(chunk, PngChunk):
                raise TypeError("Expected PngChunk, not {}".format(type(chunk)))
        self.__chunks = chunks

    @classmethod
    def from_bytes(cls, filebytes: _Data) -> _Png:
        """
        Decodes a whole PNG file.
        Chunks are read back to back until the end of the data.

        :param filebytes: the bytes that make up the PNG.
        :raises TypeError: if filebytes is not bytes.
        :raises FormatError: if the PNG signature is missing or if any chunk is malformed.
        """
        filebytes = as_data(filebytes)
        if not read_png_signature(filebytes):
            raise FormatError("bad signature: missing PNG signature")
        decoded_chunks = []
        start = len(PNG_SIGNATURE)
        while start < len(filebytes):
            try:
                chunk = PngChunk.from_bytes(filebytes, start)
            except FormatError as e:
                raise FormatError("{} (chunk at offset {})".format(e.reason, start)) from e
            decoded_chunks.append(chunk)
            start += chunk.length + _CHUNK_OVERHEAD
        return cls(decoded_chunks)

    @property
    def chunks(self) -> tuple[_Chunk, ...]:
        """
        :returns: the PNG chunks that make up this image.
        """
        return tuple(self.__chunks)

    @property
    def header(self) -> Optional[_Chunk]:
        """
        :returns: the first chunk of the image, normally the IHDR chunk, or None if the image has no chunk.
            Its content is not checked.
        """
        if not self.__chunks:
            return None
        return self.__chunks[0]

    @property
    def bytes(self) -> bytes:
        """
        :returns: the raw bytes that make up the PNG file.
        """
        b = bytearray(PNG_SIGNATURE)
        for chunk in self.__chunks:
            b += chunk.bytes
        return bytes(b)

    def save(self, file_name: str) -> None:
        """
        Save this PNG to a file on disc.
        :param file_name: name to save the file as. Will be overwritten if is already exists.
        """
        data = self.bytes
        with _builtin_open(file_name, 'wb') as f:
            f.write(data)

    def copy(self) -> _Png:
        """
        :returns: a new Png object with the same bytes as this one.
        """
        return Png.from_bytes(self.bytes)

    def append_chunk(self, chunk: _Chunk) -> None:
        """
        Adds the chunk at the end of the file.
        No check is done for chunks of the same type.

        :param chunk: the chunk to add to the image.
        :raises TypeError: if chunk is not a :class:`PngChunk`.
        """
        if not isinstance(chunk, PngChunk):
            raise TypeError("Expected PngChunk, not {}".format(type(chunk)))
        self.__chunks.append(chunk)

    def chunk_by_type(self, name: str) -> Optional[_Chunk]:
        """
        :param name: the chunk type to look for (e.g. IHDR).
        :returns: the first chunk of the given type in this image, or None if there is none.
        """
        for chunk in self.__chunks:
            if chunk.type == name:
                return chunk
        return None

    def get_chunks_by_type(self, name: str) -> tuple[_Chunk, ...]:
        """
        :param name: the chunk type to look for (e.g. IHDR).
        :returns: all the chunks of the given type in this image.
        """
        return tuple(filter(lambda c: c.type == name, self.__chunks))

    def remove_chunk(self, name: str) -> _Chunk:
        """
        Removes the first chunk of the given type from the image.
        Other chunks of the same type are left in place.

        :param name: the chunk type to remove (e.g. tEXt).
        :returns: the removed chunk.
        :raises NotFoundError: if this image has no chunk of that type.
        """
        for i, chunk in enumerate(self.__chunks):
            if chunk.type == name:
                return self.__chunks.pop(i)
        raise NotFoundError(name)

    def index_of_chunk(self, chunk: _Chunk) -> int:
        """
        :param chunk: a chunk to get the index of.
        :returns: the index of the given chunk in the image.
        :raises ValueError: if this image does not contain the given chunk.
        """
        for i, c in enumerate(self.__chunks):
            if c is chunk:
                return i
        raise ValueError("chunk not in image")

    def address_of_chunk(self, chunk: _Chunk) -> int:
        """
        :param chunk: a chunk to get the address of.
        :returns: the byte address of the given chunk.
        :raises ValueError: if this image does not contain the given chunk.
        """
        index = self.index_of_chunk(chunk)
        add = len(PNG_SIGNATURE)
        for c in self.__chunks[:index]:
            add += c.length + _CHUNK_OVERHEAD
        return add

    def __len__(self) -> int:
        return len(self.__chunks)

    def __iter__(self) -> Iterator[_Chunk]:
        return iter(tuple(self.__chunks))

    def __eq__(self, other) -> bool:
        if not isinstance(other, Png):
            return NotImplemented
        return self.chunks == other.chunks

    def __str__(self) -> str:
        lines = ["PNG file with {} chunks:".format(len(self.__chunks))]
        add = len(PNG_SIGNATURE)
        for chunk in self.__chunks:
            lines.append("@{}".format(add))
            lines.append(str(chunk))
            add += chunk.length + _CHUNK_OVERHEAD
        return '\n'.join(lines)


class PngChunk:

    """
    Represents a PNG chunk.
    The structure of a png chunk should be as follow:
            [   length (4 bytes, big-endian) |
                type (4 bytes, ascii)        |
                data (length bytes)          |
                crc (4 bytes)                ]

    The crc checksum is calculated with the chunk type and data, but does
    not include the length header.
    A chunk can't be changed once created, build a new one and swap it in the image instead.
    """

    def __init__(self, chunk_type: _ChunkTypeLike, data: _Data = b'') -> None:
        """
        Creates a PngChunk from its type and payload.
        To decode a chunk from raw bytes, use :meth:`PngChunk.from_bytes`.

        :param chunk_type: the type of the chunk, as a :class:`ChunkType` or anything its constructor accepts.
        :param data: the payload of the chunk. Can be empty and does not need to be text.
        :raises TypeError: if the arguments are not of a valid type.
        :raises FormatError: if chunk_type is not a valid chunk type.
        """
        if not isinstance(chunk_type, ChunkType):
            chunk_type = ChunkType(chunk_type)
        self.__chunk_type = chunk_type
        self.__data = as_data(data)

    @classmethod
    def from_bytes(cls, chunkbytes: _Data, offset: int = 0) -> _Chunk:
        """
        Decodes the chunk starting at offset in chunkbytes.
        If to much data is given everything not in the range specified in the length header will be ignored,
        len(chunk.bytes) is the number of bytes that were read.

        :param chunkbytes: the raw bytes of the chunk.
        :param offset: where the chunk starts in chunkbytes.
        :raises TypeError: if chunkbytes is not bytes.
        :raises FormatError: if the data is too short, the chunk type is invalid or the crc does not match.
        """
        chunkbytes = as_data(chunkbytes)
        available = len(chunkbytes) - offset
        if available < 8:
            raise FormatError("truncated input: chunk header needs 8 bytes, got {}".format(max(0, available)))
        length = unpack('>I', chunkbytes[offset:offset + 4])[0]
        try:
            chunk_type = ChunkType(chunkbytes[offset + 4:offset + 8])
        except FormatError as e:
            raise FormatError("invalid chunk type: {}".format(e.reason)) from e
        start = offset + 8
        end = start + length
        if len(chunkbytes) < end + 4:
            raise FormatError(
                "truncated input: {} chunk needs {} bytes, only {} left".format(
                    chunk_type,
                    length + 12,
                    available
                )
            )
        chunk = cls(chunk_type, chunkbytes[start:end])
        expected = unpack('>I', chunkbytes[end:end + 4])[0]
        if chunk.crc != expected:
            raise FormatError(
                "CRC mismatch for {} chunk: stored {}, computed {}".format(chunk_type, expected, chunk.crc)
            )
        return chunk

    @property
    def bytes(self) -> bytes:
        """
        :returns: this chunk's raw content.
        :raises FormatError: if the payload is too large for the length header.
        """
        if self.length > _MAX_CHUNK_LENGTH:
            raise FormatError("chunk data too large: {} bytes".format(self.length))
        return pack('>I', self.length) + self.__chunk_type.bytes + self.__data + pack('>I', self.crc)

    @property
    def crc(self) -> int:
        """
        :returns: the CRC checksum of this chunk, computed from its type and data.
        """
        return crc(self.__chunk_type.bytes + self.__data)

    @property
    def chunk_type(self) -> ChunkType:
        """
        :returns: the type of this chunk, as a :class:`ChunkType`.
        """
        return self.__chunk_type

    @property
    def type(self) -> str:
        """
        :returns: the type of this chunk (E.g. IHDR)
        """
        return str(self.__chunk_type)

    def __len__(self) -> int:
        """
        :returns: the length of this chunk.
        """
        return self.length

    @property
    def length(self) -> int:
        """
        :returns: the length of this chunk's payload.
        """
        return len(self.__data)

    @property
    def data(self) -> bytes:
        """
        :returns: this chunk's payload.
        """
        return self.__data

    def data_as_string(self) -> str:
        """
        :returns: this chunk's payload decoded as utf-8.
        :raises FormatError: if the payload is not valid utf-8.
        """
        try:
            return self.__data.decode('utf-8')
        except UnicodeDecodeError as e:
            raise FormatError("invalid encoding: {} chunk data is not utf-8 ({})".format(self.type, e)) from e

    def iscritical(self) -> bool:
        """
        :returns: whether this chunk's critical bit is set
            (which equals to the first character in the chunk's name being uppercase).
            A PNG decoder coming accros a critical chunk it doesn't know about should produce an error.
            The PNG specification includes 4 critical chunks: IHDR, PLTE, IDAT and IEND.
        """
        return self.__chunk_type.is_critical()

    def isancillary(self) -> bool:
        """
        :returns: whether this chunk is not a critical chunk.
        """
        return self.__chunk_type.is_ancillary()

    def __eq__(self, other) -> bool:
        if not isinstance(other, PngChunk):
            return NotImplemented
        return self.__chunk_type == other.chunk_type and self.__data == other.data

    def __hash__(self) -> int:
        return hash((self.__chunk_type, self.__data))

    def __repr__(self) -> str:
        norm = super(PngChunk, self).__repr__()
        norm = norm.rsplit(' ')
        norm.insert(1, '[' + self.type + ']')
        return ' '.join(norm)

    def __str__(self) -> str:
        return '\n'.join((
            "Chunk {",
            "  Length: {}".format(self.length),
            "  Type: {}".format(self.type),
            "  Data: {} bytes".format(len(self.__data)),
            "  Crc: {}".format(self.crc),
            "}",
        ))


_builtin_open = open


def open(filename: str) -> Png:
    """
    :returns: a Png object, reading from the given file name. Http and Https links are supported as well.
    :raises PngIOError: if the file can't be read or downloaded.
    :raises FormatError: if the file is not a valid PNG.
    """
    if is_url(filename):
        try:
            resp = requests.get(filename)
            resp.raise_for_status()
        except requests.RequestException as e:
            raise PngIOError(filename, e) from e
        data = resp.content
    else:
        try:
            with _builtin_open(filename, 'rb') as f:
                data = f.read()
        except OSError as e:
            raise PngIOError(filename, e) from e
    return Png.from_bytes(data)


def is_url(filename: str) -> bool:
    return filename.startswith('http://') or filename.startswith('https://')


def read_png_signature(data: _Data) -> bool:
    return data[0:8] == PNG_SIGNATURE


def create_chunk(chunk_type: _ChunkTypeLike, message: Union[str, _Data] = b'') -> PngChunk:
    """
    :returns: a new chunk of the given type, holding message.
        Text messages are encoded as utf-8.
    """
    if isinstance(message, str):
        message = message.encode('utf-8')
    return PngChunk(chunk_type, message)
