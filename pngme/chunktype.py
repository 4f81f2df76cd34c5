from typing import Union

from .pngexceptions import FormatError


"""
The chunk type is the 4 letters tag that names a PNG chunk (IHDR, IEND, tEXt...).
The case of each letter is a property bit, see https://www.w3.org/TR/PNG/#5Chunk-naming-conventions
"""


class ChunkType:

    """
    Represents the type of a PNG chunk.
    A chunk type is made of exactly 4 ascii letters.
    Bit 5 of each byte (the case of the letter) encodes a property:
            [   ancillary bit    (lowercase first letter)  |
                private bit      (lowercase second letter) |
                reserved bit     (must be uppercase)       |
                safe-to-copy bit (lowercase last letter)   ]
    """

    def __init__(self, value: Union[bytes, bytearray, str]) -> None:
        """
        :param value: the 4 raw bytes of the type, or its 4 characters long string.
        :raises TypeError: if value is neither bytes nor str.
        :raises FormatError: if value is not exactly 4 ascii letters.
        """
        if isinstance(value, str):
            if len(value) != 4:
                raise FormatError("Chunk types must be 4 characters long, got {!r}".format(value))
            if not (value.isascii() and value.isalpha()):
                raise FormatError("Chunk types must only contain ascii letters, got {!r}".format(value))
            value = value.encode('ascii')
        elif isinstance(value, (bytes, bytearray)):
            value = bytes(value)
            if len(value) != 4:
                raise FormatError("Chunk types must be 4 bytes long, got {!r}".format(value))
            # bytes.isalpha() only accepts ascii letters
            if not value.isalpha():
                raise FormatError("Chunk types must only contain ascii letters, got {!r}".format(value))
        else:
            raise TypeError("A chunk type should be built from bytes or str, not {}".format(type(value)))
        self.__bytes = value

    @property
    def bytes(self) -> bytes:
        """
        :returns: the 4 raw bytes of this chunk type.
        """
        return self.__bytes

    def is_critical(self) -> bool:
        """
        :returns: whether the ancillary bit is unset (the first letter is uppercase).
            A decoder coming across an unknown critical chunk should fail.
        """
        return self.__bytes[0:1].isupper()

    def is_ancillary(self) -> bool:
        """
        :returns: whether this type is not critical.
        """
        return not self.is_critical()

    def is_public(self) -> bool:
        """
        :returns: whether the private bit is unset (the second letter is uppercase).
        """
        return self.__bytes[1:2].isupper()

    def is_reserved_bit_valid(self) -> bool:
        """
        :returns: whether the reserved bit is unset (the third letter is uppercase),
            as required by the current version of PNG.
        """
        return self.__bytes[2:3].isupper()

    def is_safe_to_copy(self) -> bool:
        """
        :returns: whether an editor that doesn't know this chunk
            may copy it to a modified image (the last letter is lowercase).
        """
        return self.__bytes[3:4].islower()

    def is_valid(self) -> bool:
        """
        Only the content and the reserved bit are checked,
        the other property bits can take any value.
        """
        return self.__bytes.isalpha() and self.is_reserved_bit_valid()

    def __eq__(self, other) -> bool:
        if not isinstance(other, ChunkType):
            return NotImplemented
        return self.__bytes == other.bytes

    def __hash__(self) -> int:
        return hash(self.__bytes)

    def __str__(self) -> str:
        return self.__bytes.decode('ascii')

    def __repr__(self) -> str:
        return 'ChunkType({!r})'.format(str(self))
