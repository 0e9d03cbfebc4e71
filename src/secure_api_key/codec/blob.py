"""
Binary blob framing.

Layout, all integers signed 32-bit little-endian:

    [int32 lead noise byte length][lead noise bytes]
    [int32 pair count]
        pair count times: [int32 position][code unit]
    [int32 trail noise byte length][trail noise bytes]

Noise is text in the configured encoding. A code unit is one character in
the fixed width and byte order of that encoding.
"""

import struct
from dataclasses import dataclass
from typing import Iterable

from ..config import ScrambleSettings
from ..errors import BufferUnderrunError
from ..scrambler import CharPosition

INT32 = struct.Struct("<i")

# Highest value chr() accepts
_MAX_CODE_POINT = 0x10FFFF


class BlobWriter:
    """Appends blob fields to an in-memory buffer."""

    def __init__(self, settings: ScrambleSettings) -> None:
        self.settings = settings
        self._buffer = bytearray()

    def write_int32(self, value: int) -> None:
        self._buffer += INT32.pack(value)

    def write_bytes(self, data: bytes) -> None:
        self._buffer += data

    def write_noise(self, noise: str) -> None:
        """Write a noise string prefixed by its encoded byte length."""
        data = noise.encode(self.settings.encoding)
        self.write_int32(len(data))
        self.write_bytes(data)

    def write_char(self, char: str) -> None:
        """Write one code unit character in the encoding's width and byte order."""
        self.write_bytes(
            ord(char).to_bytes(self.settings.code_unit_width, self.settings.code_unit_byteorder)
        )

    def write_pairs(self, pairs: Iterable[CharPosition]) -> None:
        """Write the pair count followed by each (position, char) entry."""
        pairs = tuple(pairs)
        self.write_int32(len(pairs))
        for pair in pairs:
            self.write_int32(pair.position)
            self.write_char(pair.char)

    def getvalue(self) -> bytes:
        return bytes(self._buffer)


class BlobReader:
    """
    Reads blob fields sequentially from a byte buffer.

    Every read checks the remaining length first and raises
    BufferUnderrunError instead of returning short data.
    """

    def __init__(self, data: bytes, settings: ScrambleSettings) -> None:
        self.settings = settings
        self._data = data
        self._offset = 0

    @property
    def remaining(self) -> int:
        return len(self._data) - self._offset

    def read_bytes(self, length: int) -> bytes:
        if length < 0 or length > self.remaining:
            raise BufferUnderrunError(length, self.remaining)

        chunk = self._data[self._offset:self._offset + length]
        self._offset += length
        return chunk

    def read_int32(self) -> int:
        return INT32.unpack(self.read_bytes(INT32.size))[0]

    def read_noise(self) -> bytes:
        """Read a length-prefixed noise block and return its raw bytes."""
        return self.read_bytes(self.read_int32())

    def read_char(self) -> str:
        """Read one code unit. Values beyond Unicode decode as U+FFFD."""
        unit = self.read_bytes(self.settings.code_unit_width)
        code = int.from_bytes(unit, self.settings.code_unit_byteorder)
        return chr(code) if code <= _MAX_CODE_POINT else "\ufffd"

    def read_pairs(self) -> list[CharPosition]:
        """
        Read the pair count and that many (position, char) entries.

        A negative count reads no entries.
        """
        count = self.read_int32()

        entry_size = INT32.size + self.settings.code_unit_width
        if count * entry_size > self.remaining:
            raise BufferUnderrunError(count * entry_size, self.remaining)

        pairs = []
        for _ in range(count):
            position = self.read_int32()
            pairs.append(CharPosition(char=self.read_char(), position=position))
        return pairs


@dataclass(frozen=True)
class EncodedBlob:
    """
    A fully parsed blob, noise included.

    The decoder never builds one of these since it stops after the pairs.
    It exists for serializing on encode and for inspecting blobs.
    """

    leading_noise: str
    pairs: tuple[CharPosition, ...] = ()
    trailing_noise: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "pairs", tuple(self.pairs))

    def to_bytes(self, settings: ScrambleSettings) -> bytes:
        """Serialize the blob in wire order."""
        writer = BlobWriter(settings)
        writer.write_noise(self.leading_noise)
        writer.write_pairs(self.pairs)
        writer.write_noise(self.trailing_noise)
        return writer.getvalue()

    @classmethod
    def parse(cls, data: bytes, settings: ScrambleSettings) -> "EncodedBlob":
        """
        Parse every section of a blob, trailing noise included.

        Unlike decoding, this fails if the trailing noise is truncated.
        Undecodable noise bytes are replaced rather than rejected.

        Args:
            data: The raw blob bytes
            settings: Settings the blob was written with

        Returns:
            The parsed blob
        """
        reader = BlobReader(data, settings)
        leading = reader.read_noise().decode(settings.encoding, errors="replace")
        pairs = reader.read_pairs()
        trailing = reader.read_noise().decode(settings.encoding, errors="replace")
        return cls(leading_noise=leading, pairs=tuple(pairs), trailing_noise=trailing)
