"""Structural decoding of WebAssembly binary modules.

The decoder checks the module framing only: preamble, section ids, sizes
and ordering, custom section names and the counts that must agree between
sections. Instruction encodings inside section bodies are read by the engine
backend; type correctness is left to validation.
"""

from dataclasses import dataclass, field
from typing import List, Optional

from .errors import ErrCode

MAGIC = b"\x00asm"
VERSION = b"\x01\x00\x00\x00"

CUSTOM_SECTION = 0
FUNCTION_SECTION = 3
CODE_SECTION = 10
DATA_SECTION = 11
DATA_COUNT_SECTION = 12

SECTION_NAMES = {
    0: "custom",
    1: "type",
    2: "import",
    3: "function",
    4: "table",
    5: "memory",
    6: "global",
    7: "export",
    8: "start",
    9: "element",
    10: "code",
    11: "data",
    12: "datacount",
    13: "tag",
}

# Required position of each non-custom section in a module.
SECTION_ORDER = {1: 1, 2: 2, 3: 3, 4: 4, 5: 5, 13: 6, 6: 7, 7: 8, 8: 9, 9: 10, 12: 11, 10: 12, 11: 13}


class DecodeError(Exception):
    """Raised when a module is not a well-formed binary."""

    def __init__(self, code: ErrCode, offset: int, detail: Optional[str] = None):
        self.code = code
        self.offset = offset
        super().__init__(f"{detail or code.message} (at offset {offset:#x})")


@dataclass(frozen=True)
class Section:
    id: int
    name: str
    offset: int
    size: int


@dataclass
class DecodedModule:
    """A module whose binary framing has been decoded."""

    path: str
    data: bytes
    sections: List[Section] = field(default_factory=list)

    def section(self, section_id: int) -> Optional[Section]:
        return next((s for s in self.sections if s.id == section_id), None)


class _Reader:
    def __init__(self, data: bytes, pos: int = 0, end: Optional[int] = None):
        self.data = data
        self.pos = pos
        self.end = len(data) if end is None else end

    def at_end(self) -> bool:
        return self.pos >= self.end

    def byte(self) -> int:
        if self.pos >= self.end:
            raise DecodeError(ErrCode.UNEXPECTED_END, self.pos)
        value = self.data[self.pos]
        self.pos += 1
        return value

    def take(self, count: int) -> bytes:
        if self.pos + count > self.end:
            raise DecodeError(ErrCode.UNEXPECTED_END, self.end)
        chunk = self.data[self.pos:self.pos + count]
        self.pos += count
        return chunk

    def u32(self) -> int:
        """Read an unsigned LEB128 value of at most 32 bits."""
        start = self.pos
        result = 0
        for index in range(5):
            value = self.byte()
            if index == 4:
                if value & 0x80:
                    raise DecodeError(ErrCode.INTEGER_TOO_LONG, start)
                if value & 0x70:
                    raise DecodeError(ErrCode.INTEGER_TOO_LARGE, start)
            result |= (value & 0x7F) << (7 * index)
            if not value & 0x80:
                break
        return result


def decode(data: bytes, path: str = "") -> DecodedModule:
    """Decode the framing of a binary module.

    Args:
        data: Raw module bytes
        path: Source path, kept on the result for reporting

    Returns:
        The decoded module with its section table

    Raises:
        DecodeError: If the binary is malformed
    """
    reader = _Reader(data)
    if reader.take(4) != MAGIC:
        raise DecodeError(ErrCode.MALFORMED_MAGIC, 0)
    if reader.take(4) != VERSION:
        raise DecodeError(ErrCode.MALFORMED_VERSION, 4)

    module = DecodedModule(path=path, data=data)
    counts = {}
    last_position = 0

    while not reader.at_end():
        header_offset = reader.pos
        section_id = reader.byte()
        if section_id not in SECTION_NAMES:
            raise DecodeError(ErrCode.MALFORMED_SECTION, header_offset)
        size = reader.u32()
        payload = reader.pos
        if payload + size > len(data):
            raise DecodeError(ErrCode.UNEXPECTED_END, len(data))

        name = SECTION_NAMES[section_id]
        if section_id == CUSTOM_SECTION:
            name = _custom_name(data, payload, payload + size)
        else:
            position = SECTION_ORDER[section_id]
            if position <= last_position:
                raise DecodeError(ErrCode.JUNK_SECTION, header_offset)
            last_position = position
            if section_id in (FUNCTION_SECTION, CODE_SECTION, DATA_SECTION, DATA_COUNT_SECTION):
                counts[section_id] = _leading_count(data, payload, payload + size, section_id)

        module.sections.append(Section(section_id, name, payload, size))
        reader.pos = payload + size

    if counts.get(FUNCTION_SECTION, 0) != counts.get(CODE_SECTION, 0):
        raise DecodeError(ErrCode.INCOMPATIBLE_FUNC_CODE, len(data))
    if DATA_COUNT_SECTION in counts and counts[DATA_COUNT_SECTION] != counts.get(DATA_SECTION, 0):
        raise DecodeError(ErrCode.INCOMPATIBLE_DATA_COUNT, len(data))
    return module


def _custom_name(data: bytes, start: int, end: int) -> str:
    reader = _Reader(data, start, end)
    length = reader.u32()
    raw = reader.take(length)
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError:
        raise DecodeError(ErrCode.MALFORMED_UTF8, start) from None


def _leading_count(data: bytes, start: int, end: int, section_id: int) -> int:
    reader = _Reader(data, start, end)
    count = reader.u32()
    if section_id == DATA_COUNT_SECTION and not reader.at_end():
        raise DecodeError(ErrCode.SECTION_SIZE_MISMATCH, reader.pos)
    return count
