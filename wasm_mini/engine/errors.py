"""Numeric error codes reported by the module engine.

Codes are grouped by the phase that produces them:

* ``0x01``-``0x1F`` runtime and workflow errors
* ``0x20``-``0x3F`` load phase (binary decoding)
* ``0x40``-``0x5F`` validation phase
* ``0x60``-``0x7F`` instantiation phase
"""

from enum import IntEnum
from typing import Optional


class ErrCode(IntEnum):
    """Stable error codes shared by every engine backend."""

    SUCCESS = 0x00
    RUNTIME_ERROR = 0x02
    WRONG_VM_WORKFLOW = 0x04

    # Load phase
    ILLEGAL_PATH = 0x20
    READ_ERROR = 0x21
    UNEXPECTED_END = 0x22
    MALFORMED_MAGIC = 0x23
    MALFORMED_VERSION = 0x24
    MALFORMED_SECTION = 0x25
    SECTION_SIZE_MISMATCH = 0x26
    LENGTH_OUT_OF_BOUNDS = 0x27
    JUNK_SECTION = 0x28
    INCOMPATIBLE_FUNC_CODE = 0x29
    INCOMPATIBLE_DATA_COUNT = 0x2A
    MALFORMED_VALTYPE = 0x2B
    MALFORMED_UTF8 = 0x34
    INTEGER_TOO_LARGE = 0x35
    INTEGER_TOO_LONG = 0x36
    ILLEGAL_OPCODE = 0x37
    MALFORMED_MODULE = 0x3F

    # Validation phase
    INVALID_ALIGNMENT = 0x40
    TYPE_CHECK_FAILED = 0x41
    INVALID_LABEL_IDX = 0x42
    INVALID_LOCAL_IDX = 0x43
    INVALID_FUNC_TYPE_IDX = 0x44
    INVALID_FUNC_IDX = 0x45
    INVALID_TABLE_IDX = 0x46
    INVALID_MEMORY_IDX = 0x47
    INVALID_GLOBAL_IDX = 0x48
    DUP_EXPORT_NAME = 0x4F
    CONST_EXPR_REQUIRED = 0x50
    MULTI_MEMORIES = 0x52
    INVALID_MODULE = 0x5F

    # Instantiation phase
    INCOMPATIBLE_IMPORT_TYPE = 0x61
    UNKNOWN_IMPORT = 0x62
    DATA_SEG_DOES_NOT_FIT = 0x63
    ELEM_SEG_DOES_NOT_FIT = 0x64
    INSTANTIATION_FAILED = 0x7F

    @property
    def message(self) -> str:
        """Default human-readable message for this code."""
        return _MESSAGES.get(self, self.name.lower().replace("_", " "))


_MESSAGES = {
    ErrCode.SUCCESS: "success",
    ErrCode.RUNTIME_ERROR: "generic runtime error",
    ErrCode.WRONG_VM_WORKFLOW: "wrong VM workflow",
    ErrCode.ILLEGAL_PATH: "invalid path",
    ErrCode.READ_ERROR: "read error",
    ErrCode.UNEXPECTED_END: "unexpected end",
    ErrCode.MALFORMED_MAGIC: "magic header not detected",
    ErrCode.MALFORMED_VERSION: "unknown binary version",
    ErrCode.MALFORMED_SECTION: "malformed section id",
    ErrCode.SECTION_SIZE_MISMATCH: "section size mismatch",
    ErrCode.LENGTH_OUT_OF_BOUNDS: "length out of bounds",
    ErrCode.JUNK_SECTION: "unexpected content after last section",
    ErrCode.INCOMPATIBLE_FUNC_CODE: "function and code section have inconsistent lengths",
    ErrCode.INCOMPATIBLE_DATA_COUNT: "data count and data section have inconsistent lengths",
    ErrCode.MALFORMED_VALTYPE: "malformed value type",
    ErrCode.MALFORMED_UTF8: "malformed UTF-8 encoding",
    ErrCode.INTEGER_TOO_LARGE: "integer too large",
    ErrCode.INTEGER_TOO_LONG: "integer representation too long",
    ErrCode.ILLEGAL_OPCODE: "illegal opcode",
    ErrCode.MALFORMED_MODULE: "malformed module",
    ErrCode.INVALID_ALIGNMENT: "alignment must not be larger than natural",
    ErrCode.TYPE_CHECK_FAILED: "type mismatch",
    ErrCode.INVALID_LABEL_IDX: "unknown label",
    ErrCode.INVALID_LOCAL_IDX: "unknown local",
    ErrCode.INVALID_FUNC_TYPE_IDX: "unknown type",
    ErrCode.INVALID_FUNC_IDX: "unknown function",
    ErrCode.INVALID_TABLE_IDX: "unknown table",
    ErrCode.INVALID_MEMORY_IDX: "unknown memory",
    ErrCode.INVALID_GLOBAL_IDX: "unknown global",
    ErrCode.DUP_EXPORT_NAME: "duplicate export name",
    ErrCode.CONST_EXPR_REQUIRED: "constant expression required",
    ErrCode.MULTI_MEMORIES: "multiple memories",
    ErrCode.INVALID_MODULE: "invalid module",
    ErrCode.INCOMPATIBLE_IMPORT_TYPE: "incompatible import type",
    ErrCode.UNKNOWN_IMPORT: "unknown import",
    ErrCode.DATA_SEG_DOES_NOT_FIT: "data segment does not fit",
    ErrCode.ELEM_SEG_DOES_NOT_FIT: "elements segment does not fit",
    ErrCode.INSTANTIATION_FAILED: "instantiation failed",
}


# Keyword tables used to classify free-form engine error text. Checked in
# order, first match wins.
LOAD_KEYWORDS = [
    ("unexpected end", ErrCode.UNEXPECTED_END),
    ("magic header", ErrCode.MALFORMED_MAGIC),
    ("unknown binary version", ErrCode.MALFORMED_VERSION),
    ("section size mismatch", ErrCode.SECTION_SIZE_MISMATCH),
    ("malformed section", ErrCode.MALFORMED_SECTION),
    ("utf-8", ErrCode.MALFORMED_UTF8),
    ("integer too large", ErrCode.INTEGER_TOO_LARGE),
    ("too long", ErrCode.INTEGER_TOO_LONG),
    ("illegal opcode", ErrCode.ILLEGAL_OPCODE),
    ("unknown opcode", ErrCode.ILLEGAL_OPCODE),
    ("inconsistent lengths", ErrCode.INCOMPATIBLE_FUNC_CODE),
    ("invalid value type", ErrCode.MALFORMED_VALTYPE),
    ("end opcode", ErrCode.UNEXPECTED_END),
    ("malformed", ErrCode.MALFORMED_MODULE),
]

VALIDATION_KEYWORDS = [
    ("type mismatch", ErrCode.TYPE_CHECK_FAILED),
    ("alignment", ErrCode.INVALID_ALIGNMENT),
    ("unknown label", ErrCode.INVALID_LABEL_IDX),
    ("unknown local", ErrCode.INVALID_LOCAL_IDX),
    ("unknown type", ErrCode.INVALID_FUNC_TYPE_IDX),
    ("unknown function", ErrCode.INVALID_FUNC_IDX),
    ("unknown table", ErrCode.INVALID_TABLE_IDX),
    ("unknown memory", ErrCode.INVALID_MEMORY_IDX),
    ("unknown global", ErrCode.INVALID_GLOBAL_IDX),
    ("duplicate export", ErrCode.DUP_EXPORT_NAME),
    ("constant expression required", ErrCode.CONST_EXPR_REQUIRED),
    ("multiple memories", ErrCode.MULTI_MEMORIES),
]

INSTANTIATION_KEYWORDS = [
    ("unknown import", ErrCode.UNKNOWN_IMPORT),
    ("incompatible import type", ErrCode.INCOMPATIBLE_IMPORT_TYPE),
    ("types incompatible", ErrCode.INCOMPATIBLE_IMPORT_TYPE),
    ("data segment", ErrCode.DATA_SEG_DOES_NOT_FIT),
    ("out of bounds memory access", ErrCode.DATA_SEG_DOES_NOT_FIT),
    ("elements segment", ErrCode.ELEM_SEG_DOES_NOT_FIT),
    ("out of bounds table access", ErrCode.ELEM_SEG_DOES_NOT_FIT),
]


def match(text: str, keywords) -> Optional[ErrCode]:
    """Return the code of the first keyword found in ``text``, if any."""
    lowered = text.lower()
    for keyword, code in keywords:
        if keyword in lowered:
            return code
    return None


def classify(text: str, keywords, fallback: ErrCode) -> ErrCode:
    """Map engine error text to an ``ErrCode`` using a keyword table."""
    code = match(text, keywords)
    return fallback if code is None else code
