"""Decoding of C-escaped strings, as used for default values of bytes fields."""

from __future__ import annotations

import re

__all__ = ["CEscapeError", "unescape_c_escape_string"]

_SIMPLE_ESCAPES = {
    ord("a"): 0x07,
    ord("b"): 0x08,
    ord("f"): 0x0C,
    ord("n"): 0x0A,
    ord("r"): 0x0D,
    ord("t"): 0x09,
    ord("v"): 0x0B,
    ord("\\"): 0x5C,
    ord("?"): 0x3F,
    ord("'"): 0x27,
    ord('"'): 0x22,
}

_OCTAL_DIGITS = b"01234567"
_HEX_BYTE = re.compile(rb"\+?[0-9a-fA-F]+")


class CEscapeError(ValueError):
    """Raised when a C-escaped default value is malformed."""


def unescape_c_escape_string(s: str) -> bytes:
    """Decode the C escape sequences in ``s`` into raw bytes."""
    src = s.encode("utf-8")
    length = len(src)
    dst = bytearray()
    p = 0
    while p < length:
        if src[p] != ord("\\"):
            dst.append(src[p])
            p += 1
            continue
        p += 1
        if p == length:
            raise CEscapeError(f"invalid c-escaped default binary value ({s}): ends with '\\'")
        c = src[p]
        if c in _SIMPLE_ESCAPES:
            dst.append(_SIMPLE_ESCAPES[c])
            p += 1
        elif c in _OCTAL_DIGITS:
            octal = 0
            for _ in range(3):
                if p < length and src[p] in _OCTAL_DIGITS:
                    octal = octal * 8 + (src[p] - ord("0"))
                    p += 1
                else:
                    break
            if octal > 0xFF:
                raise CEscapeError(
                    f"invalid c-escaped default binary value ({s}): octal value out of range"
                )
            dst.append(octal)
        elif c in b"xX":
            if p + 3 > length:
                raise CEscapeError(
                    f"invalid c-escaped default binary value ({s}): incomplete hex value"
                )
            digits = src[p + 1 : p + 3]
            if not _HEX_BYTE.fullmatch(digits):
                bad = src[p : p + 2].decode("utf-8", "replace")
                raise CEscapeError(
                    f"invalid c-escaped default binary value ({bad}): invalid hex value"
                )
            dst.append(int(digits, 16))
            p += 3
        else:
            raise CEscapeError(f"invalid c-escaped default binary value ({s}): invalid escape")
    return bytes(dst)