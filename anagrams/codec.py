"""
Binary form of a representative set.

Layout (big-endian):
    uint32 word count
    per word: uint32 byte length, UTF-8 bytes

Words are written in sorted code point order, so equal sets always encode to
the same bytes and ``decode`` can reject anything the encoder cannot produce.
"""
import struct

from .errors import CorruptGroupError

_U32 = struct.Struct(">I")


def encode(entry) -> bytes:
    words = sorted(entry)
    parts = [_U32.pack(len(words))]
    for word in words:
        raw = word.encode("utf-8")
        parts.append(_U32.pack(len(raw)))
        parts.append(raw)
    return b"".join(parts)


def decode(data) -> frozenset:
    """Inverse of ``encode``; raises CorruptGroupError on malformed input."""
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise CorruptGroupError(f"expected bytes, got {type(data).__name__}")
    data = bytes(data)
    count, offset = _read_u32(data, 0, "word count")
    words = []
    for index in range(count):
        length, offset = _read_u32(data, offset, f"length of word {index}")
        end = offset + length
        if end > len(data):
            raise CorruptGroupError(
                f"word {index} needs {length} bytes, only {len(data) - offset} left")
        try:
            word = data[offset:end].decode("utf-8")
        except UnicodeDecodeError as e:
            raise CorruptGroupError(f"word {index} is not valid UTF-8: {e}") from e
        if words and word <= words[-1]:
            raise CorruptGroupError(f"word {index} is duplicated or out of order")
        words.append(word)
        offset = end
    if offset != len(data):
        raise CorruptGroupError(f"{len(data) - offset} trailing bytes after {count} words")
    return frozenset(words)


def _read_u32(data: bytes, offset: int, what: str):
    if offset + _U32.size > len(data):
        raise CorruptGroupError(f"truncated group: missing {what} at offset {offset}")
    return _U32.unpack_from(data, offset)[0], offset + _U32.size


def render(entry) -> str:
    """Human readable form, ``{ word1, word2 }``."""
    return "{ " + ", ".join(sorted(entry)) + " }"


def format_record(signature: str, entry, include_signature: bool = False) -> str:
    if include_signature:
        return f"{signature}\t{render(entry)}"
    return render(entry)
