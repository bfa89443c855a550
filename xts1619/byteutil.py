from __future__ import annotations

import struct

SIZE_OF_LONG = 8
MASK64 = 0xFFFFFFFFFFFFFFFF


def load_int64_le(buf, offset: int = 0) -> int:
    return struct.unpack_from("<Q", buf, offset)[0]


def load_int64_be(buf, offset: int = 0) -> int:
    return struct.unpack_from(">Q", buf, offset)[0]


def store_int64_le(value: int, buf, offset: int = 0) -> None:
    struct.pack_into("<Q", buf, offset, value & MASK64)


def store_int64_be(value: int, buf, offset: int = 0) -> None:
    struct.pack_into(">Q", buf, offset, value & MASK64)


def hex_to_bytes(hex_value: str) -> bytes:
    """Decode a hex string, ignoring whitespace between digits."""
    return bytes.fromhex("".join(hex_value.split()))


def bytes_to_hex(data) -> str:
    return bytes(data).hex()
