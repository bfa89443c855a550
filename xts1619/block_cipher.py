"""
Block cipher primitives consumed by the XTS engine.

The engine only needs three things from a cipher: its algorithm name, its
block size in bytes and a way to transform exactly one block. Key and
direction are fixed when the primitive is built.
"""

from __future__ import annotations

import enum
from typing import Protocol

from cryptography.hazmat.backends import default_backend
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from .errors import InvalidLengthError


class Direction(enum.Enum):
    ENCRYPT = "encrypt"
    DECRYPT = "decrypt"


class BlockCipher(Protocol):
    algorithm_name: str
    block_size: int

    def process_block(self, src, src_offset: int, dst, dst_offset: int) -> int:
        """Transform one block from src into dst, return the bytes written."""


class AESBlockCipher:
    """
    AES over a single block at a time.

    Backed by a long-lived ECB context from `cryptography`, so an instance
    carries mutable state and must not be shared between threads.
    """

    algorithm_name = "AES"
    block_size = algorithms.AES.block_size // 8  # 16 bytes

    def __init__(self, key: bytes, direction: Direction = Direction.ENCRYPT):
        if len(key) not in (16, 24, 32):
            raise ValueError(f"AES key must be 16, 24 or 32 bytes, got {len(key)}")
        self.direction = direction
        cipher = Cipher(algorithms.AES(key), modes.ECB(), backend=default_backend())
        if direction is Direction.ENCRYPT:
            self._context = cipher.encryptor()
        else:
            self._context = cipher.decryptor()

    def process_block(self, src, src_offset: int, dst, dst_offset: int) -> int:
        block = bytes(src[src_offset:src_offset + self.block_size])
        if len(block) != self.block_size:
            raise InvalidLengthError(f"AES block must be {self.block_size} bytes, got {len(block)}")
        dst[dst_offset:dst_offset + self.block_size] = self._context.update(block)
        return self.block_size

    def __repr__(self) -> str:
        return f"AESBlockCipher(direction={self.direction.value})"
