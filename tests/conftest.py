from __future__ import annotations

import pytest


class FakeBlockCipher:
    """Identity cipher with a configurable name and block size."""

    def __init__(self, algorithm_name: str = "AES", block_size: int = 16) -> None:
        self.algorithm_name = algorithm_name
        self.block_size = block_size
        self.calls = 0

    def process_block(self, src, src_offset: int, dst, dst_offset: int) -> int:
        self.calls += 1
        dst[dst_offset:dst_offset + self.block_size] = bytes(src[src_offset:src_offset + self.block_size])
        return self.block_size


@pytest.fixture
def fake_cipher_factory():
    return FakeBlockCipher
