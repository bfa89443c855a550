from __future__ import annotations

from xts1619 import AESBlockCipher, XTSEngine
from xts1619.byteutil import hex_to_bytes
from xts1619.gf128 import GF128_REDUCTION, multiply_by_alpha
from xts1619.vectors import VECTOR_10


def test_shift_without_carry() -> None:
    tweak = bytearray(16)
    tweak[0] = 0x01
    assert multiply_by_alpha(tweak) == bytearray([0x02] + [0] * 15)


def test_low_word_top_bit_moves_to_high_word() -> None:
    tweak = bytearray(16)
    tweak[7] = 0x80
    result = multiply_by_alpha(tweak)
    assert result[7] == 0x00
    assert result[8] == 0x01


def test_carry_out_folds_reduction_constant() -> None:
    tweak = bytearray(16)
    tweak[15] = 0x80
    assert multiply_by_alpha(tweak) == bytearray([GF128_REDUCTION] + [0] * 15)


def test_all_ones() -> None:
    tweak = bytearray(b"\xff" * 16)
    expected = bytearray(b"\xff" * 16)
    expected[0] = 0xFE ^ 0x87
    assert multiply_by_alpha(tweak) == expected


def test_updates_in_place() -> None:
    tweak = bytearray(16)
    tweak[0] = 0x40
    result = multiply_by_alpha(tweak)
    assert result is tweak
    assert tweak[0] == 0x80


def test_matches_integer_model() -> None:
    tweak = bytearray(hex_to_bytes("0123456789abcdeffedcba9876543210"))
    value = int.from_bytes(tweak, "little")
    for _ in range(200):
        multiply_by_alpha(tweak)
        value <<= 1
        if value >> 128:
            value ^= (1 << 128) | 0x87
        assert int.from_bytes(tweak, "little") == value


def _alpha_powers(tweak: bytes, count: int) -> list[bytes]:
    current = bytearray(tweak)
    powers = []
    for _ in range(count):
        powers.append(bytes(current))
        multiply_by_alpha(current)
    return powers


def _encrypted_sector(tweak_key: bytes, sector: int) -> bytes:
    tweak = bytearray(sector.to_bytes(16, "little"))
    AESBlockCipher(tweak_key).process_block(tweak, 0, tweak, 0)
    return bytes(tweak)


class ZeroingCipher:
    """Writes an all-zero block, so each output block of XEX is T."""

    algorithm_name = "AES"
    block_size = 16

    def process_block(self, src, src_offset: int, dst, dst_offset: int) -> int:
        dst[dst_offset:dst_offset + 16] = bytes(16)
        return 16


def test_tweaks_distinct_over_one_data_unit() -> None:
    start = _encrypted_sector(hex_to_bytes(VECTOR_10.tweak_key), 0xFF)
    powers = _alpha_powers(start, 32)
    assert len(set(powers)) == 32
    assert powers[0] == start


def test_engine_tweak_stream() -> None:
    tweak_key = hex_to_bytes(VECTOR_10.tweak_key)
    engine = XTSEngine(ZeroingCipher(), AESBlockCipher(tweak_key))
    out = bytearray(512)
    engine.process_data_unit(bytearray(512), 0, out, 0, 0xFF)

    blocks = [bytes(out[i:i + 16]) for i in range(0, 512, 16)]
    assert len(set(blocks)) == 32
    assert blocks == _alpha_powers(_encrypted_sector(tweak_key, 0xFF), 32)
