"""
XTS mode (IEEE 1619) over fixed-size data units.

A data unit (sector) is processed block by block with XEX:

    T  = enc(tweak_key, data_unit_number)      # once per data unit
    C  = enc(key, P ^ T) ^ T                  # per block
    T  = T * alpha  in GF(2^128)               # between blocks

Decryption is the same walk with the data cipher in decrypt direction. The
tweak cipher always encrypts.

Ciphertext stealing is not implemented: data units are whole multiples of
the block size.
"""

from __future__ import annotations

import logging

from .block_cipher import AESBlockCipher, BlockCipher, Direction
from .byteutil import MASK64, SIZE_OF_LONG, store_int64_le
from .config import DEFAULT_DATA_UNIT_SIZE, XTS_KEY_SIZES, EngineConfig
from .errors import ConfigurationError, InvalidLengthError
from .gf128 import multiply_by_alpha

logger = logging.getLogger(__name__)

# The tweak is a pseudorandom function of the sector index, independent of
# whether the payload is being encrypted or decrypted.
TWEAK_DIRECTION = Direction.ENCRYPT

XTS_BLOCK_SIZE = 16
MAX_DATA_UNIT_NUMBER = MASK64


class XTSEngine:
    """
    Encrypt or decrypt data units in XTS mode.

    `cipher` does the payload work and may be swapped with `reset_cipher`,
    e.g. to flip from encryption to decryption. `tweak_cipher` is fixed for
    the lifetime of the engine and must be an encryptor.

    Not thread-safe: confine an engine to one thread or lock around both
    `reset_cipher` and `process_data_unit`.
    """

    def __init__(self, cipher: BlockCipher, tweak_cipher: BlockCipher,
                 data_unit_size: int = DEFAULT_DATA_UNIT_SIZE) -> None:
        if cipher.algorithm_name != tweak_cipher.algorithm_name:
            raise ConfigurationError(
                f"cipher algorithm {cipher.algorithm_name!r} does not match "
                f"tweak cipher algorithm {tweak_cipher.algorithm_name!r}"
            )
        tweak_direction = getattr(tweak_cipher, "direction", TWEAK_DIRECTION)
        if tweak_direction is not TWEAK_DIRECTION:
            raise ConfigurationError("tweak cipher must be initialized for encryption")

        block_size = cipher.block_size
        if block_size != XTS_BLOCK_SIZE:
            raise ConfigurationError(
                f"XTS tweaks live in GF(2^128); block size must be {XTS_BLOCK_SIZE}, got {block_size}"
            )
        EngineConfig(data_unit_size).validate(block_size)

        self._cipher = cipher
        self._tweak_cipher = tweak_cipher
        self._block_size = block_size
        self._data_unit_size = data_unit_size

        logger.debug(
            "xts engine ready: algorithm=%s block_size=%d data_unit_size=%d",
            cipher.algorithm_name, block_size, data_unit_size,
        )

    @classmethod
    def from_keys(cls, key: bytes, tweak_key: bytes,
                  direction: Direction = Direction.ENCRYPT,
                  data_unit_size: int = DEFAULT_DATA_UNIT_SIZE) -> "XTSEngine":
        """Build an AES engine from a data key and a tweak key."""
        return cls(
            AESBlockCipher(key, direction),
            AESBlockCipher(tweak_key, TWEAK_DIRECTION),
            data_unit_size=data_unit_size,
        )

    @property
    def algorithm_name(self) -> str:
        return self._cipher.algorithm_name

    @property
    def block_size(self) -> int:
        return self._block_size

    @property
    def data_unit_size(self) -> int:
        return self._data_unit_size

    @property
    def cipher(self) -> BlockCipher:
        return self._cipher

    @property
    def tweak_cipher(self) -> BlockCipher:
        return self._tweak_cipher

    def reset_cipher(self, cipher: BlockCipher) -> None:
        """
        Replace the data cipher, keeping the tweak cipher.

        The replacement is trusted to use the same algorithm and block size.
        """
        self._cipher = cipher
        logger.debug("xts data cipher replaced: %r", cipher)

    def process_data_unit(self, src: bytearray, src_offset: int,
                          dst: bytearray, dst_offset: int,
                          data_unit_number: int) -> int:
        """
        Encrypt or decrypt one data unit from `src` into `dst`.

        `src` must be writable: each block is XORed with its tweak in place
        before going through the cipher, so on return the input region holds
        P ^ T rather than P. Use `process_data_units` to keep the input intact.

        Returns the number of bytes processed, always `data_unit_size`.
        """
        if src_offset < 0 or dst_offset < 0:
            raise InvalidLengthError(
                f"offsets must be non-negative, got src_offset={src_offset} dst_offset={dst_offset}"
            )
        available = len(src) - src_offset
        if available % self._block_size != 0:
            raise InvalidLengthError(
                f"input length {available} is not a multiple of block size {self._block_size}"
            )
        if available < self._data_unit_size:
            raise InvalidLengthError(
                f"input holds {available} bytes, data unit needs {self._data_unit_size}"
            )
        if len(dst) - dst_offset < self._data_unit_size:
            raise InvalidLengthError(
                f"output has room for {len(dst) - dst_offset} bytes, data unit needs {self._data_unit_size}"
            )

        tweak = self._derive_tweak(data_unit_number)

        for i in range(0, self._data_unit_size, self._block_size):
            self._process_block(src, src_offset + i, dst, dst_offset + i, tweak)
            multiply_by_alpha(tweak)

        return self._data_unit_size

    def process_data_units(self, data: bytes, first_data_unit_number: int) -> bytes:
        """Process consecutive data units of `data`, numbered from `first_data_unit_number`."""
        if not data or len(data) % self._data_unit_size != 0:
            raise InvalidLengthError(
                f"data length {len(data)} is not a positive multiple of data unit size {self._data_unit_size}"
            )
        count = len(data) // self._data_unit_size
        if first_data_unit_number < 0 or first_data_unit_number + count - 1 > MAX_DATA_UNIT_NUMBER:
            raise ConfigurationError("data unit numbers must stay within 0..2**64-1")

        src = bytearray(data)
        out = bytearray(len(data))
        for unit in range(count):
            offset = unit * self._data_unit_size
            # Slice so each call sees exactly one data unit of input.
            chunk = src[offset:offset + self._data_unit_size]
            self.process_data_unit(chunk, 0, out, offset, first_data_unit_number + unit)
        return bytes(out)

    def _derive_tweak(self, data_unit_number: int) -> bytearray:
        if not 0 <= data_unit_number <= MAX_DATA_UNIT_NUMBER:
            raise ConfigurationError(f"data unit number must be within 0..2**64-1, got {data_unit_number}")
        tweak = bytearray(self._block_size)
        store_int64_le(data_unit_number, tweak, 0)
        # bytes SIZE_OF_LONG.. stay zero
        self._tweak_cipher.process_block(tweak, 0, tweak, 0)
        return tweak

    def _process_block(self, src, src_offset: int, dst, dst_offset: int, tweak: bytearray) -> int:
        block_size = self._block_size

        # PP <- P ^ T
        for i in range(block_size):
            src[src_offset + i] ^= tweak[i]

        # CC <- enc(key, PP)  or  PP <- dec(key, CC)
        self._cipher.process_block(src, src_offset, dst, dst_offset)

        # C <- CC ^ T
        for i in range(block_size):
            dst[dst_offset + i] ^= tweak[i]

        return block_size


def encrypt_data_units(key: bytes, tweak_key: bytes, data: bytes, data_unit_number: int,
                       data_unit_size: int = DEFAULT_DATA_UNIT_SIZE) -> bytes:
    engine = XTSEngine.from_keys(key, tweak_key, Direction.ENCRYPT, data_unit_size)
    return engine.process_data_units(data, data_unit_number)


def decrypt_data_units(key: bytes, tweak_key: bytes, data: bytes, data_unit_number: int,
                       data_unit_size: int = DEFAULT_DATA_UNIT_SIZE) -> bytes:
    engine = XTSEngine.from_keys(key, tweak_key, Direction.DECRYPT, data_unit_size)
    return engine.process_data_units(data, data_unit_number)


def split_xts_key(xts_key: bytes) -> tuple[bytes, bytes]:
    """Split a combined XTS key (data key || tweak key) into its two halves."""
    if len(xts_key) not in XTS_KEY_SIZES:
        raise ConfigurationError(
            f"XTS key must be 32, 48 or 64 bytes (two AES keys back to back), got {len(xts_key)}"
        )
    half = len(xts_key) // 2
    return xts_key[:half], xts_key[half:]
