"""XTS mode (IEEE 1619) for encrypting fixed-size storage sectors."""

from .block_cipher import AESBlockCipher, BlockCipher, Direction
from .errors import ConfigurationError, InvalidLengthError, XTSError
from .gf128 import multiply_by_alpha
from .xts import (
    TWEAK_DIRECTION,
    XTSEngine,
    decrypt_data_units,
    encrypt_data_units,
    split_xts_key,
)

__all__ = [
    "AESBlockCipher",
    "BlockCipher",
    "ConfigurationError",
    "Direction",
    "InvalidLengthError",
    "TWEAK_DIRECTION",
    "XTSEngine",
    "XTSError",
    "decrypt_data_units",
    "encrypt_data_units",
    "multiply_by_alpha",
    "split_xts_key",
]

__version__ = "0.1.0"
