from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .errors import ConfigurationError

DEFAULT_DATA_UNIT_SIZE = 512
AES_KEY_SIZES = (16, 24, 32)
XTS_KEY_SIZES = (32, 48, 64)


@dataclass(frozen=True)
class EngineConfig:
    data_unit_size: int = DEFAULT_DATA_UNIT_SIZE

    def validate(self, block_size: int) -> None:
        if not isinstance(self.data_unit_size, int) or self.data_unit_size <= 0:
            raise ConfigurationError("data_unit_size must be a positive integer")
        if self.data_unit_size % block_size != 0:
            raise ConfigurationError(
                f"data_unit_size {self.data_unit_size} is not a multiple of block size {block_size}"
            )


def parse_hex_key(hex_value: Optional[str], field: str, sizes: tuple[int, ...] = AES_KEY_SIZES) -> bytes:
    if hex_value is None:
        raise ConfigurationError(f"{field} is required")
    if not isinstance(hex_value, str):
        raise ConfigurationError(f"{field} must be a hex string")
    try:
        key = bytes.fromhex(hex_value)
    except ValueError as exc:
        raise ConfigurationError(f"{field} must be valid hex") from exc
    if len(key) not in sizes:
        allowed = ", ".join(str(size) for size in sizes)
        raise ConfigurationError(f"{field} must decode to one of {allowed} bytes, got {len(key)}")
    return key


def parse_data_unit_number(value: str) -> int:
    """Accept decimal or 0x-prefixed hex sector numbers."""
    try:
        number = int(value, 0)
    except ValueError as exc:
        raise ConfigurationError(f"data unit number must be an integer, got {value!r}") from exc
    if not 0 <= number <= 0xFFFFFFFFFFFFFFFF:
        raise ConfigurationError("data unit number must fit in 64 unsigned bits")
    return number
