from __future__ import annotations

import argparse
import logging
import sys

from .block_cipher import AESBlockCipher, Direction
from .byteutil import bytes_to_hex, hex_to_bytes
from .config import DEFAULT_DATA_UNIT_SIZE, XTS_KEY_SIZES, parse_data_unit_number, parse_hex_key
from .errors import ConfigurationError, XTSError
from .vectors import VECTOR_10, XTSVector
from .xts import TWEAK_DIRECTION, XTSEngine, split_xts_key

RULE = "=" * 52


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="xts1619", description="XTS mode (IEEE 1619) for fixed-size data units")
    parser.add_argument(
        "--log-level",
        default="info",
        choices=("info", "debug"),
        help="Console log verbosity",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("selftest", help="Run IEEE 1619 test vector 10")

    for name in ("encrypt", "decrypt"):
        cmd = sub.add_parser(name, help=f"{name.capitalize()} hex-encoded data units")
        cmd.add_argument("--key", help="Data key (hex)")
        cmd.add_argument("--tweak-key", help="Tweak key (hex)")
        cmd.add_argument("--xts-key", help="Combined data key and tweak key (hex), instead of --key/--tweak-key")
        cmd.add_argument("--data-unit", default="0", help="First data unit number (decimal or 0x hex)")
        cmd.add_argument("--data-unit-size", type=int, default=DEFAULT_DATA_UNIT_SIZE, help="Bytes per data unit")
        cmd.add_argument("data", help="Input data (hex), a whole number of data units")
    return parser


def run_vector(vector: XTSVector) -> bool:
    key = hex_to_bytes(vector.key)
    tweak_key = hex_to_bytes(vector.tweak_key)
    data_unit_number = vector.data_unit_number

    engine = XTSEngine(AESBlockCipher(key, Direction.ENCRYPT), AESBlockCipher(tweak_key, TWEAK_DIRECTION))
    plaintext = bytearray(hex_to_bytes(vector.plaintext))
    ciphertext = bytearray(hex_to_bytes(vector.ciphertext))
    created_ciphertext = bytearray(engine.data_unit_size)
    decrypted_plaintext = bytearray(engine.data_unit_size)

    print(RULE)
    print(vector.name)
    print(f"Key:              {vector.key}")
    print(f"Tweak key:        {vector.tweak_key}")
    print(f"Data unit number: {data_unit_number}")
    print(f"Plaintext:        {vector.plaintext}")
    print(f"Ciphertext:       {vector.ciphertext}")
    print(RULE)
    print("Result")
    print(RULE)

    engine.process_data_unit(plaintext, 0, created_ciphertext, 0, data_unit_number)
    created_hex = bytes_to_hex(created_ciphertext)
    encrypt_ok = created_hex == vector.ciphertext
    print(f"Ciphertext:       {created_hex}")
    if encrypt_ok:
        print(f"Ciphertext matches {vector.name}")
    else:
        print(f"Ciphertext does not match {vector.name}")

    engine.reset_cipher(AESBlockCipher(key, Direction.DECRYPT))
    engine.process_data_unit(ciphertext, 0, decrypted_plaintext, 0, data_unit_number)
    decrypted_hex = bytes_to_hex(decrypted_plaintext)
    decrypt_ok = decrypted_hex == vector.plaintext
    print(f"Plaintext:        {decrypted_hex}")
    if decrypt_ok:
        print(f"Plaintext matches {vector.name}")
    else:
        print(f"Plaintext does not match {vector.name}")

    return encrypt_ok and decrypt_ok


def _resolve_keys(args: argparse.Namespace) -> tuple[bytes, bytes]:
    if args.xts_key is not None:
        if args.key is not None or args.tweak_key is not None:
            raise ConfigurationError("--xts-key cannot be combined with --key/--tweak-key")
        return split_xts_key(parse_hex_key(args.xts_key, "--xts-key", XTS_KEY_SIZES))
    return parse_hex_key(args.key, "--key"), parse_hex_key(args.tweak_key, "--tweak-key")


def _run_transform(args: argparse.Namespace) -> int:
    key, tweak_key = _resolve_keys(args)
    data_unit_number = parse_data_unit_number(args.data_unit)
    try:
        data = hex_to_bytes(args.data)
    except ValueError as exc:
        raise XTSError("data must be valid hex") from exc

    direction = Direction.ENCRYPT if args.command == "encrypt" else Direction.DECRYPT
    engine = XTSEngine.from_keys(key, tweak_key, direction, args.data_unit_size)
    print(bytes_to_hex(engine.process_data_units(data, data_unit_number)))
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.log_level == "debug" else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "selftest":
        return 0 if run_vector(VECTOR_10) else 1

    try:
        return _run_transform(args)
    except XTSError as exc:
        print(f"{args.command} error: {exc}", file=sys.stderr)
        return 2
