#!/usr/bin/env python3
"""
RC5 Command Line Interface

Encrypts and decrypts single RC5 blocks and prints magic constants.

Usage:
    rc5 encrypt --key HEX --block HEX [--word-size W] [--rounds R]
    rc5 decrypt --key HEX --block HEX [--word-size W] [--rounds R]
    rc5 constants --width W [--derive]
    rc5 selftest
    rc5 --version
    rc5 --help
"""

import argparse
import logging
import sys
from typing import List, Optional

from . import __version__
from .crypto.constants import derive, get_magic_constants
from .crypto.engine import RC5Engine
from .crypto.errors import CryptoError
from .crypto.word import SUPPORTED_WORD_SIZES

# (word_size, rounds, key, plaintext, ciphertext)
SELFTEST_VECTORS = [
    (32, 12, "000102030405060708090a0b0c0d0e0f", "0011223344556677", "2ddc149bcf088b9e"),
    (32, 12, "2bd6459f82c5b300952c49104881ff48", "ea024714ad5c4d84", "11e43b86d231ea64"),
]


class RC5CLI:
    """Main CLI application for RC5."""

    def run(self, args: List[str]) -> int:
        """Run the CLI with given arguments."""
        parser = self.create_parser()
        parsed = parser.parse_args(args)

        logging.basicConfig(
            level=logging.DEBUG if parsed.verbose else logging.WARNING,
            format="%(asctime)s %(name)s %(levelname)s: %(message)s",
        )

        if hasattr(parsed, 'func'):
            try:
                return parsed.func(parsed)
            except (CryptoError, ValueError) as e:
                print(f"Error: {e}", file=sys.stderr)
                return 1
        else:
            parser.print_help()
            return 0

    def create_parser(self) -> argparse.ArgumentParser:
        """Create the argument parser."""
        parser = argparse.ArgumentParser(
            prog="rc5",
            description="RC5 block cipher CLI",
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog="""
Examples:
    rc5 encrypt --key 000102030405060708090a0b0c0d0e0f --block 0011223344556677
    rc5 decrypt --key 000102030405060708090a0b0c0d0e0f --block 2ddc149bcf088b9e
    rc5 encrypt -w 16 -r 16 --key 0001020304050607 --block 00010203
    rc5 constants --width 64
    rc5 selftest
            """
        )

        parser.add_argument(
            '--version',
            action='version',
            version=f'RC5 Core v{__version__}'
        )
        parser.add_argument('--verbose', '-v', action='store_true',
                            help='Enable debug logging')

        subparsers = parser.add_subparsers(title='commands', dest='command')

        self.add_cipher_command(subparsers, 'encrypt', 'Encrypt one block', self.handle_encrypt)
        self.add_cipher_command(subparsers, 'decrypt', 'Decrypt one block', self.handle_decrypt)
        self.add_constants_command(subparsers)
        self.add_selftest_command(subparsers)

        return parser

    def add_cipher_command(self, subparsers, name: str, help_text: str, handler):
        """Add an encrypt or decrypt command to parser."""
        cmd = subparsers.add_parser(name, help=help_text)
        cmd.add_argument('--key', '-k', required=True, help='Key as hex')
        cmd.add_argument('--block', '-b', required=True, help='Two-word block as hex')
        cmd.add_argument('--word-size', '-w', type=int, default=32,
                         choices=SUPPORTED_WORD_SIZES, help='Word size in bits')
        cmd.add_argument('--rounds', '-r', type=int, default=12,
                         help='Number of rounds')
        cmd.set_defaults(func=handler)

    def add_constants_command(self, subparsers):
        """Add constants command to parser."""
        cmd = subparsers.add_parser('constants', help='Print magic constants P and Q')
        cmd.add_argument('--width', required=True, type=int, help='Word size in bits')
        cmd.add_argument('--derive', action='store_true',
                         help='Derive even if the width has precomputed constants')
        cmd.set_defaults(func=self.handle_constants)

    def add_selftest_command(self, subparsers):
        """Add selftest command to parser."""
        cmd = subparsers.add_parser('selftest', help='Run known-answer tests')
        cmd.set_defaults(func=self.handle_selftest)

    # Handlers

    def _engine(self, args, key: bytes) -> RC5Engine:
        return RC5Engine(
            word_size=args.word_size,
            num_rounds=args.rounds,
            key_size=len(key),
            cache_round_keys=False,
        )

    def handle_encrypt(self, args) -> int:
        """Handle encrypt command."""
        key = bytes.fromhex(args.key)
        block = bytes.fromhex(args.block)
        print(self._engine(args, key).encrypt(key, block).hex())
        return 0

    def handle_decrypt(self, args) -> int:
        """Handle decrypt command."""
        key = bytes.fromhex(args.key)
        block = bytes.fromhex(args.block)
        print(self._engine(args, key).decrypt(key, block).hex())
        return 0

    def handle_constants(self, args) -> int:
        """Handle constants command."""
        constants = derive(args.width) if args.derive else get_magic_constants(args.width)
        p_hex, q_hex = constants.to_hex()
        print(f"P{args.width} = {p_hex}")
        print(f"Q{args.width} = {q_hex}")
        return 0

    def handle_selftest(self, args) -> int:
        """Handle selftest command."""
        failures = 0

        for word_size, rounds, key_hex, pt_hex, ct_hex in SELFTEST_VECTORS:
            key = bytes.fromhex(key_hex)
            engine = RC5Engine(word_size, rounds, len(key), cache_round_keys=False)
            encrypted = engine.encrypt(key, bytes.fromhex(pt_hex)).hex()
            decrypted = engine.decrypt(key, bytes.fromhex(ct_hex)).hex()
            ok = encrypted == ct_hex and decrypted == pt_hex
            failures += not ok
            print(f"{'✓' if ok else '✗'} {engine.name} key={key_hex}")

        for width in (16, 32, 64):
            ok = derive(width) == get_magic_constants(width)
            failures += not ok
            print(f"{'✓' if ok else '✗'} magic constants for {width}-bit words")

        print(f"{failures} failure(s)" if failures else "All tests passed")
        return 1 if failures else 0


def main(argv: Optional[List[str]] = None) -> int:
    cli = RC5CLI()
    return cli.run(sys.argv[1:] if argv is None else argv)


if __name__ == "__main__":
    sys.exit(main())
