# RC5 Core
# Variable word width RC5 block cipher
#
# This package provides:
# - Fixed-width words with wrapping arithmetic (crypto.word)
# - Magic constant table and derivation (crypto.constants)
# - The RC5 engine (crypto.engine)
# - A command line driver (cli)

from .crypto import (
    CryptoError,
    ConfigurationError,
    KeyLengthError,
    BufferBoundsError,
    RC5Config,
    RC5Engine,
    encrypt_block,
    decrypt_block,
    derive,
    get_magic_constants,
)

__all__ = [
    'CryptoError',
    'ConfigurationError',
    'KeyLengthError',
    'BufferBoundsError',
    'RC5Config',
    'RC5Engine',
    'encrypt_block',
    'decrypt_block',
    'derive',
    'get_magic_constants',
]

__version__ = "1.0.0"
