"""
RC5 Core - Crypto Package.

Modules:
    word: Fixed-width words with wrapping arithmetic and rotations
    constants: Magic constants table and the decimal-string deriver
    engine: RC5 key expansion and single-block encryption/decryption
    errors: CryptoError and its subclasses

Usage:
    >>> from rc5_core.crypto import RC5Engine
    >>> engine = RC5Engine(word_size=64, num_rounds=24, key_size=24)
    >>> key = engine.generate_key()
    >>> ciphertext = engine.encrypt(key, bytes(16))
    >>> engine.decrypt(key, ciphertext) == bytes(16)
    True
"""

from .errors import CryptoError, ConfigurationError, KeyLengthError, BufferBoundsError
from .word import (
    Word,
    Word8,
    Word16,
    Word32,
    Word64,
    Word128,
    SUPPORTED_WORD_SIZES,
    build,
    word_type,
    bytes_to_words,
    words_to_bytes,
)
from .constants import (
    MAGIC_CONSTANTS,
    MAX_DERIVABLE_WIDTH,
    BigDecimal,
    MagicConstants,
    derive,
    derive_hex,
    get_magic_constants,
)
from .engine import RC5Config, RC5Engine, encrypt_block, decrypt_block

__all__ = [
    # Errors
    "CryptoError",
    "ConfigurationError",
    "KeyLengthError",
    "BufferBoundsError",
    # Words
    "Word",
    "Word8",
    "Word16",
    "Word32",
    "Word64",
    "Word128",
    "SUPPORTED_WORD_SIZES",
    "build",
    "word_type",
    "bytes_to_words",
    "words_to_bytes",
    # Magic constants
    "MAGIC_CONSTANTS",
    "MAX_DERIVABLE_WIDTH",
    "BigDecimal",
    "MagicConstants",
    "derive",
    "derive_hex",
    "get_magic_constants",
    # Engine
    "RC5Config",
    "RC5Engine",
    "encrypt_block",
    "decrypt_block",
]
