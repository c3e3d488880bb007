"""
RC5 Core - Cipher Engine.

This module provides the RC5 block cipher for any supported word width. An
engine is configured once with RC5-w/r/b parameters (word size in bits,
number of rounds, key size in bytes) and then transforms exactly one block of
two words per call. There are no chaining modes: each call is single-block ECB.

The engine works in three steps:
    - Magic constants: P and Q for the word size, from the precomputed table
      or derived on demand (see constants.py)
    - Key expansion: the secret key is mixed into a round-key table S of
      2 * (r + 1) words
    - Block transform: r rounds of data-dependent rotations, additions and XORs

Round-key tables are pure functions of the key, so an engine may keep the
tables of recently used keys. The cache is keyed by the key bytes themselves,
holds immutable tuples and is guarded by a lock.

Example Usage:
    >>> from rc5_core.crypto import RC5Engine
    >>> engine = RC5Engine(word_size=32, num_rounds=12, key_size=16)
    >>> key = bytes(range(16))
    >>> engine.encrypt(key, bytes.fromhex("0011223344556677")).hex()
    '2ddc149bcf088b9e'
"""

import logging
import secrets
import threading
from dataclasses import asdict, dataclass
from typing import Any, Dict, List, Optional, Tuple

from .constants import get_magic_constants
from .errors import BufferBoundsError, ConfigurationError, KeyLengthError
from .word import Word, bytes_to_words, word_type, words_to_bytes

logger = logging.getLogger(__name__)

MAX_ROUNDS = 255
MAX_KEY_SIZE = 255
MAX_CACHED_KEYS = 64

RoundKeyTable = Tuple[Word, ...]


def div_ceil(numerator: int, divisor: int) -> int:
    return (numerator + divisor - 1) // divisor


@dataclass(frozen=True)
class RC5Config:
    """
    Parameters of an RC5-w/r/b engine.

    Attributes:
        word_size: Word width w in bits (8, 16, 32, 64 or 128)
        num_rounds: Number of rounds r
        key_size: Key length b in bytes
        magic_constants: Optional (P, Q) override; derived from word_size if None
        cache_round_keys: Keep expanded tables of recently used keys
    """

    word_size: int = 32
    num_rounds: int = 12
    key_size: int = 16
    magic_constants: Optional[Tuple[int, int]] = None
    cache_round_keys: bool = True

    @classmethod
    def default(cls) -> "RC5Config":
        """RC5-32/12/16, the parameters recommended by the RC5 paper."""
        return cls()

    @property
    def bytes_per_word(self) -> int:
        return self.word_size // 8

    @property
    def block_size(self) -> int:
        return 2 * self.bytes_per_word

    @property
    def table_size(self) -> int:
        return 2 * (self.num_rounds + 1)

    @property
    def key_words(self) -> int:
        return div_ceil(self.key_size, self.bytes_per_word)

    def validate(self) -> None:
        """
        Check the parameters.

        Raises:
            ConfigurationError: If any parameter is out of range
        """
        cls = word_type(self.word_size)

        if not isinstance(self.num_rounds, int) or not 1 <= self.num_rounds <= MAX_ROUNDS:
            raise ConfigurationError(
                f"Number of rounds must be between 1 and {MAX_ROUNDS}, got {self.num_rounds!r}",
                details={"num_rounds": self.num_rounds},
            )

        if not isinstance(self.key_size, int) or not 1 <= self.key_size <= MAX_KEY_SIZE:
            raise ConfigurationError(
                f"Key size must be between 1 and {MAX_KEY_SIZE} bytes, got {self.key_size!r}",
                details={"key_size": self.key_size},
            )

        if self.magic_constants is not None:
            if len(self.magic_constants) != 2:
                raise ConfigurationError(
                    "Magic constants must be a (P, Q) pair",
                    details={"magic_constants": self.magic_constants},
                )
            for name, value in zip("PQ", self.magic_constants):
                if not isinstance(value, int) or not 0 <= value <= cls.mask():
                    raise ConfigurationError(
                        f"Magic constant {name} does not fit in {self.word_size} bits",
                        details={name: value, "word_size": self.word_size},
                    )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class RC5Engine:
    """
    RC5 block cipher over one two-word block.

    The engine is immutable after construction apart from its round-key
    cache, so one instance can be shared between threads.

    Attributes:
        config: The RC5Config the engine was built from

    Example:
        >>> engine = RC5Engine(word_size=16, num_rounds=16, key_size=8)
        >>> key = engine.generate_key()
        >>> block = b"\\x00\\x01\\x02\\x03"
        >>> engine.decrypt(key, engine.encrypt(key, block)) == block
        True
    """

    def __init__(
        self,
        word_size: int = 32,
        num_rounds: int = 12,
        key_size: int = 16,
        magic_constants: Optional[Tuple[int, int]] = None,
        cache_round_keys: bool = True,
    ):
        """
        Initialize the engine.

        Args:
            word_size: Word width in bits
            num_rounds: Number of rounds
            key_size: Key length in bytes
            magic_constants: Optional (P, Q) override
            cache_round_keys: Cache expanded key tables per key

        Raises:
            ConfigurationError: If the parameters are not supported
        """
        config = RC5Config(
            word_size=word_size,
            num_rounds=num_rounds,
            key_size=key_size,
            magic_constants=tuple(magic_constants) if magic_constants is not None else None,
            cache_round_keys=cache_round_keys,
        )
        try:
            config.validate()
        except ConfigurationError as e:
            logger.error(f"Invalid RC5 configuration: {e.message}")
            raise

        self._config = config
        self._word = word_type(word_size)

        if config.magic_constants is not None:
            p, q = config.magic_constants
        else:
            p, q = get_magic_constants(word_size).as_tuple()
        self._p = self._word(p)
        self._q = self._word(q)

        self._cache: Dict[bytes, RoundKeyTable] = {}
        self._cache_lock = threading.Lock()

        logger.info(f"RC5 engine initialized: {self.name}")

    @classmethod
    def from_config(cls, config: RC5Config) -> "RC5Engine":
        return cls(
            word_size=config.word_size,
            num_rounds=config.num_rounds,
            key_size=config.key_size,
            magic_constants=config.magic_constants,
            cache_round_keys=config.cache_round_keys,
        )

    @property
    def config(self) -> RC5Config:
        return self._config

    @property
    def name(self) -> str:
        c = self._config
        return f"RC5-{c.word_size}/{c.num_rounds}/{c.key_size}"

    @property
    def magic_constants(self) -> Tuple[int, int]:
        return (self._p.value, self._q.value)

    @property
    def block_size(self) -> int:
        return self._config.block_size

    def generate_key(self) -> bytes:
        """Generate a random key of the configured size."""
        return secrets.token_bytes(self._config.key_size)

    # ------------------------------------------------------------------
    # Key schedule
    # ------------------------------------------------------------------

    def _check_key(self, key: bytes) -> bytes:
        if not isinstance(key, (bytes, bytearray, memoryview)):
            raise TypeError(f"key must be bytes-like, got {type(key).__name__}")
        key = bytes(key)
        if len(key) != self._config.key_size:
            logger.error(f"Key length mismatch for {self.name}: {len(key)} bytes")
            raise KeyLengthError(self._config.key_size, len(key))
        return key

    def _load_key(self, key: bytes) -> List[Word]:
        u = self._config.bytes_per_word
        words = [self._word(0)] * self._config.key_words
        for i in reversed(range(len(key))):
            words[i // u] = words[i // u].shift_left(8) + self._word(key[i])
        return words

    def key_expansion(self, key: bytes) -> RoundKeyTable:
        """
        Expand a secret key into the round-key table S.

        Args:
            key: Exactly key_size bytes

        Returns:
            Tuple of 2 * (num_rounds + 1) words

        Raises:
            KeyLengthError: If key has the wrong length
        """
        key = self._check_key(key)

        if self._config.cache_round_keys:
            with self._cache_lock:
                table = self._cache.get(key)
            if table is not None:
                logger.debug(f"Round-key cache hit for {self.name}")
                return table

        table = self._expand(key)

        if self._config.cache_round_keys:
            with self._cache_lock:
                if key not in self._cache and len(self._cache) >= MAX_CACHED_KEYS:
                    del self._cache[next(iter(self._cache))]
                self._cache[key] = table

        return table

    def _expand(self, key: bytes) -> RoundKeyTable:
        t = self._config.table_size
        L = self._load_key(key)
        c = len(L)

        S = [self._p]
        for i in range(1, t):
            S.append(S[i - 1] + self._q)

        A = B = self._word(0)
        i = j = 0
        for _ in range(3 * max(t, c)):
            A = S[i] = (S[i] + A + B).rotate_left(3)
            B = L[j] = (L[j] + A + B).rotate_left(A + B)
            i = (i + 1) % t
            j = (j + 1) % c

        logger.debug(f"Expanded {self.name} key into {t} round keys")
        return tuple(S)

    def clear_round_key_cache(self) -> None:
        with self._cache_lock:
            self._cache.clear()

    # ------------------------------------------------------------------
    # Block transform
    # ------------------------------------------------------------------

    def _load_block(self, block: bytes) -> List[Word]:
        if not isinstance(block, (bytes, bytearray, memoryview)):
            raise TypeError(f"block must be bytes-like, got {type(block).__name__}")
        block = bytes(block)
        if len(block) != self._config.block_size:
            logger.error(f"Block length mismatch for {self.name}: {len(block)} bytes")
            raise BufferBoundsError(self._config.block_size, len(block))
        return bytes_to_words(block, self._config.word_size)

    def encrypt(self, key: bytes, plaintext: bytes) -> bytes:
        """
        Encrypt one block.

        Args:
            key: Exactly key_size bytes
            plaintext: Exactly two words (block_size bytes), little-endian

        Returns:
            The ciphertext block

        Raises:
            KeyLengthError: If key has the wrong length
            BufferBoundsError: If plaintext is not one block long
        """
        S = self.key_expansion(key)
        A, B = self._load_block(plaintext)

        A = A + S[0]
        B = B + S[1]
        for i in range(1, self._config.num_rounds + 1):
            A = (A ^ B).rotate_left(B) + S[2 * i]
            B = (B ^ A).rotate_left(A) + S[2 * i + 1]

        return words_to_bytes((A, B))

    def decrypt(self, key: bytes, ciphertext: bytes) -> bytes:
        """
        Decrypt one block. Inverse of encrypt().

        Raises:
            KeyLengthError: If key has the wrong length
            BufferBoundsError: If ciphertext is not one block long
        """
        S = self.key_expansion(key)
        A, B = self._load_block(ciphertext)

        for i in range(self._config.num_rounds, 0, -1):
            B = (B - S[2 * i + 1]).rotate_right(A) ^ A
            A = (A - S[2 * i]).rotate_right(B) ^ B
        B = B - S[1]
        A = A - S[0]

        return words_to_bytes((A, B))

    def get_engine_info(self) -> Dict[str, Any]:
        """Describe the engine configuration."""
        p_hex, q_hex = (f"{v:0{self._config.word_size // 4}X}" for v in self.magic_constants)
        with self._cache_lock:
            cached = len(self._cache)
        return {
            "algorithm": self.name,
            "word_size": self._config.word_size,
            "num_rounds": self._config.num_rounds,
            "key_size": self._config.key_size,
            "block_size": self._config.block_size,
            "magic_constant_p": p_hex,
            "magic_constant_q": q_hex,
            "cache_round_keys": self._config.cache_round_keys,
            "cached_keys": cached,
        }


def encrypt_block(key: bytes, block: bytes, word_size: int = 32, num_rounds: int = 12) -> bytes:
    """One-shot encryption; the key size is taken from len(key)."""
    engine = RC5Engine(word_size, num_rounds, len(key), cache_round_keys=False)
    return engine.encrypt(key, block)


def decrypt_block(key: bytes, block: bytes, word_size: int = 32, num_rounds: int = 12) -> bytes:
    """One-shot decryption; the key size is taken from len(key)."""
    engine = RC5Engine(word_size, num_rounds, len(key), cache_round_keys=False)
    return engine.decrypt(key, block)
