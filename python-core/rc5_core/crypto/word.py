"""
RC5 Core - Fixed-Width Words.

RC5 is defined over machine words of w bits. This module models a word as an
immutable unsigned integer whose width is part of its type: every supported
width has its own class (Word8 ... Word128), so operands of different widths
cannot be combined silently.

All arithmetic wraps modulo 2**w. Rotations reduce the amount modulo w exactly
once, in _rotation_amount(), so rotating by 0, by w, or by an amount much wider
than the word (a full word value, as RC5 does in its data-dependent rotations)
is always well defined.

Example Usage:
    >>> from rc5_core.crypto.word import build
    >>> a = build(16, 0x0001)
    >>> b = build(16, 0x0002)
    >>> a - b
    Word16(0xffff)
    >>> build(16, 0x7000).rotate_left(8)
    Word16(0x0070)
"""

from typing import ClassVar, Dict, Iterable, List, Type, Union

from .errors import ConfigurationError

SUPPORTED_WORD_SIZES = (8, 16, 32, 64, 128)


class Word:
    """
    Unsigned integer of a fixed bit width with wrapping arithmetic.

    Concrete widths are the subclasses below. Binary operators require both
    operands to have the same width; anything else raises TypeError.
    """

    __slots__ = ("_value",)

    WIDTH: ClassVar[int] = 0

    def __init__(self, value: int = 0):
        if not self.WIDTH:
            raise TypeError("Word is abstract, use build() or a sized subclass")
        self._value = int(value) & self.mask()

    @classmethod
    def mask(cls) -> int:
        return (1 << cls.WIDTH) - 1

    @classmethod
    def byte_size(cls) -> int:
        return cls.WIDTH // 8

    @classmethod
    def from_le_bytes(cls, data: bytes) -> "Word":
        if len(data) != cls.byte_size():
            raise ValueError(
                f"{cls.__name__} needs {cls.byte_size()} bytes, got {len(data)}"
            )
        return cls(int.from_bytes(data, "little"))

    @property
    def value(self) -> int:
        return self._value

    @property
    def width(self) -> int:
        return self.WIDTH

    def to_le_bytes(self) -> bytes:
        return self._value.to_bytes(self.byte_size(), "little")

    def _check(self, other: object) -> "Word":
        if not isinstance(other, Word):
            raise TypeError(f"Expected a Word, got {type(other).__name__}")
        if type(other) is not type(self):
            raise TypeError(
                f"Word width mismatch: {self.WIDTH} bits vs {other.WIDTH} bits"
            )
        return other

    # Arithmetic (mod 2**WIDTH)

    def add(self, other: "Word") -> "Word":
        other = self._check(other)
        return type(self)(self._value + other._value)

    def sub(self, other: "Word") -> "Word":
        other = self._check(other)
        return type(self)(self._value - other._value)

    __add__ = add
    __sub__ = sub

    # Bitwise

    def __and__(self, other: "Word") -> "Word":
        other = self._check(other)
        return type(self)(self._value & other._value)

    def __or__(self, other: "Word") -> "Word":
        other = self._check(other)
        return type(self)(self._value | other._value)

    def __xor__(self, other: "Word") -> "Word":
        other = self._check(other)
        return type(self)(self._value ^ other._value)

    # Shifts and rotations

    def shift_left(self, bits: int) -> "Word":
        """Plain (non-rotating) left shift; bits pushed past the top are lost."""
        if bits < 0:
            raise ValueError("shift amount must be non-negative")
        return type(self)(self._value << bits)

    def _rotation_amount(self, amount: Union["Word", int]) -> int:
        # Amount may be a Word of any width or an arbitrary int.
        return int(amount) % self.WIDTH

    def rotate_left(self, amount: Union["Word", int]) -> "Word":
        n = self._rotation_amount(amount)
        if n == 0:
            return self
        v = self._value
        return type(self)((v << n) | (v >> (self.WIDTH - n)))

    def rotate_right(self, amount: Union["Word", int]) -> "Word":
        n = self._rotation_amount(amount)
        if n == 0:
            return self
        v = self._value
        return type(self)((v >> n) | (v << (self.WIDTH - n)))

    # Comparison and conversion

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Word):
            return NotImplemented
        return type(other) is type(self) and other._value == self._value

    def __hash__(self) -> int:
        return hash((self.WIDTH, self._value))

    def __int__(self) -> int:
        return self._value

    def __index__(self) -> int:
        return self._value

    def __repr__(self) -> str:
        digits = self.WIDTH // 4
        return f"{type(self).__name__}(0x{self._value:0{digits}x})"


class Word8(Word):
    __slots__ = ()
    WIDTH = 8


class Word16(Word):
    __slots__ = ()
    WIDTH = 16


class Word32(Word):
    __slots__ = ()
    WIDTH = 32


class Word64(Word):
    __slots__ = ()
    WIDTH = 64


class Word128(Word):
    __slots__ = ()
    WIDTH = 128


_WORD_TYPES: Dict[int, Type[Word]] = {
    cls.WIDTH: cls for cls in (Word8, Word16, Word32, Word64, Word128)
}


def word_type(width: int) -> Type[Word]:
    """Return the Word class for a bit width."""
    try:
        return _WORD_TYPES[width]
    except (KeyError, TypeError):
        raise ConfigurationError(
            f"{width} word size is not supported",
            details={"word_size": width, "supported": list(SUPPORTED_WORD_SIZES)},
        ) from None


def build(width: int, value: int = 0) -> Word:
    """Build a Word of the given width, truncating value to width bits."""
    return word_type(width)(value)


def add(a: Word, b: Word) -> Word:
    return a.add(b)


def sub(a: Word, b: Word) -> Word:
    return a.sub(b)


def rotate_left(x: Word, amount: Union[Word, int]) -> Word:
    return x.rotate_left(amount)


def rotate_right(x: Word, amount: Union[Word, int]) -> Word:
    return x.rotate_right(amount)


def bytes_to_words(data: bytes, width: int) -> List[Word]:
    """
    Split data into little-endian words of the given width.

    Args:
        data: Byte string whose length is a multiple of width // 8
        width: Word width in bits

    Raises:
        ConfigurationError: If width is not supported
        ValueError: If data does not split evenly into words
    """
    cls = word_type(width)
    size = cls.byte_size()
    if len(data) % size:
        raise ValueError(
            f"{len(data)} bytes do not split into {size}-byte words"
        )
    return [cls.from_le_bytes(data[i:i + size]) for i in range(0, len(data), size)]


def words_to_bytes(words: Iterable[Word]) -> bytes:
    """Serialize words little-endian, one after another."""
    return b"".join(w.to_le_bytes() for w in words)
