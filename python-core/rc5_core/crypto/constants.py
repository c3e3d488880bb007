"""
RC5 Core - Magic Constants.

RC5 seeds its round-key table with two odd constants per word width w:

    P_w = Odd((e - 2) * 2**w)
    Q_w = Odd((phi - 1) * 2**w)

The well-known widths are shipped precomputed in MAGIC_CONSTANTS. Any other
width (8 bits, or wider experimental widths such as 256 and 512) is derived
on demand from high-precision decimal expansions of e - 2 and phi - 1.

The derivation works on decimal digit strings throughout:

    1. double the seed fraction w times (long multiplication on its digits)
    2. keep the integer part
    3. convert that decimal integer to binary by repeated halving
    4. left-pad to w bits and force the last bit to 1
    5. group the bits into nibbles and map each one to a hex digit

Example Usage:
    >>> from rc5_core.crypto.constants import derive, get_magic_constants
    >>> derive(32).to_hex()
    ('B7E15163', '9E3779B9')
    >>> get_magic_constants(16).p == 0xB7E1
    True
"""

import functools
import logging
import math
from dataclasses import dataclass
from typing import Dict, Tuple

from .errors import ConfigurationError

logger = logging.getLogger(__name__)

# e - 2, from https://www.math.utah.edu/~pa/math/e.html
E_MINUS_2 = (
    "0.7182818284590452353602874713526624977572470936999595749669676277240766"
    "303535475945713821785251664274274663919320030599218174135966290435729003"
    "342952605956307381323286279434907632338298807531952510190115738341879307"
    "021540891499348841675092447614606680822648001684774118537423454424371075"
    "390777449920695517027618386062613313845830007520449338265602976067371132"
    "007093287091274437470472306969772093101416928368190255151086574637721112"
    "523897844250569536967707854499699679468644549059879316368892300987931277"
    "361782154249992295763514822082698951936680331825288693984964651058209392"
    "398294887933203625094431173012381970684161403970198376793206832823764648"
    "042953118023287825098194558153017567173613320698112509961818815930416903"
    "515988885193458072738667385894228792284998920868058257492796104841984443"
    "634632449684875602336248270419786232090021609"
)

# phi - 1, from http://www2.cs.arizona.edu/icon/oddsends/phi.htm
PHI_MINUS_1 = (
    "0.6180339887498948482045868343656381177203091798057628621354486227052604"
    "628189024497072072041893911374847540880753868917521266338622235369317931"
    "800607667263544333890865959395829056383226613199282902678806752087668925"
    "017116962070322210432162695486262963136144381497587012203408058879544547"
    "492461856953648644492410443207713449470495658467885098743394422125448770"
    "664780915884607499887124007652170575179788341662562494075890697040002812"
    "104276217711177780531531714101170466659914669798731761356006708748071013"
    "179523689427521948435305678300228785699782977834784587822891109762500302"
    "696156170025046433824377648610283831268330372429267526311653392473167111"
    "211588186385133162038400522216579128667529465490681131715993432359734949"
    "850904094762132229810172610705961164562990981629055520852479035240602017"
    "279974717534277759277862561943208275051312181562"
)

MAGIC_CONSTANTS: Dict[int, Tuple[int, int]] = {
    16: (0xB7E1, 0x9E37),
    32: (0xB7E15163, 0x9E3779B9),
    64: (0xB7E151628AED2A6B, 0x9E3779B97F4A7C15),
    128: (0xB7E151628AED2A6ABF7158809CF4F3C7, 0x9E3779B97F4A7C15F39CC0605CEDC835),
}

# Fraction digits kept back so truncation error never reaches the integer part.
_GUARD_DIGITS = 20

_SEED_DIGITS = min(len(E_MINUS_2), len(PHI_MINUS_1)) - len("0.")
MAX_DERIVABLE_WIDTH = int((_SEED_DIGITS - _GUARD_DIGITS) * math.log2(10)) // 8 * 8

_NIBBLES = {format(i, "04b"): "0123456789ABCDEF"[i] for i in range(16)}
_DIGITS = frozenset("0123456789")


@dataclass(frozen=True)
class MagicConstants:
    """
    The (P, Q) pair for one word width.

    Attributes:
        width: Word width in bits
        p: Odd((e - 2) * 2**width)
        q: Odd((phi - 1) * 2**width)
    """

    width: int
    p: int
    q: int

    def to_hex(self) -> Tuple[str, str]:
        digits = self.width // 4
        return (f"{self.p:0{digits}X}", f"{self.q:0{digits}X}")

    def as_tuple(self) -> Tuple[int, int]:
        return (self.p, self.q)


class BigDecimal:
    """
    Non-negative decimal number stored as a digit string.

    Holds at most one decimal point. Only the operations the derivation
    needs are provided: in-place multiplication by a small integer and
    truncation to the integer part.
    """

    def __init__(self, text: str):
        integer, dot, fraction = text.partition(".")
        if not integer or not set(integer) <= _DIGITS or not set(fraction) <= _DIGITS:
            raise ValueError(f"Not a decimal number: {text[:32]!r}")
        if dot and not fraction:
            raise ValueError(f"Missing fraction digits: {text[:32]!r}")
        self._text = text

    def __str__(self) -> str:
        return self._text

    def __repr__(self) -> str:
        return f"BigDecimal({self._text[:24]}{'...' if len(self._text) > 24 else ''})"

    def multiply(self, factor: int) -> None:
        """Multiply in place by a non-negative integer, keeping every fraction digit."""
        if factor < 0:
            raise ValueError("factor must be non-negative")

        integer, _, fraction = self._text.partition(".")
        scale = len(fraction)

        result = []
        carry = 0
        for ch in reversed(integer + fraction):
            carry, digit = divmod((ord(ch) - 48) * factor + carry, 10)
            result.append(chr(48 + digit))
        while carry:
            carry, digit = divmod(carry, 10)
            result.append(chr(48 + digit))

        product = "".join(reversed(result))
        if scale:
            integer, fraction = product[:-scale], product[-scale:]
        else:
            integer, fraction = product, ""

        integer = integer.lstrip("0") or "0"
        self._text = f"{integer}.{fraction}" if fraction else integer

    def truncate(self) -> str:
        """Integer part as a digit string. Does not change the value."""
        return self._text.partition(".")[0]


def _halve(digits: str) -> str:
    # Schoolbook division by two; the remainder moves to the next digit as 10.
    out = []
    remainder = 0
    for ch in digits:
        current = remainder * 10 + (ord(ch) - 48)
        out.append(chr(48 + current // 2))
        remainder = current % 2
    return "".join(out).lstrip("0") or "0"


def decimal_to_binary(digits: str) -> str:
    """
    Convert a non-negative decimal integer string to a binary digit string.

    Raises:
        ValueError: If digits is empty or contains non-decimal characters
    """
    if not digits or not set(digits) <= _DIGITS:
        raise ValueError(f"Not a decimal integer: {digits[:32]!r}")

    digits = digits.lstrip("0") or "0"
    if digits == "0":
        return "0"

    bits = []
    while digits != "0":
        bits.append("1" if (ord(digits[-1]) - 48) & 1 else "0")
        digits = _halve(digits)
    return "".join(reversed(bits))


def force_odd(bits: str) -> str:
    """Set the least significant bit of a binary digit string."""
    if not bits:
        return bits
    return bits[:-1] + "1"


def binary_to_hex(bits: str) -> str:
    """Map a binary digit string, whose length is a multiple of 4, to upper-case hex."""
    if len(bits) % 4:
        raise ValueError(f"Binary string length {len(bits)} is not a multiple of 4")
    try:
        return "".join(_NIBBLES[bits[i:i + 4]] for i in range(0, len(bits), 4))
    except KeyError as e:
        raise ValueError(f"Not a binary digit group: {e.args[0]!r}") from None


def _check_width(width: int) -> None:
    if not isinstance(width, int) or width <= 0 or width % 8 or width > MAX_DERIVABLE_WIDTH:
        logger.error(f"Cannot derive magic constants for width {width!r}")
        raise ConfigurationError(
            f"{width} word size is not supported for magic constant derivation",
            details={"word_size": width, "max_width": MAX_DERIVABLE_WIDTH},
        )


def _expand(seed: str, width: int) -> str:
    value = BigDecimal(seed)
    for _ in range(width):
        value.multiply(2)
    bits = decimal_to_binary(value.truncate()).rjust(width, "0")
    return binary_to_hex(force_odd(bits))


def derive_hex(width: int) -> Tuple[str, str]:
    """
    Derive P and Q for a word width as upper-case hex strings of width/4 digits.

    Raises:
        ConfigurationError: If width is not a positive multiple of 8 within
            MAX_DERIVABLE_WIDTH
    """
    _check_width(width)
    return _expand(E_MINUS_2, width), _expand(PHI_MINUS_1, width)


@functools.lru_cache(maxsize=None)
def derive(width: int) -> MagicConstants:
    """Derive the magic constants for a word width."""
    p_hex, q_hex = derive_hex(width)
    logger.debug(f"Derived P{width}={p_hex} Q{width}={q_hex}")
    return MagicConstants(width, int(p_hex, 16), int(q_hex, 16))


def get_magic_constants(width: int) -> MagicConstants:
    """
    Magic constants for a word width.

    Widths in MAGIC_CONSTANTS come from the table; any other width is
    derived once and memoized.
    """
    if width in MAGIC_CONSTANTS:
        return MagicConstants(width, *MAGIC_CONSTANTS[width])
    logger.debug(f"No precomputed magic constants for width {width}, deriving")
    return derive(width)
