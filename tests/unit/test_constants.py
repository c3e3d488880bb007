"""
Unit Tests for RC5 Magic Constants

This module tests the decimal digit-string arithmetic behind the magic
constant derivation and checks derived constants against the published
values for 16, 32, 64 and 128-bit words.
"""

import pytest

from rc5_core.crypto.constants import (
    MAGIC_CONSTANTS,
    MAX_DERIVABLE_WIDTH,
    BigDecimal,
    MagicConstants,
    binary_to_hex,
    decimal_to_binary,
    derive,
    derive_hex,
    force_odd,
    get_magic_constants,
)
from rc5_core.crypto.errors import ConfigurationError


class TestBigDecimal:
    """Test cases for BigDecimal."""

    def test_multiply(self):
        value = BigDecimal("123456789000000000000000000000000000000000000011111111111111111111111.0")
        value.multiply(20)
        assert str(value) == "2469135780000000000000000000000000000000000000222222222222222222222220.0"

    def test_multiply_carries_into_integer_part(self):
        value = BigDecimal("0.75")
        value.multiply(2)
        assert str(value) == "1.50"
        value.multiply(2)
        assert str(value) == "3.00"

    def test_multiply_by_zero(self):
        value = BigDecimal("123456789000000000000000000000000000000000000011111111111111111111111")
        value.multiply(0)
        assert str(value) == "0"

    def test_truncate(self):
        value = BigDecimal("0.7182818284")
        assert value.truncate() == "0"
        for _ in range(8):
            value.multiply(2)
        # 0.7182818284 * 256 = 183.88...
        assert value.truncate() == "183"
        assert str(value).startswith("183.")

    @pytest.mark.parametrize("text", ["", ".5", "1.", "1.2.3", "12a", "-1"])
    def test_invalid(self, text):
        with pytest.raises(ValueError):
            BigDecimal(text)

    def test_negative_factor(self):
        with pytest.raises(ValueError):
            BigDecimal("1.0").multiply(-2)


class TestBinaryConversion:
    """Test cases for the decimal to binary to hex pipeline."""

    @pytest.mark.parametrize("decimal,binary", [
        ("0", "0"),
        ("1", "1"),
        ("7", "111"),
        ("10", "1010"),
        ("0012", "1100"),
        ("47073", "1011011111100001"),
    ])
    def test_decimal_to_binary(self, decimal, binary):
        assert decimal_to_binary(decimal) == binary

    def test_decimal_to_binary_large(self):
        """Halving a digit string carries remainders through every digit."""
        value = 2 ** 200 + 12345
        assert decimal_to_binary(str(value)) == format(value, "b")

    @pytest.mark.parametrize("digits", ["", "1.5", "x1"])
    def test_decimal_to_binary_invalid(self, digits):
        with pytest.raises(ValueError):
            decimal_to_binary(digits)

    def test_force_odd(self):
        assert force_odd("100") == "101"
        assert force_odd("11") == "11"
        assert force_odd("") == ""

    def test_binary_to_hex(self):
        assert binary_to_hex("1111") == "F"
        assert binary_to_hex("1011011111100001") == "B7E1"

    def test_binary_to_hex_invalid(self):
        with pytest.raises(ValueError):
            binary_to_hex("101")
        with pytest.raises(ValueError):
            binary_to_hex("10a1")


class TestDerivation:
    """Test cases for derive and get_magic_constants."""

    def test_derive_32(self):
        constants = derive(32)
        assert (constants.p, constants.q) == (0xB7E15163, 0x9E3779B9)

    def test_derive_64(self):
        assert derive(64).as_tuple() == (0xB7E151628AED2A6B, 0x9E3779B97F4A7C15)

    @pytest.mark.parametrize("width", sorted(MAGIC_CONSTANTS))
    def test_derive_matches_table(self, width):
        assert derive(width).as_tuple() == MAGIC_CONSTANTS[width]

    def test_derive_8(self):
        assert derive(8).as_tuple() == (0xB7, 0x9F)

    def test_derive_hex(self):
        assert derive_hex(16) == ("B7E1", "9E37")
        assert derive_hex(128) == ("B7E151628AED2A6ABF7158809CF4F3C7", "9E3779B97F4A7C15F39CC0605CEDC835")

    @pytest.mark.parametrize("width", [256, 512])
    def test_derive_wide(self, width):
        """Wide constants extend the narrower ones and stay odd."""
        p_hex, q_hex = derive_hex(width)
        assert len(p_hex) == len(q_hex) == width // 4
        assert p_hex.startswith("B7E151628AED2A6ABF7158809CF4F3C")
        assert q_hex.startswith("9E3779B97F4A7C15F39CC0605CEDC83")
        assert int(p_hex, 16) % 2 == 1
        assert int(q_hex, 16) % 2 == 1

    @pytest.mark.parametrize("width", [0, -8, 12, MAX_DERIVABLE_WIDTH + 8])
    def test_unsupported_width(self, width):
        with pytest.raises(ConfigurationError):
            derive_hex(width)

    def test_get_magic_constants_table(self):
        constants = get_magic_constants(16)
        assert constants == MagicConstants(16, 0xB7E1, 0x9E37)
        assert constants.to_hex() == ("B7E1", "9E37")

    def test_get_magic_constants_derived(self):
        """Widths outside the table fall back to derivation."""
        assert 8 not in MAGIC_CONSTANTS
        assert get_magic_constants(8) == MagicConstants(8, 0xB7, 0x9F)
