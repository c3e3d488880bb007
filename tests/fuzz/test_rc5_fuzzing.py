"""
Fuzz Tests for RC5 Core

This module contains property-based tests using hypothesis: round trips
for every word width, rotation identities and wrapping arithmetic.
"""

import pytest
import hypothesis.strategies as st
from hypothesis import given, settings, Verbosity

from rc5_core.crypto.engine import RC5Engine
from rc5_core.crypto.errors import BufferBoundsError, KeyLengthError
from rc5_core.crypto.word import SUPPORTED_WORD_SIZES, build


word_sizes = st.sampled_from(SUPPORTED_WORD_SIZES)
rounds = st.integers(min_value=1, max_value=32)
key_sizes = st.integers(min_value=1, max_value=64)


@st.composite
def engine_inputs(draw):
    """An engine configuration with a matching key and block."""
    word_size = draw(word_sizes)
    num_rounds = draw(rounds)
    key_size = draw(key_sizes)
    key = draw(st.binary(min_size=key_size, max_size=key_size))
    block = draw(st.binary(min_size=word_size // 4, max_size=word_size // 4))
    return RC5Engine(word_size, num_rounds, key_size, cache_round_keys=False), key, block


@st.composite
def words_with_width(draw):
    width = draw(word_sizes)
    value = draw(st.integers(min_value=0, max_value=2 ** width - 1))
    return build(width, value)


class TestEngineFuzzing:
    """Fuzz tests for the RC5 engine."""

    @given(inputs=engine_inputs())
    @settings(verbosity=Verbosity.quiet, max_examples=100, deadline=None)
    def test_roundtrip_fuzz(self, inputs):
        """decrypt(encrypt(block)) == block for every configuration."""
        engine, key, block = inputs
        ciphertext = engine.encrypt(key, block)
        assert len(ciphertext) == len(block)
        assert engine.decrypt(key, ciphertext) == block

    @given(inputs=engine_inputs())
    @settings(verbosity=Verbosity.quiet, max_examples=50, deadline=None)
    def test_deterministic_fuzz(self, inputs):
        engine, key, block = inputs
        assert engine.encrypt(key, block) == engine.encrypt(key, block)
        assert engine.key_expansion(key) == engine.key_expansion(key)

    @given(inputs=engine_inputs(), extra=st.integers(min_value=1, max_value=8))
    @settings(verbosity=Verbosity.quiet, max_examples=50, deadline=None)
    def test_bad_lengths_fuzz(self, inputs, extra):
        engine, key, block = inputs
        with pytest.raises(KeyLengthError):
            engine.encrypt(key + bytes(extra), block)
        with pytest.raises(BufferBoundsError):
            engine.encrypt(key, block[:-1])
        with pytest.raises(BufferBoundsError):
            engine.decrypt(key, block + bytes(extra))


class TestWordFuzzing:
    """Fuzz tests for word arithmetic."""

    @given(x=words_with_width(), amount=st.integers(min_value=0, max_value=2 ** 130))
    @settings(verbosity=Verbosity.quiet, max_examples=200)
    def test_rotate_inverse_fuzz(self, x, amount):
        assert x.rotate_right(amount).rotate_left(amount) == x
        assert x.rotate_left(amount).rotate_right(amount) == x

    @given(x=words_with_width())
    @settings(verbosity=Verbosity.quiet, max_examples=100)
    def test_rotate_by_width_fuzz(self, x):
        assert x.rotate_left(x.width) == x
        assert x.rotate_right(2 * x.width) == x

    @given(x=words_with_width(), data=st.data())
    @settings(verbosity=Verbosity.quiet, max_examples=200)
    def test_wraparound_fuzz(self, x, data):
        y = build(x.width, data.draw(st.integers(min_value=0, max_value=2 ** x.width - 1)))
        total = x + y
        assert 0 <= total.value <= 2 ** x.width - 1
        assert total.value == (x.value + y.value) % 2 ** x.width
        assert (total - y) == x
        assert (x - y).value == (x.value - y.value) % 2 ** x.width

    @given(x=words_with_width())
    @settings(verbosity=Verbosity.quiet, max_examples=100)
    def test_bytes_roundtrip_fuzz(self, x):
        data = x.to_le_bytes()
        assert len(data) == x.width // 8
        assert type(x).from_le_bytes(data) == x
