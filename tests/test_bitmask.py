"""
Bitmask and floating-bit expansion tests.

Covers mask parsing (bit order, validation), the value-masking rule,
the address-floating rule, and the combination expander.
"""

import pytest
from mask_decoder.bitmask import Bitmask, MaskedAddress
from mask_decoder.config import MASK_ALL
from mask_decoder.expander import floating_combinations, floating_positions


EXAMPLE_MASK = "XXXXXXXXXXXXXXXXXXXXXXXXXXXXX1XXXX0X"
FLOAT_MASK = "000000000000000000000000000000X1001X"


# ─── Parsing ─────────────────────────────

class TestBitmaskParse:
    def test_rightmost_char_is_bit_zero(self):
        """Rightmost pattern character is bit 0."""
        m = Bitmask.parse("0" * 35 + "1")
        assert m.force_one_mask == 1
        assert m.float_or_pass_mask == 0

    def test_leftmost_char_is_bit_35(self):
        """Leftmost pattern character is bit 35."""
        m = Bitmask.parse("X" + "0" * 35)
        assert m.float_or_pass_mask == 1 << 35
        assert m.force_one_mask == 0

    def test_example_mask_fields(self):
        """Example mask: one forced 1 (bit 6), one forced 0 (bit 1)."""
        m = Bitmask.parse(EXAMPLE_MASK)
        assert m.force_one_mask == 0b1000000
        assert m.float_or_pass_mask == MASK_ALL & ~0b1000010

    def test_fields_are_disjoint(self):
        """Floating and force-one fields never share a bit."""
        m = Bitmask.parse(FLOAT_MASK)
        assert m.float_or_pass_mask & m.force_one_mask == 0

    def test_overlapping_fields_rejected(self):
        """Constructing overlapping fields raises ValueError."""
        with pytest.raises(ValueError):
            Bitmask(0b11, 0b10)

    def test_wrong_length(self):
        """Patterns other than 36 characters are rejected."""
        with pytest.raises(ValueError, match="36 characters"):
            Bitmask.parse("X" * 35)
        with pytest.raises(ValueError):
            Bitmask.parse("X" * 37)

    def test_invalid_character(self):
        """Lowercase x is not a valid mask character."""
        with pytest.raises(ValueError, match="invalid mask character"):
            Bitmask.parse("x" * 36)

    def test_str_renders_pattern(self):
        """str(mask) reproduces the parsed pattern."""
        for pattern in (EXAMPLE_MASK, FLOAT_MASK, "0" * 36, "1" * 36):
            assert str(Bitmask.parse(pattern)) == pattern

    def test_pass_through(self):
        """pass_through() is the all-X mask."""
        m = Bitmask.pass_through()
        assert str(m) == "X" * 36
        assert m.floating_count == 36

    def test_is_immutable(self):
        """Mask fields cannot be reassigned."""
        m = Bitmask.parse(EXAMPLE_MASK)
        with pytest.raises(AttributeError):
            m.force_one_mask = 0


# ─── Value masking ───────────────────────

class TestApplyToValue:
    def test_all_x_is_identity(self):
        """All-X mask leaves 36-bit values unchanged."""
        m = Bitmask.parse("X" * 36)
        for v in (0, 1, 11, 101, 0xFFFFFFFFF, 123456789):
            assert m.apply_to_value(v) == v

    def test_all_zero_clears(self):
        """All-0 mask clears every value."""
        m = Bitmask.parse("0" * 36)
        for v in (0, 1, 11, 0xFFFFFFFFF):
            assert m.apply_to_value(v) == 0

    def test_all_one_sets_36_bits(self):
        """All-1 mask sets all 36 bits."""
        m = Bitmask.parse("1" * 36)
        assert m.apply_to_value(0) == MASK_ALL

    def test_example_values(self):
        """Example mask: 11 -> 73, 101 -> 101, 0 -> 64."""
        m = Bitmask.parse(EXAMPLE_MASK)
        assert m.apply_to_value(11) == 73
        assert m.apply_to_value(101) == 101
        assert m.apply_to_value(0) == 64

    def test_bits_above_36_are_cleared(self):
        """Value bits above bit 35 do not survive masking."""
        m = Bitmask.parse("X" * 36)
        assert m.apply_to_value(1 << 40 | 5) == 5


# ─── Address floating ────────────────────

class TestMaskedAddress:
    def test_base_and_floating_bits(self):
        """Address 42 under X1001X: base 26, floating bits 5 and 0."""
        m = Bitmask.parse(FLOAT_MASK)
        masked = m.masked_base_address_and_floating_bits(42)
        assert masked.base_address == 26
        assert masked.floating_mask == 0b100001

    def test_zero_positions_pass_address_through(self):
        """'0' positions keep the address bits."""
        m = Bitmask.parse("0" * 36)
        masked = m.masked_base_address_and_floating_bits(0b101101)
        assert masked.base_address == 0b101101
        assert masked.floating_mask == 0

    def test_addresses(self):
        """Address 42 under X1001X expands to 26, 27, 58, 59."""
        m = Bitmask.parse(FLOAT_MASK)
        masked = m.masked_base_address_and_floating_bits(42)
        assert sorted(masked.addresses()) == [26, 27, 58, 59]

    def test_str(self):
        """MaskedAddress renders floating bits as X and base bits as 1."""
        masked = Bitmask.parse(FLOAT_MASK).masked_base_address_and_floating_bits(42)
        assert str(masked) == "000000000000000000000000000000X1101X"

    def test_no_floating_bits_single_address(self):
        """No floating bits yields only the base address."""
        masked = MaskedAddress(base_address=13, floating_mask=0)
        assert masked.addresses() == [13]


# ─── Expander ────────────────────────────

class TestFloatingCombinations:
    def test_no_floating_bits(self):
        """Empty floating mask yields the single combination 0."""
        assert floating_combinations(0) == [0]

    def test_two_bits(self):
        """Two floating bits yield four combinations."""
        assert sorted(floating_combinations(0b100001)) == [0, 1, 32, 33]

    @pytest.mark.parametrize("mask", [
        0b1, 0b1011, 0b1111000000, (1 << 35) | (1 << 17) | 1, 0x3FF,
    ])
    def test_count_distinct_and_contained(self, mask):
        """2**k distinct combinations, none outside the mask."""
        combos = floating_combinations(mask)
        assert len(combos) == 2 ** bin(mask).count("1")
        assert len(set(combos)) == len(combos)
        for c in combos:
            assert c & ~mask == 0

    def test_bits_beyond_width_ignored(self):
        """Floating bits at or above the width are ignored."""
        assert floating_combinations(1 << 40) == [0]
        assert sorted(floating_combinations((1 << 40) | 0b10)) == [0, 2]

    def test_positions(self):
        """floating_positions lists set bits LSB first."""
        assert floating_positions(0b100101) == [0, 2, 5]
