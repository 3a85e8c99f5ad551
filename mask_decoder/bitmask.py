"""
36-bit three-valued bitmask.

A mask line such as ``XXXXXXXXXXXXXXXXXXXXXXXXXXXXX1XXXX0X`` is stored
as two disjoint integer fields, leftmost character = bit 35:

    float_or_pass_mask   bit set where the pattern has 'X'
    force_one_mask       bit set where the pattern has '1'

Positions set in neither field were '0' in the pattern.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import List

from .config import MASK_WIDTH, MASK_ALL, MASK_ALPHABET
from .expander import floating_combinations


def _render(floating: int, ones: int, width: int = MASK_WIDTH) -> str:
    """Render two bit fields as a {0,1,X} pattern, MSB first."""
    chars = []
    for bit in range(width - 1, -1, -1):
        if (floating >> bit) & 1:
            chars.append("X")
        elif (ones >> bit) & 1:
            chars.append("1")
        else:
            chars.append("0")
    return "".join(chars)


@dataclass(frozen=True)
class MaskedAddress:
    """Base address plus the floating bits still to be enumerated."""
    base_address: int
    floating_mask: int

    def addresses(self) -> List[int]:
        """Every concrete address this masked address expands to."""
        return [self.base_address | c
                for c in floating_combinations(self.floating_mask)]

    def __str__(self) -> str:
        return _render(self.floating_mask, self.base_address)


@dataclass(frozen=True)
class Bitmask:
    float_or_pass_mask: int = MASK_ALL
    force_one_mask: int = 0

    def __post_init__(self):
        if self.float_or_pass_mask & self.force_one_mask:
            raise ValueError("floating and force-one bits overlap")

    @classmethod
    def parse(cls, pattern: str) -> Bitmask:
        """Build a mask from its 36-character textual form.

        Raises ValueError on a wrong length or a character outside {0,1,X}.
        """
        if len(pattern) != MASK_WIDTH:
            raise ValueError(
                f"mask must be {MASK_WIDTH} characters, got {len(pattern)}")

        floating = 0
        ones = 0
        bit = 1
        for ch in reversed(pattern):
            if ch not in MASK_ALPHABET:
                raise ValueError(f"invalid mask character {ch!r}")
            if ch == "X":
                floating |= bit
            elif ch == "1":
                ones |= bit
            bit <<= 1
        return cls(floating, ones)

    @classmethod
    def pass_through(cls) -> Bitmask:
        """All-'X' mask: values pass unchanged, every address bit floats."""
        return cls(MASK_ALL, 0)

    @property
    def floating_count(self) -> int:
        return bin(self.float_or_pass_mask).count("1")

    def apply_to_value(self, value: int) -> int:
        """Value-masking rule: X keeps the bit, 1 forces 1, 0 forces 0."""
        return (value & self.float_or_pass_mask) | self.force_one_mask

    def masked_base_address_and_floating_bits(self, address: int) -> MaskedAddress:
        """Address-floating rule.

        '1' positions are forced to 1, 'X' positions are cleared (to be
        filled in by expansion), '0' positions keep the address bit.
        """
        base = (address | self.force_one_mask) & ~self.float_or_pass_mask
        return MaskedAddress(base_address=base,
                             floating_mask=self.float_or_pass_mask)

    def __str__(self) -> str:
        return _render(self.float_or_pass_mask, self.force_one_mask)
