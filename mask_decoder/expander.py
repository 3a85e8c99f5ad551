"""
Floating-bit expansion.

Given a mask of floating bit positions, produce every 0/1 assignment of
exactly those positions. With k floating bits the result has 2**k
entries; all other bits are zero in every entry.
"""

from __future__ import annotations
from typing import List

from .config import MASK_WIDTH


def floating_positions(floating_mask: int, width: int = MASK_WIDTH) -> List[int]:
    """Bit indices set in ``floating_mask`` below ``width``, LSB first."""
    return [bit for bit in range(width) if (floating_mask >> bit) & 1]


def floating_combinations(floating_mask: int, width: int = MASK_WIDTH) -> List[int]:
    """Every assignment of the floating bits, as integers.

    Built by doubling: each new floating bit keeps the existing
    combinations and adds a copy of them with that bit set. Order is
    not part of the contract.
    """
    combos = [0]
    for bit in floating_positions(floating_mask, width):
        flag = 1 << bit
        combos += [c | flag for c in combos]
    return combos
