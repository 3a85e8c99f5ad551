"""
Sparse memory store for the decoder.

Only addresses that have been written exist. Unwritten addresses read
as 0 and contribute nothing to the sum. The store is a plain dict keyed
by address; iteration order is not meaningful.
"""

from __future__ import annotations
from typing import Dict, ItemsView, Optional

from .config import VALUE_WIDTH

_SUM_MODULUS = 1 << VALUE_WIDTH


class SparseMemory:
    """Address → value map. Values are stored as given; masking is the
    decoder's job.
    """

    def __init__(self):
        self._mem: Dict[int, int] = {}

    # --- Core read/write ---

    def read(self, addr: int) -> int:
        """Read the value at ``addr``; unwritten addresses read as 0."""
        return self._mem.get(addr, 0)

    def write(self, addr: int, value: int):
        """Store ``value`` at ``addr``. The last write to an address wins."""
        self._mem[addr] = value

    def __getitem__(self, addr: int) -> int:
        return self.read(addr)

    def __setitem__(self, addr: int, value: int):
        self.write(addr, value)

    def __contains__(self, addr: int) -> bool:
        return addr in self._mem

    def __len__(self) -> int:
        return len(self._mem)

    def items(self) -> ItemsView[int, int]:
        return self._mem.items()

    def values_sum(self) -> int:
        """Sum of every stored value, as an unsigned 64-bit integer.

        The sum wraps modulo 2**64.
        """
        return sum(self._mem.values()) % _SUM_MODULUS

    # --- Dump ---

    def dump(self, limit: Optional[int] = None) -> str:
        """Sorted ``address: value`` listing for debugging."""
        addrs = sorted(self._mem)
        if limit is not None:
            addrs = addrs[:limit]
        return "\n".join(f"{addr:>11}: {self._mem[addr]}" for addr in addrs)
