"""
Command definitions for the masked-memory decoder.

The parser turns each program line into one of these nodes and the
decoder consumes them in order. The set is closed: ``Command`` is the
union of every kind the decoder knows how to execute.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Union


# ──────────────────────────────────────────────
# Base node
# ──────────────────────────────────────────────

@dataclass(frozen=True)
class CommandNode:
    """Base class for all commands. ``line`` is the 1-based source line."""
    line: int = 0


# ──────────────────────────────────────────────
# Commands
# ──────────────────────────────────────────────

@dataclass(frozen=True)
class SetMask(CommandNode):
    """``mask = <pattern>``: replaces the current mask."""
    pattern: str = ""

    def __str__(self) -> str:
        return f"mask = {self.pattern}"


@dataclass(frozen=True)
class WriteMemory(CommandNode):
    """``mem[address] = value``: a write through the current mask."""
    address: int = 0
    value: int = 0

    def __str__(self) -> str:
        return f"mem[{self.address}] = {self.value}"


Command = Union[SetMask, WriteMemory]
