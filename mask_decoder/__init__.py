"""
maskdec: Masked-Memory Decoder
==============================
Runs "set mask" / "write memory" programs against a sparse 36-bit
address space and reports the sum of the values left in memory, under
either of two decoding strategies.

Architecture:
    ┌───────────┐    ┌──────────┐    ┌───────────┐    ┌──────────────┐
    │ Program   │───>│  Parser  │───>│  Decoder  │───>│ SparseMemory │───> sum
    │ (lines)   │    │(commands)│    │ (strategy)│    │  (addr→val)  │
    └───────────┘    └──────────┘    └───────────┘    └──────────────┘
                                       │      │
                                  Bitmask   Expander (address floating only)

    - commands.py:  SetMask / WriteMemory dataclasses
    - parser.py:    Line parser → command list, ParseError
    - bitmask.py:   36-bit {0,1,X} mask, value and address rules
    - expander.py:  Every assignment of the floating bits
    - memory.py:    Dict-backed memory with watchpoints and snapshots
    - decoder.py:   Single-pass interpreter, DecodingStrategy
"""

__version__ = "0.1.0"

from typing import Dict, Iterable, List

from .commands import Command, SetMask, WriteMemory
from .bitmask import Bitmask, MaskedAddress
from .expander import floating_combinations
from .memory import SparseMemory
from .parser import Parser, ParseError, parse_lines, parse_text
from .decoder import (
    DecodingStrategy, DecoderError, MaskNotSetError, MemoryDecoder,
)


def parse_program(source: str) -> List[Command]:
    """Parse a whole program text into commands."""
    return parse_text(source)


def run_program(commands: Iterable[Command], strategy: DecodingStrategy) -> int:
    """Run commands on a fresh decoder and return the memory sum."""
    return MemoryDecoder(strategy).run(commands)


def run_value_masking(commands: Iterable[Command]) -> int:
    """Part 1: each write stores the masked value at its literal address."""
    return run_program(commands, DecodingStrategy.VALUE_MASKING)


def run_address_floating(commands: Iterable[Command]) -> int:
    """Part 2: each write stores the raw value at every floating address."""
    return run_program(commands, DecodingStrategy.ADDRESS_FLOATING)


def solve(source: str) -> Dict[DecodingStrategy, int]:
    """Parse once, then run both strategies independently."""
    commands = parse_program(source)
    return {strategy: run_program(commands, strategy)
            for strategy in DecodingStrategy}
