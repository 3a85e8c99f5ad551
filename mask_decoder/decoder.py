"""
Memory decoder: executes a command list against sparse memory.

One decoder holds one current mask and one memory store. The decoding
strategy is chosen at construction and fixed for the decoder's life:

  VALUE_MASKING     mem[addr] = mask.apply_to_value(value)
  ADDRESS_FLOATING  mem[base | c] = value, for every combination c of
                    the mask's floating bits

Commands run strictly in order in a single pass. Build a fresh decoder
for every run; two strategies never share a decoder or its memory.
"""

from __future__ import annotations
import enum
import logging
from typing import Iterable, List, Optional

from .bitmask import Bitmask
from .commands import Command, SetMask, WriteMemory
from .memory import SparseMemory

log = logging.getLogger(__name__)


class DecodingStrategy(enum.Enum):
    VALUE_MASKING = "value"
    ADDRESS_FLOATING = "address"


class DecoderError(Exception):
    """Raised when the decoder cannot execute a command."""
    def __init__(self, message: str, command: Optional[Command] = None):
        self.command = command
        if command is not None and command.line:
            message = f"Line {command.line}: {message}"
        super().__init__(message)


class MaskNotSetError(DecoderError):
    """A memory write arrived before any mask was set."""


class MemoryDecoder:
    """Masked-memory interpreter.

    Usage:
        decoder = MemoryDecoder(DecodingStrategy.ADDRESS_FLOATING)
        decoder.run(parse_text(source))
        total = decoder.memory_values_sum()
    """

    def __init__(self, strategy: DecodingStrategy, trace: bool = False):
        self.strategy = strategy
        self.memory = SparseMemory()
        self.current_mask: Optional[Bitmask] = None
        self.executed = 0

        self._trace = trace
        self._trace_output: List[str] = []

    # ══════════════════════════════════════════════
    # Execution
    # ══════════════════════════════════════════════

    def run(self, commands: Iterable[Command]) -> int:
        """Execute every command in order and return the memory sum."""
        for command in commands:
            self.step(command)
        log.debug("%s: %d commands, %d addresses written",
                  self.strategy.name, self.executed, len(self.memory))
        return self.memory_values_sum()

    def step(self, command: Command):
        """Execute a single command."""
        if isinstance(command, SetMask):
            self.current_mask = Bitmask.parse(command.pattern)
        elif isinstance(command, WriteMemory):
            self._write(command)
        else:
            raise DecoderError(f"Unknown command type {type(command).__name__}")
        self.executed += 1

        if self._trace:
            self._trace_output.append(f"{self.executed:>6}  {command}")
            log.debug("exec %s", command)

    def _write(self, command: WriteMemory):
        mask = self.current_mask
        if mask is None:
            raise MaskNotSetError("memory write before any mask was set", command)

        if self.strategy is DecodingStrategy.VALUE_MASKING:
            self.memory[command.address] = mask.apply_to_value(command.value)
        elif self.strategy is DecodingStrategy.ADDRESS_FLOATING:
            masked = mask.masked_base_address_and_floating_bits(command.address)
            for addr in masked.addresses():
                self.memory[addr] = command.value
        else:
            raise DecoderError(f"Unknown strategy {self.strategy!r}", command)

    # ══════════════════════════════════════════════
    # Results
    # ══════════════════════════════════════════════

    def memory_values_sum(self) -> int:
        """Sum of all stored values, wrapped to unsigned 64 bits."""
        return self.memory.values_sum()

    def get_trace(self) -> List[str]:
        return list(self._trace_output)
