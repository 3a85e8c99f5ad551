"""
Line parser for mask/memory programs.

Turns raw program lines into a list of commands from ``commands``.
Two line shapes are accepted:

  mask = <36 characters of 0, 1, X>
  mem[<address>] = <value>

Anything else is a ParseError naming the offending line. The parser
checks syntax only; address ranges are not validated.
"""

from __future__ import annotations
import logging
import re
from typing import Iterable, List

from .commands import Command, SetMask, WriteMemory
from .bitmask import Bitmask
from .config import MASK_KEYWORD, MEM_KEYWORD, ASSIGN_TOKEN, VALUE_MAX

log = logging.getLogger(__name__)


_MASK_RE = re.compile(rf'^{MASK_KEYWORD}{ASSIGN_TOKEN}(?P<pattern>.*)$')
_MEM_RE = re.compile(
    rf'^{MEM_KEYWORD}\[(?P<address>[^\]]*)\]{ASSIGN_TOKEN}(?P<value>.*)$')
_UINT_RE = re.compile(r'^[0-9]+$')

# Decimal digits of 2**64 - 1; anything longer cannot be an address or value
_MAX_DIGITS = len(str(VALUE_MAX))


class ParseError(Exception):
    def __init__(self, message: str, line_num: int = 0, line_text: str = ""):
        self.line_num = line_num
        self.line_text = line_text
        loc = f"Line {line_num}: " if line_num else ""
        super().__init__(f"{loc}{message} ({line_text!r})")


class Parser:
    """Parses program lines into an ordered command list."""

    def __init__(self, lines: Iterable[str]):
        self.lines = list(lines)

    def parse(self) -> List[Command]:
        """Parse every line. Fails on the first bad line; no partial result."""
        commands: List[Command] = []
        for line_num, raw in enumerate(self.lines, start=1):
            commands.append(self._parse_line(raw.strip(), line_num))
        log.debug("parsed %d commands", len(commands))
        return commands

    # ── Line shapes ───────────────────────────

    def _parse_line(self, text: str, line_num: int) -> Command:
        if text.startswith(MASK_KEYWORD):
            return self._parse_mask(text, line_num)
        if text.startswith(MEM_KEYWORD):
            return self._parse_write(text, line_num)
        raise ParseError("Expected 'mask = ...' or 'mem[...] = ...'", line_num, text)

    def _parse_mask(self, text: str, line_num: int) -> SetMask:
        m = _MASK_RE.match(text)
        if not m:
            raise ParseError("Malformed mask command", line_num, text)
        pattern = m.group("pattern")
        try:
            Bitmask.parse(pattern)
        except ValueError as e:
            raise ParseError(f"Invalid mask: {e}", line_num, text) from e
        return SetMask(line=line_num, pattern=pattern)

    def _parse_write(self, text: str, line_num: int) -> WriteMemory:
        m = _MEM_RE.match(text)
        if not m:
            raise ParseError("Malformed memory write", line_num, text)
        address = self._parse_uint(m.group("address"), "address", line_num, text)
        value = self._parse_uint(m.group("value"), "value", line_num, text)
        if value > VALUE_MAX:
            raise ParseError("Value does not fit in 64 bits", line_num, text)
        return WriteMemory(line=line_num, address=address, value=value)

    @staticmethod
    def _parse_uint(token: str, what: str, line_num: int, text: str) -> int:
        if not _UINT_RE.match(token):
            raise ParseError(f"Non-numeric {what} {token!r}", line_num, text)
        if len(token.lstrip("0")) > _MAX_DIGITS:
            raise ParseError(f"{what.capitalize()} does not fit in 64 bits",
                             line_num, text)
        try:
            return int(token)
        except ValueError as e:
            raise ParseError(f"Invalid {what}: {e}", line_num, text) from e


def parse_lines(lines: Iterable[str]) -> List[Command]:
    """Parse program lines into commands."""
    return Parser(lines).parse()


def parse_text(source: str) -> List[Command]:
    """Parse a whole program text. A final trailing newline is allowed."""
    lines = source.splitlines()
    return parse_lines(lines)
