#!/usr/bin/env python3
"""
maskdec: Masked-Memory Decoder CLI

Usage:
    python maskdec.py <program.txt> [--strategy value|address|both]
                                    [--time] [--trace] [--dump] [--quiet]
                                    [--log-level LEVEL] [--log-file PATH]

Strategies:
    value    → part 1: the mask is applied to every written value
    address  → part 2: the mask is applied to the address; floating bits
               write the raw value to every combination
    both     → run both on independent decoders (default)

Examples:
    python maskdec.py input.txt
    python maskdec.py input.txt --strategy address --quiet
    python maskdec.py input.txt --time --verbose
    cat input.txt | python maskdec.py -
"""

import argparse
import logging
import sys
import os
import time
from pathlib import Path

# Allow running from project root or as module
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from mask_decoder import __version__, parse_program
from mask_decoder.config import STRATEGY_PROFILES, DEFAULT_STRATEGY, DEFAULT_LOG_LEVEL
from mask_decoder.decoder import DecodingStrategy, DecoderError, MemoryDecoder
from mask_decoder.log import setup_logging
from mask_decoder.parser import ParseError

log = logging.getLogger("mask_decoder.cli")


def _timed(enabled: bool, title: str, fn):
    """Run fn(); if enabled, report its execution time on stderr."""
    start = time.perf_counter()
    result = fn()
    if enabled:
        elapsed_ms = (time.perf_counter() - start) * 1000.0
        print(f"{title} execution time: {elapsed_ms:,.2f} ms", file=sys.stderr)
    return result


def _selected_profiles(name: str):
    if name == "both":
        names = sorted(STRATEGY_PROFILES, key=lambda n: STRATEGY_PROFILES[n]["part"])
    else:
        names = [name]
    return [(n, STRATEGY_PROFILES[n]) for n in names]


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="maskdec",
        description="Masked-memory decoder: run mask/mem programs and sum memory",
        epilog="Strategies: " + ", ".join(
            f"{n} ({p['description']})" for n, p in STRATEGY_PROFILES.items()),
    )
    parser.add_argument("input", help="Program file ('-' for stdin)")
    parser.add_argument("--strategy", default=DEFAULT_STRATEGY,
                        choices=list(STRATEGY_PROFILES.keys()) + ["both"],
                        help=f"Decoding strategy (default: {DEFAULT_STRATEGY})")
    parser.add_argument("--time", action="store_true",
                        help="Print execution time of each stage to stderr")
    parser.add_argument("--trace", action="store_true",
                        help="Print every executed command to stderr")
    parser.add_argument("--dump", action="store_true",
                        help="Print final memory contents (sorted by address) to stderr")
    parser.add_argument("--dump-limit", type=int, default=None, metavar="N",
                        help="With --dump, list at most N addresses")
    parser.add_argument("--quiet", "-q", action="store_true",
                        help="Print only the resulting numbers")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Shorthand for --log-level DEBUG")
    parser.add_argument("--log-level", default=DEFAULT_LOG_LEVEL,
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                        help=f"Console log level (default: {DEFAULT_LOG_LEVEL})")
    parser.add_argument("--log-file", type=Path, default=None,
                        help="Also write a DEBUG log to this file")
    parser.add_argument("--version", action="version",
                        version=f"maskdec {__version__}")

    args = parser.parse_args(argv)
    setup_logging("DEBUG" if args.verbose else args.log_level, log_file=args.log_file)

    # Read input
    try:
        if args.input == "-":
            source = sys.stdin.read()
        else:
            with open(args.input, "r", encoding="utf-8") as f:
                source = f.read()
    except FileNotFoundError:
        print(f"Error: File not found: {args.input}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error reading {args.input}: {e}", file=sys.stderr)
        return 1

    try:
        commands = _timed(args.time, "State loading", lambda: parse_program(source))
        log.info("Loaded %d commands from %s", len(commands), args.input)

        for name, profile in _selected_profiles(args.strategy):
            strategy = DecodingStrategy[profile["strategy"]]
            title = f"Part {profile['part']}"

            decoder = MemoryDecoder(strategy, trace=args.trace)
            total = _timed(args.time, title, lambda: decoder.run(commands))
            for line in decoder.get_trace():
                print(line, file=sys.stderr)
            if args.dump:
                print(f"── {title} memory ({len(decoder.memory)} addresses) ──",
                      file=sys.stderr)
                print(decoder.memory.dump(limit=args.dump_limit), file=sys.stderr)

            log.info("%s (%s): %d", title, name, total)
            if args.quiet:
                print(total)
            else:
                print(f"part {profile['part']}: {total}")

    except ParseError as e:
        print(f"Parse error: {e}", file=sys.stderr)
        return 1
    except DecoderError as e:
        print(f"Decoder error: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"Internal error: {e}", file=sys.stderr)
        if args.verbose:
            import traceback
            traceback.print_exc()
        return 2

    return 0


if __name__ == "__main__":
    sys.exit(main())
