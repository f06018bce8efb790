import os
import sys
import string
from dataclasses import dataclass, field
from itertools import dropwhile, islice, takewhile
from typing import Dict, Iterable, Iterator, Optional

# Marker that opens both the summary block and the per-symbol block.
IR_MARKER = "Ir"

_DIGITS = frozenset(string.digits)


@dataclass
class Run:
    """Annotations of one run of a binary.

    `symbols` maps a symbol name to its instruction count, in the order the
    symbols were first seen in the report.
    """
    name: str = ""
    total_ir: int = 0
    symbols: Dict[str, int] = field(default_factory=dict)

    def add_ir(self, symbol: str, ir: int) -> None:
        """Add an IR count for `symbol`.

        Inlining can spread one symbol over several files and lines, so the
        same name may show up more than once: counts are summed, never replaced.
        """
        self.symbols[symbol] = self.symbols.get(symbol, 0) + ir


def parse_count(word: str) -> int:
    """Fold the ASCII digits of `word` into an integer, ignoring everything else.

    Counts are printed with thousands separators (e.g. 14,418,621,168).
    A word without any digit yields 0.
    """
    value = 0
    for c in word:
        if c in _DIGITS:
            value = value * 10 + ord(c) - ord("0")
    return value


def parse_total_ir_line(line: str) -> int:
    words = line.split()
    return parse_count(words[0]) if words else 0


def parse_symbol_line(line: str):
    """Parse a per-symbol line into (symbol, ir).

    The line looks like:
        <ir> (xx.xx%)  <loc>:<sym> [<file>]
    with arbitrary spacing, including inside the percentage and inside <sym>
    (e.g. `<yaml_rust2::parser::Event as core::cmp::PartialEq>::eq`).
    """
    words = iter(line.split())
    ir = parse_count(next(words, ""))

    # Drop the percentage, up to and including the word that closes it.
    words = islice(dropwhile(lambda w: not w.endswith(")"), words), 1, None)
    loc = " ".join(takewhile(lambda w: not w.startswith("["), words))

    _, sep, symbol = loc.partition(":")
    return (symbol if sep else ""), ir


def _starts_with_digit(line: str) -> bool:
    stripped = line.strip()
    return bool(stripped) and stripped[0] in _DIGITS


def _skip_past_marker(lines: Iterator[str]) -> bool:
    """Advance `lines` past the next `Ir` line and the separator that follows it."""
    for line in lines:
        if line.startswith(IR_MARKER):
            next(lines, None)
            return True
    return False


def parse_annotate(lines: Iterable[str], name: str = "") -> Run:
    """Parse the output of `callgrind_annotate` into a `Run`.

    Malformed or truncated reports are not an error: whatever could be read
    is returned (possibly a run with a zero total and no symbol).
    """
    run = Run(name=name)
    lines = (line.rstrip("\r\n") for line in lines)

    if not _skip_past_marker(lines):
        print(f"Warning: No '{IR_MARKER}' summary found in run '{name}'. Treating it as empty.",
              file=sys.stderr)
        return run
    run.total_ir = parse_total_ir_line(next(lines, ""))

    if not _skip_past_marker(lines):
        return run
    for line in takewhile(_starts_with_digit, lines):
        symbol, ir = parse_symbol_line(line)
        run.add_ir(symbol, ir)

    return run


def parse_annotate_file(path: str, name: Optional[str] = None) -> Run:
    """Load a run from a `callgrind_annotate` output file.

    The run is named after the file unless `name` is given.
    """
    if name is None:
        name = os.path.basename(path)
    with open(path, "r", encoding="utf-8", errors="replace") as f:
        return parse_annotate(f, name)
