import sys
from typing import List, Optional, Sequence, TextIO

from .options import ConfigError, DisplayConfig, RelativeMode, RelativeTo, Show
from .records import Records

# --- Layout constants ---

# Width of a percentage cell such as `+ 12.345%`: sign, 3 integral digits,
# dot, 3 decimals, `%`. Ratios of 1000x or more do not fit and are cut.
PERCENTDIFF_WIDTH = 9

# Name of the pseudo-symbol carrying the total IR of each run.
TOTAL_IR_ROW_NAME = "Total IR"

RED = "\x1b[31m"
GREEN = "\x1b[32m"
BOLD_RED = "\x1b[31;1m"
RESET = "\x1b[0m"


# --- Alignment helpers (truncate when the text is wider than the cell) ---

def right(s: str, width: int) -> str:
    return s[:width] if len(s) > width else s.rjust(width)


def left(s: str, width: int) -> str:
    return s[:width] if len(s) > width else s.ljust(width)


def centered(s: str, width: int) -> str:
    if len(s) > width:
        return s[:width]
    padding = width - len(s)
    return " " * (padding // 2) + s + " " * (padding // 2 + padding % 2)


def percent_diff(ir: int, reference_ir: int) -> float:
    """Percentage of change from `reference_ir` to `ir`, always positive.

    Anything coming from a zero reference counts as a 100% change.
    """
    if reference_ir == 0:
        return 100.0
    return abs(ir - reference_ir) * 100.0 / reference_ir


def resolve_references(relative_to: RelativeTo, n_runs: int) -> List[Optional[int]]:
    """Return, for each column, the index of the column it is compared to.

    `None` marks a reference column, shown as a raw IR count. When comparing
    to the previous column, the first column is the only reference.
    """
    if relative_to.mode is RelativeMode.PREVIOUS:
        return [None] + list(range(n_runs - 1))

    if relative_to.mode is RelativeMode.FIRST:
        reference = 0
    elif relative_to.mode is RelativeMode.LAST:
        reference = n_runs - 1
    else:
        reference = relative_to.column
        if reference >= n_runs:
            raise ConfigError(f"Invalid relative-to column {reference} (got {n_runs} columns)")
    return [None if i == reference else reference for i in range(n_runs)]


class Displayer:
    """Lays out `Records` as a table, one row per symbol.

    A row reads:
        <symbol> | <ir_ref> | <ir-diff> <%> <ir> | <ir-diff> <%> <ir> ...
    where each non-reference column shows the fields selected by `config.show`,
    in that order.
    """

    def __init__(self, config: DisplayConfig, records: Records, out: Optional[TextIO] = None) -> None:
        self.config = config
        self.records = records
        self.out = out if out is not None else sys.stdout

        if config.show_all:
            self.shown = [True] * len(records.counts)
        else:
            self.shown = records.changed_mask().tolist()

        self.references = resolve_references(config.relative_to, records.n_runs)
        self.max_symbol_width = self._max_symbol_width()
        self.max_total_ir_width = len(str(max(records.run_totals))) if records.run_totals else 1
        self.run_width = self._run_width()

    def _max_symbol_width(self) -> int:
        widths = [len(name) for name, shown in zip(self.records.counts.index, self.shown) if shown]
        return max(widths + [len(TOTAL_IR_ROW_NAME)])

    def _run_width(self) -> int:
        """Width of a non-reference column, between the ` | ` separators."""
        field_widths = {
            Show.IR_COUNT: self.max_total_ir_width,
            Show.IR_COUNT_DIFF: self.max_total_ir_width + 1,  # sign
            Show.PERCENTAGE_DIFF: PERCENTDIFF_WIDTH,
        }
        return sum(field_widths[x] for x in self.config.show) + len(self.config.show) - 1

    def column_width(self, i: int) -> int:
        return self.max_total_ir_width if self.references[i] is None else self.run_width

    def display(self) -> None:
        self.show_header()
        self.show_delimitation_line()
        self.show_total_ir_line()
        self.show_delimitation_line()
        for row, shown in zip(self.records.rows(), self.shown):
            if shown:
                self.show_row(row.name, row.counts)

    def _emit(self, parts: Sequence[str]) -> None:
        print("".join(parts), file=self.out)

    def show_header(self) -> None:
        parts = [left("Symbol", self.max_symbol_width)]
        for i, name in enumerate(self.records.run_names):
            parts.append(" | ")
            parts.append(centered(name, self.column_width(i)))
        self._emit(parts)

    def show_delimitation_line(self) -> None:
        parts = ["-" * self.max_symbol_width]
        for i in range(self.records.n_runs):
            parts.append("-+-")
            parts.append("-" * self.column_width(i))
        self._emit(parts)

    def show_total_ir_line(self) -> None:
        self.show_row(TOTAL_IR_ROW_NAME, self.records.run_totals)

    def show_row(self, name: str, irs: Sequence[int]) -> None:
        parts = [left(name, self.max_symbol_width)]
        for ir, reference in zip(irs, self.references):
            parts.append(" | ")
            if reference is None:
                parts.append(self.ir_cell(ir))
            else:
                parts.append(self.run_details(ir, irs[reference]))
        self._emit(parts)

    def run_details(self, ir: int, reference_ir: int) -> str:
        cells = []
        for x in self.config.show:
            if x is Show.IR_COUNT:
                cells.append(self.ir_cell(ir))
            elif x is Show.IR_COUNT_DIFF:
                cells.append(self.ir_diff_cell(ir, reference_ir))
            elif x is Show.PERCENTAGE_DIFF:
                cells.append(self.percent_diff_cell(ir, reference_ir))
        return " ".join(cells)

    def ir_cell(self, ir: int) -> str:
        return right(str(ir), self.max_total_ir_width)

    def ir_diff_cell(self, ir: int, reference_ir: int) -> str:
        diff = abs(ir - reference_ir)
        if diff == 0:
            return right("-", self.max_total_ir_width + 1)
        if ir > reference_ir:
            return f"{RED}+{right(str(diff), self.max_total_ir_width)}{RESET}"
        return f"{GREEN}-{right(str(diff), self.max_total_ir_width)}{RESET}"

    def percent_diff_cell(self, ir: int, reference_ir: int) -> str:
        if ir == reference_ir:
            return right("- ", PERCENTDIFF_WIDTH)
        percent = percent_diff(ir, reference_ir)
        if ir < reference_ir:
            return f"{GREEN}-{right(f'{percent:7.3f}%', PERCENTDIFF_WIDTH - 1)}{RESET}"
        if percent < 1000.0:
            return f"{RED}+{right(f'{percent:7.3f}%', PERCENTDIFF_WIDTH - 1)}{RESET}"
        # Orders of magnitude: show a ratio instead.
        ratio = percent / 100.0
        return f"{BOLD_RED}{right(f'{ratio:7.3f}x', PERCENTDIFF_WIDTH)}{RESET}"


def display(records: Records, config: DisplayConfig, out: Optional[TextIO] = None) -> None:
    """Write the comparison table of `records` to `out` (stdout by default)."""
    Displayer(config, records, out).display()
