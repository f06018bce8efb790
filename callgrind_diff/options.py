from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Sequence


class CallgrindDiffError(Exception):
    """Base class for errors reported to the user."""


class ConfigError(CallgrindDiffError, ValueError):
    """An option value, or a combination of options, is invalid."""


class NoInputError(CallgrindDiffError):
    """Nothing was given to compare."""


_COLUMN_PREFIX = "column"


def _parse_column(text: str, usage: str) -> int:
    number = text[len(_COLUMN_PREFIX):]
    if not number:
        raise ConfigError(f"{usage} needs a 0-index, e.g.: {usage}3 for the 4th column")
    if not (number.isascii() and number.isdigit()):
        raise ConfigError(f"Invalid column number: {number}")
    return int(number)


# --- Sorting ---

class SortField(Enum):
    SYMBOL = "symbol"
    FIRST_IR = "first-ir"
    LAST_IR = "last-ir"
    COLUMN = "column"


class SortOrder(Enum):
    ASCENDING = "+"
    DESCENDING = "-"


@dataclass(frozen=True)
class SortBy:
    """How to sort the rows. `column` is only set for `SortField.COLUMN`."""
    field: SortField = SortField.SYMBOL
    order: SortOrder = SortOrder.ASCENDING
    column: Optional[int] = None


def parse_sort_by(text: str) -> SortBy:
    """Parse `[+|-]symbol`, `[+|-]first-ir`, `[+|-]last-ir` or `[+|-]columnX`."""
    if not text:
        raise ConfigError("Empty sort-by value")

    order = SortOrder.ASCENDING
    if text[0] in "+-":
        order = SortOrder(text[0])
        text = text[1:]

    if text.startswith(_COLUMN_PREFIX):
        return SortBy(SortField.COLUMN, order, _parse_column(text, "sort-by=column"))
    if text in (SortField.SYMBOL.value, SortField.FIRST_IR.value, SortField.LAST_IR.value):
        return SortBy(SortField(text), order)
    raise ConfigError("Invalid sort-by. Accepted values are: symbol, first-ir, last-ir, columnX")


# --- Reference column ---

class RelativeMode(Enum):
    FIRST = "first"
    LAST = "last"
    PREVIOUS = "previous"
    COLUMN = "column"


@dataclass(frozen=True)
class RelativeTo:
    """Which column the other columns are compared to."""
    mode: RelativeMode = RelativeMode.FIRST
    column: Optional[int] = None


def parse_relative_to(text: str) -> RelativeTo:
    if text.startswith(_COLUMN_PREFIX):
        return RelativeTo(RelativeMode.COLUMN, _parse_column(text, "relative-to=column"))
    if text in (RelativeMode.FIRST.value, RelativeMode.LAST.value, RelativeMode.PREVIOUS.value):
        return RelativeTo(RelativeMode(text))
    raise ConfigError("Invalid relative-to. Accepted values are: first, last, previous, columnX")


# --- Cell contents ---

class Show(Enum):
    ALL = "all"
    IR_COUNT = "ircount"
    PERCENTAGE_DIFF = "percentagediff"
    IR_COUNT_DIFF = "ircountdiff"


SHOW_ALL_FIELDS = (Show.IR_COUNT_DIFF, Show.PERCENTAGE_DIFF, Show.IR_COUNT)


def parse_show(text: str) -> List[Show]:
    """Parse a comma-separated list of `Show` values. Blank items are ignored."""
    values = []
    for item in text.split(","):
        item = item.strip()
        if not item:
            continue
        try:
            values.append(Show(item))
        except ValueError:
            raise ConfigError(
                "Invalid show. Accepted values are: all, ircount, percentagediff, ircountdiff"
            ) from None
    return values


def sanitize_show(values: Sequence[Show]) -> List[Show]:
    """Expand `all` (or nothing) to every field, otherwise drop repeated values."""
    if not values or Show.ALL in values:
        return list(SHOW_ALL_FIELDS)
    unique = []
    for value in values:
        if value not in unique:
            unique.append(value)
    return unique


@dataclass
class DisplayConfig:
    """Everything the sorting and rendering steps need to know."""
    show_all: bool = False
    sort_by: SortBy = field(default_factory=SortBy)
    relative_to: RelativeTo = field(default_factory=RelativeTo)
    show: List[Show] = field(default_factory=lambda: list(SHOW_ALL_FIELDS))

    def __post_init__(self):
        self.show = sanitize_show(self.show)

    def check_columns(self, n_runs: int) -> None:
        """Reject column indices that do not exist once the runs are known."""
        if self.relative_to.mode is RelativeMode.COLUMN and self.relative_to.column >= n_runs:
            raise ConfigError(f"Invalid relative-to column {self.relative_to.column} (got {n_runs} columns)")
        if self.sort_by.field is SortField.COLUMN and self.sort_by.column >= n_runs:
            raise ConfigError(f"Invalid column {self.sort_by.column} (got {n_runs} columns)")
