from typing import Iterator, List, NamedTuple, Tuple

import numpy as np
import pandas as pd

from .annotate import Run
from .options import ConfigError, SortBy, SortField, SortOrder


class Row(NamedTuple):
    """A symbol and its IR count for every run, in run order."""
    name: str
    counts: Tuple[int, ...]


def _empty_counts() -> pd.DataFrame:
    return pd.DataFrame(index=pd.Index([], dtype=object, name="symbol"))


class Records:
    """The annotation records of multiple runs.

    The comparison only makes sense if every run profiles the same binary
    (possibly at different stages of development).

    `counts` is a symbol x run table of IR counts: one row per symbol seen in
    any run (first-seen order until `sort` is called), one column per run,
    labelled with the run's position. A symbol missing from a run counts 0.
    """

    def __init__(self) -> None:
        # Names are only for display; they may be blank or repeated.
        self.run_names: List[str] = []
        self.run_totals: List[int] = []
        self.counts = _empty_counts()

    @property
    def n_runs(self) -> int:
        return len(self.run_names)

    def add_run(self, run: Run) -> None:
        """Append `run` as the last column."""
        self.assert_invariants()
        n_runs = self.n_runs

        column = pd.Series(list(run.symbols.values()), index=list(run.symbols.keys()), dtype=np.uint64)

        # New symbols go after the known ones, with a 0 for every previous run.
        known = self.counts.index
        new_symbols = [name for name in run.symbols if name not in known]
        if new_symbols:
            index = known.append(pd.Index(new_symbols, dtype=object))
            self.counts = self.counts.reindex(index, fill_value=0).astype(np.uint64)
            self.counts.index.name = "symbol"

        # Symbols this run did not hit get a 0.
        self.counts[n_runs] = column.reindex(self.counts.index, fill_value=0).astype(np.uint64)

        self.run_names.append(run.name)
        self.run_totals.append(run.total_ir)

        self.assert_invariants()

    def sort(self, by: SortBy) -> None:
        """Reorder the symbols. Ties keep their previous relative order.

        Descending order is the exact reverse of the ascending one.
        """
        n_runs = self.n_runs
        if by.field is SortField.COLUMN and by.column >= n_runs:
            raise ConfigError(f"Invalid column {by.column} (got {n_runs} columns)")
        if n_runs == 0:
            return

        if by.field is SortField.SYMBOL:
            self.counts = self.counts.sort_index(kind="stable")
        else:
            column = {
                SortField.FIRST_IR: 0,
                SortField.LAST_IR: n_runs - 1,
                SortField.COLUMN: by.column,
            }[by.field]
            self.counts = self.counts.sort_values(by=column, kind="stable")

        if by.order is SortOrder.DESCENDING:
            self.counts = self.counts.iloc[::-1]

    def rows(self) -> Iterator[Row]:
        for name, counts in zip(self.counts.index, self.counts.itertuples(index=False, name=None)):
            yield Row(name, tuple(int(ir) for ir in counts))

    def changed_mask(self) -> np.ndarray:
        """Boolean mask of the symbols whose IR count is not the same in every run."""
        values = self.counts.to_numpy(dtype=np.uint64)
        return (values != values[:, :1]).any(axis=1)

    def assert_invariants(self) -> None:
        """Check that every symbol has exactly one IR count per run.

        A failure here is a bug in `add_run`, not a problem with the input.
        """
        n_runs = self.n_runs
        assert len(self.run_totals) == n_runs, \
            f"Invalid # of total irs (got {len(self.run_totals)}, expected {n_runs})"
        assert list(self.counts.columns) == list(range(n_runs)), \
            f"Invalid # of runs for symbols (got {self.counts.shape[1]}, expected {n_runs})"
        assert self.counts.index.is_unique, "Duplicate symbols in records"
