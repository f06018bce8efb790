import argparse
import os
import sys
from typing import List, Optional, Sequence

from .annotate import parse_annotate_file
from .display import display
from .options import (
    CallgrindDiffError,
    ConfigError,
    DisplayConfig,
    NoInputError,
    SortBy,
    RelativeTo,
    parse_relative_to,
    parse_show,
    parse_sort_by,
)
from .records import Records


def _argument_type(parse):
    """Turn a `ConfigError` raised by `parse` into an argparse usage error."""
    def wrapper(text):
        try:
            return parse(text)
        except ConfigError as e:
            raise argparse.ArgumentTypeError(str(e)) from None
    wrapper.__name__ = parse.__name__
    return wrapper


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="callgrind-diff",
        description="Compare the instruction counts of several callgrind_annotate outputs.",
    )
    parser.add_argument("inputs", nargs="*",
                        help="callgrind_annotate output files, one column each, in the given order")
    parser.add_argument("-a", "--all", action="store_true",
                        help="Show all lines, even those without a change")
    parser.add_argument("--sort-by", type=_argument_type(parse_sort_by), default=SortBy(),
                        help="[+|-]FIELD with FIELD one of: symbol (default), first-ir, last-ir, columnX "
                             "(0-indexed). A leading '-' sorts in descending order")
    parser.add_argument("--relative-to", type=_argument_type(parse_relative_to), default=RelativeTo(),
                        help="Reference column for the diffs: first (default), last, previous, columnX")
    parser.add_argument("--show", type=_argument_type(parse_show), action="extend", default=[],
                        help="Comma-separated fields shown for each column: ircount, percentagediff, "
                             "ircountdiff, all (default: ircountdiff,percentagediff,ircount)")
    parser.add_argument("--names", type=lambda s: [name.strip() for name in s.split(",")], default=None,
                        help="Comma-separated run names, one per input (default: the file names)")
    parser.add_argument("--csv-export", default="", help="Not supported")
    parser.add_argument("--export-graph", default="", help="Not supported")
    return parser


def config_from_args(args: argparse.Namespace) -> DisplayConfig:
    """Check the option combinations that argparse cannot check on its own."""
    if args.csv_export:
        raise ConfigError("--csv-export is not supported")
    if args.export_graph:
        raise ConfigError("--export-graph is not supported")
    if not args.inputs:
        raise NoInputError("No input file")
    for path in args.inputs:
        if os.path.splitext(path)[1].lower() == ".csv":
            raise ConfigError(f"CSV inputs are not supported: {path}")
    if args.names is not None and len(args.names) != len(args.inputs):
        raise ConfigError(f"Mismatch between `names` count {len(args.names)} "
                          f"and number of callgrind files {len(args.inputs)}")

    return DisplayConfig(
        show_all=args.all,
        sort_by=args.sort_by,
        relative_to=args.relative_to,
        show=args.show,
    )


def inputs_to_records(inputs: Sequence[str], names: Optional[Sequence[str]] = None) -> Records:
    """Parse every input, in order, into one column of a `Records`."""
    records = Records()
    for i, path in enumerate(inputs):
        records.add_run(parse_annotate_file(path, names[i] if names else None))
    return records


def run(config: DisplayConfig, records: Records, out=None) -> None:
    if records.n_runs == 0:
        raise NoInputError("No input run")
    config.check_columns(records.n_runs)
    records.sort(config.sort_by)
    display(records, config, out)


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        config = config_from_args(args)
        records = inputs_to_records(args.inputs, args.names)
        run(config, records)
    except (CallgrindDiffError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
