"""callgrind_annotate outputs shared by the tests."""

HEADER = """\
--------------------------------------------------------------------------------
Profile data file 'callgrind.out.4242' (creator: callgrind-3.22.0)
--------------------------------------------------------------------------------
I1 cache:
D1 cache:
LL cache:
Timerange: Basic block 0 - 2901783
Trigger: Program termination
Profiled target:  ./target/release/app (PID: 4242, part: 1)
Events recorded:  Ir
Events shown:     Ir
Event sort order: Ir
Thresholds:       99
Include dirs:
User annotated:
Auto-annotation:  on

"""


def report(total, symbol_lines):
    return (
        HEADER
        + "--------------------------------------------------------------------------------\n"
        + "Ir                 \n"
        + "--------------------------------------------------------------------------------\n"
        + f"{total} (100.0%)  PROGRAM TOTALS\n"
        + "\n"
        + "--------------------------------------------------------------------------------\n"
        + "Ir                      file:function\n"
        + "--------------------------------------------------------------------------------\n"
        + "".join(line + "\n" for line in symbol_lines)
        + "\n"
        + "--------------------------------------------------------------------------------\n"
        + "-- Auto-annotated source: src/main.rs\n"
        + "--------------------------------------------------------------------------------\n"
        + "  No information has been collected for src/main.rs\n"
    )


BASELINE = report("14,418,621,168", [
    "8,000,000,000 (55.48%)  ???:memcpy [/usr/lib/libc.so.6]",
    "3,000,000,000 (20.81%)  src/parser.rs:yaml::parser::Parser::next [/bin/app]",
    "2,000,000,000 (13.87%)  src/lib.rs:<yaml::parser::Event as core::cmp::PartialEq>::eq [/bin/app]",
    "1,000,000,000 ( 6.94%)  src/scanner.rs:yaml::parser::Parser::next [/bin/app]",
    "      418,621 ( 0.00%)  src/main.rs:app::main [/bin/app]",
])
