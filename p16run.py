#!/usr/bin/env python3
"""
p16run - Pullet16 Interpreter CLI

Usage:
    python p16run.py <program.txt> [-d data.txt] [-o output.txt]
                     [--max-steps N] [--strict-zero] [--listing] [--dump]
                     [--log-file run.log] [-v | -vv]

The program file holds one 16-bit word per line as a bit string.
The data file holds one signed hex literal per line (+0005, -001F, ...),
consumed by RD. WRT records go to --output, or stdout by default.

Exit status:
    0  program stopped (STP, or ran off the end of memory)
    1  machine fault (bad address, PC too big, RD past end of data,
       unloadable program) or unreadable input file
    2  internal error
    3  --max-steps reached before the program stopped

Examples:
    python p16run.py examples/sum.txt -d examples/sum_data.txt
    python p16run.py prog.txt --listing
    python p16run.py prog.txt -vv --log-file trace.log --dump
"""

import argparse
import sys
import os

# Allow running from project root or as module
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from pullet16 import __version__
from pullet16.config import MachineConfig, MAX_MEMORY
from pullet16.faults import MachineFault
from pullet16.interpreter import Interpreter, StopReason
from pullet16.logsetup import setup_logging, verbosity_to_level
from pullet16.scanner import LineSource

EXIT_OK = 0
EXIT_FAULT = 1
EXIT_INTERNAL = 2
EXIT_STEP_LIMIT = 3


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="p16run",
        description="Pullet16 interpreter: load a program and execute it",
    )
    parser.add_argument("program", help="Program file (one 16-bit word per line)")
    parser.add_argument("-d", "--data", help="Data file for RD (default: no data)")
    parser.add_argument("-o", "--output", help="Output file for WRT records (default: stdout)")
    parser.add_argument("--max-steps", type=int, default=None,
                        help="Stop after N instructions (default: unbounded)")
    parser.add_argument("--max-memory", type=int, default=MAX_MEMORY,
                        help=f"Highest legal address (default: {MAX_MEMORY})")
    parser.add_argument("--strict-zero", action="store_true",
                        help="Treat access to location 0 as out of bounds")
    parser.add_argument("--listing", action="store_true",
                        help="Print the program listing and exit without running")
    parser.add_argument("--dump", action="store_true",
                        help="Print the final machine state to stdout")
    parser.add_argument("--log-file", help="Write a DEBUG log (with trace) to this file")
    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="Console log detail (-v info, -vv trace)")
    parser.add_argument("--version", action="version",
                        version=f"p16run {__version__}")
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(console_level=verbosity_to_level(args.verbose),
                  log_file=args.log_file)

    config = MachineConfig(
        max_memory=args.max_memory,
        allow_location_zero=not args.strict_zero,
        max_steps=args.max_steps,
    )

    # Read inputs
    try:
        program = LineSource.from_file(args.program)
        data = LineSource.from_file(args.data) if args.data else LineSource.empty()
    except OSError as e:
        print(f"Error reading input: {e}", file=sys.stderr)
        return EXIT_FAULT

    out_file = None
    try:
        if args.output and not args.listing:
            out_file = open(args.output, "w", encoding="utf-8")
        interp = Interpreter(config, data=data, out_stream=out_file or sys.stdout)
        interp.load_program(program)

        if args.listing:
            print(interp.listing())
            return EXIT_OK

        reason = interp.run()

        if args.dump:
            print(interp.dump())

    except MachineFault as e:
        print(f"Machine fault: {e}", file=sys.stderr)
        return EXIT_FAULT
    except OSError as e:
        print(f"Error writing output: {e}", file=sys.stderr)
        return EXIT_FAULT
    except Exception as e:
        print(f"Internal interpreter error: {e}", file=sys.stderr)
        if args.verbose:
            import traceback
            traceback.print_exc()
        return EXIT_INTERNAL
    finally:
        if out_file is not None:
            out_file.close()

    if reason is StopReason.STEP_LIMIT:
        print(f"Step limit reached ({args.max_steps} instructions)", file=sys.stderr)
        return EXIT_STEP_LIMIT
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
