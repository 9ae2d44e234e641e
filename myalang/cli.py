#!/usr/bin/env python3
"""
CLI tool for preprocessing MYA source files.
"""

import sys
import os
import argparse
import logging

from myalang.errors import MYAError
from myalang.formatting import format_scope_ledger, format_tokens
from myalang.main import EXAMPLE_SOURCE, MYA


def setup_logging(level: str = "WARNING", quiet: bool = False) -> None:
    """Configure logging.

    Args:
        level: Logging level string (DEBUG, INFO, WARNING, ERROR)
        quiet: If True, suppress all output except errors
    """
    if quiet:
        level = "ERROR"
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(levelname)s:%(name)s:%(message)s",
    )


def positive_int(value):
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid positive integer: {value!r}")
    if number < 1:
        raise argparse.ArgumentTypeError(f"invalid positive integer: {value!r}")
    return number


def build_parser():
    parser = argparse.ArgumentParser(
        prog="myac",
        description="Preprocess a MYA source file into INDENT/DEDENT tokens.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  myac program.mya --tokens            # Show preprocessed tokens
  myac program.mya --scope-ledger      # Show the scope ledger
  myac program.mya --outline           # Parse and list block headers
  myac --example --tokens              # Run on the built-in example program
  myac program.mya --tab-width 8       # Count tabs as 8 columns
        """,
    )

    parser.add_argument("source_file", nargs="?", help="Path to the MYA source file")
    parser.add_argument(
        "--example",
        action="store_true",
        help="Use the built-in example program instead of a file",
    )
    parser.add_argument("--tokens", action="store_true", help="Display preprocessed tokens")
    parser.add_argument(
        "--scope-ledger",
        action="store_true",
        help="Display the scope ledger used for lateral navigation",
    )
    parser.add_argument(
        "--outline",
        action="store_true",
        help="Parse the source and list every block-opening statement",
    )
    parser.add_argument(
        "--canonical",
        action="store_true",
        help="Print the source re-indented with four spaces per scope",
    )
    parser.add_argument(
        "--tab-width",
        type=positive_int,
        default=4,
        help="Width of a tab character in columns (default: 4)",
    )

    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    verbosity.add_argument("-q", "--quiet", action="store_true", help="Only log errors")
    return parser


def myac(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.example and not args.source_file:
        parser.print_usage(sys.stderr)
        print("myac: error: a source file or --example is required", file=sys.stderr)
        sys.exit(2)

    setup_logging("DEBUG" if args.verbose else "WARNING", quiet=args.quiet)

    if not args.example and not os.path.exists(args.source_file):
        print(f"Error: File '{args.source_file}' not found")
        sys.exit(1)

    try:
        if args.example:
            print("Running with built-in example code...")
            model = MYA(from_string=EXAMPLE_SOURCE, tab_width=args.tab_width)
        else:
            model = MYA(from_file=args.source_file, tab_width=args.tab_width)

        print(f"Preprocessed {len(model.tokens)} tokens.")
        for diagnostic in model.diagnostics:
            print(f"Warning: {diagnostic.message}")

        if args.tokens:
            print()
            print(format_tokens(model.tokens))

        if args.scope_ledger:
            print()
            print(format_scope_ledger(model.scope_ledger))

        if args.outline:
            print()
            for header, line, depth in model.outline():
                print(f"{'  ' * depth}{header}  (line {line})")

        if args.canonical:
            print()
            print(model.to_canonical(), end="")

    except (MYAError, OSError) as e:
        print(f"Error: {e}")
        if args.verbose:
            import traceback

            traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    myac()
