#!/usr/bin/env python3
"""
Command-line entry point for gimmickdump.

Running without a subcommand behaves like ``gimmickdump extract`` and
prompts for the dump path.
"""

import argparse
import logging
import sys
from importlib.metadata import PackageNotFoundError, version

from .commands.extract import add_extract_parser, run_extract
from .commands.summary import add_summary_parser, run_summary


def configure_logging(verbose: bool = False) -> None:
    """Configure basic logging for main entry points."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format='%(levelname)s: %(message)s'
    )


def _package_version() -> str:
    try:
        return version('gimmickdump')
    except PackageNotFoundError:
        return 'unknown'


def build_parser() -> argparse.ArgumentParser:
    """Build the top-level parser with all subcommands."""
    parser = argparse.ArgumentParser(
        prog='gimmickdump',
        description='Extract the gimmick table from a Dolphin MEM1 RAM dump',
    )
    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {_package_version()}'
    )

    subparsers = parser.add_subparsers(dest='command')
    extract_parser = add_extract_parser(subparsers)
    extract_parser.set_defaults(func=run_extract)
    summary_parser = add_summary_parser(subparsers)
    summary_parser.set_defaults(func=run_summary)

    return parser


def main(argv=None) -> int:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(getattr(args, 'verbose', False))
    handler = getattr(args, 'func', run_extract)
    return handler(args)


if __name__ == '__main__':
    sys.exit(main())
