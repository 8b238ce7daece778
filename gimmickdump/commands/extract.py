"""Extract subcommand - writes the gimmick table of a RAM dump to a report file."""

import argparse
import logging
import os
from typing import List, Optional

from ..core.decoder import decode_gimmick_table
from ..core.exceptions import GimmickDumpError, InputFileError
from ..core.image import MemoryImage
from ..core.models import GIMMICK_TABLE, GimmickEntry, TableLayout
from ..utils.writer import REPORT_FORMATS, write_report

logger = logging.getLogger(__name__)

DEFAULT_OUTPUT = 'gimmicks.csv'
DUMP_PROMPT = 'Enter path to MEM8 RAM dump from Dolphin:'


def add_extract_parser(subparsers) -> argparse.ArgumentParser:
    """
    Add 'extract' subcommand parser.

    Args:
        subparsers: Subparsers object from argparse

    Returns:
        The extract parser
    """
    parser = subparsers.add_parser(
        'extract',
        help='Write the gimmick table of a RAM dump to a CSV or JSON report',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
examples:
  # Prompt for the dump path, write gimmicks.csv
  gimmickdump extract

  # Explicit dump and output file
  gimmickdump extract mem1.raw -o table.csv

  # JSON instead of CSV
  gimmickdump extract mem1.raw --format json -o table.json
        """
    )
    add_extract_arguments(parser)
    return parser


def add_extract_arguments(parser: argparse.ArgumentParser) -> None:
    """Register extract options on ``parser``."""
    parser.add_argument(
        'dump_path',
        nargs='?',
        help='Path to the MEM1 RAM dump (prompted for when omitted)')
    parser.add_argument(
        '-o', '--output',
        default=DEFAULT_OUTPUT,
        help='Report file to write (default: %(default)s)')
    parser.add_argument(
        '--format',
        dest='report_format',
        choices=REPORT_FORMATS,
        default='csv',
        help='Report format (default: %(default)s)')
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable verbose output')


def prompt_dump_path() -> str:
    """Ask for the dump path on stdin."""
    print(DUMP_PROMPT)
    return input().strip()


def _validate_dump_path(dump_path: str) -> tuple[bool, str]:
    """
    Validate that the dump file exists.

    Returns:
        Tuple of (is_valid, error_message)
    """
    if not dump_path:
        return False, "No memory dump path given"
    if not os.path.exists(dump_path):
        return False, f"Memory dump not found: {dump_path}"
    return True, ""


def load_gimmick_table(dump_path: str, layout: TableLayout = GIMMICK_TABLE) -> List[GimmickEntry]:
    """
    Load a RAM dump and decode its gimmick table.

    Args:
        dump_path: Path to the RAM dump
        layout: Table layout to decode

    Returns:
        Decoded entries in table slot order

    Raises:
        GimmickDumpError: If the dump is missing, truncated or undecodable
    """
    is_valid, error_message = _validate_dump_path(dump_path)
    if not is_valid:
        raise InputFileError(error_message)

    logger.info("Memory dump: %s", dump_path)
    image = MemoryImage.from_file(dump_path)
    return decode_gimmick_table(image, layout)


def run_extract(args: argparse.Namespace) -> int:
    """
    Execute the extract subcommand.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, 1 for error)
    """
    dump_path: Optional[str] = getattr(args, 'dump_path', None)
    if not dump_path:
        try:
            dump_path = prompt_dump_path()
        except EOFError:
            logger.error("No memory dump path given")
            return 1

    output = getattr(args, 'output', DEFAULT_OUTPUT)
    report_format = getattr(args, 'report_format', 'csv')

    try:
        entries = load_gimmick_table(dump_path)
        write_report(entries, output, report_format)
    except GimmickDumpError as e:
        logger.error("Failed to extract gimmick table: %s", e)
        return 1

    print(f"{report_format.upper()} written successfully to {output}.")
    return 0
