"""Summary subcommand - print a readable overview of the gimmick table."""

import argparse
import logging

from jinja2 import TemplateError as Jinja2TemplateError

from ..core.exceptions import GimmickDumpError
from ..core.models import GIMMICK_TABLE
from ..utils.summary import build_summary_context, render_summary
from .extract import load_gimmick_table

logger = logging.getLogger(__name__)


def add_summary_parser(subparsers) -> argparse.ArgumentParser:
    """Add 'summary' subcommand parser."""
    parser = subparsers.add_parser(
        'summary',
        help='Print a summary of the gimmick table of a RAM dump',
        description=(
            'Decode the gimmick table of a RAM dump and print totals\n'
            'followed by the full table.'
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        'dump_path',
        help='Path to the MEM1 RAM dump',
    )
    parser.add_argument(
        '--template',
        type=str,
        metavar='PATH',
        help='Path to custom Jinja2 template (default: built-in template)',
    )
    parser.add_argument(
        '--verbose',
        action='store_true',
        help='Enable verbose output',
    )

    return parser


def run_summary(args) -> int:
    """
    Run summary subcommand.

    Returns:
        Exit code (0 for success, 1 for error)
    """
    try:
        entries = load_gimmick_table(args.dump_path)
        context = build_summary_context(entries, GIMMICK_TABLE, args.dump_path)
        output = render_summary(context, args.template)
        print(output)
        return 0

    except (FileNotFoundError, Jinja2TemplateError) as e:
        logger.error("Template error: %s", e)
        return 1
    except GimmickDumpError as e:
        logger.error("Failed to summarize gimmick table: %s", e)
        return 1
