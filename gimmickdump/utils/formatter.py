"""Row formatting for decoded gimmick entries."""

from typing import Dict, List, Optional, Union

from ..core.models import GimmickEntry

NONE_PLACEHOLDER = '<none>'

REPORT_HEADER = [
    'Gimmick ID',
    'Name',
    'Resource Name',
    'Build Function Address',
    'Common?',
]

# JSON keys, in the same order as REPORT_HEADER
REPORT_KEYS = [
    'gimmick_id',
    'name',
    'resource_name',
    'build_function_address',
    'is_common',
]


def format_hex(value: int) -> str:
    """Render ``value`` as uppercase hex with a 0x prefix."""
    return f"0x{value:X}"


def text_or_placeholder(text: Optional[str]) -> str:
    """Absent and empty strings both render as the placeholder."""
    return text if text else NONE_PLACEHOLDER


def format_build_function(entry: GimmickEntry) -> str:
    if not entry.has_build_function:
        return NONE_PLACEHOLDER
    return format_hex(entry.build_function_address)


def format_bool(value: bool) -> str:
    return 'true' if value else 'false'


def format_entry_row(entry: GimmickEntry) -> List[str]:
    """
    Render one entry as report cells.

    Args:
        entry: Decoded gimmick entry

    Returns:
        List of cell strings in REPORT_HEADER order
    """
    return [
        format_hex(entry.index),
        text_or_placeholder(entry.description),
        text_or_placeholder(entry.resource_name),
        format_build_function(entry),
        format_bool(entry.is_common),
    ]


def format_entry_record(entry: GimmickEntry) -> Dict[str, Union[str, bool]]:
    """Render one entry as a JSON-friendly dict keyed by REPORT_KEYS."""
    record = dict(zip(REPORT_KEYS, format_entry_row(entry)))
    record['is_common'] = entry.is_common
    return record
