"""Build template context for gimmick table summaries and render it."""

from pathlib import Path
from typing import Any, List, Optional

from jinja2 import Environment, FileSystemLoader

from ..core.models import GimmickEntry, TableLayout
from .formatter import REPORT_HEADER, format_entry_row, format_hex

DEFAULT_TEMPLATE = Path(__file__).parent / 'templates' / 'default_summary.j2'


def build_summary_context(entries: List[GimmickEntry], layout: TableLayout,
                          dump_path: str = '') -> dict[str, Any]:
    """
    Build template context from decoded entries.

    Args:
        entries: Decoded entries in table slot order
        layout: Table layout the entries were decoded with
        dump_path: Path of the source dump, shown in the heading

    Returns:
        Dictionary with template variables:
        - dump_path, table_start, table_end, stride: table geometry
        - entry_count, common_count, missing_description_count,
          missing_resource_count, decode_error_count: totals
        - header, rows: the full table as rendered strings
    """
    return {
        'dump_path': str(dump_path),
        'table_start': format_hex(layout.start_address),
        'table_end': format_hex(layout.end_address),
        'stride': format_hex(layout.stride),
        'entry_count': len(entries),
        'common_count': sum(1 for e in entries if e.is_common),
        'missing_description_count': sum(1 for e in entries if not e.description),
        'missing_resource_count': sum(1 for e in entries if not e.resource_name),
        'decode_error_count': sum(1 for e in entries if e.description_failed),
        'header': REPORT_HEADER,
        'rows': [format_entry_row(e) for e in entries],
    }


def render_summary(context: dict, template_path: Optional[str] = None) -> str:
    """Render a summary context with a user template or DEFAULT_TEMPLATE.

    Raises:
        FileNotFoundError: If template_path doesn't exist
        jinja2.TemplateError: If the template has syntax errors
    """
    template_file = Path(template_path) if template_path else DEFAULT_TEMPLATE
    if not template_file.is_file():
        raise FileNotFoundError(f"Summary template not found: {template_file}")

    env = Environment(loader=FileSystemLoader(template_file.parent),
                      trim_blocks=True, lstrip_blocks=True)
    return env.get_template(template_file.name).render(**context)
