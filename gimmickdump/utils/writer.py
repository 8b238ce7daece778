"""Report file output (CSV and JSON)."""

import csv
import json
import logging
import os
import tempfile
from pathlib import Path
from typing import List, Sequence, TextIO

from ..core.exceptions import ReportWriteError
from ..core.models import GimmickEntry
from .formatter import REPORT_HEADER, format_entry_record, format_entry_row

logger = logging.getLogger(__name__)

REPORT_FORMATS = ('csv', 'json')


def _write_csv(entries: Sequence[GimmickEntry], stream: TextIO) -> None:
    writer = csv.writer(stream)
    writer.writerow(REPORT_HEADER)
    for entry in entries:
        writer.writerow(format_entry_row(entry))


def _write_json(entries: Sequence[GimmickEntry], stream: TextIO) -> None:
    json.dump([format_entry_record(entry) for entry in entries], stream,
              indent=2, ensure_ascii=False)
    stream.write('\n')


_WRITERS = {
    'csv': _write_csv,
    'json': _write_json,
}


def write_report(entries: List[GimmickEntry], output_path, report_format: str = 'csv') -> Path:
    """
    Write decoded entries to a report file.

    The report is written to a temporary file next to ``output_path`` and
    moved into place once complete, so a failed run leaves no partial file.

    Args:
        entries: Decoded entries in table slot order
        output_path: Destination file path
        report_format: One of REPORT_FORMATS

    Returns:
        Path of the written report

    Raises:
        ValueError: If report_format is unknown
        ReportWriteError: If the report cannot be written
    """
    if report_format not in _WRITERS:
        raise ValueError(f"Unknown report format: {report_format}")
    emit = _WRITERS[report_format]

    output = Path(output_path)
    temp_path = None

    try:
        with tempfile.NamedTemporaryFile(
                mode='w', encoding='utf-8', newline='', dir=output.parent,
                prefix=f".{output.name}.", suffix='.tmp', delete=False) as temp_file:
            temp_path = temp_file.name
            emit(entries, temp_file)
        os.replace(temp_path, output)
    except OSError as e:
        if temp_path and os.path.exists(temp_path):
            os.unlink(temp_path)
        raise ReportWriteError(f"Failed to write report {output}: {e}") from e

    logger.info("Wrote %d entries to %s", len(entries), output)
    return output
