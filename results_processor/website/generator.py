"""
Report generator for the interactive results summary page.

This module is a thin orchestrator that assembles the HTML document from
the template components in templates/ and writes it to disk.
"""

import os
from datetime import datetime
from typing import List, Optional

from ..models import ResultRecord
from ..utils.log import info
from .css_preservation import read_preserved_css
from .serializers import build_report_dataset, render_result_rows, serialize_records
from .templates import get_css, get_javascript, get_head, get_body


class ReportGenerationError(Exception):
    """Raised when the report cannot be written."""
    pass


def build_report_html(
    records: List[ResultRecord],
    preserved_style: str = '',
    generated_time: Optional[str] = None,
) -> str:
    """
    Build the complete, self-contained report document.

    Args:
        records: Final annotated records
        preserved_style: User <style> element to re-embed verbatim
        generated_time: Timestamp for the meta line (defaults to now)

    Returns:
        Complete HTML document as a string
    """
    if generated_time is None:
        generated_time = datetime.now().strftime('%Y-%m-%d %H:%M:%S')

    dataset = build_report_dataset(records)

    head = get_head(get_css(), preserved_style)
    body = get_body(dataset, render_result_rows(dataset.records), generated_time)
    js = get_javascript(serialize_records(dataset.records))

    return f'''<!DOCTYPE html>
<html lang="en">
{head}
{body}

    <script>
{js}
    </script>
</body>
</html>
'''


def generate_report(records: List[ResultRecord], output_path: str) -> None:
    """
    Generate the results summary page at output_path.

    Custom CSS in an existing file at output_path is carried over before
    the file is overwritten.

    Args:
        records: Final annotated records
        output_path: Path to save the HTML file

    Raises:
        ReportGenerationError: If the file cannot be written
    """
    info(f"Generating report: {output_path}")

    preserved_style = read_preserved_css(output_path)
    html_content = build_report_html(records, preserved_style)

    try:
        output_dir = os.path.dirname(output_path)
        if output_dir:
            os.makedirs(output_dir, exist_ok=True)
        with open(output_path, 'w', encoding='utf-8') as f:
            f.write(html_content)
    except OSError as e:
        raise ReportGenerationError(f"Could not write report {output_path}: {e}") from e

    info(f"Summary written to {output_path} with {len(records)} rows")
