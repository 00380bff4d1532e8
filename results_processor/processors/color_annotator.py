"""
Highlighted-row detection.

The results spreadsheet marks qualifying competitors by filling their row
green. This pass finds those rows and flags the matching records. It never
fails the run: any error leaves every record unflagged.
"""

from dataclasses import replace
from typing import Dict, List, Optional, Tuple

from ..models import ResultRecord
from ..utils.constants import GREEN_MIN, GREEN_MARGIN
from ..utils.log import debug, info, warn


HighlightMap = Dict[Tuple[str, int], bool]


def parse_argb(argb: Optional[str]) -> Optional[Tuple[int, int, int]]:
    """
    Decompose an "AARRGGBB" or "RRGGBB" hex colour into (r, g, b).

    Args:
        argb: Hex colour string, optionally prefixed with '#'

    Returns:
        RGB tuple, or None if the string is not a hex colour
    """
    if not argb or not isinstance(argb, str):
        return None
    hex_value = argb.lstrip('#')
    if len(hex_value) == 8:
        hex_value = hex_value[2:]
    if len(hex_value) != 6:
        return None
    try:
        return (
            int(hex_value[0:2], 16),
            int(hex_value[2:4], 16),
            int(hex_value[4:6], 16),
        )
    except ValueError:
        return None


def is_greenish(argb: Optional[str]) -> bool:
    """Green channel >= 150 and more than 20 above both red and blue."""
    rgb = parse_argb(argb)
    if rgb is None:
        return False
    r, g, b = rgb
    return g >= GREEN_MIN and g > r + GREEN_MARGIN and g > b + GREEN_MARGIN


def collect_highlighted_rows(workbook) -> HighlightMap:
    """
    Build the (sheet, row) -> True map of green rows in included sheets.

    A row counts as highlighted when at least one cell is green.

    Args:
        workbook: ResultsWorkbook (anything with included_sheets()/sheet())

    Returns:
        Mapping of highlighted (sheet name, 1-based row) keys
    """
    highlighted: HighlightMap = {}
    for sheet_name in workbook.included_sheets():
        grid = workbook.sheet(sheet_name)
        for row, colors in grid.iter_row_fills():
            if any(is_greenish(color) for color in colors):
                highlighted[(sheet_name, row)] = True
        debug(f"  {sheet_name}: {sum(1 for key in highlighted if key[0] == sheet_name)} highlighted rows")
    return highlighted


def apply_highlights(records: List[ResultRecord], highlighted: HighlightMap) -> List[ResultRecord]:
    """Return records with is_green set from the highlight map."""
    return [
        replace(record, is_green=highlighted.get(record.source_key, False))
        for record in records
    ]


def annotate_highlighted_rows(workbook, records: List[ResultRecord]) -> List[ResultRecord]:
    """
    Flag records whose source row is highlighted green.

    Any failure while reading fills is reported as a warning and the
    records come back with is_green False.

    Args:
        workbook: ResultsWorkbook the records were extracted from
        records: Extracted records

    Returns:
        Records with is_green set
    """
    try:
        highlighted = collect_highlighted_rows(workbook)
    except Exception as e:
        warn(f"Failed to detect highlighted rows, continuing without highlight: {e}")
        return apply_highlights(records, {})

    annotated = apply_highlights(records, highlighted)
    info(f"  Highlighted: {sum(1 for r in annotated if r.is_green)} of {len(annotated)} results")
    return annotated
