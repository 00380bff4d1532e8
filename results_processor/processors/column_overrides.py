"""
Fixed-column overrides for the known DMT and TRA sheet layouts.

Both layouts keep the deduction-adjusted final rank and score in fixed
columns that have nothing to do with the nominal header row, so they are
read by direct address instead of through header detection.
"""

from typing import Callable, Optional, Tuple

from ..utils.constants import FIXED_COLUMN_LAYOUTS
from ..utils.helpers import clean_text


# (column letter, 1-based row) -> formatted text
CellTextAccessor = Callable[[str, int], str]


def fixed_columns_for_sheet(sheet_name: str) -> Optional[Tuple[str, str]]:
    """
    Return the (position column, total column) pair for a sheet layout.

    Args:
        sheet_name: Worksheet name

    Returns:
        Column letters, or None if the sheet has no fixed layout
    """
    lower = str(sheet_name).lower()
    for fragment, position_col, total_col in FIXED_COLUMN_LAYOUTS:
        if fragment in lower:
            return position_col, total_col
    return None


def resolve_fixed_columns(
    sheet_name: str,
    row: int,
    position: str,
    total: str,
    text_at: CellTextAccessor,
) -> Tuple[str, str]:
    """
    Replace header-detected position/total with the fixed-column values.

    A fixed cell only wins when it is non-empty.

    Args:
        sheet_name: Worksheet name
        row: 1-based row of the record
        position: Header-detected position
        total: Header-detected total
        text_at: Formatted-text accessor for the sheet

    Returns:
        (position, total) after overrides
    """
    columns = fixed_columns_for_sheet(sheet_name)
    if columns is None:
        return position, total

    position_col, total_col = columns
    fixed_position = clean_text(text_at(position_col, row))
    fixed_total = clean_text(text_at(total_col, row))
    if fixed_position:
        position = fixed_position
    if fixed_total:
        total = fixed_total
    return position, total
