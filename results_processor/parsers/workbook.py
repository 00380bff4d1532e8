"""
Workbook loading and cell access for results spreadsheets.

A single openpyxl workbook backs both the formatted-text grid used for
table detection and the per-cell fill colours used for highlight detection.
A workbook whose stylesheet cannot be parsed is read values-only instead.
"""

import re
import zipfile
from datetime import date, datetime, time
from io import BytesIO
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

import openpyxl
import pandas as pd
from openpyxl.styles.colors import COLOR_INDEX
from openpyxl.utils import column_index_from_string

from ..utils.constants import INCLUDED_SHEETS
from ..utils.log import debug, warn


class WorkbookLoadError(Exception):
    """Raised when a results workbook cannot be opened."""
    pass


Column = Union[str, int]

# Package part holding number formats, fonts and fills
STYLES_PART = 'xl/styles.xml'


def format_number(value: Union[int, float], number_format: Optional[str]) -> str:
    """
    Render a number the way a spreadsheet displays it.

    Supports fixed decimals ("0.000"), thousands separators ("#,##0") and
    percentages ("0.0%"). Anything else is treated as "General".

    Args:
        value: Numeric cell value
        number_format: The cell's number format code

    Returns:
        Display text
    """
    fmt = (number_format or 'General').split(';')[0]
    # Drop quoted literals and escapes before inspecting placeholders
    fmt = re.sub(r'"[^"]*"|\\.', '', fmt)

    if fmt == 'General' or not re.search(r'[0#]', fmt):
        if float(value).is_integer():
            return str(int(value))
        return f"{value:.11g}"

    percent = '%' in fmt
    if percent:
        value = value * 100
    decimals_match = re.search(r'\.([0#]+)', fmt)
    decimals = len(decimals_match.group(1)) if decimals_match else 0
    grouping = ',' if ',' in fmt else ''
    text = f"{value:{grouping}.{decimals}f}"
    return f"{text}%" if percent else text


def cell_text(cell: Any) -> str:
    """
    Return the formatted text of an openpyxl cell.

    Args:
        cell: openpyxl cell (or anything with value/number_format)

    Returns:
        Display text, '' for empty cells
    """
    return value_text(getattr(cell, 'value', None), getattr(cell, 'number_format', None))


def value_text(value: Any, number_format: Optional[str] = None) -> str:
    """Display text for a raw cell value under an optional number format."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "TRUE" if value else "FALSE"
    if isinstance(value, datetime):
        if value.time() == time(0, 0):
            return value.date().isoformat()
        return value.isoformat(sep=' ')
    if isinstance(value, (date, time)):
        return value.isoformat()
    if isinstance(value, (int, float)):
        return format_number(value, number_format)
    return str(value)


def fill_color(cell: Any) -> Optional[str]:
    """
    Return a cell's foreground fill as an ARGB hex string.

    Theme colours cannot be resolved without the workbook theme and are
    reported as None, as are unfilled cells.

    Args:
        cell: openpyxl cell

    Returns:
        "AARRGGBB" string or None
    """
    fill = getattr(cell, 'fill', None)
    if fill is None or getattr(fill, 'fill_type', None) is None:
        return None

    color = getattr(fill, 'fgColor', None)
    if color is None:
        return None

    if color.type == 'rgb' and isinstance(color.rgb, str):
        return color.rgb.upper()
    if color.type == 'indexed' and isinstance(color.indexed, int):
        if 0 <= color.indexed < len(COLOR_INDEX):
            return COLOR_INDEX[color.indexed].upper()
    return None


def column_to_index(column: Column) -> int:
    """Convert a column letter ("AZ") or 1-based index to a 1-based index."""
    if isinstance(column, int):
        return column
    return column_index_from_string(column.strip().upper())


def _text_frame(rows: List[List[str]]) -> pd.DataFrame:
    """Rectangular DataFrame of cell text, short rows padded with ''."""
    width = max((len(row) for row in rows), default=0)
    if not rows or width == 0:
        return pd.DataFrame()
    return pd.DataFrame([row + [''] * (width - len(row)) for row in rows], dtype=object)


class FillsUnavailableError(Exception):
    """Raised when a sheet was read without its cell styles."""
    pass


class SheetGrid:
    """
    Formatted-text matrix and fill access for one worksheet.

    A grid is normally backed by an openpyxl worksheet. A grid built from a
    prepared text frame has no fill information, and asking for fills
    raises FillsUnavailableError.
    """

    def __init__(self, worksheet=None, name: Optional[str] = None,
                 frame: Optional[pd.DataFrame] = None, fills_error: str = ''):
        self.worksheet = worksheet
        self.name = name if name is not None else worksheet.title
        self.fills_error = fills_error
        self._frame: Optional[pd.DataFrame] = frame
        self._blank_rows: Optional[pd.Series] = None

    @property
    def frame(self) -> pd.DataFrame:
        """Formatted cell text, 0-based index (row 1 is index 0)."""
        if self._frame is None:
            self._frame = self._build_frame()
        return self._frame

    def _build_frame(self) -> pd.DataFrame:
        ws = self.worksheet
        if ws is None or ws.max_row < 1 or ws.max_column < 1:
            return pd.DataFrame()
        rows = [
            [cell_text(cell) for cell in row]
            for row in ws.iter_rows(min_row=1, max_row=ws.max_row,
                                    min_col=1, max_col=ws.max_column)
        ]
        frame = _text_frame(rows)
        debug(f"  Sheet '{self.name}': {frame.shape[0]} rows x {frame.shape[1]} columns")
        return frame

    @property
    def row_count(self) -> int:
        return self.frame.shape[0]

    @property
    def column_count(self) -> int:
        return self.frame.shape[1]

    def row_values(self, row: int) -> List[str]:
        """Formatted text of every cell in a 1-based row."""
        if row < 1 or row > self.row_count:
            return []
        return list(self.frame.iloc[row - 1])

    def is_blank_row(self, row: int) -> bool:
        if self._blank_rows is None:
            if self.frame.empty:
                self._blank_rows = pd.Series(dtype=bool)
            else:
                self._blank_rows = self.frame.apply(
                    lambda col: col.str.strip().eq('')
                ).all(axis=1)
        if row < 1 or row > len(self._blank_rows):
            return True
        return bool(self._blank_rows.iloc[row - 1])

    def text_at(self, column: Column, row: int) -> str:
        """Formatted text at a direct address, '' outside the used range."""
        col = column_to_index(column)
        if row < 1 or row > self.row_count or col < 1 or col > self.column_count:
            return ""
        return self.frame.iat[row - 1, col - 1]

    def iter_row_fills(self) -> Iterator[Tuple[int, List[Optional[str]]]]:
        """
        Yield (row, [fill colour per cell]) for every row in the sheet.

        Raises:
            FillsUnavailableError: If the sheet was read without styles
        """
        ws = self.worksheet
        if ws is None:
            reason = f": {self.fills_error}" if self.fills_error else ""
            raise FillsUnavailableError(f"Cell fills unavailable for sheet '{self.name}'{reason}")
        for cells in ws.iter_rows(min_row=1, max_row=ws.max_row,
                                  min_col=1, max_col=ws.max_column):
            if not cells:
                continue
            yield cells[0].row, [fill_color(cell) for cell in cells]


class ResultsWorkbook:
    """
    A results spreadsheet with value and fill access per sheet.

    Built either from an openpyxl workbook (values and fills) or from
    prepared text frames per sheet (values only).
    """

    def __init__(self, workbook=None, path: Optional[Path] = None,
                 frames: Optional[Dict[str, pd.DataFrame]] = None, fills_error: str = ''):
        self.workbook = workbook
        self.path = path
        self.fills_error = fills_error
        self._frames = frames or {}
        self._sheets: Dict[str, SheetGrid] = {}

    @property
    def sheet_names(self) -> List[str]:
        if self.workbook is not None:
            return list(self.workbook.sheetnames)
        return list(self._frames)

    def included_sheets(self) -> List[str]:
        """Sheet names that hold primary results ("DMT", "TRA")."""
        return [name for name in self.sheet_names if is_included_sheet(name)]

    def sheet(self, name: str) -> SheetGrid:
        if name not in self._sheets:
            if self.workbook is not None:
                grid = SheetGrid(self.workbook[name])
            else:
                grid = SheetGrid(name=name, frame=self._frames[name], fills_error=self.fills_error)
            self._sheets[name] = grid
        return self._sheets[name]

    def close(self) -> None:
        if self.workbook is not None:
            self.workbook.close()


def is_included_sheet(sheet_name: str) -> bool:
    """Only sheets named exactly DMT or TRA (any case) are processed."""
    return str(sheet_name).lower() in INCLUDED_SHEETS


def read_values_only(path: Union[str, Path]) -> Dict[str, pd.DataFrame]:
    """
    Read cell values from a workbook while ignoring its stylesheet.

    The styles part is left out of an in-memory copy of the package and the
    copy is read in openpyxl's read-only, values-only mode, which never looks
    cell styles up. Row and column positions are kept; number formats and
    fills are lost.

    Args:
        path: Path to the .xlsx file

    Returns:
        Mapping of sheet name to a text frame
    """
    buffer = BytesIO()
    with zipfile.ZipFile(path) as source, zipfile.ZipFile(buffer, 'w', zipfile.ZIP_DEFLATED) as target:
        for item in source.infolist():
            if item.filename != STYLES_PART:
                target.writestr(item, source.read(item.filename))
    buffer.seek(0)

    workbook = openpyxl.load_workbook(buffer, read_only=True, data_only=True)
    try:
        frames = {}
        for ws in workbook.worksheets:
            # Stale <dimension> elements would truncate the read
            ws.reset_dimensions()
            rows = [
                [value_text(value) for value in row]
                for row in ws.iter_rows(min_row=1, min_col=1, values_only=True)
            ]
            frames[ws.title] = _text_frame(rows)
        return frames
    finally:
        workbook.close()


def load_workbook(path: Union[str, Path]) -> ResultsWorkbook:
    """
    Open a results workbook with cached values and cell styles.

    If the workbook opens but its styles cannot be parsed, the values are
    read without styles and the returned workbook has no fill information.
    Highlight detection then fails on its own terms while extraction and
    rendering carry on.

    Args:
        path: Path to the .xlsx file

    Returns:
        ResultsWorkbook wrapper

    Raises:
        WorkbookLoadError: If the file cannot be read as a workbook at all
    """
    path = Path(path)
    try:
        workbook = openpyxl.load_workbook(path, data_only=True)
    except Exception as e:
        try:
            frames = read_values_only(path)
        except Exception:
            raise WorkbookLoadError(f"Could not open workbook {path}: {e}") from e
        warn(f"Could not read cell styles from {path.name}, reading values only: {e}")
        return ResultsWorkbook(path=path, frames=frames, fills_error=str(e))

    debug(f"Loaded workbook {path.name} with sheets: {', '.join(workbook.sheetnames)}")
    return ResultsWorkbook(workbook, path)
