"""Shared fixtures for building results worksheets in tests."""

import zipfile
from typing import Any, Dict, List, NamedTuple, Optional

import openpyxl
import pytest
import xlsxwriter
from openpyxl.styles import PatternFill
from openpyxl.utils import column_index_from_string

from results_processor.models import ResultRecord
from results_processor.parsers.workbook import ResultsWorkbook, SheetGrid
from results_processor.utils.log import set_use_emoji, set_verbosity


class Cell(NamedTuple):
    """A cell value with optional fill colour and number format."""
    value: Any
    bg_color: Optional[str] = None
    num_format: Optional[str] = None


def sparse_row(cells: Dict[str, Any]) -> List[Any]:
    """Build a row from {column letter: value}, padding gaps with None."""
    width = max(column_index_from_string(col) for col in cells)
    row = [None] * width
    for col, value in cells.items():
        row[column_index_from_string(col) - 1] = value
    return row


def _build_openpyxl_workbook(sheets: Dict[str, List[List[Any]]]):
    wb = openpyxl.Workbook()
    wb.remove(wb.active)
    for name, rows in sheets.items():
        ws = wb.create_sheet(name)
        for r, row in enumerate(rows, start=1):
            for c, value in enumerate(row, start=1):
                if isinstance(value, Cell):
                    cell = ws.cell(row=r, column=c, value=value.value)
                    if value.bg_color:
                        cell.fill = PatternFill(fill_type='solid', fgColor=value.bg_color)
                    if value.num_format:
                        cell.number_format = value.num_format
                elif value is not None:
                    ws.cell(row=r, column=c, value=value)
    return wb


@pytest.fixture
def make_workbook():
    """Factory: {sheet name: rows} -> in-memory ResultsWorkbook."""
    def _make(sheets: Dict[str, List[List[Any]]]) -> ResultsWorkbook:
        return ResultsWorkbook(_build_openpyxl_workbook(sheets))
    return _make


@pytest.fixture
def make_grid(make_workbook):
    """Factory: rows -> SheetGrid for a single sheet."""
    def _make(rows: List[List[Any]], name: str = 'DMT') -> SheetGrid:
        return make_workbook({name: rows}).sheet(name)
    return _make


@pytest.fixture
def write_xlsx(tmp_path):
    """Factory: write {sheet name: rows} to an .xlsx file with xlsxwriter."""
    def _write(sheets: Dict[str, List[List[Any]]], filename: str = 'results.xlsx'):
        path = tmp_path / filename
        workbook = xlsxwriter.Workbook(str(path))
        for name, rows in sheets.items():
            ws = workbook.add_worksheet(name)
            for r, row in enumerate(rows):
                for c, value in enumerate(row):
                    fmt = None
                    if isinstance(value, Cell):
                        props = {}
                        if value.bg_color:
                            props['bg_color'] = value.bg_color
                            props['pattern'] = 1
                        if value.num_format:
                            props['num_format'] = value.num_format
                        fmt = workbook.add_format(props) if props else None
                        value = value.value
                    if value is None:
                        if fmt is not None:
                            ws.write_blank(r, c, None, fmt)
                        continue
                    ws.write(r, c, value, fmt)
        workbook.close()
        return path
    return _write


@pytest.fixture
def break_styles():
    """Replace the stylesheet of an .xlsx file with malformed XML, in place."""
    def _break(path):
        with zipfile.ZipFile(path) as source:
            parts = [(item, source.read(item.filename)) for item in source.infolist()]
        with zipfile.ZipFile(path, 'w', zipfile.ZIP_DEFLATED) as target:
            for item, data in parts:
                if item.filename == 'xl/styles.xml':
                    data = b'<styleSheet><broken'
                target.writestr(item, data)
        return path
    return _break


@pytest.fixture
def make_record():
    """Factory for ResultRecord with sensible defaults."""
    def _make(**overrides) -> ResultRecord:
        fields = {
            'position': '1',
            'name': 'Sam Jones',
            'club': 'Springers',
            'total_score': '56.200',
            'discipline': 'DMT',
            'discipline_code': 'DMT',
            'category_part': 'Men',
            'age_group': '14-15yrs',
            'aggregate_age': '14-15yrs',
            'source_sheet': 'DMT',
            'source_row': 4,
        }
        fields.update(overrides)
        return ResultRecord(**fields)
    return _make


@pytest.fixture
def styled():
    """The Cell helper: styled(value, bg_color=..., num_format=...)."""
    return Cell


@pytest.fixture
def sparse():
    """The sparse_row helper: sparse({'A': ..., 'AZ': ...})."""
    return sparse_row


@pytest.fixture(autouse=True)
def reset_logging():
    """Restore default console logging after tests that change it."""
    yield
    set_verbosity(False)
    set_use_emoji(True)
