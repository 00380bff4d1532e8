"""Workbook loading, table detection, and field classification."""

from .workbook import (
    FillsUnavailableError,
    load_workbook,
    ResultsWorkbook,
    SheetGrid,
    WorkbookLoadError,
)
from .table_detector import (
    detect_table_blocks,
    extract_results,
    extract_sheet_results,
    is_likely_header,
)
from .field_classifier import classify_row

__all__ = [
    'FillsUnavailableError',
    'load_workbook',
    'ResultsWorkbook',
    'SheetGrid',
    'WorkbookLoadError',
    'detect_table_blocks',
    'extract_results',
    'extract_sheet_results',
    'is_likely_header',
    'classify_row',
]
