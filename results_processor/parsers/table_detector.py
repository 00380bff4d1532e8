"""
Table detection and result extraction for sparse results worksheets.

Result sheets hold several tables one after another, each with its own
header row and usually a "CODE Category - Age" title a few rows above.
There is no other delimiter, so a table runs until the next header row.
"""

import re
from typing import Dict, List, Optional, Sequence

from ..models import ResultRecord, TableBlock
from ..processors.column_overrides import resolve_fixed_columns
from ..utils.constants import (
    HEADER_SYNONYMS,
    COLUMN_ROLES,
    TITLE_SCAN_DEPTH,
    TITLE_SEPARATOR_RE,
)
from ..utils.helpers import clean_text, format_score, normalize_header
from ..utils.log import debug, info
from .field_classifier import classify_row, combine_age_and_gender
from .workbook import ResultsWorkbook, SheetGrid


def find_column_index(header_row: Sequence, candidates: Sequence[str]) -> int:
    """
    Find the column matching any of the candidate header names.

    Exact (normalized) matches win over substring matches.

    Args:
        header_row: Header cell values
        candidates: Normalized synonyms for one column role

    Returns:
        0-based column index, or -1 if nothing matches
    """
    headers = [normalize_header(h) for h in header_row]

    for idx, header in enumerate(headers):
        if header in candidates:
            return idx

    for idx, header in enumerate(headers):
        if not header:
            continue
        for candidate in candidates:
            if candidate in header:
                return idx
    return -1


def map_header_columns(header_row: Sequence) -> Dict[str, int]:
    """Map every column role to its index in a header row."""
    return {
        role: find_column_index(header_row, HEADER_SYNONYMS[role])
        for role in COLUMN_ROLES
    }


def is_likely_header(row: Optional[Sequence]) -> bool:
    """
    Decide whether a row is a results table header.

    A header names the competitor (or forename + surname) and also has a
    total/score or club/team column.
    """
    if not row:
        return False

    def has(role: str) -> bool:
        return find_column_index(row, HEADER_SYNONYMS[role]) != -1

    has_name = has('name') or (has('forename') and has('surname'))
    return has_name and (has('total') or has('club'))


def _looks_like_title(text: str) -> bool:
    return bool(TITLE_SEPARATOR_RE.search(text))


def find_group_title(grid: SheetGrid, header_row: int) -> str:
    """
    Scan the rows above a header for a "<text> - <text>" title.

    The nearest row wins. Within a row, the first cell alone is preferred
    over the joined row text.

    Args:
        grid: Sheet being scanned
        header_row: 1-based header row

    Returns:
        Title text or ''
    """
    lowest = max(1, header_row - TITLE_SCAN_DEPTH)
    for row in range(header_row - 1, lowest - 1, -1):
        values = grid.row_values(row)
        if not values:
            continue
        first = clean_text(values[0])
        if first and _looks_like_title(first):
            return first
        joined = re.sub(r'\s+', ' ', ' '.join(clean_text(v) for v in values)).strip()
        if joined and _looks_like_title(joined):
            return joined
    return ""


def detect_table_blocks(grid: SheetGrid) -> List[TableBlock]:
    """
    Find every header/data block in a sheet.

    Blank rows inside a block are skipped; a new header row ends the
    current block and starts the next one.

    Args:
        grid: Sheet to scan

    Returns:
        Blocks in sheet order
    """
    blocks = []
    row = 1
    last_row = grid.row_count

    while row <= last_row:
        if grid.is_blank_row(row) or not is_likely_header(grid.row_values(row)):
            row += 1
            continue

        header_values = grid.row_values(row)
        block = TableBlock(
            header_row=row,
            columns=map_header_columns(header_values),
            title=find_group_title(grid, row),
            start_row=row + 1,
            end_row=row,
        )

        row += 1
        while row <= last_row:
            if grid.is_blank_row(row):
                row += 1
                continue
            if is_likely_header(grid.row_values(row)):
                break
            block.end_row = row
            row += 1

        debug(f"  Table at row {block.header_row} ({block.title or 'untitled'}): "
              f"rows {block.start_row}-{block.end_row}")
        blocks.append(block)

    return blocks


def _value(values: Sequence, idx: int) -> str:
    if idx < 0 or idx >= len(values):
        return ""
    return clean_text(values[idx])


def resolve_name(values: Sequence, block: TableBlock) -> str:
    """Name from the name column, else forename + surname."""
    # "Forename" contains 'name', so such headers resolve a name column and
    # the surname is never joined
    name = _value(values, block.column('name'))
    if name:
        return name
    if block.column('forename') != -1 and block.column('surname') != -1:
        parts = [_value(values, block.column('forename')), _value(values, block.column('surname'))]
        return ' '.join(p for p in parts if p).strip()
    return ""


def extract_block_results(grid: SheetGrid, block: TableBlock) -> List[ResultRecord]:
    """
    Build result records for every named data row of a block.

    Args:
        grid: Sheet the block belongs to
        block: Detected table block

    Returns:
        One record per row with a resolvable name
    """
    records = []
    for row in range(block.start_row, block.end_row + 1):
        if grid.is_blank_row(row):
            continue
        values = grid.row_values(row)

        name = resolve_name(values, block)
        if not name:
            continue

        age_group = combine_age_and_gender(
            _value(values, block.column('age')),
            _value(values, block.column('gender')),
        )
        position, total = resolve_fixed_columns(
            grid.name,
            row,
            _value(values, block.column('position')),
            _value(values, block.column('total')),
            grid.text_at,
        )
        classification = classify_row(
            grid.name,
            block.title,
            values,
            age_group=age_group,
            column_a=grid.text_at('A', row),
        )

        records.append(ResultRecord(
            position=position,
            name=name,
            club=_value(values, block.column('club')),
            total_score=format_score(total),
            discipline=classification.discipline,
            discipline_code=classification.discipline_code,
            category_part=classification.category_part,
            age_group=classification.age_group,
            aggregate_age=classification.aggregate_age,
            source_sheet=grid.name,
            source_row=row,
        ))
    return records


def extract_sheet_results(grid: SheetGrid) -> List[ResultRecord]:
    """Extract records from every table block in a sheet."""
    records = []
    for block in detect_table_blocks(grid):
        records.extend(extract_block_results(grid, block))
    return records


def extract_results(workbook: ResultsWorkbook) -> List[ResultRecord]:
    """
    Extract records from every included sheet of a workbook.

    Args:
        workbook: Loaded results workbook

    Returns:
        Records in workbook/sheet order
    """
    all_records = []
    for sheet_name in workbook.included_sheets():
        records = extract_sheet_results(workbook.sheet(sheet_name))
        info(f"  {sheet_name}: {len(records)} results")
        all_records.extend(records)
    return all_records
