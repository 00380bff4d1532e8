"""
Discipline, category and age-group classification for result rows.

The cascade is:
  1. the table title ("TRA Women - 14-15yrs"),
  2. otherwise the sheet name plus disability markers in the row,
  3. column A of the data row itself, which overrides both when it parses.
"""

from typing import Iterable, Optional, Tuple

from ..models import Classification
from ..utils.constants import (
    TITLE_PARTS_RE,
    COLUMN_A_RE,
    GENDER_TOKEN_RE,
    DISABILITY_PATTERNS,
    DISCIPLINE_DMT,
    DISCIPLINE_DMT_DISABILITY,
    DISCIPLINE_TRA,
    DISCIPLINE_TRA_DISABILITY,
    DISCIPLINE_CODES,
    SIMPLIFIED_DISCIPLINES,
    UNKNOWN,
)
from ..utils.helpers import clean_text


Parts = Tuple[str, str, str]


def looks_like_disability(value) -> bool:
    """Check a single cell for disability markers (disab..., DMD, TRD)."""
    if value is None:
        return False
    text = str(value)
    return any(pattern.search(text) for pattern in DISABILITY_PATTERNS)


def row_has_disability_marker(values: Iterable) -> bool:
    """True if any cell in the row looks like a disability marker."""
    return any(looks_like_disability(v) for v in values if isinstance(v, str))


def sheet_suggests_deductions(sheet_name: str) -> bool:
    s = str(sheet_name).lower()
    return ' dd' in s or s.endswith('dd') or 'with deductions' in s


def determine_discipline_base(sheet_name: str) -> str:
    """DMT for sheets mentioning dmt, trampoline for everything else."""
    if 'dmt' in str(sheet_name).lower():
        return DISCIPLINE_DMT
    return DISCIPLINE_TRA


def determine_discipline(sheet_name: str, row_values: Iterable) -> str:
    """
    Derive the full discipline label when no table title is available.

    Args:
        sheet_name: Worksheet name
        row_values: Cell values of the data row

    Returns:
        One of "DMT", "DMT Disability - DMD", "Trampoline TRA",
        "Trampoline Disability TRD"
    """
    base = determine_discipline_base(sheet_name)
    disability = sheet_suggests_deductions(sheet_name) or row_has_disability_marker(row_values)
    if base == DISCIPLINE_DMT:
        return DISCIPLINE_DMT_DISABILITY if disability else DISCIPLINE_DMT
    return DISCIPLINE_TRA_DISABILITY if disability else DISCIPLINE_TRA


def parse_title_parts(title: Optional[str]) -> Optional[Parts]:
    """
    Split a table title into (code, category, age).

    >>> parse_title_parts("DMT Men - 14-15yrs")
    ('DMT', 'Men', '14-15yrs')
    """
    text = clean_text(title)
    if not text:
        return None
    match = TITLE_PARTS_RE.match(text)
    if not match:
        return None
    return match.group(1).upper(), match.group(2).strip(), match.group(3).strip()


def parse_column_a(text: Optional[str]) -> Optional[Parts]:
    """Split per-row column A text ("TRA Women - 14-15yrs") into parts."""
    value = clean_text(text)
    if not value:
        return None
    match = COLUMN_A_RE.match(value)
    if not match:
        return None
    return match.group(1).upper(), match.group(2).strip(), match.group(3).strip()


def simplify_discipline(code: str, sheet_name: str) -> str:
    """Map a discipline code to the display discipline."""
    simplified = SIMPLIFIED_DISCIPLINES.get(clean_text(code).upper())
    if simplified:
        return simplified
    return 'DMT' if 'dmt' in str(sheet_name).lower() else 'Trampoline'


def combine_age_and_gender(age: str, gender: str) -> str:
    """
    Build the working age group from the age and gender columns.

    Gender is prefixed only when the age text does not already name one.
    """
    age = clean_text(age)
    gender = clean_text(gender)
    if not age:
        return gender
    if gender and not GENDER_TOKEN_RE.search(age):
        return f"{gender} {age}".strip()
    return age


def classify_row(
    sheet_name: str,
    title: Optional[str],
    row_values: Iterable,
    age_group: str = '',
    column_a: Optional[str] = None,
) -> Classification:
    """
    Run the discipline/category/age cascade for one data row.

    Args:
        sheet_name: Worksheet name
        title: Title scraped above the table header (may be empty)
        row_values: Cell values of the data row
        age_group: Working age group from the age/gender columns
        column_a: Formatted text of column A on the same row

    Returns:
        Classification for the row
    """
    row_values = list(row_values)
    full_discipline = None

    title_parts = parse_title_parts(title)
    if title_parts:
        code, category, aggregate_age = title_parts
    else:
        full_discipline = determine_discipline(sheet_name, row_values)
        code = DISCIPLINE_CODES[full_discipline]
        category, aggregate_age = '', ''

    if not aggregate_age:
        aggregate_age = age_group or UNKNOWN

    # The age cell sometimes carries the whole "CODE Category - Age" title
    display_age = aggregate_age
    if not category and ' - ' in display_age:
        age_parts = parse_title_parts(display_age)
        if age_parts:
            code, category, display_age = age_parts
    if not display_age:
        display_age = age_group or UNKNOWN

    row_parts = parse_column_a(column_a)
    if row_parts:
        code = row_parts[0] or code
        category = row_parts[1] or category
        display_age = row_parts[2] or display_age

    return Classification(
        discipline_code=code,
        category_part=category,
        age_group=display_age or UNKNOWN,
        aggregate_age=aggregate_age,
        discipline=simplify_discipline(code, sheet_name),
        full_discipline=full_discipline,
    )
