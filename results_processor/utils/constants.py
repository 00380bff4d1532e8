"""
Results summary constants, header synonyms, and configuration.
"""

import re
from pathlib import Path
from typing import Dict, List, Tuple


# === Directory and File Path Configuration ===
def _find_project_root() -> Path:
    """Find the project root directory.

    Looks for a .project_root marker file above this module, then falls
    back to the directory containing the package.
    """
    current = Path(__file__).resolve()
    for parent in [current] + list(current.parents):
        marker = parent / ".project_root"
        if marker.exists():
            return parent

    return Path(__file__).resolve().parent.parent.parent


BASE_DIR = _find_project_root()
DEFAULT_INPUT_PATH = BASE_DIR / "resources" / "results" / "2026-01-18-Results-NoBG.xlsx"
DEFAULT_OUTPUT_PATH = BASE_DIR / "frontend" / "public" / "results" / "2026" / "regional" / "q1" / "index.html"

# === SHEET SELECTION ===
# Only the primary result sheets; DD/Teams/Region sheets are ignored
INCLUDED_SHEETS = ('dmt', 'tra')

# === HEADER SYNONYMS ===
# Matched case/whitespace-insensitively: exact first, then substring
HEADER_SYNONYMS: Dict[str, List[str]] = {
    'position': ['pos', 'position', 'rank', 'place'],
    'name': ['name', 'competitor', 'gymnast', 'athlete'],
    'club': ['club', 'team', 'organisation', 'organization'],
    'total': ['total', 'overall', 'final', 'score', 'total score', 'overall total'],
    'age': ['age group', 'age', 'group', 'category', 'class', 'event', 'level', 'division'],
    'gender': ['gender', 'sex'],
    'forename': ['forename', 'first name', 'firstname', 'first'],
    'surname': ['surname', 'last name', 'lastname', 'last'],
}

COLUMN_ROLES = tuple(HEADER_SYNONYMS.keys())

# Rows above a header searched for a "<text> - <text>" title
TITLE_SCAN_DEPTH = 5
TITLE_SEPARATOR_RE = re.compile(r'\S.*\s-\s.*\S')

# === CLASSIFICATION PATTERNS ===
TITLE_PARTS_RE = re.compile(r'^(TRA|TPD|DMT|DMD)\s+(.+?)\s*-\s*(.+)$', re.IGNORECASE)
COLUMN_A_RE = re.compile(r'^([A-Za-z]{3})\s*(.*?)\s*-\s*(.+)$')
GENDER_TOKEN_RE = re.compile(r'women|men|girls?|boys?', re.IGNORECASE)
DISABILITY_PATTERNS = (
    re.compile(r'\bdisab', re.IGNORECASE),
    re.compile(r'\bdmd\b', re.IGNORECASE),
    re.compile(r'\btrd\b', re.IGNORECASE),
)

# Full discipline labels from the sheet-name fallback
DISCIPLINE_DMT = 'DMT'
DISCIPLINE_DMT_DISABILITY = 'DMT Disability - DMD'
DISCIPLINE_TRA = 'Trampoline TRA'
DISCIPLINE_TRA_DISABILITY = 'Trampoline Disability TRD'

DISCIPLINE_CODES = {
    DISCIPLINE_DMT: 'DMT',
    DISCIPLINE_DMT_DISABILITY: 'DMD',
    DISCIPLINE_TRA: 'TRA',
    DISCIPLINE_TRA_DISABILITY: 'TPD',
}

# Short code -> display discipline
SIMPLIFIED_DISCIPLINES = {
    'TRA': 'Trampoline',
    'TPD': 'Trampoline',
    'DMT': 'DMT',
    'DMD': 'DMT',
}

UNKNOWN = 'Unknown'

# === FIXED COLUMN LAYOUTS ===
# (sheet name fragment, position column, total column); first match wins
FIXED_COLUMN_LAYOUTS: List[Tuple[str, str, str]] = [
    ('dmt', 'AZ', 'AY'),
    ('tra', 'AO', 'AN'),
]

# === HIGHLIGHT DETECTION ===
GREEN_MIN = 150
GREEN_MARGIN = 20

# === REPORT ===
REPORT_TITLE = 'Competition Results Summary'
MOBILE_BREAKPOINT_PX = 640
GROUP_KEY_SEPARATOR = ' - '
