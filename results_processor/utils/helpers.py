"""
Helper utility functions for the results processor.
"""

import math
import re
from typing import Any, Optional, Union


def normalize_header(value: Any) -> str:
    """
    Normalize a header cell for synonym matching.

    Lower-cases and collapses internal whitespace.

    Args:
        value: Raw header cell value

    Returns:
        Normalized header string ('' for None)
    """
    if value is None:
        return ""
    return re.sub(r'\s+', ' ', str(value).lower()).strip()


def clean_text(value: Any) -> str:
    """Return the value as a stripped string, '' for None."""
    if value is None:
        return ""
    return str(value).strip()


def to_number_or_string(value: Any) -> Union[float, str]:
    """
    Coerce a score-like value to a number where possible.

    Non-numeric characters (thousands separators, units, stray text) are
    stripped before parsing. Values with nothing numeric left are returned
    as trimmed text so markers like "DNS" survive.

    Args:
        value: Raw cell value

    Returns:
        float if the value is numeric, otherwise the trimmed string
    """
    if value is None:
        return ""
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        if math.isfinite(value):
            return float(value)
        return str(value)

    text = str(value).strip()
    digits = re.sub(r'[^\d.-]', '', text)
    if not re.search(r'\d', digits):
        return text
    try:
        number = float(digits)
    except ValueError:
        return text
    return number if math.isfinite(number) else text


def format_score(value: Any) -> str:
    """
    Format a total score for display.

    Numeric values become fixed 3-decimal strings; anything else is
    returned trimmed. Formatting an already formatted score is a no-op.

    Args:
        value: Raw score value

    Returns:
        Display string
    """
    result = to_number_or_string(value)
    if isinstance(result, float):
        return f"{result:.3f}"
    return result


def parse_position(value: Any) -> Optional[int]:
    """
    Parse a finishing position into an integer for sorting.

    Handles tie notation and suffixes ("1=", "2T", "3rd").

    Args:
        value: Position value

    Returns:
        Integer position or None if not numeric
    """
    digits = re.sub(r'[^\d-]', '', clean_text(value))
    match = re.match(r'-?\d+', digits)
    if not match:
        return None
    return int(match.group(0))
