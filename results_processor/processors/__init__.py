"""Post-extraction processors: fixed-column overrides and highlight detection."""

from .column_overrides import resolve_fixed_columns, fixed_columns_for_sheet
from .color_annotator import annotate_highlighted_rows, collect_highlighted_rows, is_greenish

__all__ = [
    'resolve_fixed_columns',
    'fixed_columns_for_sheet',
    'annotate_highlighted_rows',
    'collect_highlighted_rows',
    'is_greenish',
]
