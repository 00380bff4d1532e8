"""
Data serializers for the results report.

The grouping, ordering and row markup here mirror the page script so the
initial table body is rendered server-side and can be tested directly.
"""

import json
from html import escape
from typing import Any, Iterable, List, Tuple

from ..models import ReportDataset, ResultRecord
from ..utils.constants import GROUP_KEY_SEPARATOR, UNKNOWN
from ..utils.helpers import parse_position


def unique_sorted(values: Iterable[str]) -> List[str]:
    """Deduplicated non-empty values, sorted case-insensitively."""
    return sorted({v for v in values if v}, key=lambda v: (str(v).casefold(), str(v)))


def build_report_dataset(records: List[ResultRecord]) -> ReportDataset:
    """
    Order records for display and collect the filter option lists.

    Args:
        records: Final annotated records

    Returns:
        ReportDataset ready for rendering
    """
    return ReportDataset(
        records=sort_records(records),
        disciplines=unique_sorted(r.discipline for r in records),
        categories=unique_sorted(r.category_part for r in records),
        age_groups=unique_sorted(r.age_group for r in records),
        clubs=unique_sorted(r.club for r in records),
    )


def group_key(record: ResultRecord) -> str:
    """Composite "discipline - category - age" key, empty parts skipped."""
    parts = [record.discipline, record.category_part, record.age_group]
    return GROUP_KEY_SEPARATOR.join(p for p in parts if p)


def record_sort_key(record: ResultRecord) -> Tuple[Any, ...]:
    """
    Sort key: group, then numeric position ascending, then name.

    Records without a numeric position sort after numbered ones.
    """
    key = group_key(record)
    position = parse_position(record.position)
    has_position = position is not None
    return (
        key.casefold(),
        key,
        0 if has_position else 1,
        position if has_position else 0,
        record.name.casefold(),
    )


def sort_records(records: Iterable[ResultRecord]) -> List[ResultRecord]:
    return sorted(records, key=record_sort_key)


def _e(value: Any) -> str:
    return escape(str(value), quote=True)


def render_result_row(record: ResultRecord) -> str:
    """Render one record as a table row (desktop cells plus mobile summary card)."""
    tr_class = ' class="green-row"' if record.is_green else ''
    meta = (f'{_e(record.club)} <span class="dot">&bull;</span> {_e(record.discipline)} '
            f'<span class="dot">&bull;</span> {_e(record.category_part)} '
            f'<span class="dot">&bull;</span> {_e(record.age_group)}')
    return f"""
            <tr{tr_class}>
                <td class="summary-line-cell" data-key="summary">
                    <div class="sum-grid">
                        <div class="sum-pos"><span class="pos-badge">{_e(record.position)}</span></div>
                        <div class="sum-main">
                            <div class="sum-top">
                                <span class="sum-name">{_e(record.name)}</span>
                                <span class="sum-score">{_e(record.total_score)}</span>
                            </div>
                            <div class="sum-bottom">{meta}</div>
                        </div>
                    </div>
                </td>
                <td data-label="Position" data-key="position"><span class="pos-badge">{_e(record.position)}</span></td>
                <td data-label="Competitor" data-key="name">{_e(record.name)}</td>
                <td data-label="Club" data-key="club">{_e(record.club)}</td>
                <td data-label="Total Score" data-key="total">{_e(record.total_score)}</td>
                <td data-label="Discipline" data-key="discipline"><span class="badge">{_e(record.discipline)}</span></td>
                <td data-label="Category" data-key="category">{_e(record.category_part)}</td>
                <td data-label="Age Group" data-key="age">{_e(record.age_group)}</td>
            </tr>"""


def render_result_rows(records: Iterable[ResultRecord]) -> str:
    """
    Render records in the given order, inserting a group header row
    whenever the group key changes.

    Args:
        records: Records, already sorted

    Returns:
        HTML for the table body
    """
    html = []
    current_group = None
    for record in records:
        key = group_key(record) or UNKNOWN
        if key != current_group:
            current_group = key
            html.append(f'\n            <tr class="group-header"><td colspan="7">{_e(key)}</td></tr>')
        html.append(render_result_row(record))
    return ''.join(html)


def serialize_records(records: Iterable[ResultRecord]) -> str:
    """
    JSON array of records for inlining in a <script> block.

    "</" is escaped so competitor text cannot close the script element.
    """
    data = [record.to_dict() for record in records]
    return json.dumps(data, ensure_ascii=False).replace('</', '<\\/')
