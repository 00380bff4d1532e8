"""
HTML section templates for the results summary page.
"""

from html import escape
from typing import List

from ...models import ReportDataset
from ...utils.constants import REPORT_TITLE


def get_head(css: str, preserved_style: str = '') -> str:
    """
    Return the HTML head section.

    Args:
        css: Base stylesheet
        preserved_style: User <style> element carried over from the
            previous report, embedded exactly as found
    """
    user_style = f"\n    {preserved_style}" if preserved_style else ''
    return f"""<head>
    <meta charset="utf-8">
    <meta name="viewport" content="width=device-width, initial-scale=1">
    <title>{REPORT_TITLE}</title>
    <style data-report-base>
{css}
    </style>{user_style}
</head>"""


def _options(values: List[str]) -> str:
    options = ['<option value="">All</option>']
    for value in values:
        safe = escape(value, quote=True)
        options.append(f'<option value="{safe}">{safe}</option>')
    return ''.join(options)


def get_filter_controls(dataset: ReportDataset) -> str:
    """Return the collapsible filter panel."""
    return f"""    <div class="filters-header">
        <button id="filtersToggle" class="filters-toggle" type="button" aria-expanded="true" aria-controls="filtersSection">Hide filters</button>
    </div>
    <div id="filtersSection" class="controls filters-collapsible">
        <label>
            Search (name)
            <input id="searchInput" type="text" placeholder="Type a name..." />
        </label>
        <label>
            Discipline
            <select id="disciplineFilter">{_options(dataset.disciplines)}</select>
        </label>
        <label>
            Category
            <select id="categoryFilter">{_options(dataset.categories)}</select>
        </label>
        <label>
            Age group
            <select id="ageFilter">{_options(dataset.age_groups)}</select>
        </label>
        <label>
            Club
            <select id="clubFilter">{_options(dataset.clubs)}</select>
        </label>
    </div>"""


def get_results_table(rows_html: str) -> str:
    """Return the results table with a pre-rendered body."""
    return f"""    <div class="table-container">
    <table>
        <thead>
            <tr>
                <th>Position</th>
                <th>Competitor</th>
                <th>Club</th>
                <th>Total Score</th>
                <th>Discipline</th>
                <th>Category</th>
                <th>Age Group</th>
            </tr>
        </thead>
        <tbody id="resultsBody">{rows_html}
        </tbody>
    </table>
    </div>"""


def get_body(dataset: ReportDataset, rows_html: str, generated_time: str) -> str:
    """
    Return the HTML body content (without the closing tag or script).

    Args:
        dataset: Report dataset (filter options, record count)
        rows_html: Pre-rendered table body rows
        generated_time: Timestamp shown in the meta line
    """
    return f"""<body>
    <h1>{REPORT_TITLE}</h1>
    <div class="meta">Generated from DMT and TRA sheets &middot; {escape(generated_time)}</div>
{get_filter_controls(dataset)}
    <div class="count"><span id="count">{dataset.total} of {dataset.total} shown</span></div>
{get_results_table(rows_html)}"""
