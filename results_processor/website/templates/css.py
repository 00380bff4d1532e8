"""
CSS styles for the results summary page.
"""

from ...utils.constants import MOBILE_BREAKPOINT_PX


def get_css() -> str:
    """Return the base CSS styles for the report."""
    css_template = """        :root {
            --text-primary: #111111;
            --text-secondary: #444444;
            --text-muted: #666666;
            --border-color: #eeeeee;
            --input-border: #cccccc;
            --header-bg: #fafafa;
            --hover-color: #f8fbff;
            --group-bg: #f3f4f6;
            --highlight-bg: #e8fbe8;
            --badge-bg: #eef2ff;
            --badge-text: #3730a3;
        }
        body {
            font-family: system-ui, -apple-system, 'Segoe UI', Roboto, Helvetica, Arial, sans-serif;
            margin: 24px;
            color: var(--text-primary);
        }
        h1 {
            font-size: 20px;
            margin: 0 0 16px;
        }
        .meta {
            font-size: 12px;
            color: var(--text-muted);
            margin-bottom: 10px;
        }
        .controls {
            display: grid;
            grid-template-columns: repeat(5, minmax(180px, 1fr));
            gap: 12px;
            margin-bottom: 16px;
        }
        .controls label {
            display: flex;
            flex-direction: column;
            font-size: 12px;
            color: var(--text-secondary);
            gap: 6px;
        }
        .filters-header {
            display: flex;
            justify-content: flex-end;
            align-items: center;
            gap: 8px;
            margin-bottom: 8px;
            max-width: 90%;
        }
        .filters-toggle {
            appearance: none;
            border: 1px solid #d1d5db;
            background: #ffffff;
            color: var(--text-primary);
            padding: 6px 10px;
            border-radius: 8px;
            font-size: 13px;
            cursor: pointer;
        }
        .filters-toggle:hover {
            background: #f9fafb;
        }
        .filters-collapsible[hidden] {
            display: none !important;
        }
        input[type="text"], select {
            padding: 8px 10px;
            border: 1px solid var(--input-border);
            border-radius: 6px;
            font-size: 14px;
        }
        .count {
            margin-left: 8px;
            font-size: 12px;
            color: var(--text-muted);
        }
        .table-container {
            width: 100%;
            max-width: 90%;
        }
        table {
            width: 100%;
            border-collapse: collapse;
            min-width: 720px;
        }
        th, td {
            padding: 10px 12px;
            border-bottom: 1px solid var(--border-color);
            font-size: 14px;
            text-align: left;
        }
        th {
            position: sticky;
            top: 0;
            background: var(--header-bg);
            z-index: 1;
        }
        tbody tr:hover {
            background: var(--hover-color);
        }
        .badge {
            display: inline-block;
            background: var(--badge-bg);
            color: var(--badge-text);
            padding: 2px 8px;
            border-radius: 999px;
            font-size: 12px;
        }
        .group-header {
            background: var(--group-bg);
            font-weight: 600;
        }
        .group-header td {
            padding-top: 16px;
        }
        .green-row {
            background: var(--highlight-bg) !important;
        }
        /* Desktop/tablet: condensed summary card hidden */
        td.summary-line-cell {
            display: none;
        }
        @media (max-width: BREAKPOINTpx) {
            body { margin: 16px; }
            .controls { grid-template-columns: 1fr; max-width: 90%; }
            input[type="text"], select { font-size: 12px; }
            .table-container { overflow: visible; }
            table { min-width: 0; max-width: 100%; }
            table, thead, tbody, th, td, tr { display: block; }
            thead { display: none; }
            tbody tr {
                background: #ffffff;
                border: 1px solid var(--border-color);
                border-radius: 10px;
                padding: 10px 12px;
                margin: 0 0 12px 0;
                box-shadow: 0 1px 1px rgba(0,0,0,0.02);
                width: 100%;
                box-sizing: border-box;
            }
            th, td { padding: 6px 0; font-size: 13px; border-bottom: none; text-align: center; }
            td { word-break: break-word; overflow-wrap: anywhere; }
            td[data-key="position"], td[data-key="name"], td[data-key="total"],
            td[data-key="club"], td[data-key="discipline"], td[data-key="category"], td[data-key="age"] {
                display: none;
            }
            td.summary-line-cell { display: block; margin-bottom: 6px; padding: 0; width: 100%; box-sizing: border-box; }
            td.summary-line-cell .sum-grid { display: grid; grid-template-columns: 28px 1fr; column-gap: 10px; align-items: stretch; }
            td.summary-line-cell .sum-pos { background: rgb(193, 197, 199); color: #ffffff; border-radius: 90px; display: flex; align-items: center; justify-content: center; }
            td.summary-line-cell .sum-pos .pos-badge { font-size: 24px; padding: 4px 12px; line-height: 1; }
            td.summary-line-cell .sum-top { display: grid; grid-template-columns: 1fr max-content; align-items: center; column-gap: 8px; }
            td.summary-line-cell .sum-name { font-weight: 700; font-size: 17px; white-space: nowrap; overflow: hidden; text-overflow: ellipsis; text-align: left; min-width: 0; }
            td.summary-line-cell .sum-score { font-weight: 600; font-size: 13px; white-space: nowrap; line-height: 1; justify-self: center; }
            td.summary-line-cell .sum-bottom { margin-top: 4px; font-size: 12px; color: #6b7280; text-align: left; }
            .group-header td { display: block !important; padding: 6px 0; border: none; }
            .badge { font-size: 11px; }
        }"""
    return css_template.replace('BREAKPOINT', str(MOBILE_BREAKPOINT_PX))
