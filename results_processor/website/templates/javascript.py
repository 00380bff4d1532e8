"""
JavaScript code for the results summary page.
"""

from ...utils.constants import MOBILE_BREAKPOINT_PX, GROUP_KEY_SEPARATOR, UNKNOWN


def get_javascript(json_data: str) -> str:
    """
    Return the JavaScript code for the report.

    Filtering, grouping and ordering match website.serializers, which
    renders the initial table body.

    Args:
        json_data: JSON array of serialized result records

    Returns:
        JavaScript code as a string
    """
    js_template = """        const DATA = {JSON_DATA_PLACEHOLDER};

        function escapeHtml(s) {
            return String(s == null ? '' : s)
                .replaceAll('&', '&amp;')
                .replaceAll('<', '&lt;')
                .replaceAll('>', '&gt;')
                .replaceAll('"', '&quot;')
                .replaceAll("'", '&#x27;');
        }

        // Collapsible filters, collapsed by default on narrow screens
        const filtersToggleBtn = document.getElementById('filtersToggle');
        const filtersSection = document.getElementById('filtersSection');
        function setFiltersCollapsed(collapsed) {
            filtersSection.hidden = collapsed;
            filtersToggleBtn.setAttribute('aria-expanded', String(!collapsed));
            filtersToggleBtn.textContent = collapsed ? 'Show filters' : 'Hide filters';
        }
        (function initFiltersCollapse() {
            try {
                const isMobile = window.matchMedia && window.matchMedia('(max-width: {BREAKPOINT_PLACEHOLDER}px)').matches;
                setFiltersCollapsed(!!isMobile);
            } catch (_) {
                setFiltersCollapsed(false);
            }
        })();
        filtersToggleBtn.addEventListener('click', () => {
            setFiltersCollapsed(!filtersSection.hidden);
        });

        function getGroupKey(row) {
            return [row.discipline, row.categoryPart, row.ageGroup].filter(Boolean).join('{SEPARATOR_PLACEHOLDER}');
        }

        function compareText(a, b) {
            const al = String(a).toLowerCase();
            const bl = String(b).toLowerCase();
            if (al !== bl) return al < bl ? -1 : 1;
            if (a === b) return 0;
            return String(a) < String(b) ? -1 : 1;
        }

        function parsePosition(value) {
            const digits = String(value == null ? '' : value).replace(/[^\\d-]/g, '');
            const m = digits.match(/^-?\\d+/);
            return m ? parseInt(m[0], 10) : null;
        }

        function compareRows(x, y) {
            const gcmp = compareText(getGroupKey(x), getGroupKey(y));
            if (gcmp !== 0) return gcmp;
            const xi = parsePosition(x.position);
            const yi = parsePosition(y.position);
            if (xi !== null && yi === null) return -1;  // numbered positions first
            if (xi === null && yi !== null) return 1;
            if (xi !== null && xi !== yi) return xi - yi;
            return compareText(String(x.name).toLowerCase(), String(y.name).toLowerCase());
        }

        function renderRow(r) {
            const trClass = r.isGreen ? ' class="green-row"' : '';
            const dot = ' <span class="dot">&bull;</span> ';
            const meta = [r.club, r.discipline, r.categoryPart, r.ageGroup].map(escapeHtml).join(dot);
            return `
            <tr${trClass}>
                <td class="summary-line-cell" data-key="summary">
                    <div class="sum-grid">
                        <div class="sum-pos"><span class="pos-badge">${escapeHtml(r.position)}</span></div>
                        <div class="sum-main">
                            <div class="sum-top">
                                <span class="sum-name">${escapeHtml(r.name)}</span>
                                <span class="sum-score">${escapeHtml(r.totalScore)}</span>
                            </div>
                            <div class="sum-bottom">${meta}</div>
                        </div>
                    </div>
                </td>
                <td data-label="Position" data-key="position"><span class="pos-badge">${escapeHtml(r.position)}</span></td>
                <td data-label="Competitor" data-key="name">${escapeHtml(r.name)}</td>
                <td data-label="Club" data-key="club">${escapeHtml(r.club)}</td>
                <td data-label="Total Score" data-key="total">${escapeHtml(r.totalScore)}</td>
                <td data-label="Discipline" data-key="discipline"><span class="badge">${escapeHtml(r.discipline)}</span></td>
                <td data-label="Category" data-key="category">${escapeHtml(r.categoryPart)}</td>
                <td data-label="Age Group" data-key="age">${escapeHtml(r.ageGroup)}</td>
            </tr>`;
        }

        function renderRows(rows) {
            const tbody = document.getElementById('resultsBody');
            let html = '';
            let currentGroup = null;
            for (const r of rows) {
                const key = getGroupKey(r) || '{UNKNOWN_PLACEHOLDER}';
                if (key !== currentGroup) {
                    currentGroup = key;
                    html += `<tr class="group-header"><td colspan="7">${escapeHtml(key)}</td></tr>`;
                }
                html += renderRow(r);
            }
            tbody.innerHTML = html;
            document.getElementById('count').textContent = rows.length + ' of ' + DATA.length + ' shown';
        }

        function applyFilters() {
            const q = document.getElementById('searchInput').value.trim().toLowerCase();
            const d = document.getElementById('disciplineFilter').value;
            const cat = document.getElementById('categoryFilter').value;
            const a = document.getElementById('ageFilter').value;
            const c = document.getElementById('clubFilter').value;
            const filtered = DATA.filter(row => {
                if (d && row.discipline !== d) return false;
                if (cat && row.categoryPart !== cat) return false;
                if (a && row.ageGroup !== a) return false;
                if (c && row.club !== c) return false;
                if (q && !String(row.name || '').toLowerCase().includes(q)) return false;
                return true;
            });
            filtered.sort(compareRows);
            renderRows(filtered);
        }

        document.getElementById('searchInput').addEventListener('input', applyFilters);
        ['disciplineFilter', 'categoryFilter', 'ageFilter', 'clubFilter'].forEach(id => {
            document.getElementById(id).addEventListener('change', applyFilters);
        });
        applyFilters();"""

    # Data goes in last so record text is never treated as a placeholder
    return (js_template
            .replace('{BREAKPOINT_PLACEHOLDER}', str(MOBILE_BREAKPOINT_PX))
            .replace('{SEPARATOR_PLACEHOLDER}', GROUP_KEY_SEPARATOR)
            .replace('{UNKNOWN_PLACEHOLDER}', UNKNOWN)
            .replace('{JSON_DATA_PLACEHOLDER}', json_data))
