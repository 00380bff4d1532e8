"""
HTML template components for the results summary page.
"""

from .css import get_css
from .javascript import get_javascript
from .html_sections import (
    get_head,
    get_body,
    get_filter_controls,
    get_results_table,
)

__all__ = [
    'get_css',
    'get_javascript',
    'get_head',
    'get_body',
    'get_filter_controls',
    'get_results_table',
]
