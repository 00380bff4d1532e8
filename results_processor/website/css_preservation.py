"""
Carry hand-edited CSS over from a previously generated report.

Users customise the published page by adding a stylesheet to it. Before the
report is regenerated the old file is searched for that stylesheet so it can
be embedded again unchanged.
"""

import re
from pathlib import Path
from typing import Union

from bs4 import BeautifulSoup

from ..utils.log import debug, warn


PRESERVED_CSS_ATTR = 'data-preserved-user-css'
BASE_CSS_ATTR = 'data-report-base'

# Selectors only the generated base stylesheet uses together
_BASE_SELECTORS = ('.group-header', '.controls')

_STYLE_END_RE = re.compile(r'</style\s*>', re.IGNORECASE)


def _style_text(tag) -> str:
    return tag.string or ''


def is_base_stylesheet(tag) -> bool:
    """True for the report's own generated stylesheet."""
    if tag.has_attr(BASE_CSS_ATTR):
        return True
    text = _style_text(tag)
    return all(selector in text for selector in _BASE_SELECTORS)


def wrap_preserved_css(css: str) -> str:
    """Wrap bare CSS text in a marked <style> block."""
    return f'<style {PRESERVED_CSS_ATTR}>{css}</style>'


def source_markup(html: str, tag) -> str:
    """
    Return the markup of a <style> element exactly as written in html.

    Uses the parser's recorded start position, so attribute order, quoting
    and valueless attributes are kept. Falls back to re-rendering the tag
    when no position was recorded.
    """
    if tag.sourceline is None or tag.sourcepos is None:
        return str(tag)
    lines = html.split('\n')
    start = sum(len(line) + 1 for line in lines[:tag.sourceline - 1]) + tag.sourcepos
    end = _STYLE_END_RE.search(html, start)
    if not html.startswith('<', start) or end is None:
        return str(tag)
    return html[start:end.end()]


def extract_preserved_css(html: str) -> str:
    """
    Find the user stylesheet in an existing report.

    An explicitly marked <style data-preserved-user-css> block always wins
    and is returned exactly as written, attributes included. Otherwise the
    text of the last <style> block that is not the generated base
    stylesheet is wrapped in a marked block; this fallback is best-effort.

    Args:
        html: Existing report markup

    Returns:
        A <style> element ready to embed, or ''
    """
    if not html:
        return ""
    soup = BeautifulSoup(html, 'html.parser')

    marked = soup.find('style', attrs={PRESERVED_CSS_ATTR: True})
    if marked is not None:
        return source_markup(html, marked)

    user_blocks = [tag for tag in soup.find_all('style') if not is_base_stylesheet(tag)]
    if not user_blocks:
        return ""
    css = _style_text(user_blocks[-1])
    if not css:
        return ""
    debug("  No marked user CSS; using last unmarked <style> block")
    return wrap_preserved_css(css)


def read_preserved_css(output_path: Union[str, Path]) -> str:
    """
    Read the user stylesheet from the report currently at output_path.

    Args:
        output_path: Destination of the report about to be written

    Returns:
        A <style> element to re-embed, '' when there is no file or nothing
        to keep
    """
    path = Path(output_path)
    if not path.exists():
        return ""
    try:
        existing = path.read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError) as e:
        warn(f"Could not read existing report {path} for custom CSS: {e}")
        return ""

    block = extract_preserved_css(existing)
    if block:
        debug(f"  Preserving {len(block)} characters of custom CSS from {path.name}")
    return block
