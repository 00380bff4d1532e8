"""
Competition Results Summary Generator

Scan trampoline and double-mini-trampoline result spreadsheets for embedded
result tables and generate a filterable, self-contained HTML report.
"""

__version__ = "1.0.0"
