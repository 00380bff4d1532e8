"""
Logging utilities for console output.

Provides consistent logging with support for:
- Log levels (DEBUG, INFO, WARN, ERROR)
- Optional emoji stripping
- Verbose mode for debug output
- Colored output (when supported)
"""

import sys
import re
from typing import Optional
from enum import IntEnum


class LogLevel(IntEnum):
    """Log levels for filtering output."""
    DEBUG = 0
    INFO = 1
    WARN = 2
    ERROR = 3


# Module-level configuration
_log_level = LogLevel.INFO
_use_emoji = True

# ANSI color codes
_COLORS = {
    'reset': '\033[0m',
    'red': '\033[91m',
    'yellow': '\033[93m',
    'green': '\033[92m',
    'gray': '\033[90m',
}

_EMOJI_RE = re.compile(
    "["
    "\U0001F300-\U0001F6FF"  # symbols, pictographs, transport
    "\U0001F1E0-\U0001F1FF"  # flags
    "\U00002702-\U000027B0"
    "\U000024C2-\U0001F251"
    "]+",
    flags=re.UNICODE
)


def set_verbosity(verbose: bool) -> None:
    """Show DEBUG messages when verbose, otherwise INFO and above."""
    global _log_level
    _log_level = LogLevel.DEBUG if verbose else LogLevel.INFO


def set_use_emoji(use_emoji: bool) -> None:
    """Enable or disable emoji in output."""
    global _use_emoji
    _use_emoji = use_emoji


def _supports_color(stream) -> bool:
    if not hasattr(stream, 'isatty') or not stream.isatty():
        return False
    # Windows cmd doesn't support ANSI by default
    return sys.platform != 'win32'


def _colorize(text: str, color: str, stream) -> str:
    if _supports_color(stream) and color in _COLORS:
        return f"{_COLORS[color]}{text}{_COLORS['reset']}"
    return text


def _clean(msg: str) -> str:
    if _use_emoji:
        return msg
    return _EMOJI_RE.sub('', msg).strip()


def _emit(msg: str, level: Optional[str], color: Optional[str], stream) -> None:
    text = _clean(msg)
    if level:
        prefix = f"[{level}]"
        if color:
            prefix = _colorize(prefix, color, stream)
        text = f"{prefix} {text}"
    elif color:
        text = _colorize(text, color, stream)
    print(text, file=stream)


def debug(msg: str) -> None:
    """Print debug message (only if verbose mode enabled)."""
    if _log_level <= LogLevel.DEBUG:
        _emit(msg, 'DEBUG', 'gray', sys.stdout)


def info(msg: str) -> None:
    """Print info message."""
    if _log_level <= LogLevel.INFO:
        _emit(msg, None, None, sys.stdout)


def warn(msg: str) -> None:
    """Print warning message to stderr."""
    if _log_level <= LogLevel.WARN:
        _emit(msg, 'WARN', 'yellow', sys.stderr)


def error(msg: str) -> None:
    """Print error message to stderr."""
    if _log_level <= LogLevel.ERROR:
        _emit(msg, 'ERROR', 'red', sys.stderr)


def success(msg: str) -> None:
    """Print success message (always shown)."""
    _emit(msg, None, 'green', sys.stdout)
