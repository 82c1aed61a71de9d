"""Severity levels.

Levels are plain integers. The named levels are spaced four apart so that
custom levels fit in between; ``level_string`` renders those as an offset from
the nearest lower name (``INFO+2``, ``DEBUG-1``).
"""

import re

from opentelemetry._logs import SeverityNumber

DEBUG = -4
INFO = 0
WARN = 4
ERROR = 8

_NAMES = {"DEBUG": DEBUG, "INFO": INFO, "WARN": WARN, "ERROR": ERROR}

_INT_PATTERN = re.compile(r"^[+-]?\d+$")


def _with_offset(base: str, val: int) -> str:
    if val == 0:
        return base
    return f"{base}{val:+d}"


def level_string(level: int) -> str:
    if level < INFO:
        return _with_offset("DEBUG", level - DEBUG)
    if level < WARN:
        return _with_offset("INFO", level - INFO)
    if level < ERROR:
        return _with_offset("WARN", level - WARN)
    return _with_offset("ERROR", level - ERROR)


def parse_level(text: str) -> int:
    """Parse ``NAME``, ``NAME+N``, ``NAME-N`` (any case) or a signed integer.

    Raises:
        ValueError: if ``text`` is none of those.
    """
    s = text.strip()
    if _INT_PATTERN.match(s):
        return int(s)

    name, offset = s, 0
    i = next((j for j, ch in enumerate(s) if ch in "+-"), -1)
    if i >= 0:
        name = s[:i]
        if not _INT_PATTERN.match(s[i:]):
            raise ValueError(f"level string {text!r}: bad offset")
        offset = int(s[i:])

    base = _NAMES.get(name.upper())
    if base is None:
        raise ValueError(f"level string {text!r}: unknown name")
    return base + offset


def to_severity(level: int) -> SeverityNumber:
    """Map a level onto the OpenTelemetry severity scale (INFO -> 9)."""
    return SeverityNumber(min(max(level + 9, 1), 24))
