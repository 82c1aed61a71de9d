"""Rendering helpers shared by the text, JSON and bridge handlers.

Provides :func:`format_text_record` (``key=value`` lines) and
:func:`format_json_record` (one JSON object per line), plus :func:`walk_attrs`
and :func:`flatten_attrs` for sinks that want flat dotted keys.
"""

import json
import math
from datetime import datetime
from typing import Any, Callable, Iterator

from ..attrs import Attr
from ..level import level_string
from ..record import Record, Source

TIME_KEY = "time"
LEVEL_KEY = "level"
SOURCE_KEY = "source"
MESSAGE_KEY = "msg"

ReplaceAttr = Callable[[tuple[str, ...], Attr], Attr | None]


# =============================================================================
# Attribute walking
# =============================================================================


def walk_attrs(
    attrs: tuple[Attr, ...] | list[Attr], groups: tuple[str, ...] = ()
) -> Iterator[tuple[tuple[str, ...], Attr]]:
    """Yield ``(groups, attr)`` for every leaf attribute, depth first.

    Groups with an empty key are inlined into their parent; leaves with an
    empty key are skipped.
    """
    for a in attrs:
        if a.is_group:
            inner = groups + (a.key,) if a.key else groups
            yield from walk_attrs(tuple(a.value), inner)
        elif a.key:
            yield groups, a


def flatten_attrs(attrs: tuple[Attr, ...] | list[Attr]) -> dict[str, Any]:
    """Collapse attributes into a dict with dotted keys; later keys win."""
    out: dict[str, Any] = {}
    for groups, a in walk_attrs(attrs):
        out[".".join(groups + (a.key,))] = a.value
    return out


def format_time(t: datetime) -> str:
    s = t.isoformat(timespec="milliseconds")
    if s.endswith("+00:00"):
        s = s[:-6] + "Z"
    return s


def _replace(replace_attr: ReplaceAttr | None, groups: tuple[str, ...], a: Attr) -> Attr | None:
    if replace_attr is None:
        return a
    r = replace_attr(groups, a)
    if r is None or (r.key == "" and not r.is_group):
        return None
    return r


def builtin_attrs(
    record: Record, add_source: bool, replace_attr: ReplaceAttr | None
) -> list[Attr]:
    """Return the time/level/source/msg attributes of a record after replacement."""
    out: list[Attr] = []
    candidates = []
    if record.time is not None:
        candidates.append(Attr(TIME_KEY, record.time))
    candidates.append(Attr(LEVEL_KEY, record.level))
    if add_source and record.source is not None:
        candidates.append(Attr(SOURCE_KEY, record.source))
    candidates.append(Attr(MESSAGE_KEY, record.message))
    for a in candidates:
        r = _replace(replace_attr, (), a)
        if r is not None:
            out.append(r)
    return out


# =============================================================================
# Text
# =============================================================================


def _needs_quoting(s: str) -> bool:
    if s == "":
        return True
    for ch in s:
        if ch.isspace() or ch in '="' or not ch.isprintable():
            return True
    return False


def _text_string(s: str) -> str:
    if _needs_quoting(s):
        return json.dumps(s, ensure_ascii=False)
    return s


def text_value(v: Any) -> str:
    if v is None:
        return "<nil>"
    if isinstance(v, bool):
        return "true" if v else "false"
    if isinstance(v, (int, float)):
        return str(v)
    if isinstance(v, datetime):
        return format_time(v)
    return _text_string(str(v))


def _text_builtin(a: Attr) -> str:
    if a.key == LEVEL_KEY and isinstance(a.value, int) and not isinstance(a.value, bool):
        return f"{_text_string(a.key)}={level_string(a.value)}"
    return f"{_text_string(a.key)}={text_value(a.value)}"


def format_text_record(
    record: Record,
    attrs: list[Attr],
    *,
    add_source: bool = False,
    replace_attr: ReplaceAttr | None = None,
) -> str:
    """
    Format a record as a ``key=value`` line.

    Format: time=... level=INFO source=file:line msg=... k=v group.k=v\\n

    Args:
        record: The record whose built-in fields are rendered.
        attrs: The attributes to render, already nested into open groups.
        add_source: Whether to render the ``source`` field.
        replace_attr: Optional hook to rewrite or drop attributes.

    Returns:
        Formatted line with newline terminator.
    """
    parts = [_text_builtin(a) for a in builtin_attrs(record, add_source, replace_attr)]
    tail = format_text_attrs(attrs, replace_attr)
    if tail:
        parts.append(tail)
    return " ".join(parts) + "\n"


def format_text_attrs(attrs: list[Attr], replace_attr: ReplaceAttr | None = None) -> str:
    """Render attributes alone as space separated ``key=value`` pairs."""
    parts: list[str] = []
    for groups, a in walk_attrs(attrs):
        r = _replace(replace_attr, groups, a)
        if r is None:
            continue
        if r.is_group:
            for inner_groups, inner in walk_attrs((r,), groups):
                key = ".".join(inner_groups + (inner.key,))
                parts.append(f"{_text_string(key)}={text_value(inner.value)}")
            continue
        key = ".".join(groups + (r.key,))
        parts.append(f"{_text_string(key)}={text_value(r.value)}")
    return " ".join(parts)


# =============================================================================
# JSON
# =============================================================================


def _json_dumps(v: Any) -> str:
    return json.dumps(v, ensure_ascii=False)


def json_value(v: Any) -> str:
    if isinstance(v, Source):
        return _json_dumps({"function": v.function, "file": v.file, "line": v.line})
    if isinstance(v, datetime):
        return _json_dumps(format_time(v))
    if isinstance(v, float) and not math.isfinite(v):
        return _json_dumps(str(v))
    if v is None or isinstance(v, (str, int, float, bool)):
        return _json_dumps(v)
    if isinstance(v, BaseException):
        return _json_dumps(str(v))
    try:
        return json.dumps(v, ensure_ascii=False, default=str)
    except (TypeError, ValueError):
        return _json_dumps(str(v))


def _json_members(
    attrs: tuple[Attr, ...] | list[Attr],
    groups: tuple[str, ...],
    replace_attr: ReplaceAttr | None,
) -> list[str]:
    members: list[str] = []
    for a in attrs:
        if a.is_group:
            inner = groups + (a.key,) if a.key else groups
            sub = _json_members(tuple(a.value), inner, replace_attr)
            if not sub:
                continue
            if a.key:
                members.append(f"{_json_dumps(a.key)}:{{{','.join(sub)}}}")
            else:
                members.extend(sub)
            continue
        if not a.key:
            continue
        r = _replace(replace_attr, groups, a)
        if r is None:
            continue
        if r.is_group:
            members.extend(_json_members((r,), groups, None))
            continue
        members.append(f"{_json_dumps(r.key)}:{json_value(r.value)}")
    return members


def format_json_record(
    record: Record,
    attrs: list[Attr],
    *,
    add_source: bool = False,
    replace_attr: ReplaceAttr | None = None,
) -> str:
    """
    Format a record as a single-line JSON object.

    Groups become nested objects; duplicate keys are written as they come.

    Returns:
        JSON string (single line) with newline terminator.
    """
    members = []
    for a in builtin_attrs(record, add_source, replace_attr):
        if a.key == LEVEL_KEY and isinstance(a.value, int) and not isinstance(a.value, bool):
            members.append(f"{_json_dumps(a.key)}:{_json_dumps(level_string(a.value))}")
        else:
            members.append(f"{_json_dumps(a.key)}:{json_value(a.value)}")
    members.extend(_json_members(attrs, (), replace_attr))
    return "{" + ",".join(members) + "}\n"
