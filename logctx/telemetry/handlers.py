"""Stream handlers: text, JSON and discard.

Provides :class:`GroupingHandler`, the shared base that keeps pre-bound
attributes and open groups, and the concrete :class:`TextHandler`,
:class:`JSONHandler` and :class:`DiscardHandler`.
"""

import copy
import threading
from abc import abstractmethod
from dataclasses import dataclass
from typing import Sequence, TextIO

from ..attrs import Attr
from ..context import Context
from ..handler import Handler
from ..level import INFO
from ..record import Record
from .format import ReplaceAttr, format_json_record, format_text_record


@dataclass(frozen=True)
class HandlerOptions:
    """Options for :class:`TextHandler` and :class:`JSONHandler`.

    Parameters:
        add_source: Render the caller location as the ``source`` field.
        level: Minimum enabled level.
        replace_attr: Called with ``(groups, attr)`` for each built-in field
            and each non-group attribute. Return a new attribute to rewrite
            it, or ``None`` (or an attribute with an empty key) to drop it.
    """

    add_source: bool = False
    level: int = INFO
    replace_attr: ReplaceAttr | None = None


# =============================================================================
# Grouping Handler
# =============================================================================


class GroupingHandler(Handler):
    """Base class keeping pre-bound attributes per open group.

    ``_pre[d]`` holds the attributes bound while ``d`` groups were open, so
    ``len(_pre) == len(_groups) + 1``. Derivation copies the handler and
    replaces the tuples; the original handler is never changed.
    """

    def __init__(self, level: int = INFO):
        self._level = level
        self._groups: tuple[str, ...] = ()
        self._pre: tuple[tuple[Attr, ...], ...] = ((),)

    @property
    def groups(self) -> tuple[str, ...]:
        return self._groups

    def enabled(self, ctx: Context, level: int) -> bool:
        return level >= self._level

    def with_attrs(self, attrs: Sequence[Attr]) -> Handler:
        kept = tuple(a for a in attrs if not a.is_empty_group)
        if not kept:
            return self
        h = copy.copy(self)
        h._pre = self._pre[:-1] + (self._pre[-1] + kept,)
        return h

    def with_group(self, name: str) -> Handler:
        if name == "":
            return self
        h = copy.copy(self)
        h._groups = self._groups + (name,)
        h._pre = self._pre + ((),)
        return h

    def resolve(self, record: Record) -> list[Attr]:
        """Return the record's attributes nested into the open groups.

        Pre-bound attributes of each depth come before the deeper group.
        Groups left without members are omitted.
        """
        inner = list(record.attrs())
        for depth in range(len(self._groups), 0, -1):
            members = list(self._pre[depth]) + inner
            inner = [Attr.group(self._groups[depth - 1], *members)] if members else []
        return list(self._pre[0]) + inner


class _StreamHandler(GroupingHandler):
    def __init__(self, stream: TextIO, options: HandlerOptions | None = None):
        options = options or HandlerOptions()
        super().__init__(options.level)
        self._stream = stream
        self._options = options
        # shared by every handler derived from this one
        self._lock = threading.Lock()

    @abstractmethod
    def _format(self, record: Record, attrs: list[Attr]) -> str:
        ...

    def handle(self, ctx: Context, record: Record) -> None:
        line = self._format(record, self.resolve(record))
        with self._lock:
            self._stream.write(line)
            flush = getattr(self._stream, "flush", None)
            if flush is not None:
                flush()


class TextHandler(_StreamHandler):
    """Writes ``key=value`` lines.

    Example output:
        time=2026-02-03T10:30:00.000Z level=INFO msg="User logged in" count=7
    """

    def _format(self, record: Record, attrs: list[Attr]) -> str:
        return format_text_record(
            record,
            attrs,
            add_source=self._options.add_source,
            replace_attr=self._options.replace_attr,
        )

    def __repr__(self) -> str:
        return f"TextHandler(groups={self._groups!r})"


class JSONHandler(_StreamHandler):
    """Writes one JSON object per line.

    Example output:
        {"time":"2026-02-03T10:30:00.000Z","level":"INFO","msg":"User logged in","count":7}
    """

    def _format(self, record: Record, attrs: list[Attr]) -> str:
        return format_json_record(
            record,
            attrs,
            add_source=self._options.add_source,
            replace_attr=self._options.replace_attr,
        )

    def __repr__(self) -> str:
        return f"JSONHandler(groups={self._groups!r})"


class DiscardHandler(Handler):
    """Handler that is never enabled and drops every record."""

    def enabled(self, ctx: Context, level: int) -> bool:
        return False

    def handle(self, ctx: Context, record: Record) -> None:
        pass

    def with_attrs(self, attrs: Sequence[Attr]) -> Handler:
        return self

    def with_group(self, name: str) -> Handler:
        return self

    def __repr__(self) -> str:
        return "DiscardHandler()"
