"""A single log record: time, level, message, source and attributes."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from .attrs import Attr, args_to_attrs
from .level import INFO, level_string


@dataclass(frozen=True)
class Source:
    """Location of the logging call."""

    function: str
    file: str
    line: int

    def __str__(self) -> str:
        return f"{self.file}:{self.line}"


class Record:
    """
    A log record under construction.

    Attributes are appended with :meth:`add` and never removed. Handlers that
    need to add attributes of their own must :meth:`clone` first; a record
    handed to a handler may be shared with other handlers.
    """

    __slots__ = ("time", "level", "message", "source", "_attrs")

    def __init__(
        self,
        time: datetime | None = None,
        level: int = INFO,
        message: str = "",
        source: Source | None = None,
    ):
        self.time = time
        self.level = level
        self.message = message
        self.source = source
        self._attrs: list[Attr] = []

    def add(self, *args: Any) -> None:
        """Append attributes given in flexible argument form."""
        self._attrs.extend(args_to_attrs(args))

    def add_attrs(self, *attrs: Attr) -> None:
        for a in attrs:
            if not a.is_empty_group:
                self._attrs.append(a)

    def attrs(self) -> tuple[Attr, ...]:
        return tuple(self._attrs)

    @property
    def num_attrs(self) -> int:
        return len(self._attrs)

    def clone(self) -> "Record":
        r = Record(self.time, self.level, self.message, self.source)
        r._attrs = list(self._attrs)
        return r

    def __repr__(self) -> str:
        attrs = " ".join(str(a) for a in self._attrs)
        return f"Record({level_string(self.level)} {self.message!r} {attrs})"
