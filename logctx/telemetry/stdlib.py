"""Bridge to the standard library :mod:`logging` package.

Used for the ``default`` logger type: records go to a stdlib logger (the root
logger unless one is given), so whatever ``logging`` configuration the process
already has decides where they end up.
"""

import logging

from ..context import Context
from ..record import Record
from .format import flatten_attrs, format_text_attrs
from .handlers import GroupingHandler


def to_stdlib_level(level: int) -> int:
    """Map DEBUG/INFO/WARN/ERROR onto 10/20/30/40, linear in between."""
    return 20 + (level * 5) // 2


class StdlibHandler(GroupingHandler):
    """Handler forwarding records to a :class:`logging.Logger`.

    The attributes are appended to the message as ``key=value`` pairs and are
    also available to stdlib formatters and filters as ``record.attrs``.
    """

    def __init__(self, logger: logging.Logger | None = None):
        super().__init__()
        self._logger = logger or logging.getLogger()

    def enabled(self, ctx: Context, level: int) -> bool:
        return self._logger.isEnabledFor(to_stdlib_level(level))

    def handle(self, ctx: Context, record: Record) -> None:
        attrs = self.resolve(record)
        msg = record.message
        tail = format_text_attrs(attrs)
        if tail:
            msg = f"{msg} {tail}"
        fn, lno, func = "(unknown file)", 0, None
        if record.source is not None:
            fn, lno, func = record.source.file, record.source.line, record.source.function
        lr = self._logger.makeRecord(
            self._logger.name,
            to_stdlib_level(record.level),
            fn,
            lno,
            msg,
            (),
            None,
            func,
            extra={"attrs": flatten_attrs(attrs)},
        )
        self._logger.handle(lr)

    def __repr__(self) -> str:
        return f"StdlibHandler({self._logger.name!r})"
