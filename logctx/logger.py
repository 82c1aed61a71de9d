"""Logger facade over a :class:`~logctx.handler.Handler`.

Provides :class:`Logger`, a thin front end with ``debug``/``info``/``warn``/
``error`` methods. Every method takes an optional ``ctx``; when omitted the
ambient context (see :func:`logctx.context.current`) is used, so attributes
bound with :func:`logctx.propagate.scope` reach the handler without being
passed around.
"""

import sys
from datetime import UTC, datetime
from typing import Any

from .attrs import args_to_attrs
from .context import Context, current
from .handler import Handler
from .level import DEBUG, ERROR, INFO, WARN
from .record import Record, Source


class Logger:
    """Structured logger bound to one handler.

    Example:
        >>> log = Logger(ContextHandler(TextHandler(sys.stdout)))
        >>> log.info("Connection established", "peer_id", "abc123")
        >>> with scope("request_id", "r-1"):
        ...     log.warn("slow request", "ms", 830)
    """

    __slots__ = ("_handler",)

    def __init__(self, handler: Handler):
        if handler is None:
            raise ValueError("nil handler")
        self._handler = handler

    @property
    def handler(self) -> Handler:
        return self._handler

    def enabled(self, level: int, ctx: Context | None = None) -> bool:
        return self._handler.enabled(current() if ctx is None else ctx, level)

    def with_attrs(self, *args: Any) -> "Logger":
        """Derive a logger whose handler pre-binds ``args``."""
        attrs = args_to_attrs(args)
        if not attrs:
            return self
        return Logger(self._handler.with_attrs(attrs))

    def with_group(self, name: str) -> "Logger":
        """Derive a logger that nests all later attributes under ``name``."""
        if name == "":
            return self
        return Logger(self._handler.with_group(name))

    def log(self, level: int, msg: str, *args: Any, ctx: Context | None = None) -> None:
        self._log(ctx, level, msg, args)

    def debug(self, msg: str, *args: Any, ctx: Context | None = None) -> None:
        self._log(ctx, DEBUG, msg, args)

    def info(self, msg: str, *args: Any, ctx: Context | None = None) -> None:
        self._log(ctx, INFO, msg, args)

    def warn(self, msg: str, *args: Any, ctx: Context | None = None) -> None:
        self._log(ctx, WARN, msg, args)

    warning = warn

    def error(self, msg: str, *args: Any, ctx: Context | None = None) -> None:
        self._log(ctx, ERROR, msg, args)

    def _log(self, ctx: Context | None, level: int, msg: str, args: tuple) -> None:
        if ctx is None:
            ctx = current()
        if not self._handler.enabled(ctx, level):
            return
        # caller of debug/info/... is two frames up from here
        frame = sys._getframe(2)
        source = Source(frame.f_code.co_name, frame.f_code.co_filename, frame.f_lineno)
        record = Record(datetime.now(UTC), level, msg, source)
        record.add(*args)
        self._handler.handle(ctx, record)

    def __repr__(self) -> str:
        return f"Logger({self._handler!r})"
