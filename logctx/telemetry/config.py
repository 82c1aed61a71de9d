"""Root logger configuration for logctx.

Provides :func:`build_logger` (configuration string -> :class:`Logger`),
:func:`root_logger` (lazy process-wide singleton configured from the
environment) and :func:`get_logger` (named child of the root logger).

Configuration format::

    <type>?output=<output>&level=<level>&addSource=<bool>

Type:

- ``json`` (or empty): :class:`JSONHandler`
- ``text``: :class:`TextHandler`
- ``discard``: a logger that drops everything
- ``default``: forwards to the stdlib :mod:`logging` root logger

Output: ``stderr``/``err`` (default), ``stdout``/``out``, ``discard`` or a
file descriptor number.

Level: ``debug``, ``info``, ``warn``, ``error`` in any case, optionally with an
offset (``error-8`` is INFO), or a signed integer. Default is INFO.

AddSource: a boolean literal (``true``, ``0``, ``F`` ...). Default is false.

Every handler except ``discard`` is wrapped in a
:class:`~logctx.handler.ContextHandler`, so attributes attached to the context
are always emitted.
"""

import inspect
import io
import os
import re
import sys
import threading
from typing import TextIO
from urllib.parse import parse_qs, urlsplit

from ..handler import ContextHandler
from ..level import INFO, parse_level
from ..logger import Logger
from ..mechanism import LoggerConfigError
from .handlers import DiscardHandler, HandlerOptions, JSONHandler, TextHandler
from .stdlib import StdlibHandler

# Name of the environment variable read by :func:`root_logger`.
ENV_KEY = "LOGCTX_LOGGER"

# Attribute key for the ``name`` argument of :func:`get_logger`.
NAME_KEY = "logger"

# Used when the environment variable is missing or empty.
DEFAULT_LOGGER = "json?output=stderr&level=error&addSource=true"

_TRUE = {"1", "t", "T", "TRUE", "true", "True"}
_FALSE = {"0", "f", "F", "FALSE", "false", "False"}

_FD_PATTERN = re.compile(r"^[+-]?\d+$")


class _DiscardWriter(io.TextIOBase):
    def write(self, s: str) -> int:
        return len(s)

    def writable(self) -> bool:
        return True


def _parse_bool(s: str) -> bool:
    if s in _TRUE:
        return True
    if s in _FALSE:
        return False
    raise ValueError(s)


def get_output(values: dict[str, list[str]]) -> TextIO:
    s = values.get("output", [""])[0]
    if s in ("stderr", "err", ""):
        return sys.stderr
    if s in ("stdout", "out"):
        return sys.stdout
    if s == "discard":
        return _DiscardWriter()
    if _FD_PATTERN.match(s):
        try:
            return open(int(s), "w", closefd=False)
        except (OSError, ValueError) as exc:
            raise LoggerConfigError(
                f"invalid output=`{s}`: {exc}", field="output", value=s
            ) from exc
    raise LoggerConfigError(
        f"unknown output=`{s}`, must be a file descriptor or one of `stdout`, `stderr` or `discard`",
        field="output",
        value=s,
    )


def new_handler_options(values: dict[str, list[str]]) -> HandlerOptions:
    add_source = False
    level = INFO
    s = values.get("addSource", [""])[0]
    if s != "":
        try:
            add_source = _parse_bool(s)
        except ValueError:
            raise LoggerConfigError(
                f"invalid addSource=`{s}`, must be parsed as a boolean",
                field="addSource",
                value=s,
            ) from None
    s = values.get("level", [""])[0]
    if s != "":
        # '+' arrives as a space after query decoding
        s = s.replace(" ", "+")
        try:
            level = parse_level(s)
        except ValueError:
            raise LoggerConfigError(
                f"invalid level=`{s}`, e.g. `debug`, `warn`, `info` or `error`",
                field="level",
                value=s,
            ) from None
    return HandlerOptions(add_source=add_source, level=level)


def build_logger(config: str) -> Logger:
    """Build a logger from a configuration string.

    Raises:
        LoggerConfigError: if any part of ``config`` is invalid.
    """
    try:
        u = urlsplit(config)
    except ValueError as exc:
        raise LoggerConfigError(str(exc), value=config) from exc
    name = u.path
    values = parse_qs(u.query, keep_blank_values=True)

    if name == "":
        name = "json"
    elif name == "discard":
        return Logger(DiscardHandler())
    elif name == "default":
        return Logger(ContextHandler(StdlibHandler()))
    elif name not in ("json", "text"):
        raise LoggerConfigError(f"unknown logger=`{name}`", field="type", value=name)

    output = get_output(values)
    options = new_handler_options(values)

    if name == "json":
        return Logger(ContextHandler(JSONHandler(output, options)))
    return Logger(ContextHandler(TextHandler(output, options)))


_root_lock = threading.Lock()
_root: tuple[Logger | None, LoggerConfigError | None] | None = None


def root_logger() -> Logger:
    """Get or create the process-wide root logger.

    The environment variable :data:`ENV_KEY` is read and parsed on the first
    call only; later calls, concurrent ones included, get the same logger, or
    the same :class:`LoggerConfigError` raised again.
    """
    global _root

    if _root is None:
        with _root_lock:
            if _root is None:
                config = os.environ.get(ENV_KEY) or DEFAULT_LOGGER
                try:
                    _root = (build_logger(config), None)
                except LoggerConfigError as exc:
                    _root = (None, exc)

    logger, err = _root
    if err is not None:
        raise err
    assert logger is not None
    return logger


def get_logger(name: str | None = None) -> Logger:
    """Return the root logger tagged with ``logger=<name>``.

    Args:
        name: Value of the ``logger`` attribute. ``None`` uses the calling
            module's ``__name__``; an empty string returns the root logger
            without the attribute.

    Raises:
        LoggerConfigError: if the root logger configuration is invalid.
    """
    if name is None:
        frame = inspect.currentframe()
        caller = frame.f_back if frame is not None else None
        name = caller.f_globals.get("__name__", "") if caller is not None else ""
    logger = root_logger()
    if name:
        logger = logger.with_attrs(NAME_KEY, name)
    return logger
