"""Convenience exports for the :mod:`logctx` package."""

from .attrs import BADKEY, Attr, args_to_attrs  # noqa: F401
from .context import Context, current  # noqa: F401
from .handler import ContextHandler, Handler  # noqa: F401
from .level import DEBUG, ERROR, INFO, WARN, level_string, parse_level  # noqa: F401
from .logger import Logger  # noqa: F401
from .mechanism import LogCtxException, LoggerConfigError  # noqa: F401
from .propagate import attrs, reset, reset_scope, scope, with_attrs  # noqa: F401
from .record import Record, Source  # noqa: F401
from .telemetry import (  # noqa: F401
    DiscardHandler,
    HandlerOptions,
    JSONHandler,
    OTelHandler,
    StdlibHandler,
    TextHandler,
    build_logger,
    get_logger,
    root_logger,
)

__all__ = [
    "LogCtxException",
    "LoggerConfigError",

    "Attr",
    "BADKEY",
    "args_to_attrs",
    "Record",
    "Source",
    "DEBUG",
    "INFO",
    "WARN",
    "ERROR",
    "level_string",
    "parse_level",

    # context propagation
    "Context",
    "current",
    "with_attrs",
    "reset",
    "attrs",
    "scope",
    "reset_scope",

    # handlers
    "Handler",
    "ContextHandler",
    "HandlerOptions",
    "TextHandler",
    "JSONHandler",
    "DiscardHandler",
    "OTelHandler",
    "StdlibHandler",

    # logger
    "Logger",
    "build_logger",
    "root_logger",
    "get_logger",
]
