"""Concrete handlers and root logger configuration.

This package provides the stream handlers (text, JSON, discard), the stdlib
:mod:`logging` and OpenTelemetry bridges, the rendering helpers they share,
and the environment-driven root logger.
"""

from .config import (
    DEFAULT_LOGGER,
    ENV_KEY,
    NAME_KEY,
    build_logger,
    get_logger,
    root_logger,
)
from .format import (
    flatten_attrs,
    format_json_record,
    format_text_record,
)
from .handlers import (
    DiscardHandler,
    GroupingHandler,
    HandlerOptions,
    JSONHandler,
    TextHandler,
)
from .otel import OTelHandler
from .stdlib import StdlibHandler, to_stdlib_level

__all__ = [
    # config
    "build_logger",
    "root_logger",
    "get_logger",
    "ENV_KEY",
    "NAME_KEY",
    "DEFAULT_LOGGER",
    # handlers
    "HandlerOptions",
    "GroupingHandler",
    "TextHandler",
    "JSONHandler",
    "DiscardHandler",
    "OTelHandler",
    "StdlibHandler",
    "to_stdlib_level",
    # formatting
    "format_text_record",
    "format_json_record",
    "flatten_attrs",
]
