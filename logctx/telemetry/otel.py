"""OpenTelemetry logs bridge.

Provides :class:`OTelHandler`, a handler that emits each record through an
OTel ``Logger`` obtained from a ``LoggerProvider``. Attributes, including the
ones a :class:`~logctx.handler.ContextHandler` merged from the context, become
flat OTel attributes with dotted keys for groups.
"""

import time

from opentelemetry._logs import LogRecord

from ..context import Context
from ..level import INFO, level_string, to_severity
from ..record import Record
from .format import flatten_attrs
from .handlers import GroupingHandler

_PRIMITIVES = (str, bool, int, float)


def _otel_value(v):
    if isinstance(v, _PRIMITIVES):
        return v
    if isinstance(v, (list, tuple)) and all(isinstance(x, _PRIMITIVES) for x in v):
        return tuple(v)
    return str(v)


class OTelHandler(GroupingHandler):
    """Handler that emits records via the OTel Logger API.

    Example:
        >>> provider = LoggerProvider()
        >>> log = Logger(ContextHandler(OTelHandler(provider.get_logger("myapp"))))
        >>> log.info("Connection established", "peer_id", "abc123")

    Duplicate keys collapse to the last value, since OTel attributes are a map.
    """

    def __init__(self, logger, level: int = INFO, add_source: bool = False):
        """Initialize the bridge.

        Args:
            logger: OTel Logger instance from LoggerProvider.get_logger()
            level: Minimum enabled level.
            add_source: Add ``code.function``/``code.filepath``/``code.lineno``.
        """
        super().__init__(level)
        self._logger = logger
        self._add_source = add_source

    def handle(self, ctx: Context, record: Record) -> None:
        attributes = {k: _otel_value(v) for k, v in flatten_attrs(self.resolve(record)).items() if v is not None}
        if self._add_source and record.source is not None:
            attributes["code.function"] = record.source.function
            attributes["code.filepath"] = record.source.file
            attributes["code.lineno"] = record.source.line
        timestamp = int(record.time.timestamp() * 1e9) if record.time is not None else time.time_ns()
        self._logger.emit(
            LogRecord(
                timestamp=timestamp,
                body=record.message,
                severity_text=level_string(record.level),
                severity_number=to_severity(record.level),
                attributes=attributes,
            )
        )

    def __repr__(self) -> str:
        return f"OTelHandler(groups={self._groups!r})"
