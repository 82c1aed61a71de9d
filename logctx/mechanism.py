"""Core error types for :mod:`logctx`."""


class LogCtxException(Exception):
    """Base class for all logctx exceptions."""


class LoggerConfigError(LogCtxException, ValueError):
    """Raised when a logger configuration string cannot be honoured.

    ``field`` names the offending part of the configuration (``type``,
    ``output``, ``level`` or ``addSource``) and ``value`` the raw text.
    """

    def __init__(self, message: str, field: str = "", value: str = ""):
        super().__init__(message)
        self.field = field
        self.value = value

    def __str__(self):
        return self.args[0]
