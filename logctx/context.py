"""Immutable execution context and its ambient binding.

A :class:`Context` is a linked chain of key/value nodes: deriving a child never
touches the parent, so contexts can be shared freely across threads and tasks.
The *ambient* context lives in a :class:`contextvars.ContextVar`, which asyncio
tasks inherit automatically. Threads started with ``threading.Thread`` do not;
run them under ``contextvars.copy_context().run`` to carry it over.
"""

import contextvars
from typing import Any


class Context:
    """Immutable carrier of typed, collision-safe values.

    A node matches when its key is the looked-up key, or when the looked-up
    key says it is equal. A marker whose equality is identity therefore never
    matches a key it does not own, however permissive that key is.
    """

    __slots__ = ("_parent", "_key", "_value")

    def __init__(self, parent: "Context | None" = None, key: Any = None, value: Any = None):
        self._parent = parent
        self._key = key
        self._value = value

    @classmethod
    def background(cls) -> "Context":
        """Return the empty root context."""
        return _BACKGROUND

    def with_value(self, key: Any, value: Any) -> "Context":
        if key is None:
            raise ValueError("nil key")
        return Context(self, key, value)

    def value(self, key: Any, default: Any = None) -> Any:
        node: Context | None = self
        while node is not None:
            if node._key is key or (node._key is not None and key == node._key):
                return node._value
            node = node._parent
        return default

    def __repr__(self) -> str:
        depth = 0
        node = self._parent
        while node is not None:
            depth += 1
            node = node._parent
        return f"Context(depth={depth})"


_BACKGROUND = Context()

_current: contextvars.ContextVar[Context] = contextvars.ContextVar(
    "logctx.context", default=_BACKGROUND
)


def current() -> Context:
    """Return the ambient context of the running task or thread."""
    return _current.get()


def set_current(ctx: Context) -> contextvars.Token:
    return _current.set(ctx)


def restore_current(token: contextvars.Token) -> None:
    _current.reset(token)
