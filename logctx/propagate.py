"""Attach logging attributes to a :class:`~logctx.context.Context`.

Attributes are recorded as an append-only *history*: a tuple of batches, one
batch per :func:`with_attrs` call, each batch holding the raw arguments of that
call. Nothing is normalized until the attributes are read back by
:func:`attrs` or by :class:`~logctx.handler.ContextHandler`, and then the most
recently attached batch comes first.

Example:
    >>> ctx = with_attrs(Context.background(), "user", "alice", Attr("age", 42))
    >>> ctx = with_attrs(ctx, "state", "good")
    >>> [str(a) for a in attrs(ctx, "count", 7)]
    ['count=7', 'state=good', 'user=alice', 'age=42']
"""

from contextlib import contextmanager
from typing import Any, Iterator

from .context import Context, current, restore_current, set_current
from .record import Record

Batch = tuple[Any, ...]
History = tuple[Batch, ...]


class _HistoryKey:
    """Private context key; only this module holds the instance."""

    __slots__ = ()

    def __eq__(self, other: object) -> bool:
        return self is other

    __hash__ = object.__hash__

    def __repr__(self) -> str:
        return "logctx.history"


_HISTORY_KEY = _HistoryKey()


def history(ctx: Context) -> History:
    """Return the batches bound to ``ctx``, oldest first."""
    return ctx.value(_HISTORY_KEY, ())


def with_attrs(parent: Context, *args: Any) -> Context:
    """Return a context carrying ``args`` in addition to the parent's attributes.

    The arguments follow the flexible rule of :func:`~logctx.attrs.args_to_attrs`.
    With no arguments the parent itself is returned.

    Raises:
        ValueError: if ``parent`` is None.
    """
    if parent is None:
        raise ValueError("cannot create context from None parent")
    if not args:
        return parent
    return parent.with_value(_HISTORY_KEY, history(parent) + (tuple(args),))


def reset(parent: Context, *args: Any) -> Context:
    """Return a context that carries only ``args``, hiding the parent's attributes.

    Other values of the parent context stay reachable.
    """
    if parent is None:
        raise ValueError("cannot create context from None parent")
    return parent.with_value(_HISTORY_KEY, (tuple(args),) if args else ())


def attrs(ctx: Context, *args: Any) -> list:
    """Return ``args`` followed by the attributes attached to ``ctx``.

    The result can be passed straight to :meth:`Logger.info` and friends or to
    :meth:`Logger.with_attrs`, for loggers whose handler is not a
    :class:`~logctx.handler.ContextHandler`.
    A context without attributes gives an empty list.
    """
    return _flatten(history(ctx), args)


def _flatten(batches: History, args: tuple[Any, ...]) -> list:
    r = Record()
    r.add(*args)
    for batch in reversed(batches):
        r.add(*batch)
    return list(r.attrs())


@contextmanager
def scope(*args: Any) -> Iterator[Context]:
    """Bind ``args`` onto the ambient context for the duration of the block."""
    token = set_current(with_attrs(current(), *args))
    try:
        yield current()
    finally:
        restore_current(token)


@contextmanager
def reset_scope(*args: Any) -> Iterator[Context]:
    """Like :func:`scope`, but start from a clean attribute history."""
    token = set_current(reset(current(), *args))
    try:
        yield current()
    finally:
        restore_current(token)
