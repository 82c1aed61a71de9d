"""The handler interface and the context-attribute decorator."""

from abc import ABC, abstractmethod
from typing import Sequence

from .attrs import Attr
from .context import Context
from .propagate import history, reset
from .record import Record


class Handler(ABC):
    """
    The abstract log sink.

    A handler decides whether a level is enabled, consumes records, and can be
    derived into handlers with pre-bound attributes or an open group. Derived
    handlers never change the handler they were derived from.
    """

    @abstractmethod
    def enabled(self, ctx: Context, level: int) -> bool: ...

    @abstractmethod
    def handle(self, ctx: Context, record: Record) -> None: ...

    @abstractmethod
    def with_attrs(self, attrs: Sequence[Attr]) -> "Handler": ...

    @abstractmethod
    def with_group(self, name: str) -> "Handler": ...


class ContextHandler(Handler):
    """Handler that adds the attributes attached to the context to each record.

    It wraps another handler. Records whose context carries attributes (see
    :func:`~logctx.propagate.with_attrs`) are cloned, extended with those
    attributes, most recently attached first, and passed on together with a
    reset context so that a nested ``ContextHandler`` does not add them again.

    Groups opened with :meth:`with_group` apply to the context attributes too:
    they are added at emission time, inside whatever group is open then.
    """

    __slots__ = ("next",)

    def __init__(self, next: Handler):
        self.next = next

    def enabled(self, ctx: Context, level: int) -> bool:
        return self.next.enabled(ctx, level)

    def handle(self, ctx: Context, record: Record) -> None:
        batches = history(ctx)
        if not batches:
            return self.next.handle(ctx, record)
        r2 = record.clone()
        for batch in reversed(batches):
            r2.add(*batch)
        return self.next.handle(reset(ctx), r2)

    def with_attrs(self, attrs: Sequence[Attr]) -> Handler:
        return ContextHandler(self.next.with_attrs(attrs))

    def with_group(self, name: str) -> Handler:
        return ContextHandler(self.next.with_group(name))

    def __repr__(self) -> str:
        return f"ContextHandler({self.next!r})"
