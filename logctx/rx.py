"""Reactive log streams.

Provides :class:`SubjectHandler`, a handler that publishes records on a
reactivex ``Subject`` so that any number of observers can consume them, and
operators to work with such record streams.
"""

from typing import Any

from reactivex import Observable, Subject
from reactivex import operators as ops

from .context import Context
from .level import DEBUG
from .record import Record
from .telemetry.handlers import GroupingHandler


class SubjectHandler(GroupingHandler):
    """
    Handler that pushes records to a Subject.

    Each published record is a copy whose attributes are already resolved:
    attributes bound with ``with_attrs`` come first and open groups are
    applied, so observers see exactly what a stream handler would render.

    Behavior
    - Never completes and never errors on its own; observers that raise
      propagate the exception to the logging call.
    - Derived handlers (``with_attrs``/``with_group``) publish to the same
      subject.
    """

    def __init__(self, subject: Subject | None = None, level: int = DEBUG):
        super().__init__(level)
        self._subject = subject if subject is not None else Subject()

    @property
    def subject(self) -> Subject:
        return self._subject

    def handle(self, ctx: Context, record: Record) -> None:
        out = Record(record.time, record.level, record.message, record.source)
        out.add_attrs(*self.resolve(record))
        self._subject.on_next(out)

    def __repr__(self) -> str:
        return f"SubjectHandler(groups={self._groups!r})"


def level_filter(min_level: int):
    """
    The operator to keep records at or above ``min_level``. Drops non-record items.
    """
    return ops.filter(lambda r: isinstance(r, Record) and r.level >= min_level)


def drop_records():
    """
    The operator to drop records and forward other items.
    """
    return ops.filter(lambda x: not isinstance(x, Record))


def record_redirect_to(target: Any, min_level: int = DEBUG):
    """
    The operator redirects records to the specified observer (or function), and forwards other items.
    Records below ``min_level`` are ignored.
    """

    def _record_redirect_to(source):
        def subscribe(observer, scheduler=None):

            if hasattr(target, "on_next"):
                redirect_fun = target.on_next
            else:
                redirect_fun = target

            def on_next(value: Any) -> None:
                if isinstance(value, Record):
                    if value.level >= min_level:
                        redirect_fun(value)
                else:
                    observer.on_next(value)

            return source.subscribe(
                on_next=on_next,
                on_error=observer.on_error,
                on_completed=observer.on_completed,
                scheduler=scheduler,
            )

        return Observable(subscribe)

    return _record_redirect_to
