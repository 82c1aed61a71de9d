"""Key/value attributes and the flexible-argument normalization rule.

Every call site that accepts logging attributes (``with_attrs``, ``reset``,
``attrs``, ``Record.add``, ``Logger.info`` ...) takes the same loose argument
list:

- an :class:`Attr` is used as is;
- a ``str`` that is not the last argument is a key, and the next argument is
  its value;
- anything else is a value with the key :data:`BADKEY`.
"""

from dataclasses import dataclass
from typing import Any, Iterable

BADKEY = "!BADKEY"


@dataclass(frozen=True)
class Attr:
    """One structured logging attribute.

    A group attribute carries a tuple of :class:`Attr` as its value; see
    :meth:`group`.
    """

    key: str
    value: Any

    @classmethod
    def group(cls, key: str, *args: Any) -> "Attr":
        """Build a group attribute from flexible arguments."""
        return cls(key, _Group(args_to_attrs(args)))

    @property
    def is_group(self) -> bool:
        return isinstance(self.value, _Group)

    @property
    def is_empty_group(self) -> bool:
        return self.is_group and len(self.value) == 0

    def __str__(self) -> str:
        if self.is_group:
            inner = " ".join(str(a) for a in self.value)
            return f"{self.key}=[{inner}]"
        return f"{self.key}={self.value}"


class _Group(tuple):
    """Marker type for group values so a plain tuple value stays a value."""

    __slots__ = ()

    def __repr__(self) -> str:
        return f"Group{tuple.__repr__(self)}"


def group_attrs(attr: Attr) -> tuple[Attr, ...]:
    """Return the members of a group attribute."""
    if not attr.is_group:
        raise TypeError(f"attribute {attr.key!r} is not a group")
    return tuple(attr.value)


def next_attr(args: tuple[Any, ...], i: int) -> tuple[Attr, int]:
    """Normalize the argument at ``args[i]``; return it and the next index."""
    x = args[i]
    if isinstance(x, Attr):
        return x, i + 1
    if isinstance(x, str):
        if i + 1 < len(args):
            return Attr(x, args[i + 1]), i + 2
        return Attr(BADKEY, x), i + 1
    return Attr(BADKEY, x), i + 1


def args_to_attrs(args: Iterable[Any]) -> list[Attr]:
    """Normalize a flexible argument list into attributes, in order.

    Empty groups are dropped; everything else is kept, duplicates included.
    """
    args = tuple(args)
    out: list[Attr] = []
    i = 0
    while i < len(args):
        attr, i = next_attr(args, i)
        if not attr.is_empty_group:
            out.append(attr)
    return out
