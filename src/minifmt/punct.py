"""Separator-delimited sequences and the spacing rules used to render them.

A ``Punctuated`` keeps every (value, separator) pair exactly as the parser
produced it. Whether the last element carries a trailing separator is part
of the data, never inferred by the renderer.

Example:
    >>> seq = Punctuated.of(["a", "b"], ",")
    >>> [pair.punct for pair in seq.pairs]
    [',', None]
    >>> Punctuated.of(["a", "b"], ",", trailing=True).has_trailing
    True

"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from enum import Enum, auto


class Spacing(Enum):
    """Whitespace placed around a separator when a sequence is rendered."""

    NONE = auto()  # a::b
    SPACE_BOTH = auto()  # A + B
    SPACE_AFTER = auto()  # a, b
    NEWLINE = auto()  # a,\nb


# (before, after) for each policy
SPACING_TABLE: dict[Spacing, tuple[str, str]] = {
    Spacing.NONE: ("", ""),
    Spacing.SPACE_BOTH: (" ", " "),
    Spacing.SPACE_AFTER: ("", " "),
    Spacing.NEWLINE: ("", "\n"),
}


@dataclass(frozen=True, slots=True)
class Pair[T]:
    """One element of a sequence and the separator that follows it, if any."""

    value: T
    punct: str | None = None


@dataclass(frozen=True, slots=True)
class Punctuated[T]:
    """Ordered sequence of values, each optionally followed by a separator.

    Insertion order is display order. Only the final pair may omit its
    separator.

    """

    pairs: tuple[Pair[T], ...] = ()

    def __post_init__(self) -> None:
        for pair in self.pairs[:-1]:
            if pair.punct is None:
                msg = "only the last element of a sequence may omit its separator"
                raise ValueError(msg)

    @classmethod
    def of(cls, values: Iterable[T], punct: str = ",", *, trailing: bool = False) -> Punctuated[T]:
        """Build a sequence separating ``values`` with ``punct``.

        Args:
            values: Elements in display order
            punct: Separator text placed between elements
            trailing: Also place a separator after the last element

        """
        items = list(values)
        pairs = []
        for i, value in enumerate(items):
            last = i == len(items) - 1
            pairs.append(Pair(value, punct if (not last or trailing) else None))
        return cls(tuple(pairs))

    @property
    def has_trailing(self) -> bool:
        """True if the final element is followed by a separator."""
        return bool(self.pairs) and self.pairs[-1].punct is not None

    def values(self) -> tuple[T, ...]:
        return tuple(pair.value for pair in self.pairs)

    def separator_count(self) -> int:
        return sum(1 for pair in self.pairs if pair.punct is not None)

    def __iter__(self) -> Iterator[T]:
        return (pair.value for pair in self.pairs)

    def __len__(self) -> int:
        return len(self.pairs)

    def __bool__(self) -> bool:
        return bool(self.pairs)


EMPTY: Punctuated = Punctuated()
