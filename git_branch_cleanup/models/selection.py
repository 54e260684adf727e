"""Immutable branch selection"""
from dataclasses import dataclass
from typing import Iterable, Iterator, Tuple


@dataclass(frozen=True)
class Selection:
    """Insertion-ordered set of branch names chosen for deletion.

    Every operation returns a new Selection; the host keeps the current one
    between renders. Protection checks live in SelectionPolicy, which is the
    only code that should add names.
    """
    names: Tuple[str, ...] = ()

    @classmethod
    def of(cls, names: Iterable[str]) -> "Selection":
        """Build a selection, dropping duplicate names but keeping order."""
        return cls(tuple(dict.fromkeys(names)))

    def __contains__(self, name: object) -> bool:
        return name in self.names

    def __iter__(self) -> Iterator[str]:
        return iter(self.names)

    def __len__(self) -> int:
        return len(self.names)

    def __bool__(self) -> bool:
        return bool(self.names)

    def with_names(self, names: Iterable[str]) -> "Selection":
        return Selection.of(self.names + tuple(names))

    def without_names(self, names: Iterable[str]) -> "Selection":
        removed = set(names)
        return Selection(tuple(n for n in self.names if n not in removed))
