"""
Read-only view over the scope ledger with lateral (sibling) navigation.
"""

from collections.abc import Sequence
from typing import Iterable, List, Optional

from myalang.preprocessor import ScopeInfo


class ScopeLedger(Sequence):
    """Ordered scope openings, one per INDENT, in emission order.

    Two entries are siblings when they share an indentation level and no
    entry with a smaller level lies between them.
    """

    def __init__(self, entries: Iterable[ScopeInfo] = ()):
        self._entries = tuple(entries)

    def __getitem__(self, index):
        return self._entries[index]

    def __len__(self):
        return len(self._entries)

    def __repr__(self):
        return f"ScopeLedger({list(self._entries)!r})"

    def __eq__(self, other):
        if isinstance(other, ScopeLedger):
            return self._entries == other._entries
        if isinstance(other, (tuple, list)):
            return self._entries == tuple(other)
        return NotImplemented

    def __hash__(self):
        return hash(self._entries)

    def _check(self, index: int) -> int:
        if not 0 <= index < len(self._entries):
            raise IndexError(f"scope index {index} out of range")
        return index

    def next_sibling(self, index: int) -> Optional[int]:
        """Index of the next scope at the same level, or None."""
        level = self._entries[self._check(index)].indent_level
        for i in range(index + 1, len(self._entries)):
            other = self._entries[i].indent_level
            if other < level:
                return None
            if other == level:
                return i
        return None

    def previous_sibling(self, index: int) -> Optional[int]:
        """Index of the previous scope at the same level, or None."""
        level = self._entries[self._check(index)].indent_level
        for i in range(index - 1, -1, -1):
            other = self._entries[i].indent_level
            if other < level:
                return None
            if other == level:
                return i
        return None

    def siblings(self, index: int) -> List[int]:
        """Indices of every scope in the sibling run containing index."""
        first = self._check(index)
        while True:
            previous = self.previous_sibling(first)
            if previous is None:
                break
            first = previous

        run = [first]
        while True:
            following = self.next_sibling(run[-1])
            if following is None:
                return run
            run.append(following)

    def by_type(self, scope_type: str) -> List[ScopeInfo]:
        return [entry for entry in self._entries if entry.scope_type == scope_type]
