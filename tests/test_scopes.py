"""
Tests for lateral navigation over the scope ledger.
"""

import pytest

from myalang.preprocessor import IndentationPreprocessor, ScopeInfo
from myalang.scopes import ScopeLedger

NESTED_SOURCE = """fn a():
    x
    if y:
        z
    for i in xs:
        w
fn b():
    q
"""


def ledger_for(source):
    _, ledger = IndentationPreprocessor().process(source)
    return ScopeLedger(ledger)


class TestScopeLedger:
    """Sequence behaviour of the ledger view."""

    def test_sequence_protocol(self):
        ledger = ledger_for(NESTED_SOURCE)

        assert len(ledger) == 4
        assert ledger[0] == ScopeInfo(4, 2, "function")
        assert ledger[-1] == ScopeInfo(4, 8, "function")
        assert [scope.scope_type for scope in ledger] == [
            "function",
            "conditional",
            "loop",
            "function",
        ]

    def test_equality_with_tuple(self):
        entries = (ScopeInfo(4, 2), ScopeInfo(8, 3))

        assert ScopeLedger(entries) == entries
        assert ScopeLedger(entries) == ScopeLedger(list(entries))

    def test_empty(self):
        assert len(ScopeLedger()) == 0
        assert list(ScopeLedger()) == []

    def test_by_type(self):
        ledger = ledger_for(NESTED_SOURCE)

        assert [scope.line for scope in ledger.by_type("function")] == [2, 8]
        assert ledger.by_type("render") == []


class TestLateralNavigation:
    """Sibling lookup between scopes at the same level."""

    def test_next_sibling(self):
        ledger = ledger_for(NESTED_SOURCE)

        assert ledger.next_sibling(0) == 3
        assert ledger.next_sibling(1) == 2
        assert ledger.next_sibling(2) is None
        assert ledger.next_sibling(3) is None

    def test_previous_sibling(self):
        ledger = ledger_for(NESTED_SOURCE)

        assert ledger.previous_sibling(0) is None
        assert ledger.previous_sibling(1) is None
        assert ledger.previous_sibling(2) == 1
        assert ledger.previous_sibling(3) == 0

    def test_siblings(self):
        ledger = ledger_for(NESTED_SOURCE)

        assert ledger.siblings(0) == [0, 3]
        assert ledger.siblings(3) == [0, 3]
        assert ledger.siblings(1) == [1, 2]
        assert ledger.siblings(2) == [1, 2]

    def test_shallower_entry_breaks_the_run(self):
        """A shallower scope between two deeper ones separates them."""
        ledger = ScopeLedger(
            [ScopeInfo(8, 2), ScopeInfo(4, 5), ScopeInfo(8, 7)]
        )

        assert ledger.next_sibling(0) is None
        assert ledger.previous_sibling(2) is None
        assert ledger.siblings(0) == [0]

    def test_deeper_entries_are_skipped(self):
        ledger = ScopeLedger(
            [ScopeInfo(4, 2), ScopeInfo(8, 3), ScopeInfo(12, 4), ScopeInfo(4, 6)]
        )

        assert ledger.next_sibling(0) == 3
        assert ledger.siblings(3) == [0, 3]

    @pytest.mark.parametrize("index", [-1, 4, 100])
    def test_out_of_range(self, index):
        ledger = ledger_for(NESTED_SOURCE)

        with pytest.raises(IndexError):
            ledger.next_sibling(index)
        with pytest.raises(IndexError):
            ledger.previous_sibling(index)
        with pytest.raises(IndexError):
            ledger.siblings(index)
