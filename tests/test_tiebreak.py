"""
Tests for tie-break policies and their registry.

Usage:
    pytest tests/test_tiebreak.py
"""

import sys
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from tourgrid.solver import (
    RandomTieBreak,
    StableTieBreak,
    create_tie_break,
    get_default_tie_break_name,
    get_tie_break_info,
    get_tie_break_names,
)


CANDIDATES = [(3, "a"), (1, "b"), (3, "c"), (1, "d"), (2, "e"), (1, "f")]


def test_registry():
    """Built-in policies are registered and creatable by name."""
    names = get_tie_break_names()

    assert "stable" in names
    assert "random" in names
    assert get_default_tie_break_name() == "stable"
    assert isinstance(create_tie_break("stable"), StableTieBreak)
    assert isinstance(create_tie_break("random", seed=3), RandomTieBreak)
    assert all(info["description"] for info in get_tie_break_info())

    with pytest.raises(ValueError):
        create_tie_break("nope")


def test_stable_keeps_offset_order():
    """Equal degrees keep input order."""
    ordered = StableTieBreak().order(CANDIDATES)

    assert [cell for _, cell in ordered] == ["b", "d", "f", "e", "a", "c"]
    # Input left untouched
    assert CANDIDATES[0] == (3, "a")


def test_random_sorts_by_degree():
    """Shuffling only happens inside equal-degree groups."""
    ordered = RandomTieBreak(seed=5).order(CANDIDATES)

    assert [d for d, _ in ordered] == [1, 1, 1, 2, 3, 3]
    assert {cell for d, cell in ordered if d == 1} == {"b", "d", "f"}


def test_random_reset_replays_sequence():
    """reset() re-seeds, so the same seed gives the same order again."""
    policy = RandomTieBreak(seed=42)
    first = [policy.order(CANDIDATES) for _ in range(5)]

    policy.reset()
    second = [policy.order(CANDIDATES) for _ in range(5)]

    assert first == second
    assert policy.describe() == "random(seed=42)"
