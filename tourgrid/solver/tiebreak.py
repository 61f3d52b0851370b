"""
Tie-Break Module - Ordering policies for equal-degree candidates.

Warnsdorff ordering sorts candidates by ascending degree. When several
candidates share a degree, the policy decides their relative order. Policies
are registered by name so they can be selected from settings or the CLI.
"""

import random
from abc import ABC, abstractmethod
from itertools import groupby
from typing import Any, Dict, List, Optional, Sequence, Tuple, Type, TypeVar

T = TypeVar("T")


class TieBreakPolicy(ABC):
    """
    Abstract base class for candidate ordering.

    Attributes:
        name: Short identifier for the policy
        description: Human-readable description
    """
    name: str = "base"
    description: str = "Base tie-break policy"

    @abstractmethod
    def order(self, candidates: Sequence[Tuple[int, T]]) -> List[Tuple[int, T]]:
        """
        Order candidates by ascending degree.

        Args:
            candidates: (degree, cell) pairs in offset-list order

        Returns:
            New list sorted by degree, ties resolved by this policy
        """

    def reset(self) -> None:
        """Restore initial state before a new solve call."""

    def describe(self) -> str:
        return self.name


# Global registry of tie-break policies
_POLICIES: Dict[str, Type[TieBreakPolicy]] = {}


def register_tie_break(cls: Type[TieBreakPolicy]) -> Type[TieBreakPolicy]:
    """
    Decorator to register a tie-break policy class.

    Usage:
        @register_tie_break
        class MyPolicy(TieBreakPolicy):
            name = "my_policy"
            ...
    """
    _POLICIES[cls.name] = cls
    return cls


def create_tie_break(name: str, **kwargs: Any) -> TieBreakPolicy:
    """
    Create a tie-break policy by name.

    Args:
        name: Policy name ("stable" or "random")
        **kwargs: Passed to the policy constructor

    Raises:
        ValueError: If policy name not found
    """
    if name not in _POLICIES:
        available = ", ".join(_POLICIES.keys())
        raise ValueError(f"Unknown tie-break policy: {name}. Available: {available}")
    return _POLICIES[name](**kwargs)


def get_tie_break_names() -> List[str]:
    return list(_POLICIES.keys())


def get_tie_break_info() -> List[Dict[str, str]]:
    """
    Get name and description for all registered policies.

    Returns:
        List of dicts with 'name' and 'description' keys
    """
    return [
        {"name": cls.name, "description": cls.description}
        for cls in _POLICIES.values()
    ]


def get_default_tie_break_name() -> str:
    return "stable"


@register_tie_break
class StableTieBreak(TieBreakPolicy):
    """Equal-degree candidates keep their offset-list order."""
    name = "stable"
    description = "Stable - equal degrees keep offset order (reproducible)"

    def order(self, candidates):
        # list.sort is stable
        return sorted(candidates, key=lambda item: item[0])


@register_tie_break
class RandomTieBreak(TieBreakPolicy):
    """
    Equal-degree candidates are shuffled with a private RNG.

    The RNG is re-seeded on reset(), so two solve calls with the same seed
    and inputs return the same tour.

    Args:
        seed: Seed for the private random.Random; None draws from OS entropy
    """
    name = "random"
    description = "Random - equal degrees shuffled by a seeded RNG"

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._rng = random.Random(seed)

    def reset(self) -> None:
        self._rng = random.Random(self.seed)

    def order(self, candidates):
        ordered = []
        for _, group in groupby(sorted(candidates, key=lambda item: item[0]),
                                key=lambda item: item[0]):
            tied = list(group)
            self._rng.shuffle(tied)
            ordered.extend(tied)
        return ordered

    def describe(self) -> str:
        return f"{self.name}(seed={self.seed})"
