"""
Selection operators

This module turns a list of fitness values into chosen indices. Higher fitness
is better. Fitness may be a scalar or a fixed-size vector of scalars, in which
case vectors are ordered lexicographically.
"""

import numbers
from abc import ABC, abstractmethod
from typing import Any, List, Optional, Sequence

import numpy as np

from .exceptions import EmptySelectionPoolError, UnorderedFitnessError
from .random_source import resolve_rng


def _comparable(fitness: Any) -> Any:
    if isinstance(fitness, np.ndarray):
        return tuple(fitness.tolist())
    if isinstance(fitness, list):
        return tuple(fitness)
    return fitness


def compare_fitness(a: Any, b: Any) -> int:
    """
    Compare two fitness values

    Args:
        a: First fitness value
        b: Second fitness value

    Returns:
        -1 if a < b, 0 if equal, 1 if a > b

    Raises:
        UnorderedFitnessError: If the values can't be ordered (e.g. NaN)
    """
    a = _comparable(a)
    b = _comparable(b)
    if isinstance(a, tuple) and isinstance(b, tuple):
        # Component by component: tuple ordering treats identical NaN objects as equal
        for x, y in zip(a, b):
            result = _compare_scalar(x, y, a, b)
            if result:
                return result
        return (len(a) > len(b)) - (len(a) < len(b))
    return _compare_scalar(a, b, a, b)


def _compare_scalar(x: Any, y: Any, a: Any, b: Any) -> int:
    if x < y:
        return -1
    if x > y:
        return 1
    if x == y:
        return 0
    raise UnorderedFitnessError(f"Failed to compare fitnesses {a!r} and {b!r}, are they NaN?")


def _check_pool(fitnesses: Sequence) -> int:
    size = len(fitnesses)
    if size == 0:
        raise EmptySelectionPoolError("Can't select from an empty fitness list")
    return size


class Selector(ABC):
    """Strategy that chooses indices from a list of fitness values"""

    @abstractmethod
    def select(self, fitnesses: Sequence, rng: Optional[np.random.Generator] = None) -> int:
        """
        Select a single index

        Args:
            fitnesses: Fitness values, one per population member
            rng: Generator to draw from. A new one is created when omitted

        Returns:
            Index of the chosen member
        """

    def select_n(self, fitnesses: Sequence, n: int,
                 rng: Optional[np.random.Generator] = None) -> List[int]:
        """
        Select n indices, each drawn independently (repetition allowed)

        Args:
            fitnesses: Fitness values, one per population member
            n: Number of indices to return
            rng: Generator shared by the n draws

        Returns:
            List of n chosen indices
        """
        if n < 0:
            raise ValueError(f"Number of selections must be non-negative, got {n}")
        _check_pool(fitnesses)
        rng = resolve_rng(rng)
        return [self.select(fitnesses, rng) for _ in range(n)]


class TournamentSelection(Selector):
    """Tournament selection with tournament size k, drawn with replacement"""

    def __init__(self, tournament_size: int = 3):
        if isinstance(tournament_size, bool) or not isinstance(tournament_size, numbers.Integral):
            raise ValueError(f"Tournament size must be an integer, got {tournament_size!r}")
        if tournament_size < 1:
            raise ValueError("Tournament size must be positive")
        self.tournament_size = int(tournament_size)

    def select(self, fitnesses: Sequence, rng: Optional[np.random.Generator] = None) -> int:
        size = _check_pool(fitnesses)
        rng = resolve_rng(rng)
        candidates = rng.integers(0, size, size=self.tournament_size)

        best = int(candidates[0])
        for candidate in candidates[1:]:
            candidate = int(candidate)
            # Later candidates win ties
            if compare_fitness(fitnesses[candidate], fitnesses[best]) >= 0:
                best = candidate
        return best

    def __repr__(self) -> str:
        return f"TournamentSelection(tournament_size={self.tournament_size})"


class SelectBest(Selector):
    """Deterministic selection of the fittest member (lowest index on ties)"""

    def select(self, fitnesses: Sequence, rng: Optional[np.random.Generator] = None) -> int:
        size = _check_pool(fitnesses)
        best = 0
        for i in range(1, size):
            if compare_fitness(fitnesses[i], fitnesses[best]) > 0:
                best = i
        return best

    def select_n(self, fitnesses: Sequence, n: int,
                 rng: Optional[np.random.Generator] = None) -> List[int]:
        if n < 0:
            raise ValueError(f"Number of selections must be non-negative, got {n}")
        return [self.select(fitnesses)] * n

    def __repr__(self) -> str:
        return "SelectBest()"
