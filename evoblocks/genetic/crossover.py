"""
Crossover operators

This module contains the crossover strategies. Both genomes are modified in
place and always keep their original length; when lengths differ only the
overlapping prefix takes part in the exchange.
"""

from abc import ABC, abstractmethod
from typing import MutableSequence, Optional

import numpy as np

from .exceptions import CrossoverTooShortError
from .random_source import event_fires, resolve_rng, validate_probability


class Crossover(ABC):
    """Strategy that exchanges genetic material between two genomes"""

    @abstractmethod
    def crossover(self, genome_a: MutableSequence, genome_b: MutableSequence,
                  rng: Optional[np.random.Generator] = None) -> None:
        """
        Cross two genomes in place

        Args:
            genome_a: First genome
            genome_b: Second genome
            rng: Generator to draw from. A new one is created when omitted
        """


def _swap(genome_a: MutableSequence, genome_b: MutableSequence, i: int) -> None:
    genome_a[i], genome_b[i] = genome_b[i], genome_a[i]


def swap_tail(genome_a: MutableSequence, genome_b: MutableSequence, point: int) -> None:
    """
    Swap every paired element from point up to the end of the shorter genome

    Args:
        genome_a: First genome
        genome_b: Second genome
        point: Crossover point, in [1, min(len(genome_a), len(genome_b)))
    """
    length = min(len(genome_a), len(genome_b))
    if not 1 <= point < length:
        raise ValueError(f"Crossover point must be in [1, {length}), got {point}")
    for i in range(point, length):
        _swap(genome_a, genome_b, i)


class OnePoint(Crossover):
    """One-point crossover: swaps the suffix after a random point"""

    def crossover(self, genome_a: MutableSequence, genome_b: MutableSequence,
                  rng: Optional[np.random.Generator] = None) -> None:
        length = min(len(genome_a), len(genome_b))
        if length < 2:
            raise CrossoverTooShortError(
                f"Can't crossover genomes with fewer than 2 overlapping elements (got {length})"
            )
        rng = resolve_rng(rng)
        point = int(rng.integers(1, length))
        swap_tail(genome_a, genome_b, point)

    def __repr__(self) -> str:
        return "OnePoint()"


class UniformCrossover(Crossover):
    """Uniform crossover: swaps each paired element with probability indpb (default 50%)"""

    def __init__(self, indpb: float = 0.5):
        self.indpb = validate_probability(indpb)

    def crossover(self, genome_a: MutableSequence, genome_b: MutableSequence,
                  rng: Optional[np.random.Generator] = None) -> None:
        length = min(len(genome_a), len(genome_b))
        if length < 1:
            raise CrossoverTooShortError("Can't crossover genomes with no overlapping elements")
        rng = resolve_rng(rng)
        for i in range(length):
            if event_fires(rng, self.indpb):
                _swap(genome_a, genome_b, i)

    def __repr__(self) -> str:
        return f"UniformCrossover(indpb={self.indpb})"


def one_point(genome_a: MutableSequence, genome_b: MutableSequence,
              rng: Optional[np.random.Generator] = None) -> None:
    """Perform one-point crossover in place"""
    OnePoint().crossover(genome_a, genome_b, rng)
