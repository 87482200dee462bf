"""
Mutation operators

This module contains the mutation strategies. Every strategy modifies a single
genome in place and never changes its length, so independent genomes can be
mutated from different threads as long as each call has its own generator.
"""

from abc import ABC, abstractmethod
from typing import MutableSequence, Optional, Sequence

import numpy as np

from .exceptions import LengthMismatchError, ShufflePoolTooSmallError
from .random_source import (
    Distribution,
    Normal,
    event_fires,
    resolve_rng,
    validate_probability,
)


class Mutator(ABC):
    """Strategy that perturbs one genome in place"""

    @abstractmethod
    def mutate(self, genome: MutableSequence, rng: Optional[np.random.Generator] = None) -> None:
        """
        Mutate a genome in place

        Args:
            genome: Genome to modify
            rng: Generator to draw from. A new one is created when omitted
        """


class DistributionMutator(Mutator):
    """Adds noise drawn from any distribution to each element with probability indpb"""

    def __init__(self, distribution: Distribution, indpb: float):
        self.distribution = distribution
        self.indpb = validate_probability(indpb)

    def mutate(self, genome: MutableSequence, rng: Optional[np.random.Generator] = None) -> None:
        rng = resolve_rng(rng)
        for i in range(len(genome)):
            if event_fires(rng, self.indpb):
                genome[i] += self.distribution.sample(rng)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(distribution={self.distribution!r}, indpb={self.indpb})"


class Gaussian(DistributionMutator):
    """Per-element gaussian mutation of mean mu and standard deviation sigma"""

    def __init__(self, mu: float, sigma: float, indpb: float):
        # Normal raises InvalidDistributionError for sigma <= 0
        super().__init__(Normal(mu, sigma), indpb)
        self.mu = self.distribution.mu
        self.sigma = self.distribution.sigma


class GaussianList(Mutator):
    """
    Per-element gaussian mutation with one mean and standard deviation per position

    Use Gaussian when every position shares the same distribution.
    """

    def __init__(self, mus: Sequence[float], sigmas: Sequence[float], indpb: float):
        if len(mus) != len(sigmas):
            raise LengthMismatchError(
                f"Length of mus ({len(mus)}) must match length of sigmas ({len(sigmas)})"
            )
        self.distributions = [Normal(mu, sigma) for mu, sigma in zip(mus, sigmas)]
        self.indpb = validate_probability(indpb)

    def mutate(self, genome: MutableSequence, rng: Optional[np.random.Generator] = None) -> None:
        # Checked before any element is touched
        if len(genome) != len(self.distributions):
            raise LengthMismatchError(
                f"Length of mus and sigmas ({len(self.distributions)}) "
                f"must match length of genome ({len(genome)})"
            )
        rng = resolve_rng(rng)
        for i, distribution in enumerate(self.distributions):
            if event_fires(rng, self.indpb):
                genome[i] += distribution.sample(rng)


class Shuffle(Mutator):
    """
    Swaps pairs of elements of any type, with probability indpb per position

    The partner of position i is drawn uniformly from every other position, so an
    element is never swapped with itself. The same pair may be swapped more than
    once during one pass. Genomes shorter than two elements are rejected.
    """

    def __init__(self, indpb: float):
        self.indpb = validate_probability(indpb)

    def mutate(self, genome: MutableSequence, rng: Optional[np.random.Generator] = None) -> None:
        size = len(genome)
        if size < 2:
            raise ShufflePoolTooSmallError(
                f"Can't shuffle a genome of length {size}, at least 2 elements are required"
            )
        rng = resolve_rng(rng)
        for idx in range(size):
            if event_fires(rng, self.indpb):
                swap_idx = partner_index(rng, idx, size)
                genome[idx], genome[swap_idx] = genome[swap_idx], genome[idx]


def partner_index(rng: np.random.Generator, idx: int, size: int) -> int:
    """Draw an index in [0, size) uniformly, excluding idx"""
    swap_idx = int(rng.integers(0, size - 1))
    if swap_idx >= idx:
        swap_idx += 1
    return swap_idx


class FlipBit(Mutator):
    """Flips boolean elements with probability indpb per position"""

    def __init__(self, indpb: float):
        self.indpb = validate_probability(indpb)

    def mutate(self, genome: MutableSequence, rng: Optional[np.random.Generator] = None) -> None:
        rng = resolve_rng(rng)
        for i in range(len(genome)):
            if event_fires(rng, self.indpb):
                genome[i] = not genome[i]


def gaussian(genome: MutableSequence, mu: float, sigma: float, indpb: float,
             rng: Optional[np.random.Generator] = None) -> None:
    """Apply a per-element gaussian mutation in place"""
    Gaussian(mu, sigma, indpb).mutate(genome, rng)


def gaussian_list(genome: MutableSequence, mus: Sequence[float], sigmas: Sequence[float],
                  indpb: float, rng: Optional[np.random.Generator] = None) -> None:
    """Apply a per-element gaussian mutation using per-position parameters"""
    GaussianList(mus, sigmas, indpb).mutate(genome, rng)


def shuffle_indexes(genome: MutableSequence, indpb: float,
                    rng: Optional[np.random.Generator] = None) -> None:
    """Swap random pairs of elements in place"""
    Shuffle(indpb).mutate(genome, rng)


def flip_bit(genome: MutableSequence, indpb: float,
             rng: Optional[np.random.Generator] = None) -> None:
    """Flip random booleans in place"""
    FlipBit(indpb).mutate(genome, rng)
