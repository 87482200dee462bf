"""
Population management for genetic algorithms

This module contains the population container. It owns the genomes, a parallel
list of fitness values and one mutator, crossover and selector, and exposes
batch operations over the whole population. Fitness is never computed here:
callers attach it between generations.
"""

import copy
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any, Dict, Iterable, Iterator, List, MutableSequence, Optional, Sequence

import numpy as np
import pandas as pd

from ..utils import spawn_rngs
from .crossover import Crossover
from .exceptions import FitnessNotEvaluatedError, LengthMismatchError
from .mutation import Mutator
from .random_source import event_fires, resolve_rng, validate_probability
from .selection import SelectBest, Selector


class Population:
    """Manages a collection of genomes and their fitness values"""

    def __init__(self,
                 genomes: Iterable[MutableSequence],
                 mutator: Mutator,
                 crossover: Crossover,
                 selector: Selector,
                 fitnesses: Optional[Sequence[Any]] = None,
                 mutation_rate: Optional[float] = None,
                 crossover_rate: Optional[float] = None,
                 rng: Optional[np.random.Generator] = None):
        """
        Initialize population

        Args:
            genomes: Initial genomes (the list is copied, the genomes are not)
            mutator: Mutation strategy
            crossover: Crossover strategy
            selector: Selection strategy
            fitnesses: Optional fitness values, index-aligned with genomes
            mutation_rate: Default per-genome gate for mutate_population
            crossover_rate: Default per-pair gate for crossover_population
            rng: Default generator for batch calls made without one. Only use it
                from one thread at a time
        """
        self._genomes: List[MutableSequence] = list(genomes)
        self._fitnesses: List[Optional[Any]] = [None] * len(self._genomes)
        self.mutator = mutator
        self.crossover = crossover
        self.selector = selector
        self.generation = 0
        self.mutation_rate = mutation_rate
        self.crossover_rate = crossover_rate
        if mutation_rate is not None:
            self.mutation_rate = validate_probability(mutation_rate, "mutation_rate")
        if crossover_rate is not None:
            self.crossover_rate = validate_probability(crossover_rate, "crossover_rate")
        self.rng = rng

        self.logger = logging.getLogger(__name__)

        if fitnesses is not None:
            self.set_fitnesses(fitnesses)

    @property
    def genomes(self) -> List[MutableSequence]:
        """Copy of the genome list (the genomes themselves are shared)"""
        return list(self._genomes)

    @property
    def fitnesses(self) -> List[Optional[Any]]:
        """Copy of the fitness list"""
        return list(self._fitnesses)

    def set_fitnesses(self, fitnesses: Sequence[Any]) -> None:
        """
        Attach fitness values to every member

        Args:
            fitnesses: One fitness per genome, in genome order
        """
        if len(fitnesses) != len(self._genomes):
            raise LengthMismatchError(
                f"Got {len(fitnesses)} fitness values for {len(self._genomes)} genomes"
            )
        self._fitnesses = list(fitnesses)

    def set_fitness(self, index: int, fitness: Any) -> None:
        """Attach a fitness value to a single member"""
        self._fitnesses[index] = fitness

    def _resolve_rate(self, value: Optional[float], default: Optional[float], name: str) -> float:
        if value is None:
            value = default
        if value is None:
            raise ValueError(f"No {name} given and the population has no default")
        return validate_probability(value, name)

    def _resolve_rng(self, rng: Optional[np.random.Generator]) -> np.random.Generator:
        return resolve_rng(rng if rng is not None else self.rng)

    def mutate_population(self, indpb: Optional[float] = None,
                          rng: Optional[np.random.Generator] = None) -> int:
        """
        Mutate each genome with independent probability indpb

        The per-genome gate is independent of any per-element probability held by
        the mutator; the two compose multiplicatively.

        Args:
            indpb: Probability that a given genome is passed to the mutator
                (defaults to the population's mutation_rate)
            rng: Generator used for the gate and the mutations
                (defaults to the population's generator)

        Returns:
            Number of genomes mutated
        """
        indpb = self._resolve_rate(indpb, self.mutation_rate, "mutation_rate")
        rng = self._resolve_rng(rng)
        mutated = 0
        for i, genome in enumerate(self._genomes):
            if event_fires(rng, indpb):
                self._fitnesses[i] = None
                self.mutator.mutate(genome, rng)
                mutated += 1

        self.logger.debug(f"Mutated {mutated}/{len(self._genomes)} genomes")
        return mutated

    def mutate_population_parallel(self, indpb: Optional[float] = None,
                                   max_workers: Optional[int] = None,
                                   seed: Optional[int] = None) -> int:
        """
        Same as mutate_population, with one task per genome on a thread pool

        Every genome gets its own generator spawned from seed, so tasks never
        share generator state and the result is reproducible for a fixed seed.
        If a task raises, every genome mutated so far already has its fitness
        cleared.

        Args:
            indpb: Probability that a given genome is passed to the mutator
                (defaults to the population's mutation_rate)
            max_workers: Thread pool size (executor default when None)
            seed: Root seed for the per-genome generators. When None, the seed is
                drawn from the population's generator if it has one

        Returns:
            Number of genomes mutated
        """
        indpb = self._resolve_rate(indpb, self.mutation_rate, "mutation_rate")
        if seed is None and self.rng is not None:
            seed = int(self.rng.integers(0, 2 ** 32))
        rngs = spawn_rngs(len(self._genomes), seed)

        def mutate_one(index: int, rng: np.random.Generator) -> bool:
            if event_fires(rng, indpb):
                # Each task owns a distinct index
                self._fitnesses[index] = None
                self.mutator.mutate(self._genomes[index], rng)
                return True
            return False

        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            results = list(executor.map(mutate_one, range(len(self._genomes)), rngs))

        mutated = sum(results)
        self.logger.debug(f"Mutated {mutated}/{len(self._genomes)} genomes in parallel")
        return mutated

    def crossover_pair(self, i: int, j: int, rng: Optional[np.random.Generator] = None) -> None:
        """Cross two members in place and invalidate their fitness"""
        if i == j:
            raise ValueError("Can't cross a genome with itself")
        self._fitnesses[i] = None
        self._fitnesses[j] = None
        self.crossover.crossover(self._genomes[i], self._genomes[j], self._resolve_rng(rng))

    def crossover_population(self, cxpb: Optional[float] = None,
                             rng: Optional[np.random.Generator] = None) -> int:
        """
        Cross consecutive pairs (0, 1), (2, 3), ... each with probability cxpb

        A trailing genome without a partner is left unchanged.

        Args:
            cxpb: Probability that a given pair is crossed
                (defaults to the population's crossover_rate)
            rng: Generator used for the gate and the crossovers
                (defaults to the population's generator)

        Returns:
            Number of pairs crossed
        """
        cxpb = self._resolve_rate(cxpb, self.crossover_rate, "crossover_rate")
        rng = self._resolve_rng(rng)
        crossed = 0
        for i in range(0, len(self._genomes) - 1, 2):
            if event_fires(rng, cxpb):
                self.crossover_pair(i, i + 1, rng)
                crossed += 1

        self.logger.debug(f"Crossed {crossed}/{len(self._genomes) // 2} pairs")
        return crossed

    def _require_fitness(self) -> None:
        missing = [i for i, fitness in enumerate(self._fitnesses) if fitness is None]
        if missing:
            raise FitnessNotEvaluatedError(
                f"{len(missing)} genomes have no fitness (first: index {missing[0]})"
            )

    def select(self, n: int, rng: Optional[np.random.Generator] = None) -> List[int]:
        """
        Select n indices to propagate into the next generation

        Genomes and fitnesses are left untouched.

        Args:
            n: Number of indices
            rng: Generator passed to the selector (defaults to the population's generator)

        Returns:
            Selected indices (repetition allowed)
        """
        self._require_fitness()
        return self.selector.select_n(self._fitnesses, n, self._resolve_rng(rng))

    def best_index(self) -> int:
        """Index of the fittest member"""
        self._require_fitness()
        return SelectBest().select(self._fitnesses)

    def next_generation(self, indices: Sequence[int]) -> None:
        """
        Replace the members with copies of the selected ones

        Args:
            indices: Indices into the current population, e.g. from select()
        """
        new_genomes = [copy.deepcopy(self._genomes[i]) for i in indices]
        new_fitnesses = [copy.deepcopy(self._fitnesses[i]) for i in indices]
        self._genomes = new_genomes
        self._fitnesses = new_fitnesses
        self.generation += 1

        self.logger.debug(f"Advanced to generation {self.generation} with {len(new_genomes)} genomes")

    def replace_genome(self, index: int, genome: MutableSequence, fitness: Optional[Any] = None) -> None:
        """Replace one member, with its fitness if already known"""
        self._genomes[index] = genome
        self._fitnesses[index] = fitness

    def get_statistics(self) -> Dict[str, Any]:
        """
        Calculate population statistics

        Fitness statistics only cover evaluated members. Vector fitness is
        summarized per component.

        Returns:
            Dictionary with population statistics
        """
        evaluated = [fitness for fitness in self._fitnesses if fitness is not None]
        stats: Dict[str, Any] = {
            'generation': self.generation,
            'size': len(self._genomes),
            'evaluated_count': len(evaluated),
            'diversity': self._calculate_diversity(),
        }

        if not evaluated:
            stats.update({
                'best_fitness': None,
                'worst_fitness': None,
                'avg_fitness': None,
                'std_fitness': None,
            })
            return stats

        values = np.asarray(evaluated, dtype=float)
        stats.update({
            'best_fitness': np.max(values, axis=0).tolist(),
            'worst_fitness': np.min(values, axis=0).tolist(),
            'avg_fitness': np.mean(values, axis=0).tolist(),
            'std_fitness': np.std(values, axis=0).tolist(),
        })
        return stats

    def _calculate_diversity(self) -> float:
        """Calculate population diversity as average normalized Hamming distance"""
        if len(self._genomes) < 2:
            return 0.0

        total_distance = 0.0
        comparisons = 0

        for i in range(len(self._genomes)):
            for j in range(i + 1, len(self._genomes)):
                a = np.asarray(self._genomes[i])
                b = np.asarray(self._genomes[j])
                overlap = min(len(a), len(b))
                longest = max(len(a), len(b))
                if longest == 0:
                    comparisons += 1
                    continue
                # Positions beyond the shorter genome count as differences
                distance = np.sum(a[:overlap] != b[:overlap]) + (longest - overlap)
                total_distance += distance / longest
                comparisons += 1

        return float(total_distance / comparisons)

    def to_frame(self) -> pd.DataFrame:
        """One row per member with its genome, fitness and evaluation flag"""
        return pd.DataFrame({
            'genome': [list(genome) for genome in self._genomes],
            'fitness': list(self._fitnesses),
            'evaluated': [fitness is not None for fitness in self._fitnesses],
        })

    def __len__(self) -> int:
        """Return population size"""
        return len(self._genomes)

    def __iter__(self) -> Iterator[MutableSequence]:
        """Make population iterable"""
        return iter(self._genomes)

    def __getitem__(self, index: int) -> MutableSequence:
        return self._genomes[index]

    def __repr__(self) -> str:
        return (f"Population(size={len(self._genomes)}, generation={self.generation}, "
                f"mutator={self.mutator!r}, crossover={self.crossover!r}, selector={self.selector!r})")
