"""
Operator builders

Creates operator instances and populations from a GAConfig.
"""

import logging
from typing import Any, Iterable, MutableSequence, Optional, Sequence

from ..config import GAConfig
from ..utils import make_rng
from .crossover import Crossover, OnePoint, UniformCrossover
from .mutation import FlipBit, Gaussian, Mutator, Shuffle
from .population import Population
from .selection import SelectBest, Selector, TournamentSelection

logger = logging.getLogger(__name__)


def build_mutator(config: GAConfig) -> Mutator:
    if config.mutator == 'gaussian':
        return Gaussian(config.mu, config.sigma, config.mutation_indpb)
    if config.mutator == 'shuffle':
        return Shuffle(config.mutation_indpb)
    if config.mutator == 'flip_bit':
        return FlipBit(config.mutation_indpb)
    raise ValueError(f"Unknown mutator: {config.mutator}")


def build_crossover(config: GAConfig) -> Crossover:
    if config.crossover == 'one_point':
        return OnePoint()
    if config.crossover == 'uniform':
        return UniformCrossover(config.crossover_indpb)
    raise ValueError(f"Unknown crossover: {config.crossover}")


def build_selector(config: GAConfig) -> Selector:
    if config.selector == 'tournament':
        return TournamentSelection(config.tournament_size)
    if config.selector == 'best':
        return SelectBest()
    raise ValueError(f"Unknown selector: {config.selector}")


def build_population(genomes: Iterable[MutableSequence],
                     config: GAConfig,
                     fitnesses: Optional[Sequence[Any]] = None) -> Population:
    """
    Build a population with the operators described by config
    
    Args:
        genomes: Initial genomes
        config: Validated before any operator is built
        fitnesses: Optional fitness values, index-aligned with genomes
        
    Returns:
        New Population
    """
    config.validate()
    population = Population(
        genomes,
        mutator=build_mutator(config),
        crossover=build_crossover(config),
        selector=build_selector(config),
        fitnesses=fitnesses,
        mutation_rate=config.mutation_rate,
        crossover_rate=config.crossover_rate,
        rng=make_rng(config.random_seed),
    )
    logger.info(f"Built {population!r}")
    return population
