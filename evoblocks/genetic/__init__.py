"""Genetic algorithm components module"""

from .exceptions import (
    GeneticOperatorError,
    InvalidDistributionError,
    InvalidProbabilityError,
    CrossoverTooShortError,
    EmptySelectionPoolError,
    ShufflePoolTooSmallError,
    UnorderedFitnessError,
    LengthMismatchError,
    FitnessNotEvaluatedError,
)
from .random_source import Distribution, Normal, Uniform, resolve_rng
from .mutation import Mutator, DistributionMutator, Gaussian, GaussianList, Shuffle, FlipBit
from .crossover import Crossover, OnePoint, UniformCrossover, swap_tail
from .selection import Selector, TournamentSelection, SelectBest, compare_fitness
from .population import Population
from .builders import build_mutator, build_crossover, build_selector, build_population

__all__ = [
    'GeneticOperatorError',
    'InvalidDistributionError',
    'InvalidProbabilityError',
    'CrossoverTooShortError',
    'EmptySelectionPoolError',
    'ShufflePoolTooSmallError',
    'UnorderedFitnessError',
    'LengthMismatchError',
    'FitnessNotEvaluatedError',
    'Distribution',
    'Normal',
    'Uniform',
    'resolve_rng',
    'Mutator',
    'DistributionMutator',
    'Gaussian',
    'GaussianList',
    'Shuffle',
    'FlipBit',
    'Crossover',
    'OnePoint',
    'UniformCrossover',
    'swap_tail',
    'Selector',
    'TournamentSelection',
    'SelectBest',
    'compare_fitness',
    'Population',
    'build_mutator',
    'build_crossover',
    'build_selector',
    'build_population',
]
