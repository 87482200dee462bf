"""
evoblocks

Composable building blocks for genetic algorithms: mutation, crossover and
selection operators over arbitrary genomes, plus a population container that
composes them. Fitness evaluation and the generation loop are left to callers.
"""

__version__ = "0.1.0"

from .config import GAConfig
from .genetic import (
    Population,
    Gaussian,
    GaussianList,
    Shuffle,
    FlipBit,
    DistributionMutator,
    OnePoint,
    UniformCrossover,
    TournamentSelection,
    SelectBest,
    build_population,
)

__all__ = [
    'GAConfig',
    'Population',
    'Gaussian',
    'GaussianList',
    'Shuffle',
    'FlipBit',
    'DistributionMutator',
    'OnePoint',
    'UniformCrossover',
    'TournamentSelection',
    'SelectBest',
    'build_population',
]
