"""Tests for the population container and its batch operations."""

import numpy as np
import pandas as pd
import pytest

from evoblocks.genetic.crossover import OnePoint
from evoblocks.genetic.exceptions import (
    FitnessNotEvaluatedError,
    LengthMismatchError,
    ShufflePoolTooSmallError,
)
from evoblocks.genetic.mutation import FlipBit, Gaussian, Shuffle
from evoblocks.genetic.population import Population
from evoblocks.genetic.selection import SelectBest, TournamentSelection


def make_bit_population(fitnesses=None) -> Population:
    genomes = [[False, False, False], [True, False, True], [True, True, True], [False, True, False]]
    return Population(genomes, FlipBit(1.0), OnePoint(), TournamentSelection(2), fitnesses=fitnesses)


def test_fitness_length_must_match_genomes() -> None:
    with pytest.raises(LengthMismatchError):
        make_bit_population(fitnesses=[1.0, 2.0])

    population = make_bit_population()
    with pytest.raises(LengthMismatchError):
        population.set_fitnesses([1.0] * 5)


def test_new_population_has_no_fitness() -> None:
    population = make_bit_population()

    assert len(population) == 4
    assert population.fitnesses == [None] * 4
    assert population.generation == 0


def test_mutate_population_with_zero_probability_changes_nothing(rng) -> None:
    population = make_bit_population(fitnesses=[0.0, 2.0, 3.0, 1.0])

    assert population.mutate_population(0.0, rng) == 0
    assert population[0] == [False, False, False]
    assert population.fitnesses == [0.0, 2.0, 3.0, 1.0]


def test_mutate_population_with_full_probability_mutates_every_genome(rng) -> None:
    population = make_bit_population(fitnesses=[0.0, 2.0, 3.0, 1.0])

    assert population.mutate_population(1.0, rng) == 4
    assert population.genomes == [
        [True, True, True],
        [False, True, False],
        [False, False, False],
        [True, False, True],
    ]
    assert population.fitnesses == [None] * 4


def test_mutate_population_keeps_fitness_aligned(rng) -> None:
    population = make_bit_population(fitnesses=[0.0, 2.0, 3.0, 1.0])
    mutated = population.mutate_population(0.5, rng)

    assert len(population.fitnesses) == len(population)
    assert population.fitnesses.count(None) == mutated


def test_parallel_mutation_is_reproducible_for_a_seed() -> None:
    def build() -> Population:
        genomes = [np.zeros(6) for _ in range(20)]
        return Population(genomes, Gaussian(0.0, 1.0, 0.5), OnePoint(), SelectBest())

    first = build()
    second = build()

    mutated_first = first.mutate_population_parallel(0.7, max_workers=4, seed=99)
    mutated_second = second.mutate_population_parallel(0.7, max_workers=2, seed=99)

    assert mutated_first == mutated_second
    for a, b in zip(first, second):
        assert np.array_equal(a, b)
    assert len(first.fitnesses) == 20
    assert first.fitnesses.count(None) == 20


def test_parallel_mutation_invalidates_only_mutated_fitness() -> None:
    genomes = [[False] * 4 for _ in range(10)]
    population = Population(genomes, FlipBit(1.0), OnePoint(), SelectBest(), fitnesses=[1.0] * 10)

    mutated = population.mutate_population_parallel(0.5, seed=7)

    changed = [i for i, genome in enumerate(population) if genome == [True] * 4]
    assert len(changed) == mutated
    assert [i for i, f in enumerate(population.fitnesses) if f is None] == changed


def test_crossover_population_pairs_neighbours_and_skips_odd_tail(rng) -> None:
    genomes = [[i] * 4 for i in range(5)]
    population = Population(genomes, FlipBit(0.1), OnePoint(), SelectBest(), fitnesses=[1.0] * 5)

    assert population.crossover_population(1.0, rng) == 2
    assert population[4] == [4, 4, 4, 4]
    assert population.fitnesses == [None, None, None, None, 1.0]
    assert sorted(population[0] + population[1]) == [0] * 4 + [1] * 4
    assert sorted(population[2] + population[3]) == [2] * 4 + [3] * 4


def test_crossover_pair_rejects_same_index(rng) -> None:
    population = make_bit_population()

    with pytest.raises(ValueError):
        population.crossover_pair(1, 1, rng)


def test_select_requires_every_fitness() -> None:
    population = make_bit_population()

    with pytest.raises(FitnessNotEvaluatedError):
        population.select(2)

    population.set_fitnesses([0.0, 2.0, 3.0, 1.0])
    population.set_fitness(2, None)
    with pytest.raises(FitnessNotEvaluatedError):
        population.best_index()


def test_select_does_not_modify_population(rng) -> None:
    population = make_bit_population(fitnesses=[0.0, 2.0, 3.0, 1.0])
    genomes_before = [list(g) for g in population]

    indices = population.select(10, rng)

    assert len(indices) == 10
    assert all(0 <= i < 4 for i in indices)
    assert population.genomes == genomes_before
    assert population.fitnesses == [0.0, 2.0, 3.0, 1.0]


def test_best_index() -> None:
    population = make_bit_population(fitnesses=[0.0, 2.0, 3.0, 1.0])

    assert population.best_index() == 2


def test_next_generation_copies_selected_members() -> None:
    population = make_bit_population(fitnesses=[0.0, 2.0, 3.0, 1.0])

    population.next_generation([2, 2, 1])

    assert population.generation == 1
    assert len(population) == 3
    assert population.fitnesses == [3.0, 3.0, 2.0]
    population[0][0] = False
    assert population[1] == [True, True, True]


def test_replace_genome() -> None:
    population = make_bit_population(fitnesses=[0.0, 2.0, 3.0, 1.0])

    population.replace_genome(0, [True, True, False], 2.0)

    assert population[0] == [True, True, False]
    assert population.fitnesses[0] == 2.0


def test_get_statistics() -> None:
    genomes = [[0, 0], [0, 1], [1, 1]]
    population = Population(genomes, FlipBit(0.5), OnePoint(), SelectBest(), fitnesses=[1.0, 2.0, 3.0])

    stats = population.get_statistics()

    assert stats['best_fitness'] == 3.0
    assert stats['worst_fitness'] == 1.0
    assert stats['avg_fitness'] == pytest.approx(2.0)
    assert stats['evaluated_count'] == 3
    assert stats['diversity'] == pytest.approx(2.0 / 3.0)


def test_get_statistics_without_fitness() -> None:
    stats = make_bit_population().get_statistics()

    assert stats['best_fitness'] is None
    assert stats['evaluated_count'] == 0
    assert stats['size'] == 4


def test_to_frame() -> None:
    population = make_bit_population(fitnesses=[0.0, 2.0, 3.0, 1.0])
    population.set_fitness(3, None)

    frame = population.to_frame()

    assert isinstance(frame, pd.DataFrame)
    assert frame.shape == (4, 3)
    assert frame['evaluated'].tolist() == [True, True, True, False]
    assert frame['genome'][2] == [True, True, True]


def test_parallel_mutation_failure_leaves_no_stale_fitness() -> None:
    genomes = [[1, 2, 3, 4, 5] for _ in range(8)] + [[0]]
    population = Population(genomes, Shuffle(1.0), OnePoint(), SelectBest(), fitnesses=[1.0] * 9)

    with pytest.raises(ShufflePoolTooSmallError):
        population.mutate_population_parallel(1.0, max_workers=1, seed=3)

    assert population.fitnesses[:8] == [None] * 8
    assert len(population.fitnesses) == len(population)


def test_batch_calls_use_population_defaults() -> None:
    def build() -> Population:
        genomes = [np.zeros(5) for _ in range(10)]
        return Population(genomes, Gaussian(0.0, 1.0, 0.5), OnePoint(), TournamentSelection(2),
                          mutation_rate=0.6, crossover_rate=0.8, rng=np.random.default_rng(21))

    first = build()
    second = build()

    assert first.mutate_population() == second.mutate_population()
    assert first.crossover_population() == second.crossover_population()
    for a, b in zip(first, second):
        assert np.array_equal(a, b)

    first.set_fitnesses([float(np.sum(g)) for g in first])
    second.set_fitnesses([float(np.sum(g)) for g in second])
    assert first.select(6) == second.select(6)


def test_parallel_mutation_seed_comes_from_population_generator() -> None:
    def build() -> Population:
        genomes = [np.zeros(4) for _ in range(12)]
        return Population(genomes, Gaussian(0.0, 1.0, 1.0), OnePoint(), SelectBest(),
                          mutation_rate=0.5, rng=np.random.default_rng(8))

    first = build()
    second = build()
    first.mutate_population_parallel(max_workers=3)
    second.mutate_population_parallel(max_workers=2)

    for a, b in zip(first, second):
        assert np.array_equal(a, b)


def test_batch_call_without_rate_or_default_fails() -> None:
    population = make_bit_population()

    with pytest.raises(ValueError):
        population.mutate_population()
    with pytest.raises(ValueError):
        population.crossover_population()
