"""
Genetic Algorithm Configuration

This module contains the operator parameters used to build a population.
"""

import math
from dataclasses import asdict, dataclass
from typing import Optional

MUTATORS = ('gaussian', 'shuffle', 'flip_bit')
CROSSOVERS = ('one_point', 'uniform')
SELECTORS = ('tournament', 'best')


@dataclass
class GAConfig:
    """Configuration parameters for the genetic operators"""
    
    # Mutation operator
    mutator: str = 'gaussian'
    mu: float = 0.0
    sigma: float = 1.0
    mutation_indpb: float = 0.1  # Per-element probability inside the mutator
    
    # Crossover operator
    crossover: str = 'one_point'
    crossover_indpb: float = 0.5  # Only used by uniform crossover
    
    # Selection operator
    selector: str = 'tournament'
    tournament_size: int = 3
    
    # Batch operation rates
    mutation_rate: float = 0.2  # Per-genome gate applied before the mutator
    crossover_rate: float = 0.6
    
    # Reproducibility
    random_seed: Optional[int] = 42
    
    def validate(self) -> None:
        """Validate configuration parameters"""
        # Mutation
        if self.mutator not in MUTATORS:
            raise ValueError(f"Mutator must be one of: {', '.join(MUTATORS)}")
        if not math.isfinite(self.mu):
            raise ValueError("Mu must be finite")
        if not math.isfinite(self.sigma) or self.sigma <= 0:
            raise ValueError("Sigma must be positive")
        if not 0 <= self.mutation_indpb <= 1:
            raise ValueError("Mutation indpb must be between 0 and 1")
        
        # Crossover
        if self.crossover not in CROSSOVERS:
            raise ValueError(f"Crossover must be one of: {', '.join(CROSSOVERS)}")
        if not 0 <= self.crossover_indpb <= 1:
            raise ValueError("Crossover indpb must be between 0 and 1")
        
        # Selection
        if self.selector not in SELECTORS:
            raise ValueError(f"Selector must be one of: {', '.join(SELECTORS)}")
        if not isinstance(self.tournament_size, int) or isinstance(self.tournament_size, bool):
            raise ValueError("Tournament size must be an integer")
        if self.tournament_size <= 0:
            raise ValueError("Tournament size must be positive")
        
        # Rates
        if not 0 <= self.mutation_rate <= 1:
            raise ValueError("Mutation rate must be between 0 and 1")
        if not 0 <= self.crossover_rate <= 1:
            raise ValueError("Crossover rate must be between 0 and 1")
        
        if self.random_seed is not None and not isinstance(self.random_seed, int):
            raise ValueError("Random seed must be an integer")
    
    def to_dict(self) -> dict:
        """Convert configuration to dictionary"""
        return asdict(self)
