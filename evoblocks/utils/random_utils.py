"""
Random utilities for reproducibility

This module hands out independent numpy generators: one per population, or one
per task so that parallel operator calls never share state. The operators never
read global random state, so reproducibility comes from seeding these.
"""

from typing import List, Optional

import numpy as np


def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    """Create a new independent generator (fresh OS entropy when seed is None)"""
    return np.random.default_rng(seed)


def spawn_rngs(n: int, seed: Optional[int] = None) -> List[np.random.Generator]:
    """
    Create n statistically independent generators from one seed
    
    Args:
        n: Number of generators
        seed: Root seed; None draws fresh entropy
        
    Returns:
        List of generators, one per parallel task
    """
    if n < 0:
        raise ValueError("Number of generators must be non-negative")
    children = np.random.SeedSequence(seed).spawn(n)
    return [np.random.default_rng(child) for child in children]
