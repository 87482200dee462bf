"""
Random-sampling boundary for the genetic operators

All randomness goes through numpy generators. Operators accept an optional
generator handle; when none is given each call creates its own, so concurrent
calls on different genomes never share a mutable generator.
"""

import math
from abc import ABC, abstractmethod
from typing import Optional

import numpy as np

from .exceptions import InvalidDistributionError, InvalidProbabilityError


def resolve_rng(rng: Optional[np.random.Generator] = None) -> np.random.Generator:
    """Return the given generator, or a new independently seeded one"""
    if rng is None:
        return np.random.default_rng()
    return rng


def validate_probability(value: float, name: str = "indpb") -> float:
    """
    Check that a probability lies in [0, 1]
    
    Args:
        value: Probability to check
        name: Parameter name used in the error message
        
    Returns:
        The value as a float
    """
    value = float(value)
    if not 0.0 <= value <= 1.0:
        raise InvalidProbabilityError(f"{name} must be between 0 and 1, got {value}")
    return value


def event_fires(rng: np.random.Generator, probability: float) -> bool:
    """Bernoulli trial: True when a uniform [0, 1) draw falls below probability"""
    return rng.random() < probability


class Distribution(ABC):
    """A parametric distribution that can be sampled with a caller-owned generator"""
    
    @abstractmethod
    def sample(self, rng: np.random.Generator) -> float:
        """Draw one value"""


class Normal(Distribution):
    """Gaussian distribution with mean mu and standard deviation sigma"""
    
    def __init__(self, mu: float, sigma: float):
        mu = float(mu)
        sigma = float(sigma)
        if not math.isfinite(mu) or not math.isfinite(sigma) or sigma <= 0:
            raise InvalidDistributionError(
                f"Invalid args to normal distribution: mu={mu} sigma={sigma}"
            )
        self.mu = mu
        self.sigma = sigma
    
    def sample(self, rng: np.random.Generator) -> float:
        return float(rng.normal(self.mu, self.sigma))
    
    def __repr__(self) -> str:
        return f"Normal(mu={self.mu}, sigma={self.sigma})"


class Uniform(Distribution):
    """Uniform distribution over [low, high)"""
    
    def __init__(self, low: float, high: float):
        low = float(low)
        high = float(high)
        if not math.isfinite(low) or not math.isfinite(high) or low >= high:
            raise InvalidDistributionError(
                f"Invalid args to uniform distribution: low={low} high={high}"
            )
        self.low = low
        self.high = high
    
    def sample(self, rng: np.random.Generator) -> float:
        return float(rng.uniform(self.low, self.high))
    
    def __repr__(self) -> str:
        return f"Uniform(low={self.low}, high={self.high})"
