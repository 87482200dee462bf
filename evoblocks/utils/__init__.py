"""Utility modules for common functionality"""

from .random_utils import make_rng, spawn_rngs
from .logging_utils import setup_logger

__all__ = ['make_rng', 'spawn_rngs', 'setup_logger']
