"""
Errors raised by the genetic operators

Every error is a ValueError subclass so callers that only care about bad input
can catch ValueError, while callers deciding whether to retry can tell the
conditions apart.
"""


class GeneticOperatorError(ValueError):
    """Base class for all operator errors"""


class InvalidDistributionError(GeneticOperatorError):
    """Distribution parameters are invalid (e.g. non-positive standard deviation)"""


class InvalidProbabilityError(GeneticOperatorError):
    """A probability parameter lies outside [0, 1]"""


class CrossoverTooShortError(GeneticOperatorError):
    """The overlapping part of two genomes is too short to cross over"""


class EmptySelectionPoolError(GeneticOperatorError):
    """Selection was asked to choose from an empty fitness list"""


class ShufflePoolTooSmallError(GeneticOperatorError):
    """Shuffle mutation needs at least two elements to swap"""


class UnorderedFitnessError(GeneticOperatorError):
    """Two fitness values could not be ordered (e.g. one of them is NaN)"""


class LengthMismatchError(GeneticOperatorError):
    """Parallel sequences that must be index-aligned have different lengths"""


class FitnessNotEvaluatedError(GeneticOperatorError):
    """A population member has no fitness attached"""
