"""Distribution contracts and concrete tables."""

from .base import ProbDistribution, UtilityFunction
from .categorical import CategoricalTable
from .marginal import MarginalDistribution

__all__ = ["CategoricalTable", "MarginalDistribution", "ProbDistribution", "UtilityFunction"]
