"""Inclusion rules for selecting files from filtered source directories."""

from .base_rules import BaseInclusionRules
from .glob_rules import GlobInclusionRules, validate_pattern

__all__ = [
    "BaseInclusionRules",
    "GlobInclusionRules",
    "validate_pattern",
]
