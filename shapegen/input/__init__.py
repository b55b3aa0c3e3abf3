"""
Input module exports
"""
from .configuration import FieldAction, FieldConfig, parse_configuration
from .pattern import Pattern, PatternKind
from .pattern_inferrer import PatternInferrer
from .value_classifier import classify

__all__ = [
    'FieldAction',
    'FieldConfig',
    'parse_configuration',
    'Pattern',
    'PatternKind',
    'PatternInferrer',
    'classify'
]
