"""
shapegen: structure-preserving synthetic fixture generation
"""
from .core import (
    FixtureGenerator,
    LinkValidator,
    MaskingEngine,
    generate_from_configuration,
    generate_from_sample,
)
from .input import FieldAction, FieldConfig, Pattern, PatternKind, parse_configuration
from .utils import ConfigManager, GeneratorSettings
from .utils.exceptions import *

__version__ = "0.1.0"

__all__ = [
    'FixtureGenerator',
    'LinkValidator',
    'MaskingEngine',
    'generate_from_configuration',
    'generate_from_sample',
    'FieldAction',
    'FieldConfig',
    'Pattern',
    'PatternKind',
    'parse_configuration',
    'ConfigManager',
    'GeneratorSettings',
    'SyntheticDataError',
    'ConfigurationError',
    'CircularLinkError',
    'DownwardLinkError',
    'CrossScopeLinkError',
    'MissingLinkTargetError',
    'ArrayScopeError',
    'SettingsError'
]
