"""
Utils module exports
"""
from .config_manager import ConfigManager, GeneratorSettings, MaskingMethod
from .exceptions import *
from .path_matcher import should_preserve
from .path_resolver import resolve_linked_path, resolve_seed_path

__all__ = [
    'ConfigManager',
    'GeneratorSettings',
    'MaskingMethod',
    'should_preserve',
    'resolve_seed_path',
    'resolve_linked_path',
    'SyntheticDataError',
    'ConfigurationError',
    'CircularLinkError',
    'DownwardLinkError',
    'CrossScopeLinkError',
    'MissingLinkTargetError',
    'ArrayScopeError',
    'SettingsError'
]
