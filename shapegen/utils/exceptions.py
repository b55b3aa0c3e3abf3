# shapegen/utils/exceptions.py
"""
Custom Exceptions for the fixture generation engine
"""
from typing import Optional


class SyntheticDataError(Exception):
    """Base exception for shapegen"""
    pass


class ConfigurationError(SyntheticDataError):
    """Configuration tree is malformed or carries an illegal link"""

    def __init__(self, message: str, source_path: Optional[str] = None,
                 target_path: Optional[str] = None):
        super().__init__(message)
        self.source_path = source_path
        self.target_path = target_path


class CircularLinkError(ConfigurationError):
    """Link target is itself a Link field"""
    pass


class DownwardLinkError(ConfigurationError):
    """Link targets a descendant of the linking field"""
    pass


class CrossScopeLinkError(ConfigurationError):
    """Link targets a field outside the scopes visible to the linking field"""
    pass


class MissingLinkTargetError(ConfigurationError):
    """Link target does not exist in the configuration"""
    pass


class ArrayScopeError(ConfigurationError):
    """Link crosses an array item structure boundary"""
    pass


class SettingsError(SyntheticDataError):
    """Generator settings loading or validation errors"""
    pass
