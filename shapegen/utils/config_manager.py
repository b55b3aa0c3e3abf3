"""
Generator settings with schema validation
Supports YAML/JSON settings files with Pydantic validation
"""
import json
import yaml
from pathlib import Path
from typing import Any, Dict, List, Optional, Union
from pydantic import BaseModel, Field, ValidationError, field_validator
from enum import Enum
import logging

from .exceptions import SettingsError

logger = logging.getLogger(__name__)


class MaskingMethod(str, Enum):
    """String scrambling strategies of the default masking engine"""
    FORMAT_PRESERVE = "format_preserve"
    SHUFFLE = "shuffle"


class GeneratorSettings(BaseModel):
    max_depth: int = Field(10, ge=0)
    max_array_items: int = Field(5, ge=1)
    default_array_count: int = Field(3, ge=0)
    anonymize: bool = False
    preserve_rules: List[str] = Field(default_factory=list)
    seed: Optional[int] = None
    locale: str = "en_US"
    masking_method: MaskingMethod = MaskingMethod.FORMAT_PRESERVE
    count: int = Field(1, ge=1)

    @field_validator('preserve_rules', mode='before')
    @classmethod
    def validate_preserve_rules(cls, v):
        if v is None:
            return []
        if isinstance(v, str):
            return [v]
        return v

    @field_validator('masking_method', mode='before')
    @classmethod
    def validate_masking_method(cls, v):
        if isinstance(v, str):
            return v.strip().lower().replace('-', '_')
        return v


class ConfigManager:
    """Settings manager with validation"""

    def __init__(self, config_path: Optional[Union[str, Path]] = None):
        self.config_path = Path(config_path) if config_path else None
        self.settings: GeneratorSettings = GeneratorSettings()

        if self.config_path:
            self.load_settings(self.config_path)

    @staticmethod
    def setup_logging(level: int = logging.INFO):
        """Setup logging configuration for hosts that want console output"""
        logging.basicConfig(
            level=level,
            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
        )

    def load_settings(self, config_path: Union[str, Path]) -> GeneratorSettings:
        """Load and validate settings from file"""
        config_path = Path(config_path)

        if not config_path.exists():
            raise SettingsError(f"Settings file not found: {config_path}")

        suffix = config_path.suffix.lower()
        try:
            with open(config_path, 'r') as f:
                if suffix in ['.yaml', '.yml']:
                    config_data = yaml.safe_load(f) or {}
                elif suffix == '.json':
                    config_data = json.load(f)
                else:
                    raise SettingsError(f"Unsupported settings format: {config_path.suffix}")
        except (yaml.YAMLError, json.JSONDecodeError) as e:
            logger.error(f"Failed to parse settings file {config_path}: {e}")
            raise SettingsError(f"Failed to parse settings file {config_path}: {e}") from e

        self.settings = self.from_dict(config_data)
        self.config_path = config_path
        logger.info(f"Settings loaded successfully from {config_path}")
        return self.settings

    def from_dict(self, config_data: Dict[str, Any]) -> GeneratorSettings:
        """Validate a settings mapping"""
        if not isinstance(config_data, dict):
            raise SettingsError("Settings must be a mapping of option names to values")

        try:
            return GeneratorSettings(**config_data)
        except ValidationError as e:
            logger.error(f"Settings validation failed: {e}")
            raise SettingsError(f"Settings validation failed: {e}") from e

    def validate_settings(self, config_data: Dict[str, Any]) -> bool:
        """Validate settings data against schema"""
        try:
            self.from_dict(config_data)
            return True
        except SettingsError:
            return False

    def override(self, **overrides) -> GeneratorSettings:
        """Return the current settings with non-None overrides applied"""
        values = self.settings.model_dump()
        values.update({k: v for k, v in overrides.items() if v is not None})
        return self.from_dict(values)
