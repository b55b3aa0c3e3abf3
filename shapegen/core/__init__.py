"""
Core module exports for easier importing
"""
from .configuration_builder import ConfigurationBuilder
from .data_generator import FixtureGenerator, generate_from_configuration, generate_from_sample
from .field_generator import FieldGenerator
from .link_validator import LinkValidator
from .masking_engine import MaskingEngine
from .sample_generator import DEPTH_EXCEEDED, SampleDrivenGenerator
from .value_factory import ValueFactory, make_rng

__all__ = [
    'ConfigurationBuilder',
    'FixtureGenerator',
    'generate_from_configuration',
    'generate_from_sample',
    'FieldGenerator',
    'LinkValidator',
    'MaskingEngine',
    'DEPTH_EXCEEDED',
    'SampleDrivenGenerator',
    'ValueFactory',
    'make_rng'
]
