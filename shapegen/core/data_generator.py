import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional

import numpy as np

from shapegen.core.configuration_builder import ConfigurationBuilder
from shapegen.core.field_generator import FieldGenerator
from shapegen.core.link_validator import LinkValidator
from shapegen.core.masking_engine import MaskingEngine
from shapegen.core.sample_generator import SampleDrivenGenerator
from shapegen.input.configuration import parse_configuration
from shapegen.input.pattern import Pattern
from shapegen.input.pattern_inferrer import PatternInferrer
from shapegen.output.diagnostics import GenerationDiagnostics
from shapegen.utils.config_manager import ConfigManager, GeneratorSettings


class FixtureGenerator:
    """Entry point for sample-driven and configuration-driven fixture generation"""

    def __init__(self, settings: Optional[GeneratorSettings] = None, masking_engine=None,
                 logger: Optional[logging.Logger] = None):
        self.settings = settings or GeneratorSettings()
        self.logger = logger or logging.getLogger(__name__)

        # Shared across items when supplied, otherwise built per item
        self.masking_engine = masking_engine
        # Holds the events of the most recent generate_* call
        self.diagnostics = GenerationDiagnostics(logger=self.logger)
        self.link_validator = LinkValidator(logger=self.logger)

    @classmethod
    def from_config_file(cls, config_path, **kwargs) -> "FixtureGenerator":
        """Create a generator from a YAML/JSON settings file"""
        return cls(settings=ConfigManager(config_path).settings, **kwargs)

    def infer_pattern(self, sample: Any, preserve_rules: Optional[Iterable[str]] = None) -> Pattern:
        """Infer the pattern tree of a sample"""
        rules = self.settings.preserve_rules if preserve_rules is None else list(preserve_rules)
        inferrer = PatternInferrer(
            preserve_rules=rules,
            max_depth=self.settings.max_depth,
            diagnostics=self.diagnostics,
            logger=self.logger,
        )
        return inferrer.infer(sample)

    def generate_from_sample(self, sample: Any, count: Optional[int] = None,
                             max_array_items: Optional[int] = None, anonymize: Optional[bool] = None,
                             preserve_rules: Optional[Iterable[str]] = None) -> Any:
        """
        Generate values shaped like a sample

        Args:
            sample: Sample value to imitate
            count: Number of values; 1 returns a single value, more return a list
            max_array_items: Upper bound of generated array lengths
            anonymize: Scramble free text instead of picking vocabulary words
            preserve_rules: Glob paths whose values are copied verbatim

        Returns:
            Generated value or list of values
        """
        count = self._resolve_count(count)
        self.diagnostics.clear()
        max_array_items = max_array_items or self.settings.max_array_items
        anonymize = self.settings.anonymize if anonymize is None else anonymize

        pattern = self.infer_pattern(sample, preserve_rules)

        results = []
        for rng in self._spawn_rngs(count):
            generator = SampleDrivenGenerator(
                rng,
                max_depth=self.settings.max_depth,
                max_array_items=max_array_items,
                anonymize=anonymize,
                masking_engine=self._masking_engine_for(rng) if anonymize else None,
                diagnostics=self.diagnostics,
                logger=self.logger,
            )
            results.append(generator.generate(pattern))

        self.logger.info(f"Generated {count} value(s) from sample")
        return results[0] if count == 1 else results

    def generate_from_configuration(self, configuration: Mapping, seed: Any = None,
                                    count: Optional[int] = None) -> Any:
        """
        Generate values from an explicit field configuration

        Args:
            configuration: Configuration tree (raw mapping or parsed)
            seed: Seed tree supplying Preserve/Anonymize source values;
                a list supplies one seed per item, cycled
            count: Number of values; 1 returns a single value, more return a list

        Returns:
            Generated value or list of values

        Raises:
            ConfigurationError: when the configuration carries an illegal link
        """
        count = self._resolve_count(count)
        self.diagnostics.clear()
        tree = parse_configuration(configuration)
        self.link_validator.validate(tree)

        results = []
        for i, rng in enumerate(self._spawn_rngs(count)):
            field_generator = FieldGenerator(
                rng,
                masking_engine=self._masking_engine_for(rng),
                diagnostics=self.diagnostics,
                default_array_count=self.settings.default_array_count,
                logger=self.logger,
            )
            builder = ConfigurationBuilder(field_generator, diagnostics=self.diagnostics, logger=self.logger)
            results.append(builder.build(tree, self._seed_for_item(seed, i)))

        self.logger.info(f"Generated {count} value(s) from configuration with {len(tree)} top-level fields")
        return results[0] if count == 1 else results

    def get_diagnostics_summary(self) -> Dict[str, Any]:
        return self.diagnostics.get_summary()

    def _resolve_count(self, count: Optional[int]) -> int:
        count = self.settings.count if count is None else count
        if count < 1:
            raise ValueError(f"count must be at least 1, got {count}")
        return count

    def _spawn_rngs(self, count: int) -> List[np.random.Generator]:
        """One independent random source per generated item"""
        seed_sequence = np.random.SeedSequence(self.settings.seed)
        return [np.random.default_rng(child) for child in seed_sequence.spawn(count)]

    def _masking_engine_for(self, rng: np.random.Generator):
        if self.masking_engine is not None:
            return self.masking_engine
        return MaskingEngine(rng=rng, locale=self.settings.locale, method=self.settings.masking_method)

    @staticmethod
    def _seed_for_item(seed: Any, index: int) -> Any:
        if isinstance(seed, list):
            return seed[index % len(seed)] if seed else None
        return seed


def generate_from_sample(sample: Any, count: Optional[int] = None, max_array_items: Optional[int] = None,
                         anonymize: Optional[bool] = None,
                         preserve_rules: Optional[Iterable[str]] = None,
                         settings: Optional[GeneratorSettings] = None, masking_engine=None) -> Any:
    """Generate ``count`` values shaped like ``sample``, unset options taken from ``settings``"""
    generator = FixtureGenerator(settings=settings, masking_engine=masking_engine)
    return generator.generate_from_sample(
        sample, count=count, max_array_items=max_array_items,
        anonymize=anonymize, preserve_rules=preserve_rules,
    )


def generate_from_configuration(configuration: Mapping, seed: Any = None, count: Optional[int] = None,
                                settings: Optional[GeneratorSettings] = None, masking_engine=None) -> Any:
    """Validate ``configuration`` once and build ``count`` values from it"""
    generator = FixtureGenerator(settings=settings, masking_engine=masking_engine)
    return generator.generate_from_configuration(configuration, seed=seed, count=count)
