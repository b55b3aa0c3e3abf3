import logging
from typing import Any, Optional

import numpy as np

from shapegen.core.value_factory import ValueFactory
from shapegen.input.pattern import FALLBACK_TEXT_LENGTH, Pattern, PatternKind
from shapegen.output.diagnostics import MAX_DEPTH_EXCEEDED, GenerationDiagnostics
from shapegen.utils.path_resolver import join_path

DEPTH_EXCEEDED = "[max depth exceeded]"


class SampleDrivenGenerator:
    """Generate new values with the shape of an inferred pattern tree"""

    def __init__(self, rng: np.random.Generator, max_depth: int = 10, max_array_items: int = 5,
                 anonymize: bool = False, masking_engine=None,
                 diagnostics: Optional[GenerationDiagnostics] = None,
                 logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)
        self.rng = rng
        self.values = ValueFactory(rng)
        self.max_depth = max_depth
        self.max_array_items = max(int(max_array_items), 1)
        self.anonymize = anonymize
        self.masking_engine = masking_engine
        self.diagnostics = diagnostics

        self.scalar_strategies = {
            PatternKind.NULL: lambda p: None,
            PatternKind.DATETIME: lambda p: self.values.datetime_string(),
            PatternKind.GUID: lambda p: self.values.guid(),
            PatternKind.STRING_NUMERIC: lambda p: self.values.numeric_string(),
            PatternKind.STRING_KEBAB: lambda p: self.values.kebab(),
            PatternKind.STRING_DOTTED: lambda p: self.values.dotted(),
            PatternKind.STRING_TEXT: self._generate_text,
            PatternKind.INT: lambda p: self.values.integer(p.value_range),
            PatternKind.LONG: lambda p: self.values.long(p.value_range),
            PatternKind.DOUBLE: lambda p: self.values.double(),
            PatternKind.BOOL: lambda p: self.values.boolean(),
            PatternKind.COMPLEX: lambda p: self._generate_text(Pattern.text(FALLBACK_TEXT_LENGTH)),
        }

    def generate(self, pattern: Pattern, depth: int = 0, path: str = "") -> Any:
        """Generate one value for a pattern node"""
        if depth > self.max_depth:
            if self.diagnostics is not None:
                self.diagnostics.record(MAX_DEPTH_EXCEEDED, path, "generation depth limit reached")
            else:
                self.logger.warning(f"Generation depth limit reached at '{path}'")
            return DEPTH_EXCEEDED

        if pattern.kind is PatternKind.OBJECT:
            return self._generate_object(pattern, depth, path)
        if pattern.kind is PatternKind.ARRAY:
            return self._generate_array(pattern, depth, path)
        return self._generate_scalar(pattern)

    def _generate_child(self, pattern: Pattern, depth: int, path: str) -> Any:
        if pattern.is_container:
            return self.generate(pattern, depth + 1, path)
        return self._generate_scalar(pattern)

    def _generate_scalar(self, pattern: Pattern) -> Any:
        if pattern.preserve_field:
            return pattern.original_value

        strategy = self.scalar_strategies.get(pattern.kind)
        if strategy is None:
            self.logger.warning(f"No strategy for pattern kind {pattern.kind}, using text")
            return self.values.text()
        return strategy(pattern)

    def _generate_text(self, pattern: Pattern) -> str:
        if self.anonymize and self.masking_engine is not None:
            placeholder = self.values.placeholder(pattern.length or FALLBACK_TEXT_LENGTH)
            return self.masking_engine.scramble_string(placeholder)
        return self.values.text()

    def _generate_object(self, pattern: Pattern, depth: int, path: str) -> dict:
        result = {}
        for name, child in pattern.properties.items():
            result[name] = self._generate_child(child, depth, join_path(path, name))
        return result

    def _generate_array(self, pattern: Pattern, depth: int, path: str) -> list:
        if pattern.item_count == 0:
            return []

        length = int(self.rng.integers(1, self.max_array_items + 1))
        item_patterns = pattern.item_patterns or [Pattern.text(FALLBACK_TEXT_LENGTH)]
        item_path = join_path(path, "*")

        return [
            self._generate_child(item_patterns[i % len(item_patterns)], depth, item_path)
            for i in range(length)
        ]
