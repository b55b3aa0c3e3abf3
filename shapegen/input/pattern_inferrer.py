import dataclasses
import logging
import numbers
import uuid
from collections.abc import Mapping
from datetime import date
from enum import Enum
from pathlib import PurePath
from typing import Any, Iterable, List, Optional, Tuple

from shapegen.input.pattern import FALLBACK_TEXT_LENGTH, Pattern, PatternKind
from shapegen.input.value_classifier import classify
from shapegen.output.diagnostics import MALFORMED_GLOB, GenerationDiagnostics
from shapegen.utils.path_matcher import is_valid_glob, should_preserve
from shapegen.utils.path_resolver import join_path

# Item patterns saturate quickly, only the head of a sequence is inspected
ARRAY_SAMPLE_LIMIT = 3

# Value types that are leaves even though they carry attributes or slots
_SCALAR_TYPES = (str, bytes, bool, numbers.Number, date, uuid.UUID, PurePath, Enum)


class PatternInferrer:
    """
    Analyze a sample value to infer its structural pattern
    """

    def __init__(self, preserve_rules: Optional[Iterable[str]] = None, max_depth: int = 10,
                 diagnostics: Optional[GenerationDiagnostics] = None,
                 logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)
        self.preserve_rules: List[str] = list(preserve_rules or [])
        self.max_depth = max_depth
        self.diagnostics = diagnostics

        for rule in self.preserve_rules:
            if not is_valid_glob(rule) and self.diagnostics is not None:
                self.diagnostics.record(MALFORMED_GLOB, rule, "preservation rule compared by exact match")

    def infer(self, value: Any, path: str = "", depth: int = 0) -> Pattern:
        """
        Infer the pattern of a value

        Args:
            value: Sample value (mapping, record, sequence or scalar)
            path: Dotted path of the value, '' for the sample root
            depth: Nesting depth of the value, 0 for the sample root

        Returns:
            Pattern tree describing the value
        """
        if value is None:
            return Pattern.leaf(PatternKind.NULL)

        if depth > self.max_depth:
            self.logger.debug(f"Max depth exceeded at '{path}', collapsing to text")
            return Pattern.text(FALLBACK_TEXT_LENGTH)

        if isinstance(value, Mapping):
            return self._infer_object(value.items(), path, depth, "mapping")

        if isinstance(value, (list, tuple, set, frozenset)):
            return self._infer_array(list(value), path, depth)

        record_items = self._record_items(value)
        if record_items is not None:
            return self._infer_object(record_items, path, depth, "record")

        pattern = classify(value)
        if should_preserve(path, self.preserve_rules):
            pattern.mark_preserved(value)
        return pattern

    def _infer_object(self, items, path: str, depth: int, object_kind: str) -> Pattern:
        properties = {}
        for name, child in items:
            name = str(name)
            properties[name] = self.infer(child, join_path(path, name), depth + 1)
        return Pattern.obj(properties, object_kind=object_kind)

    def _infer_array(self, items: List[Any], path: str, depth: int) -> Pattern:
        item_path = join_path(path, "*")
        sampled = items[:ARRAY_SAMPLE_LIMIT]
        item_patterns = [self.infer(item, item_path, depth + 1) for item in sampled]

        self.logger.debug(
            f"Array at '{path or '<root>'}': {len(items)} items, sampled {len(item_patterns)}"
        )
        return Pattern.array(len(items), item_patterns)

    @staticmethod
    def _record_items(value: Any) -> Optional[List[Tuple[str, Any]]]:
        """Attribute name/value pairs of a record, None when the value is not one"""
        if isinstance(value, _SCALAR_TYPES) or callable(value):
            return None
        if dataclasses.is_dataclass(value):
            return [(f.name, getattr(value, f.name, None)) for f in dataclasses.fields(value)]
        if hasattr(value, '__dict__'):
            return list(vars(value).items())

        slots = _slot_names(type(value))
        if slots:
            return [(name, getattr(value, name)) for name in slots if hasattr(value, name)]
        return None


def _slot_names(cls: type) -> List[str]:
    """Declared __slots__ of a class and its bases, base classes first"""
    names: List[str] = []
    for klass in reversed(cls.__mro__):
        slots = klass.__dict__.get('__slots__', ())
        if isinstance(slots, str):
            slots = (slots,)
        for name in slots:
            if name not in ('__dict__', '__weakref__') and name not in names:
                names.append(name)
    return names
