# tests/test_sample_generator.py
"""
Tests for sample-driven generation from pattern trees
"""
import re
import uuid
from datetime import datetime, timedelta, timezone

import numpy as np

from shapegen.core.masking_engine import MaskingEngine
from shapegen.core.sample_generator import DEPTH_EXCEEDED, SampleDrivenGenerator
from shapegen.core.value_factory import (
    DOTTED_PREFIXES,
    DOTTED_SUFFIXES,
    KEBAB_VOCABULARY,
    TEXT_VOCABULARY,
)
from shapegen.input.pattern import Pattern, PatternKind
from shapegen.input.pattern_inferrer import PatternInferrer

ISO_PATTERN = re.compile(r'^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}Z$')


def _shape(value):
    if isinstance(value, dict):
        return {k: _shape(v) for k, v in value.items()}
    if isinstance(value, list):
        return "list"
    return "scalar"


class TestScalarStrategies:

    def setup_method(self):
        self.generator = SampleDrivenGenerator(np.random.default_rng(7))

    def test_datetime_within_a_year(self):
        value = self.generator.generate(Pattern.leaf(PatternKind.DATETIME))

        assert ISO_PATTERN.match(value)
        generated = datetime.strptime(value, "%Y-%m-%dT%H:%M:%SZ").replace(tzinfo=timezone.utc)
        assert abs(generated - datetime.now(timezone.utc)) <= timedelta(days=366)

    def test_guid(self):
        value = self.generator.generate(Pattern.leaf(PatternKind.GUID))
        assert uuid.UUID(value).version == 4

    def test_numeric_string(self):
        for _ in range(50):
            value = self.generator.generate(Pattern.leaf(PatternKind.STRING_NUMERIC))
            assert value.isdigit()
            assert len(value) in (7, 8)

    def test_kebab(self):
        value = self.generator.generate(Pattern.leaf(PatternKind.STRING_KEBAB))
        first, second = value.split("-")
        assert first in KEBAB_VOCABULARY and second in KEBAB_VOCABULARY

    def test_dotted(self):
        value = self.generator.generate(Pattern.leaf(PatternKind.STRING_DOTTED))
        prefix, suffix = value.split("/")
        assert prefix in DOTTED_PREFIXES and suffix in DOTTED_SUFFIXES

    def test_text_uses_vocabulary(self):
        assert self.generator.generate(Pattern.text(25)) in TEXT_VOCABULARY

    def test_int_range(self):
        pattern = Pattern.leaf(PatternKind.INT, value_range=(-70, 130))
        values = [self.generator.generate(pattern) for _ in range(200)]
        assert all(isinstance(v, int) and -70 <= v < 130 for v in values)

    def test_int_default_range(self):
        value = self.generator.generate(Pattern.leaf(PatternKind.INT))
        assert 0 <= value < 100

    def test_double_and_bool(self):
        value = self.generator.generate(Pattern.leaf(PatternKind.DOUBLE))
        assert isinstance(value, float) and 0.1 <= value < 100
        assert isinstance(self.generator.generate(Pattern.leaf(PatternKind.BOOL)), bool)

    def test_null(self):
        assert self.generator.generate(Pattern.leaf(PatternKind.NULL)) is None

    def test_preserved_leaf_is_verbatim(self):
        pattern = Pattern.text(8).mark_preserved("John Doe")
        assert self.generator.generate(pattern) == "John Doe"


class TestAnonymizedText:

    def test_length_matched_scramble(self):
        rng = np.random.default_rng(3)
        generator = SampleDrivenGenerator(rng, anonymize=True, masking_engine=MaskingEngine(rng=rng))

        value = generator.generate(Pattern.text(12))
        assert len(value) == 12
        assert value.isalpha()

    def test_anonymize_without_engine_uses_vocabulary(self):
        generator = SampleDrivenGenerator(np.random.default_rng(3), anonymize=True)
        assert generator.generate(Pattern.text(12)) in TEXT_VOCABULARY

    def test_preserved_text_is_not_scrambled(self):
        rng = np.random.default_rng(3)
        generator = SampleDrivenGenerator(rng, anonymize=True, masking_engine=MaskingEngine(rng=rng))
        assert generator.generate(Pattern.text(3).mark_preserved("abc")) == "abc"


class TestContainers:

    def test_example_sample(self):
        sample = {"name": "John Doe", "age": 30, "items": ["item1", "item2"]}
        pattern = PatternInferrer().infer(sample)
        generator = SampleDrivenGenerator(np.random.default_rng(11), max_array_items=5)

        for _ in range(20):
            value = generator.generate(pattern)
            assert list(value) == ["name", "age", "items"]
            assert -70 <= value["age"] < 130
            assert isinstance(value["items"], list)
            assert 1 <= len(value["items"]) <= 5

    def test_shape_is_isomorphic(self):
        sample = {"user": {"id": 1, "tags": ["x"], "address": {"city": "Leeds"}}, "flag": True}
        pattern = PatternInferrer().infer(sample)
        value = SampleDrivenGenerator(np.random.default_rng(1)).generate(pattern)

        assert _shape(value) == _shape(sample)

    def test_empty_array_stays_empty(self):
        pattern = PatternInferrer().infer({"items": []})
        value = SampleDrivenGenerator(np.random.default_rng(1)).generate(pattern)
        assert value == {"items": []}

    def test_single_element_array_is_a_list(self):
        pattern = PatternInferrer().infer({"items": ["one"]})
        generator = SampleDrivenGenerator(np.random.default_rng(1), max_array_items=1)
        value = generator.generate(pattern)
        assert isinstance(value["items"], list) and len(value["items"]) == 1

    def test_item_patterns_cycle(self):
        pattern = Pattern.array(2, [Pattern.leaf(PatternKind.BOOL), Pattern.leaf(PatternKind.GUID)])
        generator = SampleDrivenGenerator(np.random.default_rng(5), max_array_items=10)

        for _ in range(10):
            items = generator.generate(pattern)
            for i, item in enumerate(items):
                assert isinstance(item, bool if i % 2 == 0 else str)

    def test_unsampled_array_falls_back_to_text(self):
        pattern = Pattern(kind=PatternKind.ARRAY, item_count=4)
        items = SampleDrivenGenerator(np.random.default_rng(5)).generate(pattern)
        assert items and all(item in TEXT_VOCABULARY for item in items)

    def test_depth_exceeded_sentinel(self):
        deep = Pattern.obj({"a": Pattern.obj({"b": Pattern.obj({"c": Pattern.text(3)})})})
        generator = SampleDrivenGenerator(np.random.default_rng(5), max_depth=1)

        value = generator.generate(deep)
        assert value["a"]["b"] == DEPTH_EXCEEDED

    def test_seeded_rng_is_reproducible(self):
        pattern = PatternInferrer().infer({"id": "3f2504e0-4f89-11d3-9a0c-0305e82c3301", "n": [1, 2]})

        first = SampleDrivenGenerator(np.random.default_rng(42)).generate(pattern)
        second = SampleDrivenGenerator(np.random.default_rng(42)).generate(pattern)
        assert first == second
