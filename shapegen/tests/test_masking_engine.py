# tests/test_masking_engine.py
"""
Tests for the default anonymization transforms
"""
from datetime import date, datetime, timedelta, timezone

import numpy as np
import pytest

from shapegen.core.masking_engine import MaskingEngine
from shapegen.utils.config_manager import MaskingMethod


def _parse(value):
    return datetime.strptime(value, "%Y-%m-%dT%H:%M:%SZ").replace(tzinfo=timezone.utc)


class TestMaskingEngine:

    def setup_method(self):
        self.engine = MaskingEngine(rng=np.random.default_rng(17))

    def test_format_preserving_scramble(self):
        masked = self.engine.scramble_string("AB-12 cd")

        assert len(masked) == 8
        assert masked[:2].isupper() and masked[2] == "-"
        assert masked[3:5].isdigit() and masked[5] == " "
        assert masked[6:].islower()

    def test_shuffle_keeps_characters(self):
        engine = MaskingEngine(rng=np.random.default_rng(17), method="shuffle")
        masked = engine.scramble_string("abc-123")

        assert engine.method is MaskingMethod.SHUFFLE
        assert masked[3] == "-"
        assert sorted(masked.replace("-", "")) == sorted("abc123")

    def test_shuffle_of_repeated_character_still_changes(self):
        engine = MaskingEngine(rng=np.random.default_rng(17), method=MaskingMethod.SHUFFLE)
        for _ in range(20):
            masked = engine.scramble_string("aaaaaaaaaa")
            assert len(masked) == 10 and masked.isalpha()

    def test_unknown_method(self):
        with pytest.raises(ValueError):
            MaskingEngine(method="rot13")

    def test_integer_offset(self):
        values = [self.engine.offset_number(1000, 5) for _ in range(100)]
        assert all(v != 1000 and 995 <= v <= 1005 for v in values)
        assert all(isinstance(v, int) for v in values)

    def test_float_offset(self):
        value = self.engine.offset_number(2.5, 0.5)
        assert isinstance(value, float) and 2.0 <= value <= 3.0

    def test_bool_offset(self):
        assert isinstance(self.engine.offset_number(True, 1), bool)

    @pytest.mark.parametrize("value, anchor", [
        ("2023-06-01T12:00:00Z", datetime(2023, 6, 1, 12, tzinfo=timezone.utc)),
        (datetime(2023, 6, 1, 12, tzinfo=timezone.utc), datetime(2023, 6, 1, 12, tzinfo=timezone.utc)),
        (date(2023, 6, 1), datetime(2023, 6, 1, tzinfo=timezone.utc)),
    ])
    def test_datetime_jitter(self, value, anchor):
        assert abs(_parse(self.engine.jitter_datetime(value)) - anchor) <= timedelta(days=366)

    def test_unparseable_datetime_jitters_around_now(self):
        jittered = _parse(self.engine.jitter_datetime("not a date"))
        assert abs(jittered - datetime.now(timezone.utc)) <= timedelta(days=366)

    def test_seeded_engines_agree(self):
        first = MaskingEngine(rng=np.random.default_rng(3)).scramble_string("Secret-99")
        second = MaskingEngine(rng=np.random.default_rng(3)).scramble_string("Secret-99")
        assert first == second
