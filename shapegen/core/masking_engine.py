"""
Scalar Anonymization Engine for fixture generation
Produces values that look like the source value but differ from it
"""

import logging
import numbers
from datetime import date, datetime, timedelta, timezone
from typing import Any, Optional, Union

import numpy as np
from faker import Faker

from shapegen.core.value_factory import DATETIME_FORMAT, DATETIME_JITTER_DAYS
from shapegen.utils.config_manager import MaskingMethod

logger = logging.getLogger(__name__)


class MaskingEngine:
    """
    Default anonymization transforms:
    - String scrambling (format preserving or shuffling)
    - Numeric offsetting within a neighborhood
    - Datetime jitter

    Any object exposing ``scramble_string``, ``offset_number`` and
    ``jitter_datetime`` can stand in for this class.
    """

    def __init__(self, rng: Optional[np.random.Generator] = None, locale: str = "en_US",
                 method: Union[MaskingMethod, str] = MaskingMethod.FORMAT_PRESERVE):
        self.locale = locale
        self.rng = rng if rng is not None else np.random.default_rng()
        self.method = MaskingMethod(method)
        self.faker = Faker(locale)
        self.faker.seed_instance(int(self.rng.integers(2 ** 32)))

        # Masking method registry
        self.masking_methods = {
            MaskingMethod.FORMAT_PRESERVE: self._format_preserve_mask,
            MaskingMethod.SHUFFLE: self._shuffle_mask,
        }

    def scramble_string(self, value: str) -> str:
        """Length-matched replacement for a string"""
        masking_func = self.masking_methods[self.method]
        masked = masking_func(str(value))

        # A shuffle of a single repeated character cannot change the value
        if masked == value and value and self.method is MaskingMethod.SHUFFLE:
            masked = self._format_preserve_mask(value)
        return masked

    def offset_number(self, value: Union[int, float], spread: Union[int, float]) -> Union[int, float]:
        """Move a number somewhere within +/- spread of itself"""
        if isinstance(value, bool):
            return self.faker.boolean()

        if isinstance(value, numbers.Integral):
            spread = max(int(spread), 1)
            offset = 0
            while offset == 0:
                offset = int(self.rng.integers(-spread, spread + 1))
            return int(value) + offset

        spread = abs(float(spread)) or 1.0
        return float(value) + float(self.rng.uniform(-spread, spread))

    def jitter_datetime(self, value: Any) -> str:
        """Shift a datetime (or ISO-8601 string) by up to a year either way"""
        anchor = self._parse_datetime(value)
        if anchor is None:
            logger.debug(f"Unparseable datetime '{value}', jittering around now")
            anchor = datetime.now(timezone.utc)

        offset = timedelta(days=float(self.rng.uniform(-DATETIME_JITTER_DAYS, DATETIME_JITTER_DAYS)))
        return (anchor + offset).strftime(DATETIME_FORMAT)

    def _parse_datetime(self, value: Any) -> Optional[datetime]:
        if isinstance(value, datetime):
            return value
        if isinstance(value, date):
            return datetime(value.year, value.month, value.day, tzinfo=timezone.utc)
        if isinstance(value, str):
            text = value.strip()
            if text.endswith('Z'):
                text = text[:-1] + '+00:00'
            try:
                return datetime.fromisoformat(text)
            except ValueError:
                return None
        return None

    def _shuffle_mask(self, value: str) -> str:
        """Shuffle alphanumeric characters while preserving separators"""
        chars = list(value)
        alpha_chars = [c for c in chars if c.isalnum()]
        self.faker.random.shuffle(alpha_chars)

        result = []
        alpha_idx = 0
        for char in chars:
            if char.isalnum() and alpha_idx < len(alpha_chars):
                result.append(alpha_chars[alpha_idx])
                alpha_idx += 1
            else:
                result.append(char)
        return ''.join(result)

    def _format_preserve_mask(self, value: str) -> str:
        """Preserve exact format but change content"""
        result = ""

        for char in value:
            if char.isdigit():
                result += str(self.faker.random_digit())
            elif char.isalpha():
                if char.isupper():
                    result += self.faker.random_uppercase_letter()
                else:
                    result += self.faker.random_lowercase_letter()
            else:
                result += char

        return result
