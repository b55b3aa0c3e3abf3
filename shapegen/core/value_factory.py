"""
Scalar value strategies shared by the sample-driven and configuration-driven
generators. Every draw goes through the injected numpy Generator so a seeded
rng reproduces the same values.
"""
import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional, Sequence, Tuple

import numpy as np

DATETIME_FORMAT = "%Y-%m-%dT%H:%M:%SZ"
DATETIME_JITTER_DAYS = 365

TEXT_VOCABULARY = [
    "sample", "example", "test", "demo", "value", "data", "item", "record",
]

KEBAB_VOCABULARY = [
    "alpha", "beta", "gamma", "delta", "epsilon", "zeta", "theta",
]

DOTTED_PREFIXES = [
    "api", "app", "web", "svc", "core", "data", "auth", "user",
]

DOTTED_SUFFIXES = [
    "v1", "v2", "internal", "public", "admin", "config", "status", "health",
]

NUMERIC_STRING_RANGE = (1_000_000, 100_000_000)  # 7-8 digits
DOUBLE_RANGE = (0.1, 100.0)
DEFAULT_INT_RANGE = (0, 100)
DEFAULT_LONG_RANGE = (0, 10_000)

PLACEHOLDER_ALPHABET = "abcdefghijklmnopqrstuvwxyz"


def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    """Create a random source, seeded when a seed is given"""
    return np.random.default_rng(seed)


class ValueFactory:
    """Fresh scalar values drawn from a single random source"""

    def __init__(self, rng: np.random.Generator):
        self.rng = rng

    def pick(self, vocabulary: Sequence[str]) -> str:
        return vocabulary[int(self.rng.integers(len(vocabulary)))]

    def integer(self, value_range: Optional[Tuple[int, int]] = None,
                default: Tuple[int, int] = DEFAULT_INT_RANGE) -> int:
        """Uniform integer in [low, high)"""
        low, high = value_range if value_range else default
        if high <= low:
            return int(low)
        return int(self.rng.integers(low, high))

    def long(self, value_range: Optional[Tuple[int, int]] = None) -> int:
        return self.integer(value_range, default=DEFAULT_LONG_RANGE)

    def double(self) -> float:
        return float(self.rng.uniform(*DOUBLE_RANGE))

    def boolean(self) -> bool:
        return bool(self.rng.random() < 0.5)

    def datetime_string(self, anchor: Optional[datetime] = None) -> str:
        """Anchor (default now, UTC) shifted by up to a year either way"""
        anchor = anchor or datetime.now(timezone.utc)
        offset = timedelta(days=float(self.rng.uniform(-DATETIME_JITTER_DAYS, DATETIME_JITTER_DAYS)))
        return (anchor + offset).strftime(DATETIME_FORMAT)

    def guid(self) -> str:
        return str(uuid.UUID(bytes=self.rng.bytes(16), version=4))

    def numeric_string(self) -> str:
        return str(int(self.rng.integers(*NUMERIC_STRING_RANGE)))

    def kebab(self) -> str:
        return f"{self.pick(KEBAB_VOCABULARY)}-{self.pick(KEBAB_VOCABULARY)}"

    def dotted(self) -> str:
        return f"{self.pick(DOTTED_PREFIXES)}/{self.pick(DOTTED_SUFFIXES)}"

    def text(self) -> str:
        return self.pick(TEXT_VOCABULARY)

    def placeholder(self, length: int) -> str:
        """Random lowercase string of an exact length"""
        length = max(int(length or 0), 0)
        indexes = self.rng.integers(len(PLACEHOLDER_ALPHABET), size=length)
        return ''.join(PLACEHOLDER_ALPHABET[i] for i in indexes)
