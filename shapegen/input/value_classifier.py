import numbers
import re
import logging
from datetime import date, datetime
from typing import Any

from shapegen.input.pattern import Pattern, PatternKind

logger = logging.getLogger(__name__)

INT32_MIN = -2 ** 31
INT32_MAX = 2 ** 31 - 1

INT_SPREAD = 100
LONG_SPREAD = 1000

# Ordered string rules, first match wins
DATETIME_PATTERN = re.compile(r'^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}')
GUID_PATTERN = re.compile(r'^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$', re.I)
NUMERIC_PATTERN = re.compile(r'^[0-9]+$')
KEBAB_PATTERN = re.compile(r'^[a-zA-Z]+(?:-[a-zA-Z]+)+$')
DOTTED_PATTERN = re.compile(r'^[a-zA-Z]+\.[a-zA-Z]+')


def classify_string(value: str) -> Pattern:
    """Classify a string by its format"""
    if DATETIME_PATTERN.match(value):
        return Pattern.leaf(PatternKind.DATETIME)
    if GUID_PATTERN.match(value):
        return Pattern.leaf(PatternKind.GUID)
    if NUMERIC_PATTERN.match(value):
        return Pattern.leaf(PatternKind.STRING_NUMERIC)
    if KEBAB_PATTERN.match(value):
        return Pattern.leaf(PatternKind.STRING_KEBAB)
    if DOTTED_PATTERN.match(value):
        return Pattern.leaf(PatternKind.STRING_DOTTED)
    return Pattern.text(len(value))


def classify(value: Any) -> Pattern:
    """
    Turn one scalar into a leaf pattern.

    Never raises: anything that is not a string, number, bool or date is
    reported as an opaque COMPLEX leaf.
    """
    if value is None:
        return Pattern.leaf(PatternKind.NULL)

    if isinstance(value, str):
        return classify_string(value)

    # bool is a subclass of int
    if isinstance(value, bool):
        return Pattern.leaf(PatternKind.BOOL)

    if isinstance(value, numbers.Integral):
        value = int(value)
        if INT32_MIN <= value <= INT32_MAX:
            return Pattern.leaf(PatternKind.INT, value_range=(value - INT_SPREAD, value + INT_SPREAD))
        return Pattern.leaf(PatternKind.LONG, value_range=(value - LONG_SPREAD, value + LONG_SPREAD))

    if isinstance(value, numbers.Real):
        return Pattern.leaf(PatternKind.DOUBLE)

    if isinstance(value, (datetime, date)):
        return Pattern.leaf(PatternKind.DATETIME)

    logger.debug(f"Unrecognized scalar of type {type(value).__name__}, classified as complex")
    return Pattern.leaf(PatternKind.COMPLEX)
