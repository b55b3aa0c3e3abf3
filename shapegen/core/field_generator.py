import copy
import logging
import numbers
from datetime import date, datetime
from typing import Any, Callable, Dict, Optional

import numpy as np

from shapegen.core.value_factory import ValueFactory
from shapegen.input.configuration import FieldAction, FieldConfig
from shapegen.input.value_classifier import INT_SPREAD, INT32_MAX, INT32_MIN, LONG_SPREAD
from shapegen.output.diagnostics import UNKNOWN_TYPE, GenerationDiagnostics
from shapegen.utils.path_resolver import join_path

# Relative spread used when anonymizing floating point seeds
DOUBLE_SPREAD_RATIO = 0.1

TYPE_ALIASES = {
    "string": "string", "str": "string", "text": "string",
    "numeric": "numeric",
    "kebab": "kebab",
    "dotted": "dotted",
    "int": "int", "integer": "int",
    "long": "long", "bigint": "long",
    "double": "double", "float": "double", "decimal": "double",
    "bool": "bool", "boolean": "bool",
    "datetime": "datetime", "date": "datetime", "timestamp": "datetime",
    "guid": "guid", "uuid": "guid",
    "array": "array", "list": "array",
}


def canonical_type(type_name: Optional[str]) -> Optional[str]:
    if type_name is None:
        return "string"
    return TYPE_ALIASES.get(str(type_name).strip().lower())


class FieldGenerator:
    """Produce the value of one configuration field from its action and seed value"""

    def __init__(self, rng: np.random.Generator, masking_engine=None,
                 diagnostics: Optional[GenerationDiagnostics] = None,
                 default_array_count: int = 3,
                 logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)
        self.rng = rng
        self.values = ValueFactory(rng)
        self.masking_engine = masking_engine
        self.diagnostics = diagnostics
        self.default_array_count = default_array_count

        self.random_strategies: Dict[str, Callable[[], Any]] = {
            "string": self.values.text,
            "numeric": self.values.numeric_string,
            "kebab": self.values.kebab,
            "dotted": self.values.dotted,
            "int": lambda: self.values.integer(),
            "long": lambda: self.values.long(),
            "double": self.values.double,
            "bool": self.values.boolean,
            "datetime": lambda: self.values.datetime_string(),
            "guid": self.values.guid,
        }

    def generate_field(self, field_config: FieldConfig, seed_value: Any = None, path: str = "") -> Any:
        """
        Generate the value of a leaf or simple-array field

        Args:
            field_config: Leaf configuration of the field
            seed_value: Seed value found at the field path, None when absent
            path: Dotted path of the field, used for diagnostics

        Returns:
            Generated value; arrays are always lists
        """
        field_type = canonical_type(field_config.type)

        if field_type is None:
            self._record(UNKNOWN_TYPE, path, f"unknown field type '{field_config.type}', using empty string")
            return ""

        if field_type == "array":
            return self._generate_array(field_config, seed_value, path)

        action = field_config.action
        if action is FieldAction.PRESERVE and seed_value is not None:
            return copy.deepcopy(seed_value)

        if action is FieldAction.ANONYMIZE and self._matches_type(field_type, seed_value):
            return self._anonymize(field_type, seed_value)

        return self.random_value(field_type)

    def random_value(self, field_type: str) -> Any:
        """Fresh value for a canonical scalar type"""
        strategy = self.random_strategies.get(field_type)
        if strategy is None:
            return ""
        return strategy()

    def _generate_array(self, field_config: FieldConfig, seed_value: Any, path: str) -> list:
        item_action = field_config.item_action or FieldAction.RANDOMIZE
        seed_items = list(seed_value) if isinstance(seed_value, (list, tuple)) else None

        if item_action is FieldAction.PRESERVE and seed_items is not None:
            return copy.deepcopy(seed_items)

        count = field_config.array_count
        if count is None:
            count = self.default_array_count

        item_config = FieldConfig(type=field_config.item_type or "string", action=item_action)
        item_path = join_path(path, "*")
        items = []
        for i in range(count):
            item_seed = seed_items[i % len(seed_items)] if seed_items else None
            items.append(self.generate_field(item_config, item_seed, item_path))
        return items

    @staticmethod
    def _matches_type(field_type: str, value: Any) -> bool:
        if value is None:
            return False
        if field_type in ("string", "numeric", "kebab", "dotted", "guid"):
            return isinstance(value, str)
        if field_type == "bool":
            return isinstance(value, bool)
        if field_type in ("int", "long"):
            return isinstance(value, numbers.Integral) and not isinstance(value, bool)
        if field_type == "double":
            return isinstance(value, numbers.Real) and not isinstance(value, bool)
        if field_type == "datetime":
            return isinstance(value, (str, datetime, date))
        return False

    def _anonymize(self, field_type: str, value: Any) -> Any:
        if field_type == "guid":
            return self.values.guid()
        if field_type == "bool":
            return self.values.boolean()

        if self.masking_engine is None:
            return self.random_value(field_type)

        if field_type in ("string", "numeric", "kebab", "dotted"):
            return self.masking_engine.scramble_string(value)
        if field_type in ("int", "long"):
            value = int(value)
            spread = INT_SPREAD if INT32_MIN <= value <= INT32_MAX and field_type == "int" else LONG_SPREAD
            return int(self.masking_engine.offset_number(value, spread))
        if field_type == "double":
            value = float(value)
            return float(self.masking_engine.offset_number(value, abs(value) * DOUBLE_SPREAD_RATIO))
        if field_type == "datetime":
            return self.masking_engine.jitter_datetime(value)
        return self.random_value(field_type)

    def _record(self, event_type: str, path: str, message: str):
        if self.diagnostics is not None:
            self.diagnostics.record(event_type, path, message)
        else:
            self.logger.warning(f"{event_type} at '{path}': {message}")
