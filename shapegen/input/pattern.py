"""
Pattern model: the inferred shape and format of a sample value.

A pattern tree mirrors the sample it was inferred from. Leaves describe the
format of one scalar, OBJECT nodes carry their properties in sample order and
ARRAY nodes carry the patterns of the first few items.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple
from enum import Enum


class PatternKind(Enum):
    """Format tag of a pattern node."""
    NULL = "null"
    DATETIME = "datetime"
    GUID = "guid"
    STRING_TEXT = "string_text"
    STRING_NUMERIC = "string_numeric"
    STRING_KEBAB = "string_kebab"
    STRING_DOTTED = "string_dotted"
    INT = "int"
    LONG = "long"
    DOUBLE = "double"
    BOOL = "bool"
    COMPLEX = "complex"
    OBJECT = "object"
    ARRAY = "array"


CONTAINER_KINDS = (PatternKind.OBJECT, PatternKind.ARRAY)

# Length of the text leaf used when a node cannot be described
FALLBACK_TEXT_LENGTH = 10


@dataclass
class Pattern:
    """
    One node of a pattern tree.

    Only the attributes relevant to ``kind`` are populated: ``length`` for
    STRING_TEXT, ``value_range`` for INT/LONG, ``properties`` and
    ``object_kind`` for OBJECT, ``item_count``/``sample_size``/``item_patterns``
    for ARRAY.
    """
    kind: PatternKind
    length: Optional[int] = None
    value_range: Optional[Tuple[int, int]] = None
    object_kind: Optional[str] = None
    properties: Dict[str, "Pattern"] = field(default_factory=dict)
    item_count: int = 0
    sample_size: int = 0
    item_patterns: List["Pattern"] = field(default_factory=list)
    preserve_field: bool = False
    original_value: Any = None

    @property
    def is_container(self) -> bool:
        return self.kind in CONTAINER_KINDS

    @classmethod
    def leaf(cls, kind: PatternKind, **kwargs) -> "Pattern":
        return cls(kind=kind, **kwargs)

    @classmethod
    def text(cls, length: int = FALLBACK_TEXT_LENGTH) -> "Pattern":
        return cls(kind=PatternKind.STRING_TEXT, length=length)

    @classmethod
    def obj(cls, properties: Dict[str, "Pattern"], object_kind: str = "mapping") -> "Pattern":
        return cls(kind=PatternKind.OBJECT, properties=properties, object_kind=object_kind)

    @classmethod
    def array(cls, item_count: int, item_patterns: List["Pattern"]) -> "Pattern":
        return cls(
            kind=PatternKind.ARRAY,
            item_count=item_count,
            sample_size=len(item_patterns),
            item_patterns=item_patterns,
        )

    def mark_preserved(self, original_value: Any) -> "Pattern":
        self.preserve_field = True
        self.original_value = original_value
        return self
