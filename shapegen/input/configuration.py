"""
Configuration model: explicit per-field generation schema
Nested maps of FieldConfig leaves, validated with Pydantic
"""
import logging
from collections.abc import Mapping
from enum import Enum
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from shapegen.utils.exceptions import ConfigurationError
from shapegen.utils.path_resolver import join_path, split_path

logger = logging.getLogger(__name__)

# Keys that turn a mapping into a FieldConfig leaf
LEAF_MARKERS = ("Type", "type", "Action", "action")

ARRAY_TYPES = ("array", "list")


class FieldAction(str, Enum):
    PRESERVE = "Preserve"
    ANONYMIZE = "Anonymize"
    RANDOMIZE = "Randomize"
    LINK = "Link"


def _normalize_action(v):
    if isinstance(v, str) and not isinstance(v, FieldAction):
        for action in FieldAction:
            if action.value.lower() == v.strip().lower():
                return action
    return v


class FieldConfig(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    type: str = Field("string", alias="Type")
    action: FieldAction = Field(FieldAction.RANDOMIZE, alias="Action")
    link_to: Optional[str] = Field(None, alias="LinkTo")
    array_count: Optional[int] = Field(None, alias="ArrayCount", ge=0)
    item_type: Optional[str] = Field(None, alias="ItemType")
    item_action: Optional[FieldAction] = Field(None, alias="ItemAction")
    item_structure: Optional[Dict[str, Any]] = Field(None, alias="ItemStructure")

    @field_validator('type', mode='before')
    @classmethod
    def validate_type(cls, v):
        if v is None:
            return "string"
        return str(v).strip().lower()

    @field_validator('action', 'item_action', mode='before')
    @classmethod
    def validate_action(cls, v):
        return _normalize_action(v)

    @field_validator('link_to', mode='before')
    @classmethod
    def validate_link_to(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator('item_structure', mode='after')
    @classmethod
    def validate_item_structure(cls, v):
        if v is None:
            return None
        return parse_configuration(v)

    @property
    def is_link(self) -> bool:
        return self.action is FieldAction.LINK

    @property
    def is_array(self) -> bool:
        return self.type in ARRAY_TYPES

    @property
    def has_item_structure(self) -> bool:
        return self.is_array and self.item_structure is not None


ConfigurationNode = Union[FieldConfig, Dict[str, Any]]


def is_field_config(node: Any) -> bool:
    return isinstance(node, FieldConfig)


def _looks_like_leaf(node: Mapping) -> bool:
    # A child field that happens to be called "type" is a mapping, not a marker
    return any(
        marker in node and not isinstance(node[marker], Mapping)
        for marker in LEAF_MARKERS
    )


def parse_configuration(raw: Mapping, path: str = "") -> Dict[str, ConfigurationNode]:
    """
    Turn a raw configuration mapping into a tree of FieldConfig leaves.

    A mapping carrying Type or Action is a leaf; any other mapping is a
    container of named children. Already parsed nodes are kept as they are.
    """
    if not isinstance(raw, Mapping):
        raise ConfigurationError(
            f"Configuration node at '{path or '<root>'}' must be a mapping, got {type(raw).__name__}",
            source_path=path or None,
        )

    tree: Dict[str, ConfigurationNode] = {}
    for name, node in raw.items():
        name = str(name)
        node_path = join_path(path, name)

        if isinstance(node, FieldConfig):
            tree[name] = node
        elif isinstance(node, Mapping) and _looks_like_leaf(node):
            tree[name] = _parse_field(node, node_path)
        elif isinstance(node, Mapping):
            tree[name] = parse_configuration(node, node_path)
        else:
            raise ConfigurationError(
                f"Configuration node at '{node_path}' must be a mapping, got {type(node).__name__}",
                source_path=node_path,
            )
    return tree


def _parse_field(node: Mapping, path: str) -> FieldConfig:
    try:
        return FieldConfig.model_validate(dict(node))
    except ConfigurationError as e:
        # Nested item structure errors carry paths relative to the array
        raise ConfigurationError(f"Invalid item structure of '{path}': {e}", source_path=path) from e
    except ValidationError as e:
        logger.error(f"Invalid field configuration at '{path}': {e}")
        raise ConfigurationError(f"Invalid field configuration at '{path}': {e}", source_path=path) from e


def get_config_node(configuration: Mapping, path: str) -> Optional[ConfigurationNode]:
    """Look up a node of a configuration tree by dotted path"""
    node: Any = configuration
    for segment in split_path(path):
        if isinstance(node, FieldConfig):
            if not node.has_item_structure:
                return None
            node = node.item_structure
        if not isinstance(node, Mapping) or segment not in node:
            return None
        node = node[segment]
    return node
