"""
Three-pass construction of one result tree from a configuration.

Pass 1 lays out the skeleton, pass 2 fills every non-linked field from its
seed value, pass 3 copies linked fields from their (now concrete) targets.
Link chains (including containers holding other links) are rejected by the
validator, so pass 3 needs no ordering.
"""
import copy
import logging
from typing import Any, Dict, List, Mapping, Optional

from shapegen.core.field_generator import FieldGenerator
from shapegen.input.configuration import FieldAction, FieldConfig, get_config_node, parse_configuration
from shapegen.output.diagnostics import MISSING_LINK_TARGET, UNRESOLVED_LINK, GenerationDiagnostics
from shapegen.utils.path_resolver import join_path, resolve_linked_path, resolve_seed_path


def _relative_to(path: str, scope_path: str) -> str:
    """Path of a node relative to an enclosing scope, '' for the scope itself"""
    if not scope_path:
        return path
    if path == scope_path:
        return ""
    if path.startswith(scope_path + "."):
        return path[len(scope_path) + 1:]
    return path


def _candidate_paths(link_to: str, parent: str, scope_path: str, in_item: bool) -> List[str]:
    """Lookup order of a link target inside a scope"""
    candidates = []
    stripped = None
    if scope_path and link_to.startswith(scope_path + "."):
        stripped = link_to[len(scope_path) + 1:]

    relative_parent = _relative_to(parent, scope_path)
    nested = join_path(relative_parent, link_to) if relative_parent else None

    if in_item:
        ordered = [stripped, nested, link_to]
    else:
        ordered = [nested, stripped, link_to]

    for candidate in ordered:
        if candidate and candidate not in candidates:
            candidates.append(candidate)
    return candidates


class ConfigurationBuilder:
    """Build result trees from a validated configuration"""

    def __init__(self, field_generator: FieldGenerator,
                 diagnostics: Optional[GenerationDiagnostics] = None,
                 logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)
        self.field_generator = field_generator
        self.diagnostics = diagnostics

    def build(self, configuration: Mapping, seed: Any = None) -> Dict[str, Any]:
        """Run the three passes and return the finished result"""
        tree = parse_configuration(configuration)

        result = self._build_skeleton(tree)
        self._populate_fields(tree, result, seed)
        self._populate_links(tree, result, context=result, context_path="", outer=result)
        return result

    # Pass 1

    def build_skeleton(self, configuration: Mapping) -> Dict[str, Any]:
        """Output shape with every leaf unset"""
        return self._build_skeleton(parse_configuration(configuration))

    def _build_skeleton(self, tree: Mapping) -> Dict[str, Any]:
        skeleton = {}
        for name, node in tree.items():
            if isinstance(node, FieldConfig):
                if node.has_item_structure:
                    skeleton[name] = [
                        self._build_skeleton(node.item_structure) for _ in range(self._array_count(node))
                    ]
                else:
                    skeleton[name] = None
            else:
                skeleton[name] = self._build_skeleton(node)
        return skeleton

    # Pass 2

    def _populate_fields(self, tree: Mapping, result: Dict[str, Any], seed: Any, path: str = ""):
        """Fill every non-linked field, walking the seed alongside the configuration"""
        for name, node in tree.items():
            node_path = join_path(path, name)
            seed_value = resolve_seed_path(seed, name)

            if isinstance(node, FieldConfig):
                if node.is_link:
                    continue
                if node.has_item_structure:
                    self._populate_items(node, result[name], seed_value, node_path)
                else:
                    value = self.field_generator.generate_field(node, seed_value, node_path)
                    if node.is_array and isinstance(value, (tuple, set)):
                        value = list(value)
                    result[name] = value
            else:
                self._populate_fields(node, result[name], seed_value, node_path)

    def _populate_items(self, node: FieldConfig, items: List[Dict[str, Any]], seed_value: Any, path: str):
        seed_items = seed_value if isinstance(seed_value, list) and seed_value else None

        for i, item in enumerate(items):
            item_seed = seed_items[i % len(seed_items)] if seed_items else None
            self._populate_fields(node.item_structure, item, item_seed, path)

    # Pass 3

    def _populate_links(self, tree: Mapping, result: Dict[str, Any], context: Dict[str, Any],
                       context_path: str, outer: Dict[str, Any], outer_path: str = "",
                       path: str = "", in_item: bool = False):
        """
        Copy linked fields from their targets.

        ``context`` is the scope links are resolved against; ``outer`` is the
        enclosing array item (or the root) used when the context misses.
        """
        for name, node in tree.items():
            node_path = join_path(path, name)

            if isinstance(node, FieldConfig):
                if node.is_link:
                    result[name] = self._resolve_link(
                        node, node_path, path, (context, context_path), (outer, outer_path), in_item
                    )
                elif node.has_item_structure:
                    for item in result[name]:
                        self._populate_links(
                            node.item_structure, item, context=item, context_path=node_path,
                            outer=item, outer_path=node_path, path=node_path, in_item=True,
                        )
            elif self._is_local_scope(node, node_path):
                self._populate_links(node, result[name], result[name], node_path,
                                    outer, outer_path, node_path, in_item)
            else:
                self._populate_links(node, result[name], context, context_path,
                                    outer, outer_path, node_path, in_item)

    def _is_local_scope(self, scope: Mapping, scope_path: str) -> bool:
        """Whether any link inside the scope targets a field declared in that scope"""
        return any(
            any(get_config_node(scope, candidate) is not None
                for candidate in _candidate_paths(link_to, parent, scope_path, in_item=False))
            for link_to, parent in self._scope_links(scope, scope_path)
        )

    def _scope_links(self, scope: Mapping, path: str):
        for name, node in scope.items():
            node_path = join_path(path, name)
            if isinstance(node, FieldConfig):
                if node.is_link and node.link_to:
                    yield node.link_to, path
            else:
                yield from self._scope_links(node, node_path)

    def _resolve_link(self, node: FieldConfig, path: str, parent: str, context, outer, in_item: bool) -> Any:
        if not node.link_to:
            self._record(MISSING_LINK_TARGET, path, "link field without LinkTo, randomizing")
            fallback = node.model_copy(update={'action': FieldAction.RANDOMIZE})
            return self.field_generator.generate_field(fallback, None, path)

        scopes = [context]
        if outer[0] is not context[0]:
            scopes.append(outer)

        for scope, scope_path in scopes:
            for candidate in _candidate_paths(node.link_to, parent, scope_path, in_item):
                value = resolve_linked_path(scope, candidate)
                if value is not None:
                    return copy.deepcopy(value)

        self._record(UNRESOLVED_LINK, path, f"link target '{node.link_to}' resolved to nothing")
        return None

    def _array_count(self, node: FieldConfig) -> int:
        if node.array_count is None:
            return self.field_generator.default_array_count
        return node.array_count

    def _record(self, event_type: str, path: str, message: str):
        if self.diagnostics is not None:
            self.diagnostics.record(event_type, path, message)
        else:
            self.logger.warning(f"{event_type} at '{path}': {message}")
