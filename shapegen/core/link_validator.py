import logging
from dataclasses import dataclass
from typing import Dict, Mapping, Optional

from shapegen.input.configuration import FieldConfig, parse_configuration
from shapegen.utils.exceptions import (
    ArrayScopeError,
    CircularLinkError,
    CrossScopeLinkError,
    DownwardLinkError,
    MissingLinkTargetError,
)
from shapegen.utils.path_resolver import join_path, parent_path


@dataclass(frozen=True)
class FieldRecord:
    """One configuration node as seen by the link validator"""
    path: str
    depth: int
    parent_path: str
    array_path: Optional[str]
    is_link: bool = False
    link_to: Optional[str] = None

    def is_ancestor_of(self, other: "FieldRecord") -> bool:
        return other.path.startswith(self.path + ".")


class LinkValidator:
    """
    Static validation of Link fields in a configuration tree.

    Rejects links whose target is missing, chained or circular, below the
    linking field, in an unrelated scope, or across an array item boundary.
    Validation is all-or-nothing: the first violation is raised.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)

    def validate(self, configuration: Mapping) -> None:
        """Raise a ConfigurationError subclass on the first illegal link"""
        fields = self.collect_fields(configuration)

        link_count = 0
        for record in fields.values():
            if not record.is_link:
                continue
            if not record.link_to:
                self.logger.debug(f"Link field '{record.path}' has no LinkTo, it will be randomized")
                continue
            self._check_link(record, fields)
            link_count += 1

        self.logger.info(f"Validated {link_count} links across {len(fields)} configuration nodes")

    def collect_fields(self, configuration: Mapping) -> Dict[str, FieldRecord]:
        """Walk the configuration once and record every node by path"""
        tree = parse_configuration(configuration)
        fields: Dict[str, FieldRecord] = {}
        self._collect(tree, "", 0, None, fields)
        return fields

    def _collect(self, tree: Mapping, prefix: str, depth: int, array_path: Optional[str],
                 fields: Dict[str, FieldRecord]):
        for name, node in tree.items():
            path = join_path(prefix, name)

            if isinstance(node, FieldConfig):
                fields[path] = FieldRecord(
                    path=path,
                    depth=depth + 1,
                    parent_path=prefix,
                    array_path=array_path,
                    is_link=node.is_link,
                    link_to=node.link_to,
                )
                if node.has_item_structure:
                    self._collect(node.item_structure, path, depth + 1, path, fields)
            else:
                fields[path] = FieldRecord(
                    path=path, depth=depth + 1, parent_path=prefix, array_path=array_path
                )
                self._collect(node, path, depth + 1, array_path, fields)

    def resolve_target(self, record: FieldRecord, fields: Mapping[str, FieldRecord]) -> str:
        """Absolute path a Link field points at"""
        link_to = record.link_to
        nested = join_path(record.parent_path, link_to)

        if record.array_path:
            if link_to.startswith(record.array_path + "."):
                return link_to
            if nested in fields:
                return nested
            item_relative = join_path(record.array_path, link_to)
            # Same-named fields outside the item still resolve, so the scope check can reject them
            if item_relative not in fields and link_to in fields:
                return link_to
            return item_relative

        if record.parent_path and nested in fields:
            return nested
        return link_to

    @staticmethod
    def _inner_link(target: FieldRecord, record: FieldRecord,
                    fields: Mapping[str, FieldRecord]) -> Optional[str]:
        """First Link field below a container target, other than the linking field"""
        for other in fields.values():
            if other.is_link and other.path != record.path and target.is_ancestor_of(other):
                return other.path
        return None

    def _check_link(self, record: FieldRecord, fields: Mapping[str, FieldRecord]):
        source = record.path
        target_path = self.resolve_target(record, fields)

        target = fields.get(target_path)
        if target is None:
            raise MissingLinkTargetError(
                f"Link target '{record.link_to}' of field '{source}' does not exist "
                f"(resolved to '{target_path}')",
                source_path=source, target_path=target_path,
            )

        if record.array_path and target.array_path != record.array_path:
            raise ArrayScopeError(
                f"Field '{source}' inside array '{record.array_path}' can only link to fields "
                f"of the same item structure, not '{target_path}'",
                source_path=source, target_path=target_path,
            )

        if target.is_link:
            raise CircularLinkError(
                f"Circular or chained link: '{source}' links to '{target_path}', "
                f"which is itself a link field",
                source_path=source, target_path=target_path,
            )

        inner_link = self._inner_link(target, record, fields)
        if inner_link is not None:
            raise CircularLinkError(
                f"Circular or chained link: '{source}' links to '{target_path}', "
                f"which contains the link field '{inner_link}'",
                source_path=source, target_path=target_path,
            )

        if record.array_path:
            return

        if record.is_ancestor_of(target):
            raise DownwardLinkError(
                f"Field '{source}' cannot link downward to its descendant '{target_path}'",
                source_path=source, target_path=target_path,
            )

        if target.array_path is not None:
            raise ArrayScopeError(
                f"Field '{source}' cannot link to '{target_path}' inside array item "
                f"structure '{target.array_path}'",
                source_path=source, target_path=target_path,
            )

        if target.is_ancestor_of(record):
            return

        if target.depth == record.depth:
            if target.parent_path != record.parent_path:
                raise CrossScopeLinkError(
                    f"Field '{source}' cannot link to '{target_path}': fields at the same depth "
                    f"must share a parent ('{record.parent_path or '<root>'}' vs "
                    f"'{target.parent_path or '<root>'}')",
                    source_path=source, target_path=target_path,
                )
        elif target.depth < record.depth:
            raise CrossScopeLinkError(
                f"Field '{source}' cannot link to '{target_path}': shallower targets must be "
                f"ancestors of the linking field",
                source_path=source, target_path=target_path,
            )
