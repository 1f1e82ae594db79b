"""
Definition kinds and the normalized Metadata record.

Metadata summarises a definition without loading its full content. Records
are immutable; code that needs to fill in a field builds a new record.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any

from .errors import UnknownDefinitionKindError


class DefinitionKind(str, Enum):
    """Kinds of definition a lookup can be restricted to."""

    RESOURCE = "Resource"
    TYPE = "Type"
    PROFILE = "Profile"
    EXTENSION = "Extension"
    VALUE_SET = "ValueSet"
    CODE_SYSTEM = "CodeSystem"
    INSTANCE = "Instance"
    LOGICAL = "Logical"

    @classmethod
    def parse(cls, name: str) -> DefinitionKind:
        """Parse a kind from its value (``ValueSet``) or member name (``value_set``)."""
        for kind in cls:
            if name == kind.value or name.upper() == kind.name:
                return kind
        raise UnknownDefinitionKindError(name)


# Kinds whose definitions are StructureDefinitions
STRUCTURE_KINDS = frozenset(
    {
        DefinitionKind.RESOURCE,
        DefinitionKind.TYPE,
        DefinitionKind.PROFILE,
        DefinitionKind.EXTENSION,
        DefinitionKind.LOGICAL,
    }
)

INLINE_USAGE = "Inline"


def classify_definition(definition: dict[str, Any]) -> DefinitionKind:
    """Determine the DefinitionKind of a raw JSON definition."""
    resource_type = definition.get("resourceType")
    if resource_type == "ValueSet":
        return DefinitionKind.VALUE_SET
    if resource_type == "CodeSystem":
        return DefinitionKind.CODE_SYSTEM
    if resource_type != "StructureDefinition":
        return DefinitionKind.INSTANCE

    if definition.get("derivation") == "constraint":
        if definition.get("type") == "Extension":
            return DefinitionKind.EXTENSION
        return DefinitionKind.PROFILE

    sd_kind = definition.get("kind")
    if sd_kind == "logical":
        return DefinitionKind.LOGICAL
    if sd_kind in ("primitive-type", "complex-type"):
        return DefinitionKind.TYPE
    return DefinitionKind.RESOURCE


def kind_allowed(kind: DefinitionKind, kinds: tuple[DefinitionKind, ...]) -> bool:
    """An empty filter allows every kind."""
    return not kinds or kind in kinds


def matches_identifier(identifier: str, *candidates: str | None) -> bool:
    """Check whether an identifier equals one of a definition's name/id/url."""
    return any(candidate is not None and candidate == identifier for candidate in candidates)


@dataclass(frozen=True)
class Metadata:
    """Normalized summary of a definition."""

    id: str | None = None
    name: str | None = None
    url: str | None = None
    parent: str | None = None
    sd_type: str | None = None  # Ultimate structural type, from the root of the parent chain
    resource_type: str | None = None  # Resource kind the definition instantiates
    instance_usage: str | None = None  # "Inline" instances are not addressable
    version: str | None = None
    abstract: bool | None = None

    @property
    def is_inline(self) -> bool:
        return self.instance_usage == INLINE_USAGE

    def with_changes(self, **changes: Any) -> Metadata:
        """Return a copy of this record with the given fields replaced."""
        return replace(self, **changes)

    @staticmethod
    def from_definition(definition: dict[str, Any]) -> Metadata:
        """Extract metadata from a raw JSON definition."""
        is_structure = definition.get("resourceType") == "StructureDefinition"
        instance_meta = definition.get("_instanceMeta") or {}
        return Metadata(
            id=definition.get("id"),
            name=definition.get("name", definition.get("id")),
            url=definition.get("url"),
            parent=definition.get("baseDefinition") if is_structure else None,
            sd_type=definition.get("type") if is_structure else None,
            resource_type=definition.get("resourceType"),
            instance_usage=instance_meta.get("usage"),
            version=definition.get("version"),
            abstract=definition.get("abstract") if is_structure else None,
        )
