"""
Core data models for edge-snapshot

These models describe the rows read from the edge node's metadata store, the
identity encoded in their keys, selector clauses and the options of a single
query. They are built fresh for every invocation and never written back.
"""

from __future__ import annotations

import json
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .exceptions import DecodeError, UnrecognizedResourceType

RESOURCE_SEP = "/"
DEFAULT_NAMESPACE = "default"
DEFAULT_STORE_PATH = "/var/lib/kubeedge/edgecore.db"


class ResourceKind(str, Enum):
    """Resource types stored in the edge node database

    The value is the literal ``type`` column of a metadata row.
    """

    POD = "pod"
    NODE = "node"
    SERVICE = "service"
    SECRET = "secret"
    CONFIGMAP = "configmap"
    ENDPOINTS = "endpoints"

    @property
    def status_type(self) -> Optional[str]:
        """Type segment of the companion status record, if the kind has one"""
        return _STATUS_TYPES.get(self)


_STATUS_TYPES = {
    ResourceKind.POD: "podstatus",
    ResourceKind.NODE: "nodestatus",
}

RESOURCE_TYPE_ALL = "all"

# Query order of the 'all' pseudo-type; callers rely on this grouping
ALL_QUERY_ORDER: Tuple[ResourceKind, ...] = (
    ResourceKind.POD,
    ResourceKind.NODE,
    ResourceKind.CONFIGMAP,
    ResourceKind.SECRET,
    ResourceKind.ENDPOINTS,
    ResourceKind.SERVICE,
)

# Order in which kinds are printed, in both table and structured output
RENDER_ORDER: Tuple[ResourceKind, ...] = (
    ResourceKind.POD,
    ResourceKind.SERVICE,
    ResourceKind.SECRET,
    ResourceKind.CONFIGMAP,
    ResourceKind.ENDPOINTS,
    ResourceKind.NODE,
)

RESOURCE_ALIASES: Dict[str, Tuple[ResourceKind, ...]] = {
    RESOURCE_TYPE_ALL: ALL_QUERY_ORDER,
    "po": (ResourceKind.POD,),
    "pod": (ResourceKind.POD,),
    "pods": (ResourceKind.POD,),
    "no": (ResourceKind.NODE,),
    "node": (ResourceKind.NODE,),
    "nodes": (ResourceKind.NODE,),
    "svc": (ResourceKind.SERVICE,),
    "service": (ResourceKind.SERVICE,),
    "services": (ResourceKind.SERVICE,),
    "secret": (ResourceKind.SECRET,),
    "secrets": (ResourceKind.SECRET,),
    "cm": (ResourceKind.CONFIGMAP,),
    "configmap": (ResourceKind.CONFIGMAP,),
    "configmaps": (ResourceKind.CONFIGMAP,),
    "ep": (ResourceKind.ENDPOINTS,),
    "endpoint": (ResourceKind.ENDPOINTS,),
    "endpoints": (ResourceKind.ENDPOINTS,),
}


def is_available_resource(resource_type: str) -> bool:
    """Check whether a resource type alias is known"""
    return resource_type in RESOURCE_ALIASES


def resolve_resource_type(resource_type: str) -> Tuple[ResourceKind, ...]:
    """Expand a resource type alias into the kinds to query, in query order

    Raises:
        UnrecognizedResourceType: If the alias is not in the table
    """
    try:
        return RESOURCE_ALIASES[resource_type]
    except KeyError:
        raise UnrecognizedResourceType(resource_type) from None


class OutputFormat(str, Enum):
    """Accepted values of --output"""

    TABLE = ""
    WIDE = "wide"
    JSON = "json"
    YAML = "yaml"

    @property
    def is_tabular(self) -> bool:
        return self in (OutputFormat.TABLE, OutputFormat.WIDE)


class MetaRecord(BaseModel):
    """One row of the edge node metadata store"""

    model_config = ConfigDict(frozen=True)

    type: str
    key: str
    value: str = Field(..., description="Serialized resource document")

    @property
    def resource_key(self) -> ResourceKey:
        return ResourceKey.parse(self.key)

    def document(self) -> Dict[str, Any]:
        """Decode the stored document

        Raises:
            DecodeError: If the value is not a JSON object
        """
        try:
            data = json.loads(self.value)
        except (TypeError, ValueError) as e:
            raise DecodeError(self.key, str(e)) from e
        if not isinstance(data, dict):
            raise DecodeError(self.key, f"expected a JSON object, got {type(data).__name__}")
        return data

    def with_document(self, data: Dict[str, Any]) -> MetaRecord:
        """Copy of this record carrying a re-serialized document"""
        return self.model_copy(update={"value": json.dumps(data, separators=(",", ":"))})


class ResourceKey(BaseModel):
    """Identity encoded in a record key as namespace/resourceType/name"""

    model_config = ConfigDict(frozen=True)

    namespace: str = ""
    resource_type: str = ""
    name: str = ""

    @classmethod
    def parse(cls, key: str) -> ResourceKey:
        """Split a record key into its segments

        Missing trailing segments are left empty; everything after the second
        separator belongs to the name.
        """
        parts = key.split(RESOURCE_SEP, 2)
        parts.extend([""] * (3 - len(parts)))
        return cls(namespace=parts[0], resource_type=parts[1], name=parts[2])

    def __str__(self) -> str:
        return RESOURCE_SEP.join((self.namespace, self.resource_type, self.name))


def status_key_for(key: str, kind: ResourceKind) -> Optional[str]:
    """Derive the key of the status record that belongs to a base record key

    Only the first occurrence of the type segment is swapped, so names that
    happen to contain the segment are left alone.
    """
    status_type = kind.status_type
    if status_type is None:
        return None
    segment = f"{RESOURCE_SEP}{kind.value}{RESOURCE_SEP}"
    return key.replace(segment, f"{RESOURCE_SEP}{status_type}{RESOURCE_SEP}", 1)


class SelectorClause(BaseModel):
    """A single label requirement

    ``exists`` is True for equality (``=``/``==``) and False for inequality (``!=``).
    """

    model_config = ConfigDict(frozen=True)

    key: str
    value: str
    exists: bool = True

    def matches(self, labels: Dict[str, Any]) -> bool:
        """Evaluate the clause against a label map

        A missing label never equals a concrete value, so it fails an equality
        clause and satisfies an inequality clause.
        """
        equal = self.key in labels and labels[self.key] == self.value
        return equal if self.exists else not equal


class GetOptions(BaseModel):
    """Options of one ``get`` invocation"""

    resource_type: str
    names: List[str] = Field(default_factory=list)
    namespace: str = DEFAULT_NAMESPACE
    output_format: str = ""
    selector: str = ""
    store_path: str = DEFAULT_STORE_PATH
    all_namespaces: bool = False

    @property
    def format(self) -> OutputFormat:
        return OutputFormat(self.output_format.lower())


class ResourceGroups(BaseModel):
    """Reconstructed resources grouped by kind

    Items keep the order in which they were added, which is the store scan order.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    groups: Dict[ResourceKind, List[Any]] = Field(default_factory=dict)

    def add(self, kind: ResourceKind, item: Any) -> None:
        self.groups.setdefault(kind, []).append(item)

    def of(self, kind: ResourceKind) -> List[Any]:
        return self.groups.get(kind, [])

    @property
    def total(self) -> int:
        return sum(len(items) for items in self.groups.values())

    def is_empty(self) -> bool:
        return self.total == 0

    def in_render_order(self) -> Iterator[Tuple[ResourceKind, List[Any]]]:
        """Yield non-empty groups in the fixed render order"""
        for kind in RENDER_ORDER:
            items = self.of(kind)
            if items:
                yield kind, items
