"""
Record retrieval from the metadata store

Collectors scan the store for one resource kind, keep the records that belong
to the requested namespace and names, and for pods and nodes fold the
separately stored status record into the base document. Any store or decode
failure aborts the whole query; partial results are never returned.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Sequence, Type

import structlog

from ..models import MetaRecord, ResourceKind, resolve_resource_type, status_key_for
from ..store.base import MetaStore

logger = structlog.get_logger(__name__)


def matches_names(names: Sequence[str], key: str) -> bool:
    """True if any requested name is a substring of the record key

    An empty name list matches every key.
    """
    if not names:
        return True
    return any(name in key for name in names)


def merge_status(record: MetaRecord, status_record: MetaRecord) -> MetaRecord:
    """Return a copy of record whose ``status`` comes from status_record

    Every other field of the base document is kept as stored. The edge agent
    writes the status request struct with an exported ``Status`` field, so
    both spellings are accepted.
    """
    document = record.document()
    status_document = status_record.document()
    document["status"] = status_document.get("status", status_document.get("Status"))
    return record.with_document(document)


class Collector(ABC):
    """Abstract base class for record collectors

    A collector reads one resource kind from an open store. It never writes
    to the store.
    """

    kind: ResourceKind

    def __init__(self, store: MetaStore, namespace: str, all_namespaces: bool = False):
        self.store = store
        self.namespace = namespace
        self.all_namespaces = all_namespaces

    def in_scope(self, record: MetaRecord) -> bool:
        """Namespace check against the namespace segment of the key"""
        if self.all_namespaces:
            return True
        return record.resource_key.namespace == self.namespace

    def select(self, names: Sequence[str]) -> List[MetaRecord]:
        """Scan the store and keep in-scope records matching names"""
        records = [
            record
            for record in self.store.scan(self.kind.value)
            if self.in_scope(record) and matches_names(names, record.key)
        ]
        logger.debug(
            "Selected records",
            kind=self.kind.value,
            namespace=None if self.all_namespaces else self.namespace,
            names=list(names),
            count=len(records),
        )
        return records

    @abstractmethod
    def collect(self, names: Sequence[str]) -> List[MetaRecord]:
        """Return the records of this collector's kind in store scan order

        Raises:
            StoreError: When the store cannot be read
            DecodeError: When a document needed for the result is malformed
        """
        pass


class ResourceCollector(Collector):
    """Collector for kinds stored as a single record"""

    def collect(self, names: Sequence[str]) -> List[MetaRecord]:
        return self.select(names)


class StatusMergingCollector(Collector):
    """Collector for kinds whose status lives in a companion record"""

    def collect(self, names: Sequence[str]) -> List[MetaRecord]:
        results = []
        for record in self.select(names):
            status_key = status_key_for(record.key, self.kind)
            status_record = self.store.lookup(status_key) if status_key else None
            if status_record is None:
                results.append(record)
                continue
            logger.debug("Merging status record", key=record.key, status_key=status_key)
            results.append(merge_status(record, status_record))
        return results


class PodCollector(StatusMergingCollector):
    kind = ResourceKind.POD


class NodeCollector(StatusMergingCollector):
    kind = ResourceKind.NODE


class ServiceCollector(ResourceCollector):
    kind = ResourceKind.SERVICE


class SecretCollector(ResourceCollector):
    kind = ResourceKind.SECRET


class ConfigMapCollector(ResourceCollector):
    kind = ResourceKind.CONFIGMAP


class EndpointsCollector(ResourceCollector):
    kind = ResourceKind.ENDPOINTS


class CollectorRegistry:
    """Registry mapping resource kinds to collector classes"""

    def __init__(self):
        self._collectors: Dict[ResourceKind, Type[Collector]] = {}
        self._register_defaults()

    def _register_defaults(self):
        """Register default collectors"""
        self._collectors.update({
            ResourceKind.POD: PodCollector,
            ResourceKind.NODE: NodeCollector,
            ResourceKind.SERVICE: ServiceCollector,
            ResourceKind.SECRET: SecretCollector,
            ResourceKind.CONFIGMAP: ConfigMapCollector,
            ResourceKind.ENDPOINTS: EndpointsCollector,
        })

    def create(self, kind: ResourceKind, store: MetaStore, namespace: str,
               all_namespaces: bool = False) -> Collector:
        """Create a collector instance for a kind"""
        return self._collectors[kind](store, namespace, all_namespaces)


# Global registry instance
registry = CollectorRegistry()


def query_resources(
    store: MetaStore,
    resource_type: str,
    names: Sequence[str] = (),
    namespace: str = "default",
    all_namespaces: bool = False,
) -> List[MetaRecord]:
    """Fetch the records for a resource type alias

    The 'all' pseudo-type is expanded in its fixed order and the per-kind
    results are concatenated.

    Raises:
        UnrecognizedResourceType: If resource_type is not a known alias
        StoreError: When the store cannot be read
        DecodeError: When a base or status document is malformed
    """
    kinds = resolve_resource_type(resource_type)

    results: List[MetaRecord] = []
    for kind in kinds:
        collector = registry.create(kind, store, namespace, all_namespaces)
        results.extend(collector.collect(names))

    logger.debug("Queried resources", type=resource_type, count=len(results))
    return results
