"""
Metadata store interface

A store exposes the two read operations the query engine needs: scanning all
records of one type in store order, and looking up a single record by key.
Stores are opened once per invocation and used as context managers so their
handles are released on every exit path.
"""

from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Optional

import structlog

from ..models import MetaRecord

logger = structlog.get_logger(__name__)


class MetaStore(ABC):
    """Abstract read-only view of the edge node metadata store"""

    name: str = "base"

    @abstractmethod
    def scan(self, resource_type: str) -> List[MetaRecord]:
        """Return every record whose type column equals resource_type

        Raises:
            StoreError: When the underlying query fails
        """
        pass

    @abstractmethod
    def lookup(self, key: str) -> Optional[MetaRecord]:
        """Return the record stored under key, or None

        Raises:
            StoreError: When the underlying query fails
        """
        pass

    def close(self) -> None:
        """Release the store handle"""
        pass

    def __enter__(self) -> "MetaStore":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


class InMemoryMetaStore(MetaStore):
    """Store backed by a list of records, preserving insertion order"""

    name = "memory"

    def __init__(self, records: Optional[Iterable[MetaRecord]] = None):
        self._records: Dict[str, MetaRecord] = {}
        for record in records or []:
            self.put(record)

    def put(self, record: MetaRecord) -> None:
        self._records[record.key] = record

    def scan(self, resource_type: str) -> List[MetaRecord]:
        records = [r for r in self._records.values() if r.type == resource_type]
        logger.debug("Scanned memory store", type=resource_type, count=len(records))
        return records

    def lookup(self, key: str) -> Optional[MetaRecord]:
        return self._records.get(key)
