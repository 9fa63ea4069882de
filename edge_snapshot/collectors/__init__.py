"""Record retrieval from the edge node metadata store"""

from .base import merge_status, query_resources, registry

__all__ = ["query_resources", "merge_status", "registry"]
