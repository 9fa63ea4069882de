"""
edge-snapshot: query and render the resource snapshot of an edge node

This package reads the local metadata database of an edge node, rebuilds the
resource objects stored there and prints them as tables, JSON or YAML.
"""

__version__ = "1.0.0"
__author__ = "edge-snapshot team"
__description__ = "Query and render resources from an edge node's local metadata store"
