"""
Typed projections of stored resources

``minimal`` holds only the fields needed to build table columns; ``complete``
keeps every field for exact JSON and YAML output. Both are filled from the
same decoded document by independent parsers.
"""

from . import complete, minimal

__all__ = ["complete", "minimal"]
