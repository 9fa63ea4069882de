"""
Output rendering

The tabular path rebuilds records with the minimal projection and prints
tables; the structured path rebuilds them with the complete projection and
prints JSON or YAML. Kinds are always printed in the same fixed order.
"""

from datetime import datetime
from typing import Optional, Sequence, TextIO

import structlog

from ..models import MetaRecord, OutputFormat
from ..parsers.base import CompleteParser, MinimalParser
from .structured import StructuredRenderer
from .terminal import TableRenderer

logger = structlog.get_logger(__name__)


def no_resources_message(namespace: str) -> str:
    return f"No resources found in {namespace} namespace."


def render(
    records: Sequence[MetaRecord],
    output_format: OutputFormat,
    out: TextIO,
    namespace: str = "default",
    all_namespaces: bool = False,
    width: Optional[int] = None,
    now: Optional[datetime] = None,
) -> None:
    """Render the query result to out

    Raises:
        UnrecognizedResourceType: If a record has a type that cannot be rebuilt
        DecodeError: If a record cannot be reconstructed
    """
    if not records:
        out.write(no_resources_message(namespace) + "\n")
        return

    if output_format.is_tabular:
        groups = MinimalParser().reconstruct(records)
        TableRenderer(out, with_namespace=all_namespaces, width=width, now=now).render(groups)
    else:
        groups = CompleteParser().reconstruct(records)
        StructuredRenderer(out, output_format).render(groups)

    logger.debug("Rendered resources", format=output_format.value or "table", count=groups.total)


__all__ = ["render", "no_resources_message", "TableRenderer", "StructuredRenderer"]
