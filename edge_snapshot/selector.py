"""
Label selector parsing and filtering

Supports the equality subset of the Kubernetes selector language:
``key=value``, ``key==value`` and ``key!=value`` terms joined by commas.
All terms must hold for a record to be kept.
"""

from typing import Any, Dict, List, Optional, Sequence

import structlog

from .exceptions import DecodeError, InvalidSelectorSyntax
from .models import MetaRecord, SelectorClause

logger = structlog.get_logger(__name__)

# Checked in this order; '==' and '!=' both contain '='
SELECTOR_OPERATORS = (
    ("==", True),
    ("!=", False),
    ("=", True),
)


def parse_selector(expr: str) -> List[SelectorClause]:
    """Parse a comma separated selector expression

    Terms without any operator are ignored.

    Args:
        expr: Selector expression, e.g. ``env=prod,tier!=cache``

    Returns:
        Clauses in expression order

    Raises:
        InvalidSelectorSyntax: If a term does not split into a non-empty key and value
    """
    clauses = []
    for term in expr.split(","):
        for operator, exists in SELECTOR_OPERATORS:
            if operator not in term:
                continue
            parts = term.split(operator)
            if len(parts) != 2:
                raise InvalidSelectorSyntax(term, f'may not have more than one "{operator}"')
            key, value = parts[0].strip(), parts[1].strip()
            if not key or not value:
                raise InvalidSelectorSyntax(term, "key and value must not be empty")
            clauses.append(SelectorClause(key=key, value=value, exists=exists))
            break
    return clauses


def record_labels(record: MetaRecord) -> Optional[Dict[str, Any]]:
    """Extract ``metadata.labels`` from a record's document

    Returns None when the document has no labels section.

    Raises:
        DecodeError: If the document, its metadata or its labels are malformed
    """
    metadata = record.document().get("metadata")
    if metadata is None:
        return None
    if not isinstance(metadata, dict):
        raise DecodeError(record.key, "metadata is not an object")

    labels = metadata.get("labels")
    if labels is None:
        return None
    if not isinstance(labels, dict):
        raise DecodeError(record.key, "metadata.labels is not an object")
    return labels


def apply_selector(records: Sequence[MetaRecord], clauses: Sequence[SelectorClause]) -> List[MetaRecord]:
    """Keep the records whose labels satisfy every clause

    A record without a labels section is always kept.

    Raises:
        DecodeError: If a record's document cannot be decoded
    """
    results = []
    for record in records:
        labels = record_labels(record)
        if labels is None or all(clause.matches(labels) for clause in clauses):
            results.append(record)

    logger.debug("Applied selector", candidates=len(records), kept=len(results))
    return results


def filter_selector(records: Sequence[MetaRecord], expr: str) -> List[MetaRecord]:
    """Parse expr and filter records with it"""
    return apply_selector(records, parse_selector(expr))
