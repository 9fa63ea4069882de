"""
Input validation for edge-snapshot

Checks the options of a ``get`` invocation in a fixed order before any record
is read: resource type, store path, store connection, output format, names
with the 'all' pseudo-type and finally the selector syntax.
"""

from pathlib import Path
from typing import Callable, List, Sequence

import structlog

from .exceptions import (
    InvalidOutputFormat,
    MultipleNamesWithAllType,
    StoreUnavailable,
    UnrecognizedResourceType,
    ValidationError,
)
from .models import RESOURCE_TYPE_ALL, GetOptions, OutputFormat, SelectorClause, is_available_resource
from .selector import parse_selector
from .store.base import MetaStore
from .store.sqlite import SQLiteMetaStore

logger = structlog.get_logger(__name__)


class InputValidator:
    """Validates all user inputs before processing"""

    ALLOWED_FORMATS = [f.value for f in OutputFormat if f.value]

    @classmethod
    def validate_resource_type(cls, resource_type: str) -> str:
        """Validate a resource type alias

        Raises:
            ValidationError: If no type was given
            UnrecognizedResourceType: If the alias is unknown
        """
        if not resource_type:
            raise ValidationError("You must specify the type of resource to get")

        if not is_available_resource(resource_type):
            raise UnrecognizedResourceType(resource_type)

        return resource_type

    @classmethod
    def validate_store_path(cls, path: str) -> str:
        """Validate that the store file exists

        Raises:
            StoreUnavailable: If the path is empty or missing
        """
        if not path:
            raise StoreUnavailable(path, "no database path given")

        if not Path(path).expanduser().exists():
            raise StoreUnavailable(path, "file does not exist")

        return path

    @classmethod
    def validate_output_format(cls, output_format: str) -> OutputFormat:
        """Normalize and validate an output format

        Raises:
            InvalidOutputFormat: If the lowercased format is not accepted
        """
        normalized = output_format.lower()
        if normalized and normalized not in cls.ALLOWED_FORMATS:
            raise InvalidOutputFormat(output_format)

        return OutputFormat(normalized)

    @classmethod
    def validate_names(cls, resource_type: str, names: Sequence[str]) -> List[str]:
        """Reject names combined with the 'all' pseudo-type

        Raises:
            MultipleNamesWithAllType: If names are given for 'all'
        """
        if resource_type == RESOURCE_TYPE_ALL and len(names) >= 1:
            raise MultipleNamesWithAllType()

        return list(names)

    @classmethod
    def validate_selector(cls, selector: str) -> List[SelectorClause]:
        """Parse the selector so syntax errors surface before the query

        Raises:
            InvalidSelectorSyntax: If a term is malformed
        """
        if not selector:
            return []
        return parse_selector(selector)


def validate_get_options(
    options: GetOptions,
    open_store: Callable[[str], MetaStore] = SQLiteMetaStore.open,
) -> MetaStore:
    """Validate options and open the metadata store

    The store is the only resource acquired here. It is closed again if a
    later check fails, otherwise the caller owns it.

    Returns:
        The open store

    Raises:
        ValidationError: If any option is rejected
        StoreUnavailable: If the store is missing or cannot be opened
    """
    InputValidator.validate_resource_type(options.resource_type)
    InputValidator.validate_store_path(options.store_path)

    store = open_store(options.store_path)
    try:
        options.output_format = InputValidator.validate_output_format(options.output_format).value
        InputValidator.validate_names(options.resource_type, options.names)
        InputValidator.validate_selector(options.selector)
    except ValidationError as e:
        logger.debug("Input validation failed", error=str(e))
        store.close()
        raise

    return store
