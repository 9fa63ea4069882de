"""
Typed reconstruction of stored records

Parsers turn metadata records into typed resource objects. Each kind reads a
fixed set of top-level sections from the stored document and decodes every
section on its own into the matching field of the target model, so a section
the kind does not use can never break decoding. Any failure of a used section
aborts the whole reconstruction.

Two parsers exist: one for the minimal projection that drives table columns,
one for the complete projection used for JSON and YAML. They share no state
and never derive one result from the other.
"""

from abc import ABC
from functools import lru_cache
from types import ModuleType
from typing import Any, Dict, Iterable, Tuple, Type

import structlog
from pydantic import BaseModel, TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from ..exceptions import DecodeError, UnrecognizedResourceType
from ..models import MetaRecord, ResourceGroups, ResourceKind
from ..schemas import complete, minimal

logger = structlog.get_logger(__name__)

API_VERSION = "v1"

# Top-level document sections read for each kind
KIND_SECTIONS: Dict[ResourceKind, Tuple[str, ...]] = {
    ResourceKind.POD: ("metadata", "spec", "status"),
    ResourceKind.SERVICE: ("metadata", "spec", "status"),
    ResourceKind.SECRET: ("metadata", "data", "type"),
    ResourceKind.CONFIGMAP: ("metadata", "data"),
    ResourceKind.ENDPOINTS: ("metadata", "subsets"),
    ResourceKind.NODE: ("metadata", "spec", "status"),
}


@lru_cache(maxsize=None)
def _section_adapter(model: Type[BaseModel], section: str) -> TypeAdapter:
    return TypeAdapter(model.model_fields[section].annotation)


def decode_section(record: MetaRecord, model: Type[BaseModel], section: str, value: Any) -> Any:
    """Decode one document section into the type of model's field of that name

    Raises:
        DecodeError: If the section does not match the field type
    """
    try:
        return _section_adapter(model, section).validate_python(value)
    except PydanticValidationError as e:
        raise DecodeError(record.key, f"invalid {section}: {e}") from e


def kind_of(record: MetaRecord) -> ResourceKind:
    """Map a record's type column to its kind

    Raises:
        UnrecognizedResourceType: For types this tool cannot reconstruct
    """
    try:
        return ResourceKind(record.type)
    except ValueError:
        raise UnrecognizedResourceType(record.type) from None


class Parser(ABC):
    """Base class for the typed projections

    Subclasses name the schema module holding one model per kind.
    """

    name: str = "base"
    schema: ModuleType

    def __init__(self):
        self._models: Dict[ResourceKind, Type[BaseModel]] = {
            ResourceKind.POD: self.schema.Pod,
            ResourceKind.SERVICE: self.schema.Service,
            ResourceKind.SECRET: self.schema.Secret,
            ResourceKind.CONFIGMAP: self.schema.ConfigMap,
            ResourceKind.ENDPOINTS: self.schema.Endpoints,
            ResourceKind.NODE: self.schema.Node,
        }
        missing = set(ResourceKind) - set(self._models)
        if missing:
            raise TypeError(f"{type(self).__name__} has no model for {sorted(k.value for k in missing)}")

    def parse(self, record: MetaRecord) -> BaseModel:
        """Reconstruct a single record

        The kind label is the record's type and the version is always v1,
        whatever the stored document says.

        Raises:
            UnrecognizedResourceType: For an unknown record type
            DecodeError: If the document or a used section is malformed
        """
        kind = kind_of(record)
        model = self._models[kind]
        document = record.document()

        fields = {}
        for section in KIND_SECTIONS[kind]:
            value = document.get(section)
            if value is None:
                continue
            fields[section] = decode_section(record, model, section, value)

        return model(apiVersion=API_VERSION, kind=record.type, **fields)

    def reconstruct(self, records: Iterable[MetaRecord]) -> ResourceGroups:
        """Reconstruct records and group them by kind, keeping record order"""
        groups = ResourceGroups()
        for record in records:
            groups.add(kind_of(record), self.parse(record))

        logger.debug("Reconstructed resources", parser=self.name, count=groups.total)
        return groups


class MinimalParser(Parser):
    """Builds the lean objects used to compute table columns"""

    name = "minimal"
    schema = minimal


class CompleteParser(Parser):
    """Builds full objects for exact structured output"""

    name = "complete"
    schema = complete
