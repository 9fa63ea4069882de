"""
Error hierarchy for edge-snapshot

Every failure surfaced to the user derives from EdgeSnapshotError so the CLI
can report it as a single line and exit with a fixed status code.
"""

from typing import Optional


class EdgeSnapshotError(Exception):
    """Base exception for all edge-snapshot errors"""
    pass


class ValidationError(EdgeSnapshotError):
    """Raised when user input is rejected before any store access"""
    pass


class UnrecognizedResourceType(ValidationError):
    """Raised for a resource type that is not in the alias table"""

    def __init__(self, resource_type: str):
        self.resource_type = resource_type
        super().__init__(f"Unrecognized resource type: {resource_type}")


class InvalidOutputFormat(ValidationError):
    """Raised for an output format other than wide, json or yaml"""

    def __init__(self, output_format: str):
        self.output_format = output_format
        super().__init__(
            f"Invalid output format: {output_format}, "
            "currently supports formats such as yaml|json|wide"
        )


class MultipleNamesWithAllType(ValidationError):
    """Raised when names are given together with the 'all' pseudo-type"""

    def __init__(self):
        super().__init__("You must specify only one resource when using 'all'")


class InvalidSelectorSyntax(ValidationError):
    """Raised when a label selector term cannot be split into key and value"""

    def __init__(self, term: str, reason: str):
        self.term = term
        self.reason = reason
        super().__init__(f"Invalid selector term '{term}': {reason}")


class StoreAccessError(EdgeSnapshotError):
    """Base exception for metadata store failures"""
    pass


class StoreUnavailable(StoreAccessError):
    """Raised when the metadata store is missing or cannot be opened"""

    def __init__(self, path: str, reason: Optional[str] = None):
        self.path = path
        message = f"Edge node database file {path} is not available"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class StoreError(StoreAccessError):
    """Raised when a scan or lookup against an open store fails"""
    pass


class DecodeError(EdgeSnapshotError):
    """Raised when a stored document or one of its sections cannot be decoded"""

    def __init__(self, key: str, reason: str):
        self.key = key
        self.reason = reason
        super().__init__(f"Failed to decode record {key}: {reason}")
