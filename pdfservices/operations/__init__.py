"""Operation catalog: descriptors and extension dispatch."""

from pdfservices.operations.catalog import (
    CATALOG,
    DISPATCH_TABLE,
    EXTENSION_CLASSES,
    extension_of,
    list_operations,
    resolve_by_extension,
    resolve_by_name,
)
from pdfservices.operations.models import InputArity, OperationDescriptor

__all__ = [
    "CATALOG",
    "DISPATCH_TABLE",
    "EXTENSION_CLASSES",
    "InputArity",
    "OperationDescriptor",
    "extension_of",
    "list_operations",
    "resolve_by_extension",
    "resolve_by_name",
]
