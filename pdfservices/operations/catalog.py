"""Operation catalog and file-extension dispatch.

Every transformation the service offers is a single ``OperationDescriptor``
entry; adding one is a data change. Extension dispatch goes through one
static table keyed by (direction, extension class).
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any, Literal

from pdfservices.errors import CatalogIncomplete, UnknownOperation, UnsupportedConversion
from pdfservices.operations.models import InputArity, OperationDescriptor

Direction = Literal["to_pdf", "from_pdf"]

PDF = "pdf"

# Synonymous extensions grouped into the classes dispatch works on.
EXTENSION_CLASSES: dict[str, str] = {
    "pdf": PDF,
    "doc": "word",
    "docx": "word",
    "xls": "excel",
    "xlsx": "excel",
    "ppt": "powerpoint",
    "pptx": "powerpoint",
    "html": "html",
    "htm": "html",
    "txt": "text",
    "png": "image",
    "jpg": "image",
    "jpeg": "image",
    "bmp": "image",
    "gif": "image",
}

DISPATCH_TABLE: dict[tuple[Direction, str], str] = {
    ("to_pdf", "word"): "word-to-pdf",
    ("to_pdf", "excel"): "excel-to-pdf",
    ("to_pdf", "powerpoint"): "powerpoint-to-pdf",
    ("to_pdf", "html"): "html-to-pdf",
    ("to_pdf", "text"): "text-to-pdf",
    ("to_pdf", "image"): "image-to-pdf",
    ("from_pdf", "word"): "pdf-to-word",
    ("from_pdf", "excel"): "pdf-to-excel",
    ("from_pdf", "powerpoint"): "pdf-to-powerpoint",
    ("from_pdf", "html"): "pdf-to-html",
    ("from_pdf", "text"): "pdf-to-text",
    ("from_pdf", "image"): "pdf-to-image",
}


# ---------------------------------------------------------------------------
# Payload builders
# ---------------------------------------------------------------------------


def _document(refs: Sequence[str], options: Mapping[str, Any]) -> dict[str, Any]:
    return {"documentId": refs[0]}


def _document_with_pages(refs: Sequence[str], options: Mapping[str, Any]) -> dict[str, Any]:
    body = _document(refs, options)
    if options.get("page_range") is not None:
        body["pageRange"] = options["page_range"]
    return body


def _combine(refs: Sequence[str], options: Mapping[str, Any]) -> dict[str, Any]:
    return {
        "documentInfos": [{"documentId": ref} for ref in refs],
        "config": dict(options.get("config") or {}),
    }


def _compress(refs: Sequence[str], options: Mapping[str, Any]) -> dict[str, Any]:
    return {
        "documentId": refs[0],
        "compressionLevel": options.get("compression_level", "LOW"),
    }


def _extract(refs: Sequence[str], options: Mapping[str, Any]) -> dict[str, Any]:
    body = _document_with_pages(refs, options)
    body["extractType"] = options.get("extract_type", "TEXT")
    return body


def _url(refs: Sequence[str], options: Mapping[str, Any]) -> dict[str, Any]:
    return {"url": refs[0]}


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------


def _op(
    name: str,
    endpoint_path: str,
    description: str,
    builder=_document,
    arity: InputArity = InputArity.single,
    options: tuple[str, ...] = (),
) -> OperationDescriptor:
    return OperationDescriptor(
        name=name,
        endpoint_path=endpoint_path,
        input_arity=arity,
        options=frozenset(options),
        payload_builder=builder,
        description=description,
    )


_OPERATIONS: tuple[OperationDescriptor, ...] = (
    _op("combine", "enhance/pdf-combine", "Merge several PDFs into one",
        _combine, InputArity.multiple, ("config",)),
    _op("compress", "modify/pdf-compress", "Reduce PDF size",
        _compress, options=("compression_level",)),
    _op("extract", "modify/pdf-extract", "Extract text, images or pages",
        _extract, options=("extract_type", "page_range")),
    _op("flatten", "modify/pdf-flatten", "Flatten form fields and annotations"),
    _op("linearize", "optimize/pdf-linearize", "Optimize a PDF for fast web view"),
    _op("word-to-pdf", "create/pdf-from-word", "Word document to PDF"),
    _op("excel-to-pdf", "create/pdf-from-excel", "Excel workbook to PDF"),
    _op("powerpoint-to-pdf", "create/pdf-from-ppt", "PowerPoint deck to PDF"),
    _op("html-to-pdf", "create/pdf-from-html", "HTML file to PDF"),
    _op("image-to-pdf", "create/pdf-from-image", "Image to PDF"),
    _op("text-to-pdf", "create/pdf-from-text", "Plain text to PDF"),
    _op("url-to-pdf", "create/pdf-from-url", "Web page to PDF",
        _url, InputArity.none),
    _op("pdf-to-word", "convert/pdf-to-word", "PDF to Word document"),
    _op("pdf-to-excel", "convert/pdf-to-excel", "PDF to Excel workbook"),
    _op("pdf-to-powerpoint", "convert/pdf-to-ppt", "PDF to PowerPoint deck"),
    _op("pdf-to-html", "convert/pdf-to-html", "PDF to HTML"),
    _op("pdf-to-text", "convert/pdf-to-text", "PDF to plain text"),
    _op("pdf-to-image", "convert/pdf-to-image", "PDF pages to images",
        _document_with_pages, options=("page_range",)),
)

CATALOG: dict[str, OperationDescriptor] = {op.name: op for op in _OPERATIONS}


def list_operations() -> list[OperationDescriptor]:
    """All known operations, sorted by name."""
    return sorted(CATALOG.values(), key=lambda op: op.name)


def resolve_by_name(name: str) -> OperationDescriptor:
    try:
        return CATALOG[name]
    except KeyError:
        raise UnknownOperation(name) from None


def extension_of(path: str | Path) -> str:
    """Lowercased extension without the dot ('' when there is none).

    Follows pathlib, so a bare dotfile name such as ``.pdf`` has no
    extension and is rejected like any other unrecognized input.
    """
    return Path(path).suffix.lower().lstrip(".")


def resolve_by_extension(
    input_path: str | Path, output_path: str | Path
) -> OperationDescriptor:
    """Pick the conversion that turns ``input_path`` into ``output_path``.

    Exactly one side must be a PDF and the other side a recognized format,
    otherwise UnsupportedConversion is raised.
    """
    input_ext = extension_of(input_path)
    output_ext = extension_of(output_path)
    input_class = EXTENSION_CLASSES.get(input_ext)
    output_class = EXTENSION_CLASSES.get(output_ext)

    direction: Direction
    if output_class == PDF and input_class not in (None, PDF):
        direction, other = "to_pdf", input_class
    elif input_class == PDF and output_class not in (None, PDF):
        direction, other = "from_pdf", output_class
    else:
        raise UnsupportedConversion(input_ext, output_ext)

    name = DISPATCH_TABLE.get((direction, other))
    if name is None or name not in CATALOG:
        raise CatalogIncomplete(direction, other)
    return CATALOG[name]
