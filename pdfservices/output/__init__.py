"""Output subsystem: reads pipeline inputs and persists results."""

from pdfservices.output.files import read_input, write_atomic

__all__ = [
    "read_input",
    "write_atomic",
]
