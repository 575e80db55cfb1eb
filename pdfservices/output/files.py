"""Local file access for pipeline inputs and results."""

from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path

from pdfservices.errors import LocalIOError

logger = logging.getLogger(__name__)


def _current_umask() -> int:
    # os.umask can only be read by setting it
    mask = os.umask(0)
    os.umask(mask)
    return mask


def read_input(path: str | Path) -> bytes:
    """Read an input document, wrapping OS errors in LocalIOError."""
    p = Path(path)
    try:
        data = p.read_bytes()
    except OSError as e:
        raise LocalIOError(str(p), "read", e) from e
    logger.debug("read %s (%d bytes)", p, len(data))
    return data


def write_atomic(path: str | Path, content: bytes) -> Path:
    """Write ``content`` to ``path`` via a temp file and rename.

    Either the complete file appears at ``path`` or nothing does. The file
    gets the usual 0666 & ~umask mode rather than mkstemp's 0600. On
    failure the LocalIOError carries ``content`` so the write can be retried.
    """
    dest = Path(path)
    tmp_name: str | None = None
    try:
        dest.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=dest.parent, prefix=f".{dest.name}.", suffix=".part"
        )
        with os.fdopen(fd, "wb") as f:
            os.chmod(tmp_name, 0o666 & ~_current_umask())
            f.write(content)
        os.replace(tmp_name, dest)
    except OSError as e:
        if tmp_name is not None:
            Path(tmp_name).unlink(missing_ok=True)
        raise LocalIOError(str(dest), "write", e, content=content) from e

    logger.info("wrote %s (%d bytes)", dest, len(content))
    return dest
