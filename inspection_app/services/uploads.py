from __future__ import annotations

import os
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO, Iterator

from inspection_app.core.logging import get_logger

logger = get_logger("uploads")


@contextmanager
def staged_upload(source: BinaryIO, upload_dir: Path) -> Iterator[Path]:
    """
    Copy an uploaded stream to a uniquely named file in ``upload_dir``.

    The file is removed when the block exits, whatever the outcome. A failed
    removal is logged and never raised.
    """
    upload_dir = Path(upload_dir)
    upload_dir.mkdir(parents=True, exist_ok=True)

    tmp = tempfile.NamedTemporaryFile(dir=upload_dir, prefix="upload-", delete=False)
    path = Path(tmp.name)
    try:
        with tmp:
            source.seek(0)
            while True:
                chunk = source.read(1024 * 1024)
                if not chunk:
                    break
                tmp.write(chunk)
        yield path
    finally:
        _remove(path)


def _remove(path: Path) -> None:
    try:
        os.unlink(path)
    except OSError as e:
        logger.warning("Could not remove staged upload", extra={"path": str(path), "error": str(e)})
