"""Persistence of incoming uploads to local storage."""

import logging
import shutil
import uuid
from pathlib import Path
from typing import BinaryIO, Optional

logger = logging.getLogger(__name__)


def save_upload(
    stream: BinaryIO,
    upload_dir: Path,
    filename: Optional[str] = None,
) -> Path:
    """Copy an uploaded file stream into the upload directory.

    Every upload gets a fresh random name so that concurrent requests never
    write to the same path. The original extension is kept. The file is not
    removed here; the HTTP route deletes it after evaluation when
    ``ServerConfig.keep_uploads`` is disabled.

    Args:
        stream: Readable binary stream of the upload.
        upload_dir: Directory that receives the file. Created if missing.
        filename: Original client-side filename, used only for its suffix.

    Returns:
        Path of the stored file.
    """
    upload_dir = Path(upload_dir)
    upload_dir.mkdir(parents=True, exist_ok=True)

    suffix = Path(filename).suffix if filename else ""
    destination = upload_dir / f"{uuid.uuid4().hex}{suffix}"

    with open(destination, "wb") as f:
        shutil.copyfileobj(stream, f)

    logger.debug(f"Stored upload {filename!r} at {destination}")
    return destination
