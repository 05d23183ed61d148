"""Upload receiver: writes one multipart audio file into the upload directory."""

import re
import time
from pathlib import Path

from fastapi import UploadFile

from sweethome.errors import ValidationError
from sweethome.schemas.entry import AudioInfo

UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9._-]")


def sanitize_filename(filename: str) -> str:
    """Replace every character outside letters, digits, '.', '-' and '_' with '_'."""
    return UNSAFE_FILENAME_CHARS.sub("_", filename)


def stored_filename_for(filename: str, received_ms: int | None = None) -> str:
    """Prefix the sanitized filename with the receipt time in epoch milliseconds."""
    if received_ms is None:
        received_ms = int(time.time() * 1000)
    return f"{received_ms}_{sanitize_filename(filename)}"


class UploadReceiver:
    """Streams uploaded audio to disk. No size limit is enforced."""

    chunk_size = 1024 * 64  # 64KB chunks

    def __init__(self, upload_dir: str | Path) -> None:
        self.upload_dir = Path(upload_dir)

    async def receive(self, upload: UploadFile | None) -> AudioInfo:
        """Store the upload and describe it. Raises ValidationError when no file was sent."""
        if upload is None or not upload.filename:
            raise ValidationError("audio file is required")

        self.upload_dir.mkdir(parents=True, exist_ok=True)
        stored_filename = stored_filename_for(upload.filename)
        file_path = self.upload_dir / stored_filename

        with open(file_path, "wb") as f:
            while True:
                chunk = await upload.read(self.chunk_size)
                if not chunk:
                    break
                f.write(chunk)

        return AudioInfo(
            filename=stored_filename,
            original_name=upload.filename,
            content_type=upload.content_type,
            local_path=file_path.as_posix(),
        )
