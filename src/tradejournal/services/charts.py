"""Chart image storage; trades only ever hold the returned reference string."""

from __future__ import annotations

import secrets
import string
from pathlib import Path
from typing import Iterable

from werkzeug.datastructures import FileStorage
from werkzeug.security import safe_join

from ..errors import JournalFileNotFoundError, ValidationError
from ..logging_config import get_logger
from .row_codec import clock_seed_now

logger = get_logger(__name__)

CHART_URL_PREFIX = "/api/chart/"
_ID_ALPHABET = string.ascii_lowercase + string.digits


def _random_id(length: int = 9) -> str:
    return "".join(secrets.choice(_ID_ALPHABET) for _ in range(length))


class ChartStore:
    """Stores uploaded chart images under ``chart_<ms>_<id><ext>`` names."""

    def __init__(self, charts_dir: Path, *, allowed_extensions: Iterable[str], max_bytes: int) -> None:
        self.charts_dir = Path(charts_dir)
        self.allowed_extensions = frozenset(ext.lower() for ext in allowed_extensions)
        self.max_bytes = max_bytes

    def save(self, file_storage: FileStorage) -> str:
        """Persist an uploaded image and return its stored file name."""

        original = file_storage.filename or ""
        if not original:
            raise ValidationError("No chart image uploaded")
        extension = Path(original).suffix.lower()
        if extension not in self.allowed_extensions:
            raise ValidationError("Only image files are allowed")

        data = file_storage.stream.read(self.max_bytes + 1)
        if len(data) > self.max_bytes:
            raise ValidationError("File too large")

        self.charts_dir.mkdir(parents=True, exist_ok=True)
        filename = f"chart_{clock_seed_now()}_{_random_id()}{extension}"
        (self.charts_dir / filename).write_bytes(data)
        logger.info("Chart stored", extra={"chart": filename, "bytes": len(data)})
        return filename

    @staticmethod
    def reference_for(filename: str) -> str:
        return f"{CHART_URL_PREFIX}{filename}"

    def resolve(self, filename: str) -> Path:
        """Return the path of a stored chart, or raise if it does not exist."""

        joined = safe_join(str(self.charts_dir), filename)
        if joined is None or not Path(joined).is_file():
            raise JournalFileNotFoundError("Chart image not found")
        return Path(joined)

    def delete(self, filename: str) -> bool:
        """Remove a stored chart; deleting a missing chart is not an error."""

        try:
            path = self.resolve(filename)
        except JournalFileNotFoundError:
            return False
        path.unlink(missing_ok=True)
        logger.info("Chart deleted", extra={"chart": filename})
        return True
