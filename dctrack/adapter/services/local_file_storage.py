import logging
import uuid
from pathlib import Path, PurePosixPath

from dctrack.app.services.file_storage import IFileStorage

logger = logging.getLogger(__name__)


class LocalFileStorage(IFileStorage):
    """Stores files under a root directory and serves them from a URL prefix"""

    def __init__(self, root: str, url_prefix: str = "/storage"):
        self.root = Path(root)
        self.url_prefix = url_prefix.rstrip("/")

    def _resolve(self, path: str) -> Path:
        full_path = (self.root / path).resolve()
        if not full_path.is_relative_to(self.root.resolve()):
            raise ValueError(f"Path escapes storage root: {path}")
        return full_path

    def store(self, folder: str, filename: str, content: bytes) -> str:
        suffix = PurePosixPath(filename).suffix
        path = str(PurePosixPath(folder) / f"{uuid.uuid4().hex}{suffix}")
        full_path = self._resolve(path)
        full_path.parent.mkdir(parents=True, exist_ok=True)
        full_path.write_bytes(content)
        return path

    def url(self, path: str) -> str:
        return f"{self.url_prefix}/{path.lstrip('/')}"

    def exists(self, path: str) -> bool:
        return self._resolve(path).is_file()

    def delete(self, path: str) -> bool:
        full_path = self._resolve(path)
        if not full_path.is_file():
            return False
        full_path.unlink()
        logger.info(f"Deleted stored file {path}")
        return True
