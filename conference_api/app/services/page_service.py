"""
Reading and editing the site's static HTML pages.

Only a fixed set of page files can be accessed.  Before a page is
overwritten its current version is copied to the backup directory as
``<filename>.<timestamp>.backup`` so every edit can be undone.
"""

import logging
import shutil
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional, Union

from ..core.errors import RecordNotFoundError, RecordValidationError, StorageError
from ..storage.base import utc_now

logger = logging.getLogger(__name__)

ALLOWED_PAGES = (
    "index.html",
    "committee.html",
    "speakers.html",
    "program.html",
    "venue.html",
    "registration.html",
    "contact.html",
)


def backup_name(filename: str, timestamp: Optional[str] = None) -> str:
    """Backup file name with a filesystem-safe ISO timestamp suffix."""
    stamp = (timestamp or utc_now()).replace(":", "-").replace(".", "-")
    return f"{filename}.{stamp}.backup"


class PageService:
    """Read and write whitelisted page files with automatic backups."""

    def __init__(self, pages_dir: Union[str, Path], backup_dir: Union[str, Path]):
        self.pages_dir = Path(pages_dir)
        self.backup_dir = Path(backup_dir)

    def _page_path(self, filename: str) -> Path:
        if filename not in ALLOWED_PAGES:
            raise RecordValidationError([{"field": "filename", "message": "Invalid file name"}])
        return self.pages_dir / filename

    @staticmethod
    def _stats(filename: str, path: Path, content: str) -> Dict[str, Any]:
        stat = path.stat()
        return {
            "filename": filename,
            "size": stat.st_size,
            "lastModified": datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc).isoformat(),
            "lines": len(content.split("\n")),
        }

    async def read_page(self, filename: str) -> Dict[str, Any]:
        path = self._page_path(filename)
        if not path.is_file():
            raise RecordNotFoundError("File not found")
        try:
            content = path.read_text(encoding="utf-8")
            result = self._stats(filename, path, content)
        except OSError as exc:
            raise StorageError(f"Error reading {filename}") from exc
        result["content"] = content
        return result

    async def save_page(self, filename: str, content: Any) -> Dict[str, Any]:
        """Back up the current page (if any) and write ``content`` in its place."""
        path = self._page_path(filename)
        if not isinstance(content, str) or not content:
            raise RecordValidationError([{"field": "content", "message": "Content is required"}])
        backup: Optional[str] = None
        try:
            if path.exists():
                self.backup_dir.mkdir(parents=True, exist_ok=True)
                backup = backup_name(filename)
                shutil.copy2(path, self.backup_dir / backup)
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
            result = self._stats(filename, path, content)
        except OSError as exc:
            raise StorageError(f"Error saving {filename}") from exc
        logger.info("Saved page %s (backup: %s)", filename, backup or "none")
        result.update(message="File saved successfully", backup=backup)
        return result
