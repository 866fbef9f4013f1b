import asyncio
import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)


class LocalFileSystem:
    """File system access for the core, run off the event loop."""

    async def file_exists(self, path: Path) -> bool:
        return await asyncio.to_thread(os.path.isfile, path)

    async def subdirectories(self, path: Path) -> list[str]:
        return await asyncio.to_thread(_list_subdirectories, Path(path))


def _list_subdirectories(path: Path) -> list[str]:
    # Symlinks to directories are not followed, matching lstat semantics
    with os.scandir(path) as entries:
        return [entry.name for entry in entries if entry.is_dir(follow_symlinks=False)]
