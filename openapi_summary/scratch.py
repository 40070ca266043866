import logging
import uuid
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncIterator

from starlette.concurrency import run_in_threadpool

logger = logging.getLogger("app")


class ScratchStore:
    """
    Request-scoped scratch files under a single root directory.

    Entries are named by a generated identifier, never by the client's file
    name, so concurrent uploads of the same name cannot clobber each other.
    """

    def __init__(self, root: Path | str):
        self.root = Path(root).resolve()
        self.root.mkdir(parents=True, exist_ok=True)

    def new_location(self, suffix: str = "") -> Path:
        return self.root / f"{uuid.uuid4().hex}{suffix}"

    @asynccontextmanager
    async def scratch_copy(self, content: bytes, suffix: str = "") -> AsyncIterator[Path]:
        """Write ``content`` to a fresh scratch file and delete it on exit, whatever happens inside."""
        path = self.new_location(suffix)
        try:
            await run_in_threadpool(path.write_bytes, content)
            logger.debug("scratch_created", extra={"scratch_id": path.name, "size": len(content)})
            yield path
        finally:
            await run_in_threadpool(self.release, path)

    def release(self, path: Path) -> None:
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            logger.warning("scratch_cleanup_failed", extra={"scratch_id": path.name, "error": str(e)})
            return
        logger.debug("scratch_released", extra={"scratch_id": path.name})
