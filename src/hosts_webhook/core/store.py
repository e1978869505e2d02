"""Record store abstraction over the hosts file."""

# pylint: disable=missing-function-docstring

import errno
import logging
import os
from pathlib import Path
from typing import Optional, Protocol

import aiofiles
import aiofiles.os as aioos
import aiofiles.tempfile

from hosts_webhook.core.config import get_settings
from hosts_webhook.utils.exceptions import StoreError

logger = logging.getLogger(__name__)

# Mode for a hosts file that did not exist before the first write
DEFAULT_FILE_MODE = 0o644

# Bytes that are not valid UTF-8 round-trip unchanged through str
ENCODING = "utf-8"
ENCODING_ERRORS = "surrogateescape"

# Rename onto a bind mount fails with one of these
_MOUNT_ERRNOS = (errno.EBUSY, errno.EXDEV)

_chmod = aioos.wrap(os.chmod)
_fsync = aioos.wrap(os.fsync)


class HostsStore(Protocol):
    """Protocol for hosts-file storage backends."""

    async def read(self) -> str: ...
    async def write(self, content: str) -> None: ...


class FileHostsStore:
    """Hosts file on the local filesystem."""

    def __init__(self, path: str, atomic: bool = True):
        self.path = Path(path)
        self.atomic = atomic

    async def read(self) -> str:
        """Read the whole hosts file, line endings and unknown bytes kept."""
        try:
            async with aiofiles.open(
                self.path,
                "r",
                encoding=ENCODING,
                errors=ENCODING_ERRORS,
                newline="",
            ) as f:
                return await f.read()
        except OSError as e:
            raise StoreError(str(e)) from e

    async def write(self, content: str) -> None:
        """Replace the hosts file with content."""
        try:
            if self.atomic:
                await self._replace(content)
            else:
                async with aiofiles.open(
                    self.path,
                    "w",
                    encoding=ENCODING,
                    errors=ENCODING_ERRORS,
                    newline="",
                ) as f:
                    await f.write(content)
        except OSError as e:
            if self.atomic and e.errno in _MOUNT_ERRNOS:
                logger.warning(
                    f"Cannot replace {self.path} by rename ({e.strerror}); "
                    "if it is a mount point, set ATOMIC_WRITE=false"
                )
            raise StoreError(str(e)) from e

    async def _replace(self, content: str) -> None:
        """Write to a temporary file next to the target and rename it over."""
        try:
            mode = (await aioos.stat(self.path)).st_mode & 0o7777
        except FileNotFoundError:
            mode = DEFAULT_FILE_MODE

        data = content.encode(ENCODING, ENCODING_ERRORS)

        async with aiofiles.tempfile.NamedTemporaryFile(
            "wb",
            dir=self.path.parent,
            prefix=f".{self.path.name}.",
            suffix=".tmp",
            delete=False,
        ) as tmp:
            tmp_name = tmp.name
            await tmp.write(data)
            await tmp.flush()
            await _fsync(tmp.fileno())

        try:
            await _chmod(tmp_name, mode)
            await aioos.replace(tmp_name, self.path)
        except OSError:
            await aioos.unlink(tmp_name)
            raise


class MemoryHostsStore:
    """In-memory hosts file, used in tests."""

    def __init__(self, content: str = ""):
        self.content = content
        self.writes = 0

    async def read(self) -> str:
        return self.content

    async def write(self, content: str) -> None:
        self.content = content
        self.writes += 1


# Default store instance
_store: Optional[HostsStore] = None


def get_hosts_store() -> HostsStore:
    """Get or create the default store, bound to the configured hosts file."""
    global _store  # pylint: disable=global-statement

    if _store is None:
        settings = get_settings()
        _store = FileHostsStore(settings.hosts_file, atomic=settings.atomic_write)

    return _store


def set_hosts_store(store: HostsStore) -> None:
    """Set a custom store (useful for testing)."""
    global _store  # pylint: disable=global-statement

    _store = store


def reset_hosts_store() -> None:
    """Reset the store (useful for testing)."""
    global _store  # pylint: disable=global-statement

    _store = None
