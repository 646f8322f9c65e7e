"""File I/O operations for build outputs."""

from __future__ import annotations

import asyncio
import contextlib
import os
import tempfile
from pathlib import Path

from ..errors import BuildIOError


def ensure_parent(path: Path) -> None:
    """Ensure parent directories exist for the given path.

    Args:
        path: Path whose parent directories should be created
    """
    ensure_dir(path.parent)


def ensure_dir(path: Path) -> None:
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise BuildIOError(f"Cannot create directory {path}: {e}") from e


def read_text(path: Path, encoding: str = "utf-8") -> str:
    """Read a text file, raising BuildIOError when it cannot be read."""
    try:
        return path.read_text(encoding=encoding)
    except OSError as e:
        raise BuildIOError(f"Cannot read {path}: {e}") from e


def atomic_write_text(
    path: Path, text: str, encoding: str = "utf-8", mode: int = 0o644
) -> None:
    """Write text to a file atomically using a temporary file.

    Args:
        path: Destination file path
        text: Text content to write
        encoding: Text encoding of the written file
        mode: File permissions (octal)
    """
    ensure_parent(path)

    try:
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=str(path.parent))
    except OSError as e:
        raise BuildIOError(f"Cannot write {path}: {e}") from e
    try:
        with os.fdopen(fd, "w", encoding=encoding) as tmp:
            tmp.write(text)
            tmp.flush()
            os.fsync(tmp.fileno())
        os.replace(tmp_name, path)
        os.chmod(path, mode)
    except OSError as e:
        raise BuildIOError(f"Cannot write {path}: {e}") from e
    finally:
        if os.path.exists(tmp_name):
            with contextlib.suppress(OSError):
                os.remove(tmp_name)


async def read_text_async(path: Path, encoding: str = "utf-8") -> str:
    """Read a text file without blocking the event loop."""
    return await asyncio.to_thread(read_text, path, encoding)


async def atomic_write_text_async(
    path: Path, text: str, encoding: str = "utf-8", mode: int = 0o644
) -> None:
    """Write a text file atomically without blocking the event loop."""
    await asyncio.to_thread(atomic_write_text, path, text, encoding, mode)
