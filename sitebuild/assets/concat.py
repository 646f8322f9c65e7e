"""Ordered concatenation of text files."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Iterable
from pathlib import Path
from typing import Optional, Union

from ..rendering.io import atomic_write_text, read_text

logger = logging.getLogger(__name__)

EOL = "\n"

BundleBuilder = Callable[[], Awaitable[str]]


async def concat_files(
    files: Iterable[Union[str, Path]],
    dist_path: Optional[Path] = None,
    *,
    encoding: str = "utf-8",
    mode: int = 0o644,
    bundles: Optional[dict[str, BundleBuilder]] = None,
) -> str:
    """Join files with newlines, in the order given.

    Args:
        files: File paths, or bundle tokens expanded by ``bundles``
        dist_path: Where to write the joined text, if anywhere
        encoding: Text encoding for reads and the write
        mode: File permissions of the written file
        bundles: Builders for reserved tokens such as ``"bootstrap3"``

    Returns:
        Joined text
    """
    bundles = bundles or {}
    pieces: list[str] = []
    for entry in files:
        builder = bundles.get(entry) if isinstance(entry, str) else None
        if builder is not None:
            logger.debug(f"Expanding bundle token {entry!r}")
            pieces.append(await builder())
        else:
            pieces.append(read_text(Path(entry), encoding))

    content = EOL.join(pieces)
    if dist_path is not None:
        atomic_write_text(dist_path, content, encoding, mode)
        logger.info(f"Concatenated {len(pieces)} file(s) → {dist_path}")
    return content
