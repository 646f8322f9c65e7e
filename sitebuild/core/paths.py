"""Resolution of build paths against the configured roots."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Union

PathLike = Union[str, "os.PathLike[str]"]


def is_within(candidate: str, root: str) -> bool:
    """Return True when ``candidate`` lies inside ``root``.

    Both arguments must already be normalized. Containment is decided per
    path segment, so ``/src-other/x`` is not inside ``/src``.
    """
    if candidate == root:
        return True
    prefix = root if root.endswith(os.sep) else root + os.sep
    return candidate.startswith(prefix)


def _rootless(candidate: str) -> str:
    """Drop the drive, anchor and leading ``..`` segments of a normalized path."""
    parts = os.path.splitdrive(candidate)[1].lstrip(os.sep).split(os.sep)
    while parts and parts[0] == os.pardir:
        parts.pop(0)
    return os.path.join(*parts) if parts else ""


def resolve_under(path: PathLike, root: PathLike) -> Path:
    """Root ``path`` under ``root`` unless it already lives there.

    Args:
        path: Path relative to ``root`` or already rooted there
        root: Base directory

    Returns:
        Absolute, normalized path inside ``root``. Resolving the result again
        returns it unchanged.
    """
    candidate = os.path.normpath(os.fspath(path))
    base = os.path.abspath(os.fspath(root))
    if is_within(os.path.abspath(candidate), base):
        return Path(os.path.abspath(candidate))
    return Path(os.path.abspath(os.path.join(base, _rootless(candidate))))
