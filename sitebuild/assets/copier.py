"""Recursive copy of asset files and folders."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from ..core.models import CopyRequest
from ..errors import BuildIOError
from ..rendering.io import ensure_dir

logger = logging.getLogger(__name__)


def copy_file_or_folder(source: Path, dest_dir: Path) -> Path:
    """Copy ``source`` into ``dest_dir``, keeping its name.

    Directories are copied with their full tree and merged into an existing
    destination folder of the same name.

    Returns:
        Path of the copy
    """
    target = dest_dir / source.name
    try:
        if source.is_dir():
            shutil.copytree(source, target, dirs_exist_ok=True)
        elif source.is_file():
            shutil.copy2(source, target)
        else:
            raise FileNotFoundError(f"No such file or directory: '{source}'")
    except OSError as e:
        raise BuildIOError(f"Cannot copy {source} to {dest_dir}: {e}") from e

    logger.debug(f"Copied {source} → {target}")
    return target


def copy_assets(request: CopyRequest) -> list[Path]:
    ensure_dir(request.dist)
    copied = [copy_file_or_folder(source, request.dist) for source in request.sources]
    logger.info(f"Copied {len(copied)} asset(s) into {request.dist}")
    return copied
