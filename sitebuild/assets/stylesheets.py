"""Sass and Less compiler wrappers."""

from __future__ import annotations

import asyncio
import importlib
import io
import logging
from pathlib import Path
from types import ModuleType
from typing import Protocol

import sass

from ..core.models import ScssOptions, ScssResult
from ..errors import DependencyUnavailable, StylesheetCompileError
from ..rendering.io import read_text

logger = logging.getLogger(__name__)


class LessCompiler(Protocol):
    def compile(self, source: str, filename: str) -> str:
        """Compile Less ``source`` as if read from ``filename``.

        Relative ``@import`` paths resolve against the directory of ``filename``.
        """
        ...


class _NamedSource(io.StringIO):
    """In-memory Less source carrying the path lesscpy resolves imports from."""

    def __init__(self, text: str, name: str) -> None:
        super().__init__(text)
        self.name = name


class LesscpyCompiler:
    """LessCompiler backed by the ``lesscpy`` package."""

    def __init__(self, module: ModuleType) -> None:
        self._lesscpy = module

    def compile(self, source: str, filename: str) -> str:
        # lesscpy takes the import base directory from the stream name
        return self._lesscpy.compile(_NamedSource(source, filename), minify=False)


def load_less_compiler() -> LessCompiler:
    """Resolve the optional Less compiler at runtime.

    Raises:
        DependencyUnavailable: lesscpy is not installed
    """
    try:
        module = importlib.import_module("lesscpy")
    except ImportError as e:
        raise DependencyUnavailable(
            "`pip install lesscpy` is required to build Bootstrap 3"
        ) from e
    return LesscpyCompiler(module)


async def compile_less(compiler: LessCompiler, source: str, filename: str) -> str:
    try:
        return await asyncio.to_thread(compiler.compile, source, filename)
    except StylesheetCompileError:
        raise
    except Exception as e:
        raise StylesheetCompileError(f"Less compilation error: {e}") from e


def _scss_kwargs(options: ScssOptions, encoding: str) -> dict:
    if options.file is None:
        return {"string": options.data, "output_style": options.output_style}

    source = read_text(options.file, encoding)
    logger.debug(f"Loaded {len(source)} characters from {options.file}")

    if not options.source_map:
        return {
            "string": source,
            "output_style": options.output_style,
            "include_paths": [str(options.file.parent)],
        }

    # libsass only emits source maps when it reads the file itself; the read
    # above still reports a missing or unreadable file as BuildIOError.
    css_path = options.out_file or options.file.with_suffix(".css")
    return {
        "filename": str(options.file),
        "output_style": options.output_style,
        "source_map_filename": str(Path(f"{css_path}.map")),
        "output_filename_hint": str(css_path),
        "source_map_contents": options.source_map_contents,
    }


async def compile_scss(
    options: ScssOptions, encoding: str = "utf-8", delay: float = 0.05
) -> ScssResult:
    """Compile Sass/SCSS with libsass in a worker thread.

    Args:
        options: Source and output options
        encoding: Encoding used to read ``options.file``
        delay: Seconds to wait first, working around file locks held by
            editors and watchers on some platforms

    Returns:
        Compiled CSS and, for file input with ``source_map``, the source map
    """
    kwargs = _scss_kwargs(options, encoding)
    if delay > 0:
        await asyncio.sleep(delay)

    try:
        output = await asyncio.to_thread(sass.compile, **kwargs)
    except sass.CompileError as e:
        raise StylesheetCompileError(str(e)) from e

    if isinstance(output, tuple):
        css, source_map = output
        return ScssResult(css=css, source_map=source_map)
    return ScssResult(css=output)
