"""YAML build manifests: an ordered list of build steps."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Awaitable, Callable

import yaml
from pydantic import BaseModel, Field, ValidationError

from .build import Build
from .core.models import ConcatRequest, CopyRequest, MinifyRequest, ScssOptions, TemplateJob
from .errors import ManifestError
from .rendering.io import atomic_write_text, read_text

logger = logging.getLogger(__name__)


class Manifest(BaseModel):
    """Parsed build manifest."""

    settings: dict[str, Any] = Field(default_factory=dict, description="BuildSettings overrides")
    data: dict[str, Any] = Field(default_factory=dict, description="Shared template data")
    steps: list[dict[str, Any]] = Field(default_factory=list, description="Ordered build steps")


def load_manifest(path: Path, encoding: str = "utf-8") -> Manifest:
    """Load and validate a YAML manifest.

    Raises:
        BuildIOError: The file cannot be read
        ManifestError: The document is not valid YAML or not a manifest
    """
    try:
        raw = yaml.safe_load(read_text(path, encoding)) or {}
    except yaml.YAMLError as e:
        raise ManifestError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(raw, dict):
        raise ManifestError(f"Manifest {path} must be a mapping")
    try:
        return Manifest.model_validate(raw)
    except ValidationError as e:
        raise ManifestError(f"Invalid manifest {path}: {e}") from e


async def _copy(build: Build, params: Any, data: dict[str, Any]) -> Any:
    request = CopyRequest.model_validate(params)
    return build.copy_assets(request.sources, request.dist)


async def _concat(build: Build, params: Any, data: dict[str, Any]) -> Any:
    request = ConcatRequest.model_validate(params)
    return await build.concat_files(request.files, request.dist_path)


async def _minify_js(build: Build, params: Any, data: dict[str, Any]) -> Any:
    request = MinifyRequest.model_validate(params)
    return build.minify_js(request.content, request.src_path, request.dist_path)


async def _minify_css(build: Build, params: Any, data: dict[str, Any]) -> Any:
    request = MinifyRequest.model_validate(params)
    return build.minify_css(request.content, request.src_path, request.dist_path)


async def _scss(build: Build, params: Any, data: dict[str, Any]) -> Any:
    options = ScssOptions.model_validate(params)
    result = await build.compile_scss(options)
    if options.out_file is not None:
        encoding = build.settings.file_encoding
        atomic_write_text(options.out_file, result.css, encoding, build.settings.file_mode)
        if result.source_map is not None:
            map_path = Path(f"{options.out_file}.map")
            atomic_write_text(map_path, result.source_map, encoding, build.settings.file_mode)
        logger.info(f"Compiled SCSS → {options.out_file}")
    return result


async def _templates(build: Build, params: Any, data: dict[str, Any]) -> Any:
    jobs = [TemplateJob.model_validate(job) for job in params or []]
    return await build.render_templates(jobs, data)


STEP_HANDLERS: dict[str, Callable[[Build, Any, dict[str, Any]], Awaitable[Any]]] = {
    "copy": _copy,
    "concat": _concat,
    "minify_js": _minify_js,
    "minify_css": _minify_css,
    "scss": _scss,
    "templates": _templates,
}


async def run_manifest(manifest: Manifest, build: Build | None = None) -> list[Any]:
    """Run manifest steps in order, stopping at the first failure.

    Args:
        manifest: Parsed manifest
        build: Build to run against; created from ``manifest.settings`` when omitted

    Returns:
        One result per step
    """
    try:
        if build is None:
            build = Build(**manifest.settings)
        elif manifest.settings:
            build = Build(build.settings, **manifest.settings)
    except ValidationError as e:
        raise ManifestError(f"Invalid manifest settings: {e}") from e

    logger.info(f"Running {len(manifest.steps)} build step(s)")

    results: list[Any] = []
    for index, step in enumerate(manifest.steps):
        if len(step) != 1:
            raise ManifestError(f"Step {index} must have exactly one kind, got {sorted(step)}")
        (kind, params), = step.items()
        handler = STEP_HANDLERS.get(kind)
        if handler is None:
            raise ManifestError(f"Step {index}: unknown kind {kind!r}")

        logger.debug(f"Step {index}: {kind}")
        try:
            results.append(await handler(build, params, manifest.data))
        except ValidationError as e:
            raise ManifestError(f"Step {index} ({kind}) is invalid: {e}") from e

    return results
