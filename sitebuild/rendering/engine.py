"""Template rendering engine."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

import jinja2
from jinja2 import Environment, FileSystemLoader, StrictUndefined, Template, Undefined

from ..core.models import TemplateJob, TemplateResult
from ..core.paths import resolve_under
from ..errors import TemplateError
from ..settings import BuildSettings
from .io import atomic_write_text_async, read_text_async

logger = logging.getLogger(__name__)


def create_environment(search_path: Path, strict: bool = False) -> Environment:
    """Create the Jinja2 environment used for every template.

    Args:
        search_path: Directory used to resolve ``include``/``extends``
        strict: Raise on undefined variables instead of rendering them empty

    Returns:
        Configured Jinja2 environment
    """
    return Environment(
        loader=FileSystemLoader(str(search_path)),
        undefined=StrictUndefined if strict else Undefined,
        autoescape=False,
        keep_trailing_newline=True,
    )


def compile_template(env: Environment, text: str, name: str = "<string>") -> Template:
    """Compile template text, raising TemplateError on syntax errors."""
    try:
        return env.from_string(text)
    except jinja2.TemplateError as e:
        raise TemplateError(f"Cannot compile template {name}: {e}") from e


def render(template: Template, context: Mapping[str, Any], name: str = "<string>") -> str:
    """Render a compiled template, raising TemplateError on failure."""
    try:
        return template.render(**context)
    except Exception as e:
        raise TemplateError(f"Cannot render template {name}: {e}") from e


def template_context(data: Mapping[str, Any], target: Path) -> dict[str, Any]:
    """Copy ``data`` and add ``fileName`` (name plus extension of ``target``)."""
    return {**data, "fileName": target.name}


async def render_template(
    settings: BuildSettings,
    env: Environment,
    source: Path,
    target: Path,
    data: Mapping[str, Any],
) -> TemplateResult:
    """Render a single template into the distribution root.

    Args:
        settings: Build settings supplying roots, encoding and file mode
        env: Jinja2 environment
        source: Template path, relative to or under ``settings.src``
        target: Output path, relative to or under ``settings.dist``
        data: Template context; never mutated

    Returns:
        Rendered body and resolved output path
    """
    source_path = resolve_under(source, settings.src)
    target_path = resolve_under(target, settings.dist)
    context = template_context(data, target_path)

    logger.debug(f"Rendering template: {source_path}")

    text = await read_text_async(source_path, settings.file_encoding)
    template = compile_template(env, text, str(source_path))
    body = render(template, context, str(source_path))

    await atomic_write_text_async(
        target_path, body, settings.file_encoding, settings.file_mode
    )
    logger.info(f"Rendered {source_path} → {target_path}")

    return TemplateResult(target_body=body, target_path=target_path)


async def render_templates(
    settings: BuildSettings,
    env: Environment,
    jobs: Iterable[TemplateJob],
    data: Mapping[str, Any],
) -> list[TemplateResult]:
    """Render jobs one after another, stopping at the first failure.

    Args:
        settings: Build settings
        env: Jinja2 environment
        jobs: Template jobs, rendered in order
        data: Shared context; job data is merged over it

    Returns:
        Results in job order
    """
    jobs = list(jobs)
    logger.info(f"Rendering {len(jobs)} template(s)")

    results: list[TemplateResult] = []
    for job in jobs:
        result = await render_template(
            settings, env, job.source, job.target, {**data, **job.data}
        )
        results.append(result)

    logger.info(f"Successfully rendered {len(results)} file(s)")
    return results
