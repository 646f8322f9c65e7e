"""Build facade binding the asset operations to one set of settings."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any, Optional, Union

from .assets import copier, minify, stylesheets
from .assets.bootstrap import BOOTSTRAP3_OVERRIDES, bootstrap3_root, bootstrap3_sources
from .assets.concat import concat_files
from .assets.stylesheets import LessCompiler
from .core.models import (
    BOOTSTRAP3_TOKEN,
    CopyRequest,
    CssMinifyResult,
    JsMinifyResult,
    MinifyRequest,
    ScssOptions,
    ScssResult,
    TemplateJob,
    TemplateResult,
)
from .core.paths import resolve_under
from .errors import DependencyUnavailable
from .rendering import engine
from .settings import BuildSettings

logger = logging.getLogger(__name__)


class Build:
    """Asset build operations sharing immutable source/dist settings.

    Args:
        settings: Complete settings; when omitted they are built from
            ``overrides`` plus ``SITEBUILD_*`` environment variables
        less_compiler: Less compiler for the Bootstrap 3 bundle; resolved
            at runtime when omitted
        **overrides: Individual settings such as ``src``, ``dist`` or
            ``file_encoding``
    """

    def __init__(
        self,
        settings: Optional[BuildSettings] = None,
        *,
        less_compiler: Optional[LessCompiler] = None,
        **overrides: Any,
    ) -> None:
        if settings is not None and overrides:
            settings = BuildSettings(**{**settings.model_dump(), **overrides})
        self._settings = settings or BuildSettings(**overrides)
        self._less_compiler = less_compiler
        self._env = engine.create_environment(
            self._settings.src, strict=self._settings.strict_templates
        )

    @property
    def settings(self) -> BuildSettings:
        return self._settings

    def resolve_source(self, path: Union[str, Path]) -> Path:
        return resolve_under(path, self._settings.src)

    def resolve_target(self, path: Union[str, Path]) -> Path:
        return resolve_under(path, self._settings.dist)

    async def build_bootstrap3(self) -> str:
        """Compile the curated Bootstrap 3 components to CSS.

        Returns an empty string, after logging a notice, when Bootstrap 3 or
        the Less compiler is not installed.
        """
        root = bootstrap3_root(self._settings.vendor_root)
        if not root.is_dir():
            logger.warning(f"No Bootstrap 3 installation found at {root}")
            return ""

        content = await self.concat_files(bootstrap3_sources(root))
        content += BOOTSTRAP3_OVERRIDES

        try:
            compiler = self._less_compiler or stylesheets.load_less_compiler()
        except DependencyUnavailable as e:
            logger.warning(str(e))
            return ""

        css = await stylesheets.compile_less(compiler, content, str(root / "_.less"))
        logger.debug(f"Compiled Bootstrap 3 ({len(css)} characters)")
        return css

    async def compile_scss(
        self, options: Optional[ScssOptions] = None, **kwargs: Any
    ) -> ScssResult:
        options = options or ScssOptions(**kwargs)
        return await stylesheets.compile_scss(
            options, self._settings.file_encoding, self._settings.scss_delay
        )

    async def concat_files(
        self,
        files: Iterable[Union[str, Path]],
        dist_path: Optional[Union[str, Path]] = None,
    ) -> str:
        """Join ``files`` with newlines; ``"bootstrap3"`` expands to the bundle.

        A missing file aborts the call before anything is written.
        """
        return await concat_files(
            files,
            Path(dist_path) if dist_path is not None else None,
            encoding=self._settings.file_encoding,
            mode=self._settings.file_mode,
            bundles={BOOTSTRAP3_TOKEN: self.build_bootstrap3},
        )

    def minify_js(
        self,
        content: Optional[str] = None,
        src_path: Optional[Union[str, Path]] = None,
        dist_path: Optional[Union[str, Path]] = None,
    ) -> JsMinifyResult:
        request = MinifyRequest(content=content, src_path=src_path, dist_path=dist_path)
        return minify.minify_js(
            request, self._settings.file_encoding, self._settings.file_mode
        )

    def minify_css(
        self,
        content: Optional[str] = None,
        src_path: Optional[Union[str, Path]] = None,
        dist_path: Optional[Union[str, Path]] = None,
    ) -> CssMinifyResult:
        request = MinifyRequest(content=content, src_path=src_path, dist_path=dist_path)
        return minify.minify_css(
            request, self._settings.file_encoding, self._settings.file_mode
        )

    def copy_assets(
        self,
        sources: Union[str, Path, Iterable[Union[str, Path]]],
        dist: Union[str, Path],
    ) -> list[Path]:
        if not isinstance(sources, (str, Path)):
            sources = list(sources)
        return copier.copy_assets(CopyRequest(sources=sources, dist=dist))

    async def render_template(
        self,
        source: Union[str, Path],
        target: Union[str, Path],
        data: Optional[Mapping[str, Any]] = None,
    ) -> TemplateResult:
        return await engine.render_template(
            self._settings, self._env, Path(source), Path(target), data or {}
        )

    async def render_templates(
        self,
        jobs: Iterable[Union[TemplateJob, Mapping[str, Any]]],
        data: Optional[Mapping[str, Any]] = None,
    ) -> list[TemplateResult]:
        """Render ``jobs`` sequentially; the first failure stops the batch."""
        return await engine.render_templates(
            self._settings,
            self._env,
            (TemplateJob.model_validate(job) for job in jobs),
            data or {},
        )
