"""JavaScript and CSS minification wrappers."""

from __future__ import annotations

import logging

import rcssmin
import rjsmin

from ..core.models import CssMinifyResult, JsMinifyResult, MinifyRequest
from ..rendering.io import atomic_write_text, read_text

logger = logging.getLogger(__name__)


def _input_text(request: MinifyRequest, encoding: str) -> str:
    if request.content:
        return request.content
    if request.src_path is None:
        raise ValueError("Either content or src_path is required")
    return read_text(request.src_path, encoding)


def minify_js(
    request: MinifyRequest, encoding: str = "utf-8", mode: int = 0o644
) -> JsMinifyResult:
    """Minify JavaScript, dropping comments.

    rjsmin does not emit source maps, so ``source_map`` is always None.
    """
    content = _input_text(request, encoding)
    code = rjsmin.jsmin(content, keep_bang_comments=False)

    if request.dist_path is not None:
        atomic_write_text(request.dist_path, code, encoding, mode)
        logger.info(f"Minified JS → {request.dist_path}")

    return JsMinifyResult(code=code, source_map=None)


def minify_css(
    request: MinifyRequest, encoding: str = "utf-8", mode: int = 0o644
) -> CssMinifyResult:
    content = _input_text(request, encoding)
    styles = rcssmin.cssmin(content)

    if request.dist_path is not None:
        atomic_write_text(request.dist_path, styles, encoding, mode)
        logger.info(f"Minified CSS → {request.dist_path}")

    return CssMinifyResult(styles=styles)
