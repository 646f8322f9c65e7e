"""Sitebuild - static site and asset build helper.

Renders Jinja2 templates, concatenates and minifies scripts and stylesheets,
compiles Sass (and Bootstrap 3 Less) sources and copies assets into a
distribution directory.
"""

__version__ = "0.1.0"

# Configure logging for library use
import logging

logging.getLogger(__name__).addHandler(logging.NullHandler())

from .build import Build
from .errors import (
    BuildError,
    BuildIOError,
    DependencyUnavailable,
    ManifestError,
    StylesheetCompileError,
    TemplateError,
)
from .settings import BuildSettings

__all__ = [
    "Build",
    "BuildError",
    "BuildIOError",
    "BuildSettings",
    "DependencyUnavailable",
    "ManifestError",
    "StylesheetCompileError",
    "TemplateError",
]
