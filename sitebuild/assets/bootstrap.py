"""Bootstrap 3 stylesheet bundle."""

from __future__ import annotations

from pathlib import Path

# Component order matters: variables and mixins first, utilities last.
BOOTSTRAP3_COMPONENTS: tuple[str, ...] = (
    # Core variables and mixins
    "variables",
    "mixins",
    # Reset and dependencies ("normalize" is not compatible)
    "print",
    "glyphicons",
    # Core CSS ("scaffolding" and "type" are not compatible)
    "code",
    "grid",
    "tables",
    "forms",
    "buttons",
    # Components ("labels" left out)
    "component-animations",
    "dropdowns",
    "button-groups",
    "input-groups",
    "navs",
    "navbar",
    "breadcrumbs",
    "pagination",
    "pager",
    "badges",
    "jumbotron",
    "thumbnails",
    "alerts",
    "progress-bars",
    "media",
    "list-group",
    "panels",
    "responsive-embed",
    "wells",
    "close",
    # Components w/ JavaScript
    "modals",
    "tooltip",
    "popovers",
    "carousel",
    # Utility classes
    "utilities",
    "responsive-utilities",
    "theme",
)

BOOTSTRAP3_OVERRIDES = """
.row * {
  box-sizing: border-box;
}
"""


def bootstrap3_root(vendor_root: Path) -> Path:
    return vendor_root / "bootstrap" / "less"


def bootstrap3_sources(root: Path) -> list[Path]:
    """Paths of the bundled Bootstrap 3 components, in cascade order."""
    return [root / f"{name}.less" for name in BOOTSTRAP3_COMPONENTS]
