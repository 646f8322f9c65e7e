"""Main CLI application."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any, Callable, Optional

import typer
from pydantic import ValidationError
from typing_extensions import Annotated

from ..build import Build
from ..core.models import ScssOptions, TemplateJob
from ..errors import BuildError
from ..manifest import load_manifest, run_manifest
from ..rendering.io import atomic_write_text
from .parsers import load_data_file, parse_assignment, parse_render

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="sitebuild",
    help="Render templates, bundle, minify and copy static site assets.",
)


def _execute(action: Callable[[], Any]) -> Any:
    """Run ``action``, turning build failures into a non-zero exit."""
    try:
        return action()
    except ValidationError as e:
        raise typer.BadParameter(str(e)) from e
    except BuildError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1) from e


def _write_output(build: Build, out: Optional[str], text: str) -> None:
    if out:
        atomic_write_text(
            Path(out), text, build.settings.file_encoding, build.settings.file_mode
        )
        logger.info(f"Wrote {out}")
    else:
        typer.echo(text)


@app.callback()
def configure(
    ctx: typer.Context,
    src: Annotated[
        str,
        typer.Option("--src", help="Source root (default: ./src).", metavar="DIR"),
    ] = "",
    dist: Annotated[
        str,
        typer.Option("--dist", help="Distribution root (default: ./dist).", metavar="DIR"),
    ] = "",
    encoding: Annotated[
        str,
        typer.Option("--encoding", help="Text encoding (default: utf-8)."),
    ] = "",
    vendor_root: Annotated[
        str,
        typer.Option(
            "--vendor-root",
            help="Directory holding third-party sources (default: ./node_modules).",
            metavar="DIR",
        ),
    ] = "",
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable verbose logging."),
    ] = False,
) -> None:
    """Configure roots and logging shared by every command."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="[%(levelname)s] %(message)s",
    )

    overrides = {
        key: value
        for key, value in (
            ("src", src),
            ("dist", dist),
            ("file_encoding", encoding),
            ("vendor_root", vendor_root),
        )
        if value
    }
    ctx.obj = Build(**overrides)
    logger.debug(f"Settings: {ctx.obj.settings!r}")


@app.command()
def render(
    ctx: typer.Context,
    renders: Annotated[
        list[str],
        typer.Option(
            "--render",
            help="Render SOURCE to TARGET (format: SOURCE=TARGET). Repeatable.",
            metavar="SOURCE=TARGET",
        ),
    ],
    data_file: Annotated[
        str,
        typer.Option("--data", help="YAML or JSON file with template data.", metavar="FILE"),
    ] = "",
    assignments: Annotated[
        list[str],
        typer.Option("--set", help="Template value KEY=VALUE. Repeatable.", metavar="KEY=VALUE"),
    ] = [],
) -> None:
    """Render templates from the source root into the distribution root."""
    build: Build = ctx.obj
    data = load_data_file(Path(data_file)) if data_file else {}
    data.update(parse_assignment(value) for value in assignments)
    jobs = [
        TemplateJob(source=source, target=target)
        for source, target in map(parse_render, renders)
    ]

    results = _execute(lambda: asyncio.run(build.render_templates(jobs, data)))
    logger.debug(f"Completed: {len(results)} file(s) rendered")


@app.command()
def concat(
    ctx: typer.Context,
    files: Annotated[
        list[str],
        typer.Argument(help="Files to join in order; 'bootstrap3' expands to the bundle."),
    ],
    out: Annotated[
        str,
        typer.Option("--out", help="Output file (default: stdout).", metavar="PATH"),
    ] = "",
) -> None:
    """Concatenate files with newlines."""
    build: Build = ctx.obj
    content = _execute(lambda: asyncio.run(build.concat_files(files, out or None)))
    if not out:
        typer.echo(content)


@app.command("minify-js")
def minify_js(
    ctx: typer.Context,
    src_path: Annotated[str, typer.Argument(help="JavaScript source file.")],
    out: Annotated[
        str,
        typer.Option("--out", help="Output file (default: stdout).", metavar="PATH"),
    ] = "",
) -> None:
    """Minify a JavaScript file."""
    build: Build = ctx.obj
    result = _execute(lambda: build.minify_js(src_path=src_path, dist_path=out or None))
    if not out:
        typer.echo(result.code)


@app.command("minify-css")
def minify_css(
    ctx: typer.Context,
    src_path: Annotated[str, typer.Argument(help="CSS source file.")],
    out: Annotated[
        str,
        typer.Option("--out", help="Output file (default: stdout).", metavar="PATH"),
    ] = "",
) -> None:
    """Minify a CSS file."""
    build: Build = ctx.obj
    result = _execute(lambda: build.minify_css(src_path=src_path, dist_path=out or None))
    if not out:
        typer.echo(result.styles)


@app.command()
def scss(
    ctx: typer.Context,
    file: Annotated[str, typer.Argument(help="Sass/SCSS entry file.")],
    out: Annotated[
        str,
        typer.Option("--out", help="Output CSS file (default: stdout).", metavar="PATH"),
    ] = "",
    style: Annotated[
        str,
        typer.Option("--style", help="nested, expanded, compact or compressed."),
    ] = "compressed",
    source_map: Annotated[
        bool,
        typer.Option("--source-map", help="Write OUT.map next to the output."),
    ] = False,
) -> None:
    """Compile a Sass/SCSS file to CSS."""
    build: Build = ctx.obj
    if source_map and not out:
        raise typer.BadParameter("--source-map requires --out", param_hint="--source-map")

    def compile_file() -> Any:
        options = ScssOptions(
            file=file,
            output_style=style,
            out_file=out or None,
            source_map=source_map,
        )
        return asyncio.run(build.compile_scss(options))

    result = _execute(compile_file)
    _execute(lambda: _write_output(build, out, result.css))
    if out and result.source_map is not None:
        _execute(lambda: _write_output(build, f"{out}.map", result.source_map))


@app.command()
def copy(
    ctx: typer.Context,
    sources: Annotated[list[str], typer.Argument(help="Files or directories to copy.")],
    dist: Annotated[
        str,
        typer.Option("--dist", help="Destination directory.", metavar="DIR"),
    ],
) -> None:
    """Copy files and directory trees into a destination directory."""
    build: Build = ctx.obj
    copied = _execute(lambda: build.copy_assets(sources, dist))
    logger.debug(f"Completed: {len(copied)} asset(s) copied")


@app.command()
def bootstrap3(
    ctx: typer.Context,
    out: Annotated[
        str,
        typer.Option("--out", help="Output CSS file (default: stdout).", metavar="PATH"),
    ] = "",
) -> None:
    """Build the Bootstrap 3 stylesheet bundle."""
    build: Build = ctx.obj
    css = _execute(lambda: asyncio.run(build.build_bootstrap3()))
    if not css:
        logger.info("Bootstrap 3 bundle skipped")
        return
    _execute(lambda: _write_output(build, out, css))


@app.command()
def run(
    ctx: typer.Context,
    manifest_path: Annotated[str, typer.Argument(help="YAML build manifest.", metavar="MANIFEST")],
) -> None:
    """Run the steps of a YAML build manifest in order."""
    build: Build = ctx.obj

    def run_steps() -> list[Any]:
        manifest = load_manifest(Path(manifest_path), build.settings.file_encoding)
        return asyncio.run(run_manifest(manifest, build))

    results = _execute(run_steps)
    logger.info(f"Completed {len(results)} build step(s)")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
