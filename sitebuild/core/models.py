"""Domain models for build requests and their results."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal, Union

from pydantic import BaseModel, Field, field_validator, model_validator

BOOTSTRAP3_TOKEN = "bootstrap3"

OutputStyle = Literal["nested", "expanded", "compact", "compressed"]


class TemplateJob(BaseModel):
    """A single template rendering job."""

    source: Path = Field(..., description="Template path, relative to or under src")
    target: Path = Field(..., description="Output path, relative to or under dist")
    data: dict[str, Any] = Field(
        default_factory=dict, description="Job-specific data merged over shared data"
    )


class TemplateResult(BaseModel):
    """Rendered template body and where it was written."""

    target_body: str
    target_path: Path


class ConcatRequest(BaseModel):
    """Ordered files to join, optionally persisted to ``dist_path``."""

    files: list[Union[str, Path]] = Field(
        default_factory=list,
        description=f"File paths or the {BOOTSTRAP3_TOKEN!r} bundle token",
    )
    dist_path: Path | None = None


class MinifyRequest(BaseModel):
    """Minifier input; ``content`` takes precedence over ``src_path``."""

    content: str | None = None
    src_path: Path | None = None
    dist_path: Path | None = None

    @model_validator(mode="after")
    def _require_input(self) -> "MinifyRequest":
        if not self.content and self.src_path is None:
            raise ValueError("Either content or src_path is required")
        return self


class JsMinifyResult(BaseModel):
    code: str
    source_map: str | None = None


class CssMinifyResult(BaseModel):
    styles: str


class CopyRequest(BaseModel):
    """Files or directories copied recursively into ``dist``."""

    sources: list[Path] = Field(..., description="Ordered files or directories")
    dist: Path

    @field_validator("sources", mode="before")
    @classmethod
    def _listify(cls, value: Any) -> Any:
        if isinstance(value, (str, Path)):
            return [value]
        return value


class ScssOptions(BaseModel):
    """Options for a single Sass/SCSS compilation."""

    file: Path | None = None
    data: str | None = None
    output_style: OutputStyle = "compressed"
    out_file: Path | None = None
    source_map: bool = False
    source_map_contents: bool = False

    @model_validator(mode="after")
    def _exactly_one_source(self) -> "ScssOptions":
        if (self.file is None) == (self.data is None):
            raise ValueError("Exactly one of file or data is required")
        if self.source_map and self.file is None:
            raise ValueError("Source maps are only available for file input")
        return self


class ScssResult(BaseModel):
    css: str
    source_map: str | None = None
