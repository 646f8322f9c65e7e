from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class BuildSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="SITEBUILD_", case_sensitive=False, frozen=True
    )

    src: Path = Path("./src")
    dist: Path = Path("./dist")
    file_encoding: str = "utf-8"
    vendor_root: Path = Path("./node_modules")
    scss_delay: float = 0.05
    strict_templates: bool = False
    file_mode: int = 0o644
