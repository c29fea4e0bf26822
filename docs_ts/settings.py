"""Toolchain settings for docs-ts.

Settings are loaded from environment variables (``DOCS_TS_`` prefix) with
.env file support via pydantic-settings, and are frozen after creation.

Environment variables:
    DOCS_TS_TSC_COMMAND: command used to type-check examples (default "tsc",
        e.g. "npx tsc")
    DOCS_TS_TSCONFIG: project compiler configuration that example units
        extend, relative to the project root (default "tsconfig.json")
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Compiler settings used by the example checker."""

    model_config = SettingsConfigDict(
        env_prefix="DOCS_TS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    tsc_command: str = "tsc"
    tsconfig: str = "tsconfig.json"


settings = Settings()
