"""Project configuration read from ``docs-ts.json``.

Every key is optional; camelCase keys match the JSON file, e.g.::

    {
      "srcDir": "src",
      "outDir": "docs",
      "theme": "pmarsceill/just-the-docs",
      "enableSearch": true,
      "enforceDescriptions": false,
      "enforceExamples": false,
      "exclude": ["src/internal/**/*.ts"]
    }
"""

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

from docs_ts.exceptions import ConfigError

CONFIG_FILE = "docs-ts.json"


class Config(BaseModel):
    """Decoded docs-ts.json. Immutable after creation."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid", frozen=True)

    src_dir: str = "src"
    out_dir: str = "docs"
    theme: str = "pmarsceill/just-the-docs"
    enable_search: bool = True
    enforce_descriptions: bool = False
    enforce_examples: bool = False
    exclude: tuple[str, ...] = ()


def decode(data: Any) -> Config:
    """Validate raw JSON data, raising ConfigError with one line per invalid key."""
    try:
        return Config.model_validate(data)
    except ValidationError as e:
        errors = []
        for error in e.errors():
            location = ".".join(str(part) for part in error["loc"]) or "configuration"
            errors.append(f"{location}: {error['msg']}")
        raise ConfigError(errors) from e


def load_config(root: Path) -> Config:
    """Read ``docs-ts.json`` from the project root; defaults when the file does not exist."""
    path = root / CONFIG_FILE
    if not path.exists():
        return Config()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError([f"Cannot read {path}: {e}"]) from e
    return decode(data)
