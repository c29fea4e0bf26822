import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from docs_ts.config import CONFIG_FILE, Config, decode, load_config
from docs_ts.exceptions import ConfigError, DocsTsError

# ---------------------------------------------------------------------------
# decode
# ---------------------------------------------------------------------------


def test_decode_full_configuration():
    config = decode(
        {
            "srcDir": "src",
            "outDir": "docs",
            "theme": "pmarsceill/just-the-docs",
            "enableSearch": True,
            "enforceDescriptions": False,
            "enforceExamples": False,
            "exclude": [],
        }
    )
    assert config == Config()


def test_decode_partial_configuration():
    assert decode({}) == Config()
    config = decode({"exclude": ["subdirectory/**/*.ts"]})
    assert config.exclude == ("subdirectory/**/*.ts",)
    assert config.src_dir == "src"


def test_decode_camel_case_keys():
    config = decode({"srcDir": "lib", "outDir": "api", "enforceExamples": True})
    assert (config.src_dir, config.out_dir, config.enforce_examples) == ("lib", "api", True)


def test_decode_invalid_key_type():
    with pytest.raises(ConfigError) as info:
        decode({"srcDir": "src", "theme": 1, "enableSearch": True})
    assert len(info.value.errors) == 1
    assert info.value.errors[0].startswith("theme: ")
    assert "string" in info.value.errors[0]


def test_decode_reports_every_invalid_key():
    with pytest.raises(ConfigError) as info:
        decode({"theme": 1, "unknownKey": True})
    locations = sorted(error.split(":")[0] for error in info.value.errors)
    assert locations == ["theme", "unknownKey"]


def test_config_is_frozen():
    config = Config()
    with pytest.raises(ValidationError):
        config.src_dir = "lib"  # type: ignore[misc]


# ---------------------------------------------------------------------------
# load_config
# ---------------------------------------------------------------------------


def test_load_config_defaults_without_file(tmp_path: Path):
    assert load_config(tmp_path) == Config()


def test_load_config_reads_file(tmp_path: Path):
    (tmp_path / CONFIG_FILE).write_text(json.dumps({"outDir": "site", "enableSearch": False}), encoding="utf-8")
    config = load_config(tmp_path)
    assert config.out_dir == "site"
    assert config.enable_search is False


def test_load_config_invalid_json(tmp_path: Path):
    (tmp_path / CONFIG_FILE).write_text("{ not json", encoding="utf-8")
    with pytest.raises(ConfigError) as info:
        load_config(tmp_path)
    assert info.value.errors[0].startswith("Cannot read ")
    assert isinstance(info.value, DocsTsError)
