"""Common test fixtures for docs-ts."""

from pathlib import Path

import pytest

OPTION_TS = """/**
 * @file Optional values
 */

/**
 * @since 1.0.0
 */
export type Option<A> = { _tag: 'None' } | { _tag: 'Some'; value: A }

/**
 * Builds an Option from a nullable value
 * @since 1.0.0
 */
export function fromNullable<A>(a: A | null): Option<A> {
  return a === null ? { _tag: 'None' } : { _tag: 'Some', value: a }
}
"""

INDEX_TS = """/**
 * @since 1.0.0
 */
export const version = '1.0.0'
"""


@pytest.fixture
def project(tmp_path: Path) -> Path:
    """A small TypeScript project without examples, so no compiler run is needed."""
    (tmp_path / "src" / "data").mkdir(parents=True)
    (tmp_path / "src" / "index.ts").write_text(INDEX_TS, encoding="utf-8")
    (tmp_path / "src" / "data" / "option.ts").write_text(OPTION_TS, encoding="utf-8")
    return tmp_path


@pytest.fixture
def no_compiler(monkeypatch: pytest.MonkeyPatch) -> None:
    """Fail the test if anything tries to run the TypeScript compiler."""

    def run(*args, **kwargs):
        raise AssertionError("tsc must not run")

    monkeypatch.setattr("docs_ts.examples.subprocess.run", run)
