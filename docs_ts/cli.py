"""CLI for generating documentation from TypeScript sources."""

import argparse
import sys
from pathlib import Path

from docs_ts.config import load_config
from docs_ts.core import build
from docs_ts.exceptions import DocsTsError
from docs_ts.logging import setup_logging


def _print_errors(errors: tuple[str, ...]) -> None:
    print("Errors:", file=sys.stderr)
    for error in errors:
        print(error, file=sys.stderr)


def main(argv: list[str] | None = None) -> int:
    """Entry point: generate markdown documentation for the matched files."""
    parser = argparse.ArgumentParser(description="TypeScript documentation generator")
    parser.add_argument("--root", type=Path, default=Path.cwd(), help="Project root (default: current directory)")
    parser.add_argument("--pattern", help="Glob of source files, relative to the root (default: <srcDir>/**/*.ts)")
    parser.add_argument("--out-dir", type=Path, help="Output directory (default: outDir from docs-ts.json)")
    parser.add_argument("--log-level", help="Log level override (DEBUG, INFO, WARNING, ...)")
    args = parser.parse_args(argv)

    setup_logging(level=args.log_level)
    root = args.root.resolve()

    try:
        config = load_config(root)
        written = build(root, config, pattern=args.pattern, out_dir=args.out_dir)
    except DocsTsError as e:
        _print_errors(getattr(e, "errors", (str(e),)))
        return 1

    print(f"Generated {len(written)} files")
    return 0


if __name__ == "__main__":
    sys.exit(main())
