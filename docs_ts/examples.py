"""Type-checking of the code examples embedded in doc comments.

Every function and method example becomes a standalone compilation unit.
All units are written to a scratch directory inside the project, so that
the project's node_modules and sources resolve, and checked with a single
``tsc`` run. Every compiler diagnostic is reported.
"""

import json
import os
import re
import shlex
import subprocess
import tempfile
from collections.abc import Iterable
from pathlib import Path, PurePosixPath

from docs_ts.logging import get_docs_logger
from docs_ts.model import Index, Module, Node
from docs_ts.settings import Settings, settings
from docs_ts.validation import Validation

logger = get_docs_logger(__name__)

ASSERT_IMPORT = "import * as assert from 'assert'\n"
SCRATCH_PREFIX = ".docs-ts-examples-"

_DIAGNOSTIC_RE = re.compile(r"^(?P<file>.+?)\((?P<line>\d+),(?P<column>\d+)\): (?P<message>error TS\d+: .*)$")

# Used when the project has no tsconfig.json of its own.
DEFAULT_COMPILER_OPTIONS: dict[str, object] = {
    "strict": True,
    "target": "es2017",
    "module": "commonjs",
    "moduleResolution": "node",
    "esModuleInterop": True,
}


def unit_name(module_path: Iterable[str], entity: str) -> str:
    """Deterministic unit name: one directory per module path segment, then the entity."""
    return str(PurePosixPath(*module_path, f"{entity}.ts"))


def get_examples(nodes: Iterable[Node]) -> dict[str, str]:
    """Map unit name -> unit source for every function, method and static method with an example.

    Instance methods are named ``Class.prototype.method`` and static methods
    ``Class.method``, so no two entities of a module share a unit.
    """
    sources: dict[str, str] = {}
    for node in nodes:
        match node:
            case Index():
                continue
            case Module():
                entities: list[tuple[str, str | None]] = [(function.name, function.example) for function in node.functions]
                for cls in node.classes:
                    entities.extend((f"{cls.name}.prototype.{method.name}", method.example) for method in cls.methods)
                    entities.extend((f"{cls.name}.{method.name}", method.example) for method in cls.static_methods)
                for entity, example in entities:
                    if example:
                        sources[unit_name(node.path, entity)] = ASSERT_IMPORT + example
    return sources


def parse_diagnostics(output: str, scratch_name: str) -> list[str]:
    """Turn ``tsc --pretty false`` output into one message per diagnostic.

    Indented continuation lines are folded into the diagnostic above them, and
    paths inside the scratch directory are reported as unit names.
    """
    messages: list[str] = []
    prefix = f"{scratch_name}/"
    for line in output.splitlines():
        if not line.strip():
            continue
        if line.startswith((" ", "\t")) and messages:
            messages[-1] = f"{messages[-1]}\n{line.strip()}"
            continue
        found = _DIAGNOSTIC_RE.match(line.strip())
        if found:
            file = found.group("file").replace("\\", "/").removeprefix("./").removeprefix(prefix)
            messages.append(f"{file}({found.group('line')},{found.group('column')}): {found.group('message')}")
        else:
            messages.append(line.strip())
    return messages


def _compiler_config(project_dir: Path, scratch: Path, units: Iterable[str], config: Settings) -> dict[str, object]:
    project_config = project_dir / config.tsconfig
    compiler_options: dict[str, object] = {"noEmit": True, "rootDir": os.path.relpath(project_dir, scratch).replace(os.sep, "/")}
    tsconfig: dict[str, object] = {"files": sorted(units), "include": []}
    if project_config.is_file():
        tsconfig["extends"] = os.path.relpath(project_config, scratch).replace(os.sep, "/")
    else:
        compiler_options = {**DEFAULT_COMPILER_OPTIONS, **compiler_options}
    tsconfig["compilerOptions"] = compiler_options
    return tsconfig


def check_sources(sources: dict[str, str], project_dir: Path, config: Settings = settings) -> list[str]:
    """Compile the units together and return every diagnostic (empty when they all type-check)."""
    command = shlex.split(config.tsc_command)
    project_dir = project_dir.resolve()
    try:
        with tempfile.TemporaryDirectory(prefix=SCRATCH_PREFIX, dir=project_dir) as tmp:
            scratch = Path(tmp)
            for name, source in sources.items():
                target = scratch / name
                target.parent.mkdir(parents=True, exist_ok=True)
                target.write_text(source, encoding="utf-8")
            tsconfig = scratch / "tsconfig.json"
            tsconfig.write_text(json.dumps(_compiler_config(project_dir, scratch, sources, config), indent=2), encoding="utf-8")

            args = [*command, "--project", str(tsconfig.relative_to(project_dir)), "--pretty", "false"]
            logger.debug("Running %s", " ".join(args))
            try:
                result = subprocess.run(args, cwd=project_dir, capture_output=True, text=True, check=False)
            except OSError as e:
                return [f"Cannot run {config.tsc_command}: {e}"]
    except OSError as e:
        return [f"Cannot write examples to {project_dir}: {e}"]

    diagnostics = parse_diagnostics(result.stdout + result.stderr, scratch.name)
    if result.returncode != 0 and not diagnostics:
        diagnostics = [f"{config.tsc_command} exited with status {result.returncode}"]
    return diagnostics


def check_examples(nodes: Iterable[Node], project_dir: Path, config: Settings = settings) -> Validation[None]:
    """Type-check all embedded examples; any diagnostic fails the whole check."""
    sources = get_examples(nodes)
    if not sources:
        logger.info("No examples to check")
        return Validation.success(None)

    logger.info("Type-checking %d examples", len(sources))
    failures = check_sources(sources, project_dir, config)
    if failures:
        return Validation.failure(failures)
    return Validation.success(None)
