"""Documentation pipeline.

Stages run in order and fail fast: glob resolution -> tree -> parsing ->
example checking -> sort -> render/write. Inside a stage every problem is
collected (all files are parsed even when the first one fails); at the
stage boundary Validation.unwrap raises StageFailedError with all of them,
so later stages never run.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from functools import partial
from pathlib import Path

from docs_ts.config import Config
from docs_ts.examples import check_examples
from docs_ts.extractor import parse_node, read_source
from docs_ts.logging import get_docs_logger
from docs_ts.markdown import INDEX_PAGE, render_module, render_site_config
from docs_ts.model import Index, Module, Node, Tree
from docs_ts.settings import Settings, settings
from docs_ts.tree import build_forest, flatten
from docs_ts.validation import Validation, accumulate

logger = get_docs_logger(__name__)


@dataclass(frozen=True)
class Write:
    """A rendered page waiting to be written."""

    path: Path
    content: str


def resolve_files(root: Path, pattern: str, exclude: Iterable[str] = ()) -> Validation[list[str]]:
    """Sorted forward-slash paths, relative to root, of the files matching pattern and no exclude pattern."""
    try:
        matched = {path for path in root.glob(pattern) if path.is_file()}
        excluded = {path for exclusion in exclude for path in root.glob(exclusion)}
    except (ValueError, NotImplementedError) as e:
        return Validation.failure([f"Invalid pattern {pattern}: {e}"])
    files = sorted(path.relative_to(root).as_posix() for path in matched - excluded)
    if not files:
        return Validation.failure([f"No files found matching {pattern}"])
    return Validation.success(files)


def parse_forest(root: Path, forest: Iterable[Tree], config: Config) -> Validation[list[Node]]:
    """Parse every file of the forest; failures of all files are reported together."""
    read = partial(read_source, root)
    return accumulate(
        parse_node(
            node,
            read,
            enforce_descriptions=config.enforce_descriptions,
            enforce_examples=config.enforce_examples,
        )
        for node in flatten(forest)
    )


def sort_nodes(nodes: Iterable[Node]) -> list[Node]:
    """Stable, case-insensitive sort on the slash-joined path."""
    return sorted(nodes, key=lambda node: "/".join(node.path).lower())


def get_output_path(out_dir: Path, node: Node) -> Path:
    match node:
        case Index():
            return out_dir.joinpath(*node.path[1:], "index.md")
        case Module():
            return out_dir.joinpath(*node.path[1:-1], f"{node.path[-1]}.md")


def plan_writes(nodes: Iterable[Node], out_dir: Path) -> list[Write]:
    """Render every module in order; the 1-based position is the page's navigation order."""
    modules: list[Module] = []
    for node in nodes:
        match node:
            case Index():
                logger.info("Detected directory %s", "/".join(node.path))
            case Module():
                modules.append(node)
    return [Write(get_output_path(out_dir, module), render_module(module, order)) for order, module in enumerate(modules, start=1)]


def site_writes(out_dir: Path, config: Config) -> list[Write]:
    """Jekyll configuration, plus a home page unless the project already has one."""
    writes = [Write(out_dir / "_config.yml", render_site_config(config))]
    if not (out_dir / "index.md").exists():
        writes.append(Write(out_dir / "index.md", INDEX_PAGE))
    return writes


def write_file(write: Write) -> Validation[Path]:
    logger.info("Printing module %s", write.path)
    try:
        write.path.parent.mkdir(parents=True, exist_ok=True)
        write.path.write_text(write.content, encoding="utf-8")
    except OSError as e:
        return Validation.failure([f"Cannot open file {write.path}: {e}"])
    return Validation.success(write.path)


def build(
    root: Path,
    config: Config,
    *,
    pattern: str | None = None,
    out_dir: Path | None = None,
    toolchain: Settings = settings,
) -> list[Path]:
    """Run the whole pipeline and return the written files.

    Raises:
        StageFailedError: carrying every message of the first stage that failed.
    """
    pattern = pattern or f"{config.src_dir}/**/*.ts"
    out_dir = out_dir or root / config.out_dir

    files = resolve_files(root, pattern, config.exclude).unwrap("glob")
    forest = build_forest(files)
    nodes = parse_forest(root, forest, config).unwrap("parse")
    check_examples(nodes, root, toolchain).unwrap("examples")

    writes = plan_writes(sort_nodes(nodes), out_dir) + site_writes(out_dir, config)
    return accumulate(write_file(write) for write in writes).unwrap("write")
