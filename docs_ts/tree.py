"""Source tree construction from a flat list of matched file paths."""

from collections.abc import Iterable, Sequence

from docs_ts.model import Index, Module, Node, Tree

type Directory = dict[str, Directory]


def from_paths(paths: Iterable[str]) -> Directory:
    """Fold forward-slash paths into nested dicts; a file maps to an empty dict.

    e.g. ["a/b", "a/c"] -> {"a": {"b": {}, "c": {}}}
    """
    root: Directory = {}
    for path in paths:
        level = root
        for part in path.split("/"):
            level = level.setdefault(part, {})
    return root


def from_dir(directory: Directory, prefix: Sequence[str] = ()) -> tuple[Tree, ...]:
    """Convert nested dicts into a forest of Index (directory) and Module (file) trees."""
    forest: list[Tree] = []
    for name, children in directory.items():
        path = (*prefix, name)
        if children:
            forest.append(Tree(Index(path), from_dir(children, path)))
        else:
            forest.append(Tree(Module(path)))
    return tuple(forest)


def build_forest(paths: Iterable[str]) -> tuple[Tree, ...]:
    return from_dir(from_paths(paths))


def flatten(forest: Iterable[Tree]) -> list[Node]:
    """Depth-first, pre-order list of every node in the forest."""
    nodes: list[Node] = []
    for tree in forest:
        nodes.append(tree.value)
        nodes.extend(flatten(tree.forest))
    return nodes
