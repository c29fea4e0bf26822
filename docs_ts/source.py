"""TypeScript syntax trees.

Sources are parsed with tree-sitter's TypeScript grammar. Node text is
sliced from the UTF-8 source by byte range, and doc comments are the
``comment`` siblings that directly precede a node.
"""

from collections.abc import Iterator
from dataclasses import dataclass
from functools import cache

import tree_sitter_typescript
from tree_sitter import Language, Node, Parser, Tree

TYPESCRIPT = Language(tree_sitter_typescript.language_typescript())


@cache
def get_parser() -> Parser:
    return Parser(TYPESCRIPT)


@dataclass(frozen=True)
class SourceFile:
    """A parsed source file and the bytes its nodes point into."""

    name: str
    data: bytes
    tree: Tree

    @property
    def root(self) -> Node:
        return self.tree.root_node

    @property
    def statements(self) -> tuple[Node, ...]:
        """Top-level statements in source order, comments excluded."""
        return tuple(child for child in self.root.named_children if child.type != "comment")

    @property
    def leading_comments(self) -> tuple[str, ...]:
        """Comments before the first statement (every comment of a file without statements)."""
        comments: list[str] = []
        for child in self.root.children:
            if child.type != "comment":
                break
            comments.append(self.text_of(child))
        return tuple(comments)

    def text_of(self, node: Node) -> str:
        return self.slice(node.start_byte, node.end_byte)

    def slice(self, start: int, end: int) -> str:
        return self.data[start:end].decode("utf-8", errors="replace")

    def comments_before(self, node: Node) -> list[str]:
        """The run of comments directly preceding ``node`` among its siblings, in source order."""
        comments: list[str] = []
        sibling = node.prev_sibling
        while sibling is not None and sibling.type == "comment":
            comments.append(self.text_of(sibling))
            sibling = sibling.prev_sibling
        comments.reverse()
        return comments

    def tokens(self) -> list[str]:
        """Text of every token in source order.

        Comments and tokens the parser inserted while recovering from an
        error (zero-width ``MISSING`` nodes) are left out, so the result is
        the same whether or not a region parsed cleanly.
        """
        return [self.text_of(leaf) for leaf in _leaves(self.root) if leaf.type != "comment" and not leaf.is_missing]


def _leaves(node: Node) -> Iterator[Node]:
    if node.child_count == 0:
        yield node
        return
    for child in node.children:
        yield from _leaves(child)


def parse_source(name: str, text: str) -> SourceFile:
    data = text.encode("utf-8")
    return SourceFile(name=name, data=data, tree=get_parser().parse(data))
