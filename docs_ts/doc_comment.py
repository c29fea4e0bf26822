"""Doc-comment (``/** ... */``) parsing.

Recognized tags, at the start of a comment line:
    @since <version>    version the declaration appeared in
    @deprecated         flag
    @example            all following text up to the next tag, verbatim
    @internal           flag; the owning declaration is not documented
    @file <text>        module-level description

Text before the first tag is the description.
"""

import re
from dataclasses import dataclass
from typing import Any

_STAR_LINE_RE = re.compile(r"^\s*\*\s?(.*)$")
_TAG_RE = re.compile(r"^\s*@(?P<tag>[A-Za-z]+)\b\s?(?P<rest>.*)$")
_FILE_TAG_RE = re.compile(r"(^|\s|\*)@file\b")


@dataclass(frozen=True)
class DocComment:
    """Metadata read from one doc-comment block."""

    description: str | None = None
    since: str | None = None
    deprecated: bool = False
    example: str | None = None
    internal: bool = False
    file: str | None = None

    def documentable(self) -> dict[str, Any]:
        """Fields shared by every documented entity, ready for a model constructor."""
        return {
            "description": self.description,
            "since": self.since,
            "deprecated": self.deprecated,
            "example": self.example,
        }


EMPTY = DocComment()


def is_doc_block(comment: str) -> bool:
    """True for ``/** ... */`` blocks; ``/**/`` and plain comments are not documentation."""
    return comment.startswith("/**") and not comment.startswith("/**/")


def is_file_comment(comment: str) -> bool:
    return is_doc_block(comment) and _FILE_TAG_RE.search(comment) is not None


def comment_lines(comment: str) -> list[str]:
    """Strip the comment delimiters and the leading ``*`` of every line.

    Indentation after the ``* `` prefix is kept so example code stays formatted.
    """
    body = comment.removeprefix("/**").removesuffix("*/")
    lines: list[str] = []
    for raw in body.splitlines():
        star = _STAR_LINE_RE.match(raw)
        lines.append(star.group(1).rstrip() if star else raw.strip())
    return _trim_blank(lines)


def parse_doc_comment(comment: str | None) -> DocComment:
    """Parse a raw doc-comment block. ``None`` gives the empty metadata."""
    if comment is None or not is_doc_block(comment):
        return EMPTY

    sections: list[tuple[str, list[str]]] = [("", [])]
    for line in comment_lines(comment):
        tagged = _TAG_RE.match(line)
        if tagged:
            rest = tagged.group("rest").strip()
            sections.append((tagged.group("tag"), [rest] if rest else []))
        else:
            sections[-1][1].append(line)

    fields: dict[str, Any] = {}
    for tag, lines in sections:
        match tag:
            case "":
                fields["description"] = _join(lines)
            case "since":
                fields.setdefault("since", _join(lines))
            case "deprecated":
                fields["deprecated"] = True
            case "example":
                fields.setdefault("example", "\n".join(_trim_blank(lines)) or None)
            case "internal":
                fields["internal"] = True
            case "file":
                fields.setdefault("file", _join(lines))
    return DocComment(**fields)


def _join(lines: list[str]) -> str | None:
    text = "\n".join(line.strip() for line in _trim_blank(lines)).strip()
    return text or None


def _trim_blank(lines: list[str]) -> list[str]:
    start, end = 0, len(lines)
    while start < end and not lines[start].strip():
        start += 1
    while end > start and not lines[end - 1].strip():
        end -= 1
    return lines[start:end]
