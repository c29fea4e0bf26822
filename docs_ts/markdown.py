"""Markdown rendering of parsed modules for a Jekyll (just-the-docs) site."""

import re

import yaml

from docs_ts.config import Config
from docs_ts.model import Class, Constant, Function, Interface, Method, Module, TypeAlias

INDEX_PAGE = """---
title: Home
nav_order: 0
---

API reference generated by docs-ts.
"""


def header(title: str, order: int) -> str:
    """Jekyll front matter; ``order`` positions the page in the navigation."""
    return f"---\ntitle: {title}\nnav_order: {order}\n---\n\n"


def _slug(text: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", text.lower()).strip("-")


def _code(source: str) -> list[str]:
    return ["```ts", source, "```", ""]


def _documentable(entity: Interface | TypeAlias | Constant | Function | Method | Class) -> list[str]:
    parts: list[str] = []
    if entity.deprecated:
        parts.extend(["**Deprecated**", ""])
    if entity.description:
        parts.extend([entity.description, ""])
    if entity.example:
        parts.extend(["**Example**", "", *_code(entity.example)])
    if entity.since:
        parts.extend([f"Added in v{entity.since}", ""])
    return parts


def _render_entity(title: str, signature: str, entity) -> list[str]:
    return [f"## {title}", "", "**Signature**", "", *_code(signature), *_documentable(entity)]


def _render_class(cls: Class) -> list[str]:
    parts = _render_entity(f"{cls.name} (class)", cls.signature, cls)
    for method in cls.static_methods:
        parts.extend(_render_entity(f"{method.name} (static method)", "\n".join(method.signatures), method))
    for method in cls.methods:
        parts.extend(_render_entity(f"{method.name} (method)", "\n".join(method.signatures), method))
    return parts


def _sections(module: Module) -> list[tuple[str, list[tuple[str, list[str]]]]]:
    return [
        ("Interfaces", [(f"{i.name} (interface)", _render_entity(f"{i.name} (interface)", i.signature, i)) for i in module.interfaces]),
        ("Type aliases", [(f"{t.name} (type alias)", _render_entity(f"{t.name} (type alias)", t.signature, t)) for t in module.type_aliases]),
        ("Classes", [(f"{c.name} (class)", _render_class(c)) for c in module.classes]),
        ("Constants", [(f"{c.name} (constant)", _render_entity(f"{c.name} (constant)", c.signature, c)) for c in module.constants]),
        ("Functions", [(f"{f.name} (function)", _render_entity(f"{f.name} (function)", "\n".join(f.signatures), f)) for f in module.functions]),
    ]


def render_module(module: Module, index: int) -> str:
    """Render one module page. ``index`` is the module's 1-based navigation position."""
    title = "/".join(module.path[1:]) or module.path[-1]
    sections = [(name, entries) for name, entries in _sections(module) if entries]

    parts: list[str] = [header(title, index).rstrip("\n"), ""]
    parts.extend(["# Overview", ""])
    if module.description:
        parts.extend([module.description, ""])

    if sections:
        parts.extend(["---", "", "<h2 class=\"text-delta\">Table of contents</h2>", ""])
        for name, entries in sections:
            parts.append(f"- [{name}](#{_slug(name)})")
            parts.extend(f"  - [{entry}](#{_slug(entry)})" for entry, _ in entries)
        parts.append("")

    for name, entries in sections:
        parts.extend([f"# {name}", ""])
        for _, rendered in entries:
            parts.extend(rendered)

    return "\n".join(parts).rstrip("\n") + "\n"


def render_site_config(config: Config) -> str:
    """Jekyll ``_config.yml`` for the output directory."""
    return yaml.safe_dump({"remote_theme": config.theme, "search_enabled": config.enable_search}, sort_keys=False)
