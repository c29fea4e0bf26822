"""docs-ts: documentation generator for TypeScript modules.

Extracts exported interfaces, type aliases, constants, functions and classes
with their doc-comment metadata, type-checks the embedded examples with
``tsc``, and writes one markdown page per module.

Quick Start:
    >>> from pathlib import Path
    >>> from docs_ts import build, load_config
    >>>
    >>> root = Path(".")
    >>> build(root, load_config(root))
"""

from .config import Config, load_config
from .core import build
from .exceptions import ConfigError, DocsTsError, StageFailedError
from .extractor import get_classes, get_constants, get_functions, get_interfaces, get_module_description, get_type_aliases, parse_module
from .model import Class, Constant, Function, Index, Interface, Method, Module, Node, Tree, TypeAlias
from .source import SourceFile, parse_source
from .tree import build_forest
from .validation import Validation, accumulate

__all__ = [
    "Class",
    "Config",
    "ConfigError",
    "Constant",
    "DocsTsError",
    "Function",
    "Index",
    "Interface",
    "Method",
    "Module",
    "Node",
    "SourceFile",
    "StageFailedError",
    "Tree",
    "TypeAlias",
    "Validation",
    "accumulate",
    "build",
    "build_forest",
    "get_classes",
    "get_constants",
    "get_functions",
    "get_interfaces",
    "get_module_description",
    "get_type_aliases",
    "load_config",
    "parse_module",
    "parse_source",
]
