"""Documentation model extracted from TypeScript sources.

Every record is frozen; sequences are tuples ordered as in the source file.
A Node is either an Index (a directory) or a Module (a parsed file).
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Interface:
    """Exported interface declaration."""

    name: str
    signature: str
    description: str | None = None
    since: str | None = None
    deprecated: bool = False
    example: str | None = None


@dataclass(frozen=True)
class TypeAlias:
    """Exported type alias declaration."""

    name: str
    signature: str
    description: str | None = None
    since: str | None = None
    deprecated: bool = False
    example: str | None = None


@dataclass(frozen=True)
class Constant:
    """Exported constant; the initializer is elided from the signature."""

    name: str
    signature: str
    description: str | None = None
    since: str | None = None
    deprecated: bool = False
    example: str | None = None


@dataclass(frozen=True)
class Function:
    """Exported function or function-valued constant.

    ``signatures`` has one entry per overload head followed by the
    implementation signature, whose body is collapsed.
    """

    name: str
    signatures: tuple[str, ...]
    description: str | None = None
    since: str | None = None
    deprecated: bool = False
    example: str | None = None


@dataclass(frozen=True)
class Method:
    """Public class method (instance or static), same shape as Function."""

    name: str
    signatures: tuple[str, ...]
    description: str | None = None
    since: str | None = None
    deprecated: bool = False
    example: str | None = None


@dataclass(frozen=True)
class Class:
    """Exported class with its constructor header and public methods."""

    name: str
    signature: str
    methods: tuple[Method, ...] = ()
    static_methods: tuple[Method, ...] = ()
    description: str | None = None
    since: str | None = None
    deprecated: bool = False
    example: str | None = None


@dataclass(frozen=True)
class Index:
    """Directory marker in the source tree."""

    path: tuple[str, ...]


@dataclass(frozen=True)
class Module:
    """Parsed source file. ``path`` starts with the source root directory name."""

    path: tuple[str, ...]
    description: str | None = None
    interfaces: tuple[Interface, ...] = ()
    type_aliases: tuple[TypeAlias, ...] = ()
    constants: tuple[Constant, ...] = ()
    functions: tuple[Function, ...] = ()
    classes: tuple[Class, ...] = ()


type Node = Index | Module


@dataclass(frozen=True)
class Tree:
    """A node and its children."""

    value: Node
    forest: tuple["Tree", ...] = field(default=())
