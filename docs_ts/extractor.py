"""Declaration extraction from TypeScript syntax trees.

One extractor per declaration kind. Each returns a Validation so that a
problem in one kind (an anonymous class, say) never hides the others;
parse_module runs them all and accumulates every error of the file.

Only exported top-level declarations are documented. Anything whose doc
comment carries ``@internal`` is skipped, as are private class members.
"""

from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, replace
from pathlib import Path

from tree_sitter import Node

from docs_ts.doc_comment import EMPTY, DocComment, is_doc_block, is_file_comment, parse_doc_comment
from docs_ts.model import Class, Constant, Function, Index, Interface, Method, Module, Node as DocNode, TypeAlias
from docs_ts.source import SourceFile, parse_source
from docs_ts.validation import Validation, accumulate

_DECLARATION_MODIFIERS = frozenset({"default", "declare", "async", "abstract"})
# Tokens that may follow ``function`` / ``class`` where a name belongs.
_NAMELESS_AFTER = {
    "function": frozenset({"(", "<", ""}),
    "class": frozenset({"{", "<", "extends", "implements", ""}),
}
_FUNCTION_DECLARATIONS = frozenset({"function_declaration", "generator_function_declaration"})
_FUNCTION_VALUES = frozenset({"function_expression", "function", "generator_function"})
_CLASS_DECLARATIONS = frozenset({"class_declaration", "abstract_class_declaration"})
_METHOD_MEMBERS = frozenset({"method_definition", "method_signature", "abstract_method_signature"})
_HIDDEN_MODIFIERS = frozenset({"private", "protected", "get", "set"})


@dataclass(frozen=True)
class _Declaration:
    """An exported top-level declaration.

    ``statement`` is the enclosing ``export`` statement, where signature
    text starts; ``node`` is the declaration itself.
    """

    statement: Node
    node: Node
    doc: DocComment | None

    @property
    def internal(self) -> bool:
        return self.doc is not None and self.doc.internal


@dataclass(frozen=True)
class _Signature:
    """One declaration of a (possibly overloaded) callable."""

    key: tuple[bool, str]
    name: str
    text: str
    has_body: bool
    doc: DocComment | None


def doc_block(comments: Iterable[str]) -> str | None:
    """The doc comment among a node's leading comments: the last ``/** */`` block that is not a ``@file`` block."""
    for comment in reversed(list(comments)):
        if is_doc_block(comment) and not is_file_comment(comment):
            return comment
    return None


def _doc(source: SourceFile, node: Node) -> DocComment | None:
    block = doc_block(source.comments_before(node))
    return parse_doc_comment(block) if block else None


def _exported(source: SourceFile) -> Iterator[_Declaration]:
    for statement in source.statements:
        if statement.type != "export_statement":
            continue
        node = statement.child_by_field_name("declaration")
        if node is not None and node.type == "ambient_declaration":
            node = next((child for child in node.named_children if child.type != "comment"), None)
        if node is None:
            continue
        declaration = _Declaration(statement=statement, node=node, doc=_doc(source, statement))
        if not declaration.internal:
            yield declaration


def _name(source: SourceFile, node: Node) -> str | None:
    name = node.child_by_field_name("name")
    if name is None or name.is_missing:
        return None
    return source.text_of(name) or None


def _metadata(doc: DocComment | None) -> dict:
    return (doc or EMPTY).documentable()


def _text(source: SourceFile, node: Node) -> str:
    """Node text without the terminating semicolon."""
    return source.text_of(node).rstrip().removesuffix(";").rstrip()


def _head(source: SourceFile, start: Node, body: Node) -> str:
    """Text from ``start`` up to ``body``, with the body collapsed."""
    return f"{source.slice(start.start_byte, body.start_byte).rstrip()} {{ ... }}"


def _child(node: Node, kind: str) -> Node | None:
    return next((child for child in node.children if child.type == kind), None)


def _const_declarator(declaration: _Declaration) -> Node | None:
    """First declarator of an exported ``const``; None for anything else."""
    node = declaration.node
    if node.type != "lexical_declaration" or not node.children or node.children[0].type != "const":
        return None
    return _child(node, "variable_declarator")


def _function_value(source: SourceFile, declaration: _Declaration, declarator: Node) -> str | None:
    """Signature of a ``const`` bound to an arrow function or function expression, else None."""
    value = declarator.child_by_field_name("value")
    if value is None:
        return None
    if value.type == "arrow_function":
        arrow = _child(value, "=>")
        if arrow is None:
            return None
        return f"{source.slice(declaration.statement.start_byte, arrow.end_byte)} ..."
    if value.type in _FUNCTION_VALUES:
        body = value.child_by_field_name("body")
        if body is None:
            return None
        return _head(source, declaration.statement, body)
    return None


def _nameless(source: SourceFile, keyword: str) -> int:
    """Count exported ``function`` or ``class`` declarations without a name.

    Works on the token stream, since such declarations are syntax errors and
    their shape in the tree depends on how the parser recovered.
    """
    tokens = source.tokens()
    count = 0
    for index, token in enumerate(tokens):
        if token != "export":
            continue
        position = index + 1
        while position < len(tokens) and tokens[position] in _DECLARATION_MODIFIERS:
            position += 1
        if position >= len(tokens) or tokens[position] != keyword:
            continue
        position += 1
        if keyword == "function" and position < len(tokens) and tokens[position] == "*":
            position += 1
        following = tokens[position] if position < len(tokens) else ""
        if following in _NAMELESS_AFTER[keyword]:
            count += 1
    return count


# ---------------------------------------------------------------------------
# Overload groups
# ---------------------------------------------------------------------------


def merge_overloads(signatures: Iterable[_Signature]) -> list[tuple[_Signature, ...]]:
    """Group consecutive declarations sharing a key; a declaration with a body closes its group."""
    groups: list[list[_Signature]] = []
    open_group = False
    for signature in signatures:
        if open_group and groups[-1][-1].key == signature.key:
            groups[-1].append(signature)
        else:
            groups.append([signature])
        open_group = not signature.has_body
    return [tuple(group) for group in groups]


def _group_doc(group: tuple[_Signature, ...]) -> DocComment | None:
    implementation = group[-1]
    if implementation.has_body and implementation.doc is not None:
        return implementation.doc
    return next((signature.doc for signature in group if signature.doc is not None), None)


def _is_internal(group: tuple[_Signature, ...]) -> bool:
    return any(signature.doc is not None and signature.doc.internal for signature in group)


# ---------------------------------------------------------------------------
# Extractors
# ---------------------------------------------------------------------------


def get_interfaces(source: SourceFile) -> Validation[tuple[Interface, ...]]:
    interfaces = [
        Interface(name=name, signature=_text(source, declaration.statement), **_metadata(declaration.doc))
        for declaration in _exported(source)
        if declaration.node.type == "interface_declaration" and (name := _name(source, declaration.node))
    ]
    return Validation.success(tuple(interfaces))


def get_type_aliases(source: SourceFile) -> Validation[tuple[TypeAlias, ...]]:
    aliases = [
        TypeAlias(name=name, signature=_text(source, declaration.statement), **_metadata(declaration.doc))
        for declaration in _exported(source)
        if declaration.node.type == "type_alias_declaration" and (name := _name(source, declaration.node))
    ]
    return Validation.success(tuple(aliases))


def get_constants(source: SourceFile) -> Validation[tuple[Constant, ...]]:
    constants: list[Constant] = []
    for declaration in _exported(source):
        declarator = _const_declarator(declaration)
        if declarator is None:
            continue
        name = _name(source, declarator)
        if name is None or _function_value(source, declaration, declarator) is not None:
            continue
        equals = _child(declarator, "=")
        if equals is None:
            signature = _text(source, declaration.statement)
        else:
            signature = f"{source.slice(declaration.statement.start_byte, equals.start_byte).rstrip()} = ..."
        constants.append(Constant(name=name, signature=signature, **_metadata(declaration.doc)))
    return Validation.success(tuple(constants))


def _function_signatures(source: SourceFile) -> Iterator[_Signature]:
    for declaration in _exported(source):
        node = declaration.node
        if node.type in _FUNCTION_DECLARATIONS or node.type == "function_signature":
            name = _name(source, node)
            if name is None:
                continue
            body = node.child_by_field_name("body")
            if body is None:
                text, has_body = _text(source, declaration.statement), False
            else:
                text, has_body = _head(source, declaration.statement, body), True
        else:
            declarator = _const_declarator(declaration)
            if declarator is None or (name := _name(source, declarator)) is None:
                continue
            value = _function_value(source, declaration, declarator)
            if value is None:
                continue
            text, has_body = value, True
        yield _Signature(key=(False, name), name=name, text=text, has_body=has_body, doc=declaration.doc)


def get_functions(module_name: str, source: SourceFile) -> Validation[tuple[Function, ...]]:
    if missing := _nameless(source, "function"):
        return Validation.failure([f"Missing function name in module {module_name}"] * missing)
    functions = [
        Function(name=group[0].name, signatures=tuple(signature.text for signature in group), **_metadata(_group_doc(group)))
        for group in merge_overloads(_function_signatures(source))
        if not _is_internal(group)
    ]
    return Validation.success(tuple(functions))


def get_classes(module_name: str, source: SourceFile) -> Validation[tuple[Class, ...]]:
    if missing := _nameless(source, "class"):
        return Validation.failure([f"Missing class name in module {module_name}"] * missing)
    classes = [
        _extract_class(source, name, declaration)
        for declaration in _exported(source)
        if declaration.node.type in _CLASS_DECLARATIONS and (name := _name(source, declaration.node))
    ]
    return Validation.success(tuple(classes))


def _extract_class(source: SourceFile, name: str, declaration: _Declaration) -> Class:
    body = declaration.node.child_by_field_name("body")
    if body is None:
        return Class(name=name, signature=_text(source, declaration.statement), **_metadata(declaration.doc))

    constructors: list[tuple[str, bool]] = []
    signatures: list[_Signature] = []
    for member in body.named_children:
        if member.type not in _METHOD_MEMBERS:
            continue
        found = _member_signature(source, member)
        if found is None:
            continue
        if found.name == "constructor" and not found.key[0]:
            constructors.append((found.text, found.has_body))
        else:
            signatures.append(found)

    methods: list[Method] = []
    static_methods: list[Method] = []
    for group in merge_overloads(signatures):
        if _is_internal(group):
            continue
        method = Method(name=group[0].name, signatures=tuple(signature.text for signature in group), **_metadata(_group_doc(group)))
        (static_methods if group[0].key[0] else methods).append(method)

    header = source.slice(declaration.statement.start_byte, body.start_byte).rstrip()
    implemented = [text for text, has_body in constructors if has_body]
    constructor = implemented[0] if implemented else (constructors[0][0] if constructors else None)
    if constructor is None:
        signature = f"{header} {{\n  ... \n}}"
    else:
        signature = f"{header} {{\n  {constructor}\n  ... \n}}"
    return Class(
        name=name,
        signature=signature,
        methods=tuple(methods),
        static_methods=tuple(static_methods),
        **_metadata(declaration.doc),
    )


def _member_signature(source: SourceFile, member: Node) -> _Signature | None:
    """Signature of a public method or constructor; None for accessors and private members."""
    name = member.child_by_field_name("name")
    if name is None or name.is_missing or name.type == "private_property_identifier":
        return None
    modifiers = {
        source.text_of(child) if child.type == "accessibility_modifier" else child.type
        for child in member.children
        if child.end_byte <= name.start_byte
    }
    if modifiers & _HIDDEN_MODIFIERS:
        return None

    body = member.child_by_field_name("body")
    if member.type == "method_definition" and body is not None:
        text, has_body = _head(source, member, body), True
    else:
        text, has_body = _text(source, member), False
    method_name = source.text_of(name).strip("'\"")
    return _Signature(key=("static" in modifiers, method_name), name=method_name, text=text, has_body=has_body, doc=_doc(source, member))


def get_module_description(source: SourceFile) -> str | None:
    """Description from the first ``@file`` block preceding the first statement."""
    for comment in source.leading_comments:
        if is_file_comment(comment):
            return parse_doc_comment(comment).file
    return None

# ---------------------------------------------------------------------------
# Module assembly
# ---------------------------------------------------------------------------


def _enforcement_errors(module: Module, module_name: str, enforce_descriptions: bool, enforce_examples: bool) -> list[str]:
    entities = [
        *(("interface", entity) for entity in module.interfaces),
        *(("type alias", entity) for entity in module.type_aliases),
        *(("constant", entity) for entity in module.constants),
        *(("function", entity) for entity in module.functions),
        *(("class", entity) for entity in module.classes),
    ]
    errors: list[str] = []
    for kind, entity in entities:
        if enforce_descriptions and not entity.description:
            errors.append(f"Missing description for {kind} {entity.name} in module {module_name}")
        if enforce_examples and not entity.example:
            errors.append(f"Missing example for {kind} {entity.name} in module {module_name}")
    return errors


def parse_module(
    module: Module,
    source: SourceFile,
    *,
    enforce_descriptions: bool = False,
    enforce_examples: bool = False,
) -> Validation[Module]:
    """Run every extractor over one file, accumulating all failures."""
    module_name = "/".join(module.path)
    interfaces = get_interfaces(source)
    type_aliases = get_type_aliases(source)
    constants = get_constants(source)
    functions = get_functions(module_name, source)
    classes = get_classes(module_name, source)

    combined = accumulate([interfaces, type_aliases, constants, functions, classes])
    if not combined.is_success:
        return Validation.failure(combined.errors)

    parsed = replace(
        module,
        description=get_module_description(source),
        interfaces=interfaces.value,
        type_aliases=type_aliases.value,
        constants=constants.value,
        functions=functions.value,
        classes=classes.value,
    )
    errors = _enforcement_errors(parsed, module_name, enforce_descriptions, enforce_examples)
    if errors:
        return Validation.failure(errors)
    return Validation.success(parsed)


def read_source(root: Path, module: Module) -> SourceFile:
    path = root.joinpath(*module.path)
    return parse_source(path.name, path.read_text(encoding="utf-8"))


def parse_node(
    node: DocNode,
    read: Callable[[Module], SourceFile],
    *,
    enforce_descriptions: bool = False,
    enforce_examples: bool = False,
) -> Validation[DocNode]:
    match node:
        case Index():
            return Validation.success(node)
        case Module():
            try:
                source = read(node)
            except (OSError, UnicodeDecodeError) as e:
                return Validation.failure([f"Cannot read file {'/'.join(node.path)}: {e}"])
            return parse_module(node, source, enforce_descriptions=enforce_descriptions, enforce_examples=enforce_examples)
