from pathlib import Path
from typing import Callable, List, NamedTuple, Optional, Union

from tskt.errors import TranslationError
from tskt.escaping import IdentifierEscaper
from tskt.logger import logger
from tskt.models import (
    ANY,
    ARRAY,
    CallSignature,
    Declaration,
    DeclarationError,
    DeclarationKind,
    TranslatedFile,
    TypeAnnotation,
)
from tskt.params import ParameterTranslator
from tskt.parsers import parse_file, parse_source
from tskt.settings import Grammar, TranslatorSettings
from tskt.signatures import SignatureAssembler
from tskt.syntax import (
    SyntaxKind,
    SyntaxList,
    SyntaxNode,
    contains_plain,
    iterate_separated,
    map_plain,
)
from tskt.typenames import TypeNameResolver, declared_type


class _Scope(NamedTuple):
    path: str
    errors: List[DeclarationError]
    qualifier: Optional[str] = None  # enclosing namespace, dotted


Handler = Callable[[SyntaxNode, _Scope], List[Declaration]]

_WRAPPERS = ("export_statement", "ambient_declaration", "expression_statement")
_HIDDEN_VISIBILITY = ("private", "protected")


class DeclarationTranslator:
    """
    Walks the statements of a declaration file and translates the ones with a
    Kotlin counterpart: functions, variables, interfaces, classes and
    namespaces.

    A declaration that cannot be represented is reported in
    ``TranslatedFile.errors`` and skipped; the rest of the file (or of the
    enclosing namespace) is still translated.
    """

    def __init__(self, settings: Optional[TranslatorSettings] = None) -> None:
        self.settings = settings or TranslatorSettings()
        self.escaper = IdentifierEscaper(self.settings)
        self.resolver = TypeNameResolver()
        self.params = ParameterTranslator(
            self.settings, resolver=self.resolver, escaper=self.escaper
        )
        self.signatures = SignatureAssembler(self.settings, params=self.params)
        self._handlers: dict[str, Handler] = {
            "export_statement": self._handle_export,
            "ambient_declaration": self._handle_ambient,
            "expression_statement": self._handle_expression,
            "function_signature": self._handle_function,
            "function_declaration": self._handle_function,
            "lexical_declaration": self._handle_variables,
            "variable_declaration": self._handle_variables,
            "interface_declaration": self._handle_interface,
            "class_declaration": self._handle_class,
            "abstract_class_declaration": self._handle_class,
            "internal_module": self._handle_namespace,
            "module": self._handle_namespace,
        }

    def translate_source(
        self, source: Union[str, bytes], path: str = "<memory>"
    ) -> TranslatedFile:
        root = parse_source(source, self.settings.grammar)
        return self.translate_tree(root, path)

    def translate_file(self, path: Union[str, Path]) -> TranslatedFile:
        grammar = Grammar.TSX if Path(path).suffix == ".tsx" else self.settings.grammar
        root = parse_file(path, grammar)
        return self.translate_tree(root, str(path))

    def translate_tree(self, root: SyntaxNode, path: str) -> TranslatedFile:
        result = TranslatedFile(path=path)
        scope = _Scope(path=path, errors=result.errors)
        result.declarations.extend(self._scan(root.named_children(), scope))
        return result

    def _scan(self, statements: SyntaxList, scope: _Scope) -> List[Declaration]:
        out: List[Declaration] = []
        for child in statements.payloads():
            try:
                out.extend(self._process_node(child, scope))
            except TranslationError as ex:
                name_node = _declared_name(child)
                logger.warning(
                    "Skipping declaration that cannot be translated",
                    path=scope.path,
                    namespace=scope.qualifier,
                    node_type=child.type,
                    line=child.line,
                    error=str(ex),
                )
                scope.errors.append(
                    DeclarationError(
                        name=name_node.text if name_node is not None else None,
                        node_type=child.type,
                        line=ex.line or child.line,
                        error=str(ex),
                    )
                )
        return out

    def _process_node(self, node: SyntaxNode, scope: _Scope) -> List[Declaration]:
        handler = self._handlers.get(node.type)
        if handler is None:
            logger.debug(
                "Skipping untranslated node",
                node_type=node.type,
                line=node.line,
                raw=node.text[:200],
            )
            return []
        return handler(node, scope)

    # --- handlers ---------------------------------------------------
    def _handle_export(self, node: SyntaxNode, scope: _Scope) -> List[Declaration]:
        inner = node.field("declaration")
        if inner is None:
            logger.debug("Skipping export without declaration", line=node.line)
            return []
        return self._process_node(inner, scope)

    def _handle_ambient(self, node: SyntaxNode, scope: _Scope) -> List[Declaration]:
        out: List[Declaration] = []
        for decls in map_plain(
            node.named_children(), lambda c: self._process_node(c, scope)
        ):
            out.extend(decls)
        return out

    def _handle_expression(
        self, node: SyntaxNode, scope: _Scope
    ) -> List[Declaration]:
        # a bare `namespace Foo { ... }` statement parses as an expression
        inner = node.first_named()
        if inner is None or inner.type != "internal_module":
            logger.debug("Skipping expression statement", line=node.line)
            return []
        return self._handle_namespace(inner, scope)

    def _handle_namespace(self, node: SyntaxNode, scope: _Scope) -> List[Declaration]:
        name_node = node.field("name")
        body = node.field("body")
        if name_node is None or body is None:
            return []
        if name_node.kind == SyntaxKind.STRING:
            logger.debug(
                "Skipping external module declaration",
                module=name_node.text,
                line=node.line,
            )
            return []

        name = name_node.text
        qualified = f"{scope.qualifier}.{name}" if scope.qualifier else name
        members = self._scan(body.named_children(), scope._replace(qualifier=qualified))

        own = [m for m in members if m.kind != DeclarationKind.NAMESPACE]
        nested = [m for m in members if m.kind == DeclarationKind.NAMESPACE]
        namespace = Declaration(
            kind=DeclarationKind.NAMESPACE,
            name=qualified,
            line=node.line,
            members=own,
        )
        return [namespace, *nested]

    def _handle_function(self, node: SyntaxNode, scope: _Scope) -> List[Declaration]:
        name_node = node.field("name")
        if name_node is None:
            return []
        return [
            Declaration(
                kind=DeclarationKind.FUNCTION,
                name=self.escaper.name_text(name_node),
                line=node.line,
                signature=self.signatures.assemble(node),
            )
        ]

    def _handle_variables(self, node: SyntaxNode, scope: _Scope) -> List[Declaration]:
        is_var = not contains_plain(node.children(), "const", lambda c: c.type)
        declarators = node.separated("var", "let", "const", ";")

        out: List[Declaration] = []
        for decl in iterate_separated(declarators, SyntaxKind.VARIABLE_DECLARATOR):
            name_node = decl.field("name")
            if name_node is None:
                continue
            out.append(
                Declaration(
                    kind=DeclarationKind.VARIABLE,
                    name=self.escaper.name_text(name_node),
                    line=decl.line,
                    type=self._annotation(decl),
                    is_var=is_var,
                )
            )
        return out

    def _handle_interface(self, node: SyntaxNode, scope: _Scope) -> List[Declaration]:
        return self._container(
            node, DeclarationKind.INTERFACE, self._interface_member
        )

    def _handle_class(self, node: SyntaxNode, scope: _Scope) -> List[Declaration]:
        return self._container(node, DeclarationKind.CLASS, self._class_member)

    def _container(
        self,
        node: SyntaxNode,
        kind: DeclarationKind,
        translate_member: Callable[[SyntaxNode], Optional[Declaration]],
    ) -> List[Declaration]:
        name_node = node.field("name")
        if name_node is None:
            return []
        tp_node = node.field("type_parameters")
        body = node.field("body")
        members: List[Declaration] = []
        if body is not None:
            for member in map_plain(body.named_children(), translate_member):
                if member is not None:
                    members.append(member)
        return [
            Declaration(
                kind=kind,
                name=self.escaper.name_text(name_node),
                line=node.line,
                type_params=(
                    self.params.translate_type_params(tp_node)
                    if tp_node is not None
                    else None
                ),
                members=members,
            )
        ]

    # --- members ----------------------------------------------------
    def _interface_member(self, node: SyntaxNode) -> Optional[Declaration]:
        name_node = node.field("name")
        if node.type == "method_signature" and name_node is not None:
            return self._method(node, name_node)
        if node.type == "property_signature" and name_node is not None:
            return self._property(node, name_node)
        logger.debug(
            "Skipping untranslated interface member",
            node_type=node.type,
            line=node.line,
        )
        return None

    def _class_member(self, node: SyntaxNode) -> Optional[Declaration]:
        name_node = node.field("name")
        children = node.children()
        if name_node is None or name_node.text == "constructor":
            logger.debug("Skipping class member", node_type=node.type, line=node.line)
            return None
        if contains_plain(children, "static", lambda c: c.type) or any(
            contains_plain(children, v, _visibility) for v in _HIDDEN_VISIBILITY
        ):
            logger.debug(
                "Skipping static or non-public class member",
                name=name_node.text,
                line=node.line,
            )
            return None
        if node.type in (
            "method_signature",
            "method_definition",
            "abstract_method_signature",
        ):
            return self._method(node, name_node)
        if node.type == "public_field_definition":
            return self._property(node, name_node)
        logger.debug(
            "Skipping untranslated class member",
            node_type=node.type,
            line=node.line,
        )
        return None

    def _method(self, node: SyntaxNode, name_node: SyntaxNode) -> Declaration:
        signature: CallSignature = self.signatures.assemble(node)
        name = self.escaper.name_text(name_node)
        if not contains_plain(node.children(), "?", lambda c: c.type):
            return Declaration(
                kind=DeclarationKind.METHOD,
                name=name,
                line=node.line,
                signature=signature,
            )

        # `foo?(): R` may be absent: expose it as a nullable function value
        if signature.type_params:
            logger.debug(
                "Dropping type parameters of optional method",
                name=name,
                line=node.line,
            )
        return Declaration(
            kind=DeclarationKind.PROPERTY,
            name=name,
            line=node.line,
            type=TypeAnnotation(
                type_name=_lambda_type(signature),
                is_nullable=True,
                is_lambda=True,
            ),
            is_var=False,
        )

    def _property(self, node: SyntaxNode, name_node: SyntaxNode) -> Declaration:
        children = node.children()
        annotation = self._annotation(node)
        if contains_plain(children, "?", lambda c: c.type):
            annotation = annotation.model_copy(update={"is_nullable": True})
        return Declaration(
            kind=DeclarationKind.PROPERTY,
            name=self.escaper.name_text(name_node),
            line=node.line,
            type=annotation,
            is_var=not contains_plain(children, "readonly", lambda c: c.type),
        )

    def _annotation(self, node: SyntaxNode) -> TypeAnnotation:
        type_node = declared_type(node)
        if type_node is None:
            return TypeAnnotation(type_name=ANY)
        return TypeAnnotation(
            type_name=self.resolver.resolve(type_node),
            is_lambda=type_node.kind == SyntaxKind.FUNCTION_TYPE,
        )


def _visibility(node: SyntaxNode) -> str:
    if node.kind == SyntaxKind.ACCESSIBILITY_MODIFIER:
        return node.text.strip()
    return ""


def _lambda_type(signature: CallSignature) -> str:
    args: List[str] = []
    for param in signature.params:
        name = param.type.type_name
        if param.type.is_vararg:
            name = f"{ARRAY}<{name}>"
        elif param.type.is_nullable:
            name = f"({name})?" if param.type.is_lambda else f"{name}?"
        args.append(name)
    return f"({', '.join(args)}) -> {signature.return_type.type_name}"


def _declared_name(node: SyntaxNode) -> Optional[SyntaxNode]:
    # export / declare wrappers keep the name on the wrapped declaration
    cur: Optional[SyntaxNode] = node
    while cur is not None:
        name = cur.field("name")
        if name is not None:
            return name
        if cur.type not in _WRAPPERS:
            return None
        cur = cur.field("declaration") or cur.first_named()
    return None
