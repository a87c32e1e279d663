from typing import Callable, List, NamedTuple, Optional, Sequence, Tuple, Union

from tskt.logger import logger
from tskt.models import ANY, ARRAY, BOOLEAN, NUMBER, STRING, UNIT, TypeName
from tskt.syntax import SyntaxKind, SyntaxNode, map_separated

_KEYWORD_NAMES = {
    SyntaxKind.ANY_KEYWORD: ANY,
    SyntaxKind.NUMBER_KEYWORD: NUMBER,
    SyntaxKind.STRING_KEYWORD: STRING,
    SyntaxKind.BOOLEAN_KEYWORD: BOOLEAN,
    SyntaxKind.VOID_KEYWORD: UNIT,
    # `x is T` narrows at the call site, Kotlin only sees the Boolean result
    SyntaxKind.TYPE_PREDICATE: BOOLEAN,
    SyntaxKind.ASSERTS: UNIT,
}

# An operand is either a node still to resolve or an already known name.
Operand = Union[SyntaxNode, TypeName]
Builder = Callable[[List[TypeName]], TypeName]


class _Combine(NamedTuple):
    builder: Builder
    arity: int


def declared_type(node: SyntaxNode) -> Optional[SyntaxNode]:
    """
    Type written in the ``type`` annotation of a parameter, declarator or
    property signature, if any.
    """
    annotation = node.field("type")
    if annotation is None:
        return None
    if annotation.kind == SyntaxKind.TYPE_ANNOTATION:
        return annotation.first_named()
    return annotation


class TypeNameResolver:
    """
    Maps TypeScript type nodes to Kotlin type names.

    Composite types are evaluated with an explicit work stack: every node is
    either resolved on the spot (keywords, passthrough text) or expanded into
    operands plus a builder that combines the operand names once they are all
    known. Nesting depth is therefore not limited by the interpreter stack.
    """

    def resolve(self, node: SyntaxNode) -> TypeName:
        results: List[TypeName] = []
        work: List[Union[Operand, _Combine]] = [node]

        while work:
            item = work.pop()
            if isinstance(item, _Combine):
                args = results[len(results) - item.arity :]
                del results[len(results) - item.arity :]
                results.append(item.builder(args))
                continue
            if isinstance(item, str):
                results.append(item)
                continue

            expanded = self._expand(item)
            if isinstance(expanded, str):
                results.append(expanded)
                continue

            operands, builder = expanded
            work.append(_Combine(builder, len(operands)))
            work.extend(reversed(operands))

        return results[0]

    def resolve_annotation(self, annotation: SyntaxNode) -> TypeName:
        """
        Resolve the type wrapped by an annotation node: ``: T``,
        ``: x is T`` or ``: asserts x``.
        """
        if annotation.kind != SyntaxKind.TYPE_ANNOTATION:
            return self.resolve(annotation)
        inner = annotation.first_named()
        if inner is None:
            return ANY
        return self.resolve(inner)

    def _expand(
        self, node: SyntaxNode
    ) -> Union[TypeName, Tuple[Sequence[Operand], Builder]]:
        kind = node.kind

        keyword = _KEYWORD_NAMES.get(kind)
        if keyword is not None:
            return keyword

        if kind == SyntaxKind.ARRAY_TYPE:
            element = node.first_named()
            if element is None:
                return node.full_text
            return [element], lambda args: f"{ARRAY}<{args[0]}>"

        if kind == SyntaxKind.GENERIC_TYPE:
            name_node = node.field("name")
            type_args = node.field("type_arguments")
            if name_node is None or type_args is None:
                return node.full_text
            name = name_node.text
            operands = map_separated(type_args.separated("<", ">"), lambda a: a)
            return operands, lambda args: f"{name}<{', '.join(args)}>"

        if kind == SyntaxKind.FUNCTION_TYPE:
            return self._expand_function_type(node)

        if kind == SyntaxKind.OBJECT_TYPE:
            # inline object literals are not translated structurally
            return node.full_text.strip()

        logger.debug(
            "Unresolved type kind, passing source text through",
            node_type=node.type,
            line=node.line,
        )
        return node.full_text

    def _expand_function_type(
        self, node: SyntaxNode
    ) -> Tuple[Sequence[Operand], Builder]:
        params = node.field("parameters")
        ret = node.field("return_type")

        operands: List[Operand] = []
        if params is not None:
            # Kotlin function types have no varargs: rest parameters keep
            # their declared array type here.
            operands = map_separated(
                params.separated("(", ")"),
                lambda p: declared_type(p) or ANY,
            )
        operands.append(ret if ret is not None else UNIT)

        def combine(args: List[TypeName]) -> TypeName:
            return f"({', '.join(args[:-1])}) -> {args[-1]}"

        return operands, combine
