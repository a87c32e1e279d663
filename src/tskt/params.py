from typing import List, Optional

from tskt.errors import ArrayArityError, RestParameterShapeError
from tskt.escaping import IdentifierEscaper
from tskt.models import ANY, ARRAY, NULL_DEFAULT, FunParam, TypeAnnotation, TypeParam
from tskt.settings import TranslatorSettings
from tskt.syntax import (
    SyntaxKind,
    SyntaxNode,
    contains_plain,
    map_separated,
)
from tskt.typenames import TypeNameResolver, declared_type


class ParameterTranslator:
    """
    Converts ``required_parameter`` / ``optional_parameter`` nodes into
    ``FunParam`` descriptors and type parameter lists into ``TypeParam``s.
    """

    def __init__(
        self,
        settings: Optional[TranslatorSettings] = None,
        *,
        resolver: Optional[TypeNameResolver] = None,
        escaper: Optional[IdentifierEscaper] = None,
    ) -> None:
        self.settings = settings or TranslatorSettings()
        self.resolver = resolver or TypeNameResolver()
        self.escaper = escaper or IdentifierEscaper(self.settings)

    def translate(self, node: SyntaxNode) -> FunParam:
        children = node.children()
        is_vararg = contains_plain(children, SyntaxKind.REST_PATTERN, lambda c: c.kind)

        original_type = declared_type(node)
        if is_vararg and original_type is not None:
            node_type = self._vararg_element_type(node, original_type)
        else:
            node_type = original_type

        type_name = self.resolver.resolve(node_type) if node_type is not None else ANY
        is_nullable = contains_plain(children, "?", lambda c: c.type)
        is_lambda = node_type is not None and node_type.kind == SyntaxKind.FUNCTION_TYPE
        is_var = contains_plain(
            children, SyntaxKind.ACCESSIBILITY_MODIFIER, lambda c: c.kind
        )

        value = node.field("value")
        default_value = value.full_text if value is not None else None
        if default_value is None and is_nullable:
            default_value = NULL_DEFAULT

        return FunParam(
            name=self._param_name(node),
            type=TypeAnnotation(
                type_name=type_name,
                is_nullable=is_nullable,
                is_lambda=is_lambda,
                is_vararg=is_vararg,
            ),
            default_value=default_value,
            is_var=is_var,
        )

    def translate_list(self, formal_parameters: SyntaxNode) -> List[FunParam]:
        return map_separated(formal_parameters.separated("(", ")"), self.translate)

    def translate_type_params(self, type_parameters: SyntaxNode) -> List[TypeParam]:
        def _type_param(node: SyntaxNode) -> TypeParam:
            name_node = node.field("name")
            name = self.resolver.resolve(name_node) if name_node else node.text
            constraint = node.field("constraint")
            bound_type = constraint.first_named() if constraint is not None else None
            upper_bound = (
                self.resolver.resolve(bound_type) if bound_type is not None else None
            )
            return TypeParam(name=name, upper_bound=upper_bound)

        return map_separated(type_parameters.separated("<", ">"), _type_param)

    def _vararg_element_type(
        self, node: SyntaxNode, original_type: SyntaxNode
    ) -> Optional[SyntaxNode]:
        if original_type.kind == SyntaxKind.ARRAY_TYPE:
            return original_type.first_named()

        if original_type.kind == SyntaxKind.GENERIC_TYPE:
            name_node = original_type.field("name")
            type_args = original_type.field("type_arguments")
            if name_node is not None and name_node.text == ARRAY and type_args:
                args = type_args.separated("<", ">")
                count = args.payload_count()
                if count != 1:
                    raise ArrayArityError(
                        f"Array should have one generic parameter, but have {count}."
                    )
                return next(args.payloads())

        raise RestParameterShapeError(node_type=node.type, line=node.line)

    def _param_name(self, node: SyntaxNode) -> str:
        pattern = node.field("pattern")
        if pattern is None:
            # `this` parameters carry no pattern field
            first = node.first_named()
            return self.escaper.escape(first.text if first is not None else node.text)
        if pattern.kind == SyntaxKind.REST_PATTERN:
            inner = pattern.first_named()
            if inner is not None:
                pattern = inner
        return self.escaper.name_text(pattern)
