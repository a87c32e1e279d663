from typing import Optional

from tskt.models import UNIT, CallSignature, TypeAnnotation
from tskt.params import ParameterTranslator
from tskt.settings import TranslatorSettings
from tskt.syntax import SyntaxNode
from tskt.typenames import TypeNameResolver


class SignatureAssembler:
    """
    Builds a ``CallSignature`` from any node exposing the call signature
    fields: ``function_signature``, ``function_declaration``,
    ``method_signature``, ``call_signature`` and friends.
    """

    def __init__(
        self,
        settings: Optional[TranslatorSettings] = None,
        *,
        params: Optional[ParameterTranslator] = None,
    ) -> None:
        self.settings = settings or TranslatorSettings()
        self.params = params or ParameterTranslator(self.settings)
        self.resolver: TypeNameResolver = self.params.resolver

    def assemble(self, node: SyntaxNode) -> CallSignature:
        tp_node = node.field("type_parameters")
        type_params = (
            self.params.translate_type_params(tp_node) if tp_node is not None else None
        )

        params_node = node.field("parameters")
        params = self.params.translate_list(params_node) if params_node else []

        rt_node = node.field("return_type")
        return_type = self.resolver.resolve_annotation(rt_node) if rt_node else UNIT

        return CallSignature(
            params=params,
            type_params=type_params,
            return_type=TypeAnnotation(type_name=return_type),
        )
