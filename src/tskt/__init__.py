from tskt.declarations import DeclarationTranslator
from tskt.errors import ArrayArityError, RestParameterShapeError, TranslationError
from tskt.escaping import IdentifierEscaper
from tskt.models import (
    CallSignature,
    Declaration,
    DeclarationKind,
    FunParam,
    TranslatedFile,
    TypeAnnotation,
    TypeParam,
)
from tskt.params import ParameterTranslator
from tskt.parsers import parse_file, parse_source
from tskt.settings import TranslatorSettings, load_settings
from tskt.signatures import SignatureAssembler
from tskt.typenames import TypeNameResolver

__all__ = [
    "ArrayArityError",
    "CallSignature",
    "Declaration",
    "DeclarationKind",
    "DeclarationTranslator",
    "FunParam",
    "IdentifierEscaper",
    "ParameterTranslator",
    "RestParameterShapeError",
    "SignatureAssembler",
    "TranslatedFile",
    "TranslationError",
    "TranslatorSettings",
    "TypeAnnotation",
    "TypeNameResolver",
    "TypeParam",
    "load_settings",
    "parse_file",
    "parse_source",
]
