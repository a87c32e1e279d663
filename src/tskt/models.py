from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class DeclarationKind(str, Enum):
    FUNCTION = "function"
    VARIABLE = "variable"
    INTERFACE = "interface"
    METHOD = "method"
    PROPERTY = "property"
    CLASS = "class"
    NAMESPACE = "namespace"


# Generic types
TypeName = str
SourceFragment = str  # raw expression text, carried forward unparsed

ANY = "Any"
NUMBER = "Number"
STRING = "String"
BOOLEAN = "Boolean"
UNIT = "Unit"
ARRAY = "Array"
NULL_DEFAULT: SourceFragment = "null"


# Kotlin-side descriptors
class TypeAnnotation(BaseModel):
    model_config = ConfigDict(frozen=True)

    type_name: TypeName
    is_nullable: bool = False
    is_lambda: bool = False
    is_vararg: bool = False  # declared as T[] or Array<T> with a spread marker


class FunParam(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str  # already escaped
    type: TypeAnnotation
    default_value: Optional[SourceFragment] = None
    is_var: bool = False  # constructor-property shorthand (public/private/protected)


class TypeParam(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    upper_bound: Optional[TypeName] = None


class CallSignature(BaseModel):
    model_config = ConfigDict(frozen=True)

    params: List[FunParam] = Field(default_factory=list)
    type_params: Optional[List[TypeParam]] = None
    return_type: TypeAnnotation


# Declaration scan results
class Declaration(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: DeclarationKind
    name: str
    line: int = 0

    signature: Optional[CallSignature] = None  # functions and methods
    type: Optional[TypeAnnotation] = None  # variables and properties
    type_params: Optional[List[TypeParam]] = None  # interfaces and classes
    is_var: bool = True  # false for const / readonly
    # interface, class and namespace bodies; nested namespaces are listed
    # as siblings under their qualified name
    members: List["Declaration"] = Field(default_factory=list)


class DeclarationError(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: Optional[str] = None
    node_type: str
    line: int
    error: str


class TranslatedFile(BaseModel):
    path: str
    declarations: List[Declaration] = Field(default_factory=list)
    errors: List[DeclarationError] = Field(default_factory=list)
