from pathlib import Path
from typing import List, Optional

from tskt.models import (
    ANY,
    UNIT,
    CallSignature,
    Declaration,
    DeclarationKind,
    FunParam,
    TranslatedFile,
    TypeAnnotation,
    TypeParam,
)

DEFINED_EXTERNALLY = "definedExternally"
INDENT = "    "
SECTION_SEPARATOR = "\n\n// " + "-" * 90 + "\n"


def render_type(annotation: TypeAnnotation) -> str:
    name = annotation.type_name
    if not annotation.is_nullable:
        return name
    if annotation.is_lambda:
        return f"({name})?"
    return f"{name}?"


def render_param(param: FunParam) -> str:
    prefix = ""
    if param.type.is_vararg:
        prefix += "vararg "
    if param.is_var:
        prefix += "var "
    out = f"{prefix}{param.name}: {render_type(param.type)}"
    if param.default_value is not None:
        out += f" = {param.default_value}"
    return out


def render_type_params(type_params: Optional[List[TypeParam]]) -> str:
    if not type_params:
        return ""
    parts = [
        f"{tp.name} : {tp.upper_bound}" if tp.upper_bound else tp.name
        for tp in type_params
    ]
    return f"<{', '.join(parts)}>"


def render_signature(
    name: str, signature: CallSignature, *, omit_unit: bool = False
) -> str:
    """
    ``fun <T> name(a: A): R``. With ``omit_unit`` a ``Unit`` return type is
    left implicit, as in interface members.
    """
    tparams = render_type_params(signature.type_params)
    params = ", ".join(render_param(p) for p in signature.params)
    out = f"fun {tparams + ' ' if tparams else ''}{name}({params})"
    ret = render_type(signature.return_type)
    if not (omit_unit and ret == UNIT):
        out += f": {ret}"
    return out


def render_declaration(
    decl: Declaration,
    indent: int = 0,
    container: Optional[DeclarationKind] = None,
) -> str:
    """
    Kotlin text of one declaration. ``container`` is the kind of the
    enclosing declaration: interface members stay abstract, class members
    are ``open`` and defined externally.
    """
    pad = INDENT * indent
    in_class = container == DeclarationKind.CLASS
    modifier = "open " if in_class else ""

    if decl.kind == DeclarationKind.FUNCTION and decl.signature is not None:
        return f"{pad}{render_signature(decl.name, decl.signature)} = {DEFINED_EXTERNALLY}"
    if decl.kind == DeclarationKind.METHOD and decl.signature is not None:
        if in_class:
            sig = render_signature(decl.name, decl.signature)
            return f"{pad}{modifier}{sig} = {DEFINED_EXTERNALLY}"
        return f"{pad}{render_signature(decl.name, decl.signature, omit_unit=True)}"
    if decl.kind in (DeclarationKind.VARIABLE, DeclarationKind.PROPERTY):
        keyword = "var" if decl.is_var else "val"
        type_str = render_type(decl.type) if decl.type is not None else ANY
        out = f"{pad}{modifier}{keyword} {decl.name}: {type_str}"
        if decl.kind == DeclarationKind.VARIABLE or in_class:
            out += f" = {DEFINED_EXTERNALLY}"
        return out
    if decl.kind in (DeclarationKind.INTERFACE, DeclarationKind.CLASS):
        keyword = "interface" if decl.kind == DeclarationKind.INTERFACE else "open class"
        header = f"{pad}{keyword} {decl.name}{render_type_params(decl.type_params)}"
        if not decl.members:
            return header
        body = "\n".join(
            render_declaration(m, indent + 1, decl.kind) for m in decl.members
        )
        return f"{header} {{\n{body}\n{pad}}}"
    if decl.kind == DeclarationKind.NAMESPACE:
        return render_namespace(decl)
    raise ValueError(f"Cannot render declaration of kind {decl.kind}")


def package_name(path: str) -> Optional[str]:
    """``lib.d.ts`` -> ``lib``; None when the file name is not an identifier."""
    name = Path(path).name
    for suffix in (".d.ts", ".d.tsx", ".ts", ".tsx"):
        if name.endswith(suffix):
            name = name[: -len(suffix)]
            break
    return name if name.isidentifier() else None


def render_namespace(namespace: Declaration, package: Optional[str] = None) -> str:
    qualified = f"{package}.{namespace.name}" if package else namespace.name
    lines = [
        f'@file:JsQualifier("{namespace.name}")',
        f"package {qualified}",
        "",
    ]
    lines.extend(render_declaration(m) for m in namespace.members)
    return "\n".join(lines)


def render_file(translated: TranslatedFile) -> str:
    """
    Top-level declarations first, then one ``@file:JsQualifier`` section per
    namespace, sections divided by a ruler comment.
    """
    package = package_name(translated.path)
    top = [
        render_declaration(d)
        for d in translated.declarations
        if d.kind != DeclarationKind.NAMESPACE
    ]
    sections = ["\n".join(top)] if top else []
    sections.extend(
        render_namespace(d, package)
        for d in translated.declarations
        if d.kind == DeclarationKind.NAMESPACE
    )
    return SECTION_SEPARATOR.join(sections)
