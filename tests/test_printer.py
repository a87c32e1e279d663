from tskt.declarations import DeclarationTranslator
from tskt.models import (
    CallSignature,
    Declaration,
    DeclarationKind,
    FunParam,
    TranslatedFile,
    TypeAnnotation,
    TypeParam,
)
from tskt.printer import (
    package_name,
    render_file,
    render_param,
    render_signature,
    render_type,
)

from helpers import SAMPLES_DIR


def test_render_type():
    assert render_type(TypeAnnotation(type_name="String")) == "String"
    assert render_type(TypeAnnotation(type_name="String", is_nullable=True)) == "String?"
    assert (
        render_type(TypeAnnotation(type_name="() -> Unit", is_nullable=True, is_lambda=True))
        == "(() -> Unit)?"
    )


def test_render_param():
    param = FunParam(
        name="xs",
        type=TypeAnnotation(type_name="Number", is_vararg=True),
    )
    assert render_param(param) == "vararg xs: Number"

    param = FunParam(
        name="`val`",
        type=TypeAnnotation(type_name="Any", is_nullable=True),
        default_value="null",
        is_var=True,
    )
    assert render_param(param) == "var `val`: Any? = null"


def test_render_signature():
    sig = CallSignature(
        params=[FunParam(name="a", type=TypeAnnotation(type_name="T"))],
        type_params=[TypeParam(name="T", upper_bound="Node"), TypeParam(name="U")],
        return_type=TypeAnnotation(type_name="Unit"),
    )
    assert render_signature("f", sig) == "fun <T : Node, U> f(a: T): Unit"
    assert render_signature("f", sig, omit_unit=True) == "fun <T : Node, U> f(a: T)"


def test_render_empty_interface():
    decl = Declaration(kind=DeclarationKind.INTERFACE, name="Empty")
    translated = TranslatedFile(path="x.d.ts", declarations=[decl])
    assert render_file(translated) == "interface Empty"


def test_render_sample_file():
    translated = DeclarationTranslator().translate_file(SAMPLES_DIR / "simple.d.ts")
    assert render_file(translated).splitlines() == [
        "interface A {",
        "    fun baz()",
        "    val size: Number",
        "    var label: String?",
        "    fun `is`(cb: (Any) -> Unit): Boolean",
        "}",
        "var c: Number = definedExternally",
        "fun d(a: Boolean, b: Any, c: SomeType): Unit = definedExternally",
        "val VERSION: String = definedExternally",
        "fun <T : Node> later(cb: (Any) -> Unit, vararg rest: T): Boolean = definedExternally",
        "var x: { a: number } = definedExternally",
        "var y: Any = definedExternally",
    ]


def test_render_namespaces_as_qualified_sections():
    translated = DeclarationTranslator().translate_file(
        SAMPLES_DIR / "withNonExportDeclarations.d.ts"
    )
    body = [
        "interface A {",
        "    fun baz()",
        "}",
        "open class B {",
        "    open fun boo(): Unit = definedExternally",
        "}",
        "var c: Number = definedExternally",
        "fun d(a: Boolean, b: Any, c: SomeType): Unit = definedExternally",
    ]
    assert render_file(translated).splitlines() == [
        '@file:JsQualifier("Foo")',
        "package withNonExportDeclarations.Foo",
        "",
        *body,
        "",
        "// " + "-" * 90,
        '@file:JsQualifier("Foo.Bar")',
        "package withNonExportDeclarations.Foo.Bar",
        "",
        *body,
    ]


def test_render_top_level_before_namespaces():
    translated = DeclarationTranslator().translate_source(
        "declare var v: string;\ndeclare namespace N { var w: number; }\n"
    )
    assert render_file(translated).splitlines() == [
        "var v: String = definedExternally",
        "",
        "// " + "-" * 90,
        '@file:JsQualifier("N")',
        "package N",
        "",
        "var w: Number = definedExternally",
    ]


def test_render_class_members():
    translated = DeclarationTranslator().translate_source(
        "declare class Box<T> {\n"
        "    readonly size: number;\n"
        "    open(): void;\n"
        "    onClose?: () => void;\n"
        "}\n"
        "declare class Empty {}\n"
    )
    assert render_file(translated).splitlines() == [
        "open class Box<T> {",
        "    open val size: Number = definedExternally",
        "    open fun open(): Unit = definedExternally",
        "    open var onClose: (() -> Unit)? = definedExternally",
        "}",
        "open class Empty",
    ]


def test_render_optional_method():
    translated = DeclarationTranslator().translate_source(
        "interface Hooks { foo?(): void; }"
    )
    assert render_file(translated).splitlines() == [
        "interface Hooks {",
        "    val foo: (() -> Unit)?",
        "}",
    ]


def test_package_name():
    assert package_name("lib/withNonExportDeclarations.d.ts") == "withNonExportDeclarations"
    assert package_name("api.ts") == "api"
    assert package_name("<memory>") is None
    assert package_name("my-lib.d.ts") is None
