import pytest

from tskt.errors import ArrayArityError, RestParameterShapeError, TranslationError
from tskt.models import FunParam, TypeAnnotation
from tskt.params import ParameterTranslator
from tskt.parsers import parse_source

from helpers import find_first, param_node, param_nodes


@pytest.fixture
def translator() -> ParameterTranslator:
    return ParameterTranslator()


def test_parameter_list_end_to_end(translator):
    params = [translator.translate(p) for p in param_nodes("a: boolean, b: any, c: SomeType")]

    assert [p.name for p in params] == ["a", "b", "c"]
    assert [p.type.type_name for p in params] == ["Boolean", "Any", "SomeType"]
    assert not any(p.type.is_vararg for p in params)
    assert not any(p.type.is_nullable for p in params)
    assert all(p.default_value is None for p in params)


def test_translate_list(translator):
    root = parse_source("function f(a: number, ...rest: string[]) {}")
    params = translator.translate_list(find_first(root, "formal_parameters"))
    assert params == [
        FunParam(name="a", type=TypeAnnotation(type_name="Number")),
        FunParam(
            name="rest",
            type=TypeAnnotation(type_name="String", is_vararg=True),
        ),
    ]


def test_vararg_array_type(translator):
    param = translator.translate(param_node("...xs: number[]"))
    assert param.name == "xs"
    assert param.type.is_vararg is True
    assert param.type.type_name == "Number"


def test_vararg_array_generic(translator):
    param = translator.translate(param_node("...xs: Array<string>"))
    assert param.type.is_vararg is True
    assert param.type.type_name == "String"


def test_vararg_nested_element_type(translator):
    param = translator.translate(param_node("...xs: Array<number[]>"))
    assert param.type.type_name == "Array<Number>"


def test_vararg_untyped_is_any(translator):
    param = translator.translate(param_node("...args"))
    assert param.type == TypeAnnotation(type_name="Any", is_vararg=True)


def test_vararg_lambda_element(translator):
    param = translator.translate(param_node("...fns: Array<(x: number) => void>"))
    assert param.type.is_lambda is True
    assert param.type.type_name == "(Number) -> Unit"


@pytest.mark.parametrize("src", ["...xs: string", "...xs: Foo<string>", "...xs: { a: number }"])
def test_vararg_with_non_array_type_fails(translator, src):
    with pytest.raises(RestParameterShapeError) as exc_info:
        translator.translate(param_node(src))
    assert str(exc_info.value) == "rest parameter must be an array type"
    assert isinstance(exc_info.value, TranslationError)
    assert exc_info.value.line == 1


def test_array_generic_with_wrong_arity_is_fatal(translator):
    with pytest.raises(ArrayArityError):
        translator.translate(param_node("...xs: Array<string, number>"))


def test_optional_untyped_parameter_defaults_to_null(translator):
    param = translator.translate(param_node("a?"))
    assert param.type.is_nullable is True
    assert param.type.type_name == "Any"
    assert param.default_value == "null"


def test_explicit_default_is_kept_verbatim(translator):
    param = translator.translate(param_node("a: number = 1 + 2"))
    assert param.default_value == "1 + 2"
    assert param.type.is_nullable is False

    param = translator.translate(param_node('a?: string = "x"'))
    assert param.type.is_nullable is True
    assert param.default_value == '"x"'


def test_lambda_parameter(translator):
    param = translator.translate(param_node("cb: (err: any, n: number) => void"))
    assert param.type.is_lambda is True
    assert param.type.type_name == "(Any, Number) -> Unit"


def test_parameter_names_are_escaped(translator):
    assert translator.translate(param_node("val: string")).name == "`val`"
    assert translator.translate(param_node("$el: any")).name == "`$el`"
    assert translator.translate(param_node("...when: number[]")).name == "`when`"


def test_constructor_property_is_var(translator):
    root = parse_source("class A { constructor(public name: string, b: number) {} }")
    params = translator.translate_list(find_first(root, "formal_parameters"))
    assert params[0].is_var is True
    assert params[1].is_var is False


def test_type_params(translator):
    root = parse_source("declare function f<T extends Foo<string>, U>(): void;")
    tps = translator.translate_type_params(find_first(root, "type_parameters"))
    assert [(tp.name, tp.upper_bound) for tp in tps] == [
        ("T", "Foo<String>"),
        ("U", None),
    ]
