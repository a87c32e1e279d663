import pytest

from tskt.escaping import IdentifierEscaper
from tskt.parsers import parse_source
from tskt.settings import TranslatorSettings

from helpers import find_first


@pytest.fixture
def escaper() -> IdentifierEscaper:
    return IdentifierEscaper()


@pytest.mark.parametrize(
    "word",
    ["val", "var", "is", "as", "trait", "package", "object", "when", "type", "fun", "in", "This"],
)
def test_reserved_words_are_quoted(escaper, word):
    assert escaper.escape(word) == f"`{word}`"


def test_marker_character_forces_quoting(escaper):
    assert escaper.escape("x$y") == "`x$y`"
    assert escaper.escape("$") == "`$`"


def test_plain_identifiers_are_unchanged(escaper):
    assert escaper.escape("normalName") == "normalName"
    # matching is case sensitive
    assert escaper.escape("Val") == "Val"
    assert escaper.escape("this") == "this"


def test_unquote_strips_quotes_then_escapes(escaper):
    assert escaper.unquote('"when"') == "`when`"
    assert escaper.unquote("'plain'") == "plain"
    assert escaper.unquote('"a$b"') == "`a$b`"


def test_name_text_handles_quoted_member_names(escaper):
    root = parse_source('interface A { "in"(): void; "foo-bar": string; }')
    method = find_first(root, "method_signature")
    prop = find_first(root, "property_signature")
    assert escaper.name_text(method.field("name")) == "`in`"
    assert escaper.name_text(prop.field("name")) == "foo-bar"


def test_custom_settings():
    settings = TranslatorSettings(
        reserved_words={"data"}, escape_markers={"#"}, quote="`"
    )
    escaper = IdentifierEscaper(settings)
    assert escaper.escape("data") == "`data`"
    assert escaper.escape("val") == "val"
    assert escaper.escape("a#b") == "`a#b`"
    assert escaper.escape("a$b") == "a$b"
