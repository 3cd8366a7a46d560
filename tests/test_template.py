"""
Tests for the field registry and the spec compiler.
"""

import pytest

from tagsmith.core.exceptions import InvalidField
from tagsmith.core.fields import FIELDS, ValueType, field_for_code, field_for_name
from tagsmith.core.template import CaseMode, LiteralToken, PlaceholderToken, compile_spec


def test_registry_order_and_codes():
    """The registry holds the seven fields in fixed order."""
    assert [(f.code, f.name) for f in FIELDS] == [
        ("l", "album"), ("r", "artist"), ("c", "comment"), ("g", "genre"),
        ("t", "title"), ("n", "track"), ("y", "year"),
    ]
    assert [f.name for f in FIELDS if f.value_type is ValueType.INTEGER] == ["track", "year"]


def test_field_lookup():
    """Letters resolve in either case, names exactly."""
    assert field_for_code("R").name == "artist"
    assert field_for_code("n").name == "track"
    assert field_for_name("year").code == "y"
    with pytest.raises(InvalidField):
        field_for_code("z")
    with pytest.raises(InvalidField):
        field_for_name("composer")


def test_integer_parsing():
    """Integer fields only accept base-10 input."""
    track = field_for_name("track")
    assert track.parse("07") == 7
    assert track.parse(" 12 ") == 12
    for bad in ("", "seven", "0x10", "1.5", "3/12"):
        with pytest.raises(ValueError):
            track.parse(bad)
    assert field_for_name("title").parse("07") == "07"


def test_value_formatting():
    """Track is padded to two digits, year is not, absent values are empty."""
    assert field_for_name("track").format(3) == "03"
    assert field_for_name("track").format(123) == "123"
    assert field_for_name("year").format(2004) == "2004"
    assert field_for_name("year").format(0) == ""
    assert field_for_name("title").format(None) == ""


def test_compile_tokens_in_order():
    """Literals and placeholders come out in source order."""
    spec = compile_spec("%n - %R - %_t")
    assert spec.tokens == (
        PlaceholderToken(field_for_code("n"), "", CaseMode.DOWNCASE),
        LiteralToken(" - "),
        PlaceholderToken(field_for_code("r"), "", CaseMode.PRESERVE),
        LiteralToken(" - "),
        PlaceholderToken(field_for_code("t"), "_", CaseMode.DOWNCASE),
    )
    assert [p.code for p in spec.placeholders()] == ["n", "r", "t"]
    assert spec.source == "%n - %R - %_t"


def test_mode_characters():
    """Any non-alphanumeric character or underscore binds as mode character."""
    tokens = compile_spec("%-n%.T%%y% g").tokens
    assert [(t.code, t.substitute, t.case) for t in tokens] == [
        ("n", "-", CaseMode.DOWNCASE),
        ("t", ".", CaseMode.PRESERVE),
        ("y", "%", CaseMode.DOWNCASE),
        ("g", " ", CaseMode.DOWNCASE),
    ]


def test_percent_without_placeholder_is_literal():
    """A percent sign that does not start a placeholder stays literal."""
    spec = compile_spec("100% %5 %-%t")
    assert spec.tokens == (
        LiteralToken("100% %5 %-"),
        PlaceholderToken(field_for_code("t"), "", CaseMode.DOWNCASE),
    )


def test_trailing_percent_is_literal():
    """A spec ending in % keeps it as text."""
    assert compile_spec("%t%").tokens[-1] == LiteralToken("%")


def test_plain_text_spec():
    """A spec without placeholders is a single literal."""
    spec = compile_spec("cover")
    assert spec.tokens == (LiteralToken("cover"),)
    assert list(spec.placeholders()) == []
    assert compile_spec("").tokens == ()


@pytest.mark.parametrize("spec", ["%z", "%r - %Q", "%_x"])
def test_unknown_letter_fails(spec):
    """An unknown field letter is a compile error, never ignored."""
    with pytest.raises(InvalidField):
        compile_spec(spec)
