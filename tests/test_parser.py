"""Parser tests: AST shape, literal coercion, and grammar errors."""

import logging

import pytest

from uhmlx.ast import Directive, DirectiveArg, Element, Expression, Program, Text
from uhmlx.errors import UhmlxParseError
from uhmlx.lang.parser import UhmlxParser, coerce_literal, parse_source


def test_parse_element_tree() -> None:
    program = parse_source(
        'StackPanel(Orientation="Vertical") {\n'
        '  TextBlock(Text="Hello")\n'
        '  Border { Button }\n'
        '}\n'
    )

    assert isinstance(program, Program)
    assert len(program.body) == 1
    panel = program.body[0]
    assert isinstance(panel, Element)
    assert panel.tag_name == "StackPanel"
    assert panel.properties == {"Orientation": "Vertical"}
    assert [child.tag_name for child in panel.children] == ["TextBlock", "Border"]
    assert panel.children[1].children[0] == Element(tag_name="Button")


def test_property_value_coercion() -> None:
    program = parse_source(
        'Button(Content="Hi", Width="100", Height=20, IsEnabled="true", '
        'Visible=False, Tag={{ item }}, Kind=Primary)'
    )
    button = program.body[0]
    assert button.properties == {
        "Content": "Hi",
        "Width": 100,
        "Height": 20,
        "IsEnabled": True,
        "Visible": False,
        "Tag": "{{ item }}",
        "Kind": "Primary",
    }


def test_coerce_literal_boolean_before_number() -> None:
    assert coerce_literal("TRUE") is True
    assert coerce_literal("false") is False
    assert coerce_literal("1.5") == 1.5
    assert coerce_literal("") == ""
    assert coerce_literal("10,0,0,0") == "10,0,0,0"


def test_text_from_string_and_number_tokens() -> None:
    program = parse_source('TextBlock { "Hello" 42 }')
    children = program.body[0].children
    assert children == [Text(value="Hello"), Text(value="42")]


def test_expression_content_is_stripped() -> None:
    program = parse_source("{{   if user.active  }}{{end if}}")
    assert program.body == [Expression(content="if user.active"), Expression(content="end if")]


def test_resource_directives() -> None:
    program = parse_source(
        '@useComponents { Card "components/Card.uhmlx" Row "components/Row.uhmlx" }\n'
        '@useData { items "data/items.json" }\n'
        '@useStyle { _ "styles/FlowDocument.uhmls" }\n'
        '@props item title\n'
    )
    components, data, style, props = program.body[:4]
    assert components == Directive(
        name="@useComponents",
        args=[
            DirectiveArg("Card", "components/Card.uhmlx"),
            DirectiveArg("Row", "components/Row.uhmlx"),
        ],
    )
    assert data.args == [DirectiveArg("items", "data/items.json")]
    assert style.args == [DirectiveArg("_", "styles/FlowDocument.uhmls")]
    # without braces @props takes no arguments; the identifiers become elements
    assert props == Directive(name="@props", args=[])
    assert [node.tag_name for node in program.body[4:]] == ["item", "title"]


def test_props_directive_with_block() -> None:
    program = parse_source("@props { item title }")
    assert program.body == [Directive(name="@props", args=["item", "title"])]


def test_unknown_directive_body_is_skipped(caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="uhmlx"):
        program = parse_source('@theme { dark "x" 12 } Grid')
    assert program.body[0] == Directive(name="@theme", args=[])
    assert program.body[1] == Element(tag_name="Grid")
    assert "unknown directive" in caplog.text


def test_missing_closing_brace() -> None:
    with pytest.raises(UhmlxParseError) as exc_info:
        parse_source("Grid { Button")
    error = exc_info.value
    assert "Expect '}' after element body" in error.message
    assert error.found == "end of input"


def test_missing_equals_sign() -> None:
    with pytest.raises(UhmlxParseError) as exc_info:
        parse_source('Button(Width "100")')
    error = exc_info.value
    assert "Expect '=' after property name" in error.message
    assert error.found == "100"
    assert error.offset == 13


def test_unexpected_token_at_statement_position() -> None:
    with pytest.raises(UhmlxParseError) as exc_info:
        parse_source("Grid }")
    assert exc_info.value.found == "}"
    assert exc_info.value.offset == 5


def test_directive_value_must_be_string() -> None:
    with pytest.raises(UhmlxParseError) as exc_info:
        parse_source("@useData { items data }")
    assert "@useData" in exc_info.value.message


def test_parser_keeps_path_in_errors() -> None:
    parser = UhmlxParser("Grid(", path="views/Main.uhmlx")
    with pytest.raises(UhmlxParseError) as exc_info:
        parser.parse()
    assert exc_info.value.path == "views/Main.uhmlx"
