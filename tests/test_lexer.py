"""Tokenizer tests for UHMLX source."""

import pytest

from uhmlx.errors import UhmlxSyntaxError, UnexpectedCharacterError, UnterminatedExpressionError
from uhmlx.lang.lexer import Lexer, TokenType, is_number_literal, parse_number, tokenize


def _types(source):
    return [token.type for token in tokenize(source)]


def test_element_with_properties() -> None:
    assert _types('Button(Width=100, Content="Go")') == [
        TokenType.IDENTIFIER,
        TokenType.SYMBOL,
        TokenType.IDENTIFIER,
        TokenType.SYMBOL,
        TokenType.NUMBER,
        TokenType.SYMBOL,
        TokenType.IDENTIFIER,
        TokenType.SYMBOL,
        TokenType.STRING,
        TokenType.SYMBOL,
        TokenType.EOF,
    ]


def test_qualified_names_are_identifiers() -> None:
    tokens = tokenize("local:Card Border.Background #Item x-y")
    assert [token.value for token in tokens[:-1]] == ["local:Card", "Border.Background", "#Item", "x-y"]
    assert all(token.type is TokenType.IDENTIFIER for token in tokens[:-1])


@pytest.mark.parametrize(
    "text, expected",
    [
        ("3", TokenType.NUMBER),
        ("42", TokenType.NUMBER),
        ("1e5", TokenType.NUMBER),
        ("3.5", TokenType.IDENTIFIER),
        ("3:", TokenType.IDENTIFIER),
        ("#3", TokenType.IDENTIFIER),
        ("3-4", TokenType.IDENTIFIER),
        ("abc", TokenType.IDENTIFIER),
    ],
)
def test_number_classification(text, expected) -> None:
    assert tokenize(text)[0].type is expected


def test_expression_block_keeps_delimiters_and_offset() -> None:
    tokens = tokenize('  {{ for item in items }}')
    assert tokens[0].type is TokenType.EXPRESSION
    assert tokens[0].value == "{{ for item in items }}"
    assert tokens[0].pos == 2


def test_expression_is_greedy_to_first_closing_marker() -> None:
    tokens = tokenize("{{ a }} }}")
    assert tokens[0].value == "{{ a }}"
    assert tokens[1].type is TokenType.SYMBOL
    assert tokens[1].value == "}"


def test_directive_token() -> None:
    tokens = tokenize("@useData{")
    assert tokens[0].type is TokenType.DIRECTIVE
    assert tokens[0].value == "@useData"
    assert tokens[1].value == "{"


def test_string_escape_passthrough() -> None:
    tokens = tokenize('"a\\"b"')
    assert tokens[0].type is TokenType.STRING
    assert tokens[0].value == 'a\\"b'


def test_whitespace_is_skipped_and_eof_terminates() -> None:
    tokens = tokenize("\n\t Grid \n")
    assert [token.type for token in tokens] == [TokenType.IDENTIFIER, TokenType.EOF]
    assert tokens[0].pos == 3
    assert tokens[-1].pos == len("\n\t Grid \n")


def test_unterminated_expression() -> None:
    with pytest.raises(UnterminatedExpressionError) as exc_info:
        tokenize("Grid {{ item.Name ")
    assert exc_info.value.offset == 5


def test_unexpected_character() -> None:
    with pytest.raises(UnexpectedCharacterError) as exc_info:
        tokenize("Button ; ")
    assert exc_info.value.character == ";"
    assert exc_info.value.offset == 7
    assert "UNEXPECTED_CHARACTER" in exc_info.value.format()


def test_unterminated_string() -> None:
    with pytest.raises(UhmlxSyntaxError):
        tokenize('Text(Value="oops)')


def test_lexer_restarts_from_scratch() -> None:
    lexer = Lexer("A B")
    first = lexer.tokenize()
    second = lexer.tokenize()
    assert first == second


def test_parse_number_helpers() -> None:
    assert parse_number("12") == 12
    assert parse_number("2.5") == 2.5
    assert parse_number("") is None
    assert parse_number("nan") is None
    assert parse_number("1_000") is None
    assert is_number_literal("7")
    assert not is_number_literal("7.0")
