"""Lexical analyzer (tokenizer) for UHMLX markup.

Converts source text into a list of tokens terminated by an ``EOF`` token.
Recognition order matters: expression blocks, directives, strings, symbols,
then the identifier class.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum, auto
from typing import List, Optional, Union

from ..errors import UhmlxSyntaxError, UnexpectedCharacterError, UnterminatedExpressionError

EXPRESSION_OPEN = "{{"
EXPRESSION_CLOSE = "}}"

SYMBOLS = frozenset("{}()=,")

# Identifiers cover qualified names: local:Name, Border.Background, #Component, x-y
_IDENTIFIER_CHARS = re.compile(r"[A-Za-z0-9_#.:\-]")
_DIRECTIVE_CHARS = re.compile(r"[A-Za-z0-9]")
_NUMBER_FORBIDDEN = (":", "#", ".", "-")


class TokenType(Enum):
    """Token types for UHMLX source."""

    IDENTIFIER = auto()
    STRING = auto()
    NUMBER = auto()
    SYMBOL = auto()
    DIRECTIVE = auto()
    EXPRESSION = auto()
    EOF = auto()


@dataclass(frozen=True)
class Token:
    """A single token with its source offset."""

    type: TokenType
    value: str
    pos: int

    def __repr__(self) -> str:
        return f"Token({self.type.name}, {self.value!r}, @{self.pos})"


def parse_number(text: str) -> Optional[Union[int, float]]:
    """Return the numeric value of ``text`` or ``None`` when it is not a finite number."""
    candidate = text.strip()
    if not candidate or "_" in candidate:
        return None
    try:
        return int(candidate)
    except ValueError:
        pass
    try:
        return int(candidate, 0)
    except ValueError:
        pass
    try:
        number = float(candidate)
    except ValueError:
        return None
    if number != number or number in (float("inf"), float("-inf")):
        return None
    return number


def is_number_literal(text: str) -> bool:
    if any(marker in text for marker in _NUMBER_FORBIDDEN):
        return False
    return parse_number(text) is not None


class Lexer:
    """Tokenizer for UHMLX source text."""

    def __init__(self, source: str, path: str = ""):
        self.source = source
        self.path = path
        self.pos = 0
        self.tokens: List[Token] = []

    def peek(self, offset: int = 0) -> Optional[str]:
        pos = self.pos + offset
        if pos < len(self.source):
            return self.source[pos]
        return None

    def add_token(self, token_type: TokenType, value: str, start: int) -> None:
        self.tokens.append(Token(type=token_type, value=value, pos=start))

    def read_expression(self) -> None:
        start = self.pos
        end = self.source.find(EXPRESSION_CLOSE, start)
        if end == -1:
            raise UnterminatedExpressionError(
                f"Unclosed expression {EXPRESSION_OPEN}",
                path=self.path or None,
                offset=start,
                hint=f"Close the block with '{EXPRESSION_CLOSE}'",
            )
        end += len(EXPRESSION_CLOSE)
        self.add_token(TokenType.EXPRESSION, self.source[start:end], start)
        self.pos = end

    def read_directive(self) -> None:
        start = self.pos
        self.pos += 1  # @
        while self.peek() is not None and _DIRECTIVE_CHARS.match(self.peek()):
            self.pos += 1
        self.add_token(TokenType.DIRECTIVE, self.source[start:self.pos], start)

    def read_string(self) -> None:
        """Read a double-quoted string; a backslash keeps itself and the next character."""
        start = self.pos
        self.pos += 1  # opening quote
        chars = []
        while True:
            char = self.peek()
            if char is None:
                raise UhmlxSyntaxError(
                    "Unterminated string literal",
                    path=self.path or None,
                    offset=start,
                )
            if char == '"':
                self.pos += 1
                break
            if char == "\\":
                chars.append(char)
                self.pos += 1
                char = self.peek()
                if char is None:
                    continue
            chars.append(char)
            self.pos += 1
        self.add_token(TokenType.STRING, "".join(chars), start)

    def read_identifier(self) -> None:
        start = self.pos
        while self.peek() is not None and _IDENTIFIER_CHARS.match(self.peek()):
            self.pos += 1
        value = self.source[start:self.pos]
        token_type = TokenType.NUMBER if is_number_literal(value) else TokenType.IDENTIFIER
        self.add_token(token_type, value, start)

    def tokenize(self) -> List[Token]:
        """Tokenize the entire source from scratch."""
        self.pos = 0
        self.tokens = []
        while self.pos < len(self.source):
            char = self.source[self.pos]

            if char.isspace():
                self.pos += 1
                continue

            if self.source.startswith(EXPRESSION_OPEN, self.pos):
                self.read_expression()
                continue

            if char == "@":
                self.read_directive()
                continue

            if char == '"':
                self.read_string()
                continue

            if char in SYMBOLS:
                self.add_token(TokenType.SYMBOL, char, self.pos)
                self.pos += 1
                continue

            if _IDENTIFIER_CHARS.match(char):
                self.read_identifier()
                continue

            raise UnexpectedCharacterError(char, self.pos, path=self.path or None)

        self.add_token(TokenType.EOF, "", self.pos)
        return self.tokens


def tokenize(source: str, path: str = "") -> List[Token]:
    """Convenience wrapper returning the token list for ``source``."""
    return Lexer(source, path).tokenize()


__all__ = [
    "EXPRESSION_OPEN",
    "EXPRESSION_CLOSE",
    "TokenType",
    "Token",
    "Lexer",
    "tokenize",
    "parse_number",
    "is_number_literal",
]
