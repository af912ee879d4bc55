"""Recursive descent parser for UHMLX markup.

Grammar (one method per production)::

    program    := statement* EOF
    statement  := directive | expression | element | text
    directive  := DIRECTIVE ( "{" directive-body "}" )?
    element    := IDENTIFIER ( "(" ( prop ( "," prop )* )? ")" )? ( "{" statement* "}" )?
    prop       := IDENTIFIER "=" ( STRING | NUMBER | EXPRESSION | IDENTIFIER )
    expression := EXPRESSION
    text       := STRING | NUMBER

The parser never recovers from errors; the first mismatch raises
:class:`~uhmlx.errors.UhmlxParseError`.
"""

from __future__ import annotations

import logging
import re
from typing import List, Optional, Union

from ..ast import Directive, DirectiveArg, Element, Expression, Node, Program, PropertyValue, Text
from ..errors import UhmlxParseError
from .lexer import Token, TokenType, parse_number, tokenize

logger = logging.getLogger(__name__)

RESOURCE_DIRECTIVES = ("@useComponents", "@useData", "@useStyle")
PROPS_DIRECTIVE = "@props"

_EXPRESSION_DELIMITERS = re.compile(r"^\{\{\s*|\s*\}\}$")


def strip_expression_delimiters(raw: str) -> str:
    return _EXPRESSION_DELIMITERS.sub("", raw)


def coerce_literal(raw: str) -> PropertyValue:
    """Booleans first, then numbers; anything else stays a string."""
    lowered = raw.lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    number = parse_number(raw)
    if number is not None:
        return number
    return raw


class UhmlxParser:
    """Parser producing a :class:`~uhmlx.ast.Program` from UHMLX source."""

    def __init__(self, source: str, *, path: str = ""):
        self.source = source
        self.path = path
        self.tokens: List[Token] = tokenize(source, path)
        self.current = 0

    # ------------------------------------------------------------------
    # Token management
    # ------------------------------------------------------------------

    def peek(self) -> Token:
        if self.current < len(self.tokens):
            return self.tokens[self.current]
        return Token(TokenType.EOF, "", -1)

    def previous(self) -> Token:
        if 0 < self.current <= len(self.tokens):
            return self.tokens[self.current - 1]
        return Token(TokenType.EOF, "", -1)

    def is_at_end(self) -> bool:
        return self.peek().type is TokenType.EOF

    def advance(self) -> Token:
        if not self.is_at_end():
            self.current += 1
        return self.previous()

    def check(self, token_type: TokenType, value: Optional[str] = None) -> bool:
        if self.is_at_end():
            return False
        token = self.peek()
        if token.type is not token_type:
            return False
        return value is None or token.value == value

    def match(self, token_type: TokenType, value: Optional[str] = None) -> bool:
        if self.check(token_type, value):
            self.advance()
            return True
        return False

    def consume(self, token_type: TokenType, message: str, value: Optional[str] = None) -> Token:
        if self.check(token_type, value):
            return self.advance()
        raise self.error(message, expected=[repr(value) if value else token_type.name])

    def error(self, message: str, *, expected: Optional[List[str]] = None) -> UhmlxParseError:
        token = self.peek()
        return UhmlxParseError(
            message,
            expected=expected,
            found=token.value if token.type is not TokenType.EOF else "end of input",
            offset=token.pos,
            path=self.path or None,
        )

    # ------------------------------------------------------------------
    # Productions
    # ------------------------------------------------------------------

    def parse(self) -> Program:
        body: List[Node] = []
        while not self.is_at_end():
            body.append(self.parse_statement())
        return Program(body=body)

    def parse_statement(self) -> Node:
        token = self.peek()
        if token.type is TokenType.DIRECTIVE:
            return self.parse_directive()
        if token.type is TokenType.EXPRESSION:
            return self.parse_expression()
        if token.type is TokenType.IDENTIFIER:
            return self.parse_element()
        if token.type in (TokenType.STRING, TokenType.NUMBER):
            return self.parse_text()
        raise self.error(
            f"Unexpected token at statement position ({token.type.name})",
            expected=["directive", "expression", "element", "text"],
        )

    def parse_directive(self) -> Directive:
        name = self.advance().value
        args: List[Union[DirectiveArg, str]] = []

        if self.match(TokenType.SYMBOL, "{"):
            if name in RESOURCE_DIRECTIVES:
                while self.check(TokenType.IDENTIFIER):
                    key = self.advance().value
                    value = self.consume(
                        TokenType.STRING,
                        f'Expect string value (e.g. "path/to/file") after key in {name} block',
                    ).value
                    args.append(DirectiveArg(key=key, value=value))
            elif name == PROPS_DIRECTIVE:
                while self.check(TokenType.IDENTIFIER):
                    args.append(self.advance().value)
            else:
                logger.warning("Encountered unknown directive block: %s. Skipping content.", name)
                while not self.check(TokenType.SYMBOL, "}") and not self.is_at_end():
                    self.advance()
            self.consume(TokenType.SYMBOL, f"Expect '}}' after {name} block", "}")

        return Directive(name=name, args=args)

    def parse_element(self) -> Element:
        tag_name = self.advance().value
        element = Element(tag_name=tag_name)

        if self.match(TokenType.SYMBOL, "("):
            if not self.check(TokenType.SYMBOL, ")"):
                while True:
                    self.parse_property(element)
                    if not self.match(TokenType.SYMBOL, ","):
                        break
            self.consume(TokenType.SYMBOL, "Expect ')' after properties", ")")

        if self.match(TokenType.SYMBOL, "{"):
            while not self.check(TokenType.SYMBOL, "}") and not self.is_at_end():
                element.children.append(self.parse_statement())
            self.consume(TokenType.SYMBOL, "Expect '}' after element body", "}")

        return element

    def parse_property(self, element: Element) -> None:
        key = self.consume(TokenType.IDENTIFIER, "Expect property name").value
        self.consume(TokenType.SYMBOL, "Expect '=' after property name", "=")
        for candidate in (TokenType.STRING, TokenType.NUMBER, TokenType.EXPRESSION, TokenType.IDENTIFIER):
            if self.match(candidate):
                element.properties[key] = coerce_literal(self.previous().value)
                return
        raise self.error(
            f"Expect property value for '{key}'",
            expected=["string", "number", "expression", "identifier"],
        )

    def parse_expression(self) -> Expression:
        token = self.advance()
        return Expression(content=strip_expression_delimiters(token.value))

    def parse_text(self) -> Text:
        return Text(value=self.advance().value)


def parse_source(source: str, *, path: str = "") -> Program:
    """Tokenize and parse ``source`` in one step."""
    return UhmlxParser(source, path=path).parse()


__all__ = [
    "UhmlxParser",
    "parse_source",
    "coerce_literal",
    "strip_expression_delimiters",
    "RESOURCE_DIRECTIVES",
    "PROPS_DIRECTIVE",
]
