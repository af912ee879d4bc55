"""Front end of the UHMLX compiler: tokenizer and parser."""

from .lexer import Lexer, Token, TokenType, tokenize
from .parser import UhmlxParser, parse_source

__all__ = [
    "Lexer",
    "Token",
    "TokenType",
    "tokenize",
    "UhmlxParser",
    "parse_source",
]
