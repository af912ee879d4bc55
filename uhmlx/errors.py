"""Unified error model for the UHMLX compiler."""

from __future__ import annotations

from typing import List, Optional


class UhmlxError(Exception):
    """Base class for all fatal compiler errors surfaced to users."""

    code: Optional[str] = None
    hint: Optional[str] = None

    def __init__(
        self,
        message: str,
        *,
        path: Optional[str] = None,
        offset: Optional[int] = None,
        code: Optional[str] = None,
        hint: Optional[str] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.path = path
        self.offset = offset
        if code is not None:
            self.code = code
        if hint is not None:
            self.hint = hint

    def format(self) -> str:
        components = [self.message]
        meta_parts = []
        if self.path:
            meta_parts.append(self.path)
        if self.offset is not None:
            meta_parts.append(f"@{self.offset}")
        if self.code:
            meta_parts.append(self.code)
        if meta_parts:
            components[-1] = f"{components[-1]} ({'; '.join(meta_parts)})"
        if self.hint:
            components.append(f"Hint: {self.hint}")
        return " ".join(part for part in components if part)


class UhmlxSyntaxError(UhmlxError):
    """Raised when source text cannot be tokenized or parsed."""

    code = "SYNTAX_ERROR"


class UnterminatedExpressionError(UhmlxSyntaxError):
    """An expression block was opened but never closed."""

    code = "UNTERMINATED_EXPRESSION"


class UnexpectedCharacterError(UhmlxSyntaxError):
    """The lexer met a character no token class accepts."""

    code = "UNEXPECTED_CHARACTER"

    def __init__(self, character: str, offset: int, *, path: Optional[str] = None) -> None:
        super().__init__(
            f"Unexpected character: {character!r} at position {offset}",
            path=path,
            offset=offset,
        )
        self.character = character


class UhmlxParseError(UhmlxSyntaxError):
    """Grammar violation with the expected construct and the token found."""

    code = "PARSE_ERROR"

    def __init__(
        self,
        message: str,
        *,
        expected: Optional[List[str]] = None,
        found: Optional[str] = None,
        offset: Optional[int] = None,
        path: Optional[str] = None,
        hint: Optional[str] = None,
    ) -> None:
        details = []
        if expected:
            details.append(f"expected {' or '.join(expected)}")
        if found is not None:
            details.append(f"got {found!r}")
        if offset is not None:
            details.append(f"at {offset}")
        full = f"{message} ({', '.join(details)})" if details else message
        super().__init__(full, path=path, offset=offset, hint=hint)
        self.expected = list(expected or [])
        self.found = found


class UhmlxLoaderError(UhmlxError):
    """Raised when a component, data, or style reference cannot be loaded."""

    code = "LOADER_ERROR"


class UhmlxCompilationError(UhmlxError):
    """Raised when the pipeline cannot produce any output."""

    code = "COMPILATION_ERROR"


__all__ = [
    "UhmlxError",
    "UhmlxSyntaxError",
    "UnterminatedExpressionError",
    "UnexpectedCharacterError",
    "UhmlxParseError",
    "UhmlxLoaderError",
    "UhmlxCompilationError",
]
