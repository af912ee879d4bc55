"""UHMLX: compile component-oriented UI markup into XAML."""

__version__ = "1.0.0"

from .errors import (
    UhmlxCompilationError,
    UhmlxError,
    UhmlxLoaderError,
    UhmlxParseError,
    UhmlxSyntaxError,
    UnexpectedCharacterError,
    UnterminatedExpressionError,
)
from .lang import UhmlxParser, parse_source, tokenize
from .resolver import ComponentResolver, ResolutionContext
from .codegen import XamlGenerator
from .pipeline import CompilationResult, compile_source

__all__ = [
    "__version__",
    "UhmlxError",
    "UhmlxSyntaxError",
    "UnterminatedExpressionError",
    "UnexpectedCharacterError",
    "UhmlxParseError",
    "UhmlxLoaderError",
    "UhmlxCompilationError",
    "UhmlxParser",
    "parse_source",
    "tokenize",
    "ComponentResolver",
    "ResolutionContext",
    "XamlGenerator",
    "CompilationResult",
    "compile_source",
]
