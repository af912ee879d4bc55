"""Macro resolution: directives, loops, conditionals, components and bindings."""

from .bindings import evaluate_condition, inline_data_binding, is_truthy, lookup_path
from .control import classify_marker, find_conditional_block, find_end_for
from .core import ComponentLoader, ComponentResolver, DataLoader, ResolutionContext

__all__ = [
    "ComponentLoader",
    "ComponentResolver",
    "DataLoader",
    "ResolutionContext",
    "classify_marker",
    "evaluate_condition",
    "find_conditional_block",
    "find_end_for",
    "inline_data_binding",
    "is_truthy",
    "lookup_path",
]
