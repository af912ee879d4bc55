"""Code generators for resolved UHMLX trees."""

from .xaml import XamlGenerator, format_value

__all__ = ["XamlGenerator", "format_value"]
