"""Core SQL utilities package."""

from .identifier import qualify_column, quote_identifier
from .parameters import PLACEHOLDER_STYLES, ParameterList, placeholder

__all__ = [
    "quote_identifier",
    "qualify_column",
    "placeholder",
    "ParameterList",
    "PLACEHOLDER_STYLES",
]
