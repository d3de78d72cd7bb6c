"""Result mapping: bindings, results and the mapper."""

from .binding import (
    Binding,
    FieldBinding,
    binding_for,
    db_field,
    is_named_tuple,
    is_record_type,
    record_values,
)
from .mapper import convert, map_all, map_one, map_scalar
from .result import Result

__all__ = [
    "Binding",
    "FieldBinding",
    "binding_for",
    "db_field",
    "is_record_type",
    "is_named_tuple",
    "record_values",
    "Result",
    "convert",
    "map_scalar",
    "map_one",
    "map_all",
]
