"""
Result mapper.

Maps a ``Result`` into a destination type:

- ``map_scalar``: the single value of the first row
- ``map_one``: the first row as a record (or a scalar when the destination is
  not a record type)
- ``map_all``: every row, in result order

Record fields are matched to result columns by their ``db`` tag (see
``sqlaspect.mapping.binding``). Result columns without a tagged field and
tagged fields without a result column are skipped; a skipped field keeps its
declared default. Untagged fields are never touched, so a record type whose
untagged fields have no default is mapped by passing an instance of it: the
instance serves as a template and keeps its untagged values. Values are
converted to the field annotation with pydantic in lax mode, so e.g. SQLite's
``0``/``1`` become ``bool``.
"""

from __future__ import annotations

import dataclasses
from functools import lru_cache
from typing import Any, Dict, List, Optional, Sequence, Tuple

from pydantic import TypeAdapter, ValidationError

from sqlaspect.exceptions import BindingError, MappingError, NoResultError
from sqlaspect.utils.logging import get_logger

from .binding import Binding, binding_for, is_record_type
from .result import Result

logger = get_logger(__name__)


@lru_cache(maxsize=256)
def _adapter(annotation: Any) -> TypeAdapter:
    return TypeAdapter(annotation)


def _name(destination: Any) -> str:
    return getattr(destination, "__name__", repr(destination))


def convert(value: Any, annotation: Any, column: Optional[str] = None) -> Any:
    """
    Convert a stored value to ``annotation``.

    ``None`` and ``Any`` annotations leave the value untouched.

    Raises:
        MappingError: If the value cannot be converted
    """
    if annotation is None or annotation is Any:
        return value
    try:
        return _adapter(annotation).validate_python(value)
    except ValidationError as e:
        message = e.errors()[0]["msg"] if e.errors() else str(e)
        raise MappingError(
            f"cannot convert {value!r} to {_name(annotation)}: {message}",
            column=column,
        ) from e
    except TypeError as e:
        # unhashable or otherwise unusable annotation
        raise MappingError(
            f"unsupported destination type {_name(annotation)}: {e}", column=column
        ) from e


def _check_destination(destination: Any) -> None:
    if destination is None or not (isinstance(destination, type) or hasattr(destination, "__origin__")):
        raise MappingError(
            "destination must be a type (e.g. int or a dataclass) or a record instance",
            destination=type(destination).__name__ if destination is not None else "None",
        )


def _resolve(destination: Any) -> Tuple[Optional[Binding], Any]:
    """
    Return ``(binding, template)`` for a destination.

    The binding is None for scalar destinations. The template is the record
    instance when one was passed instead of a type.
    """
    if is_record_type(type(destination)):
        template, record_type = destination, type(destination)
    else:
        _check_destination(destination)
        template, record_type = None, destination
    if not is_record_type(record_type):
        return None, None
    try:
        return binding_for(record_type), template
    except BindingError as e:
        raise MappingError(str(e), destination=_name(record_type)) from e


def _column_index(
    columns: Sequence[str], binding: Binding, template: Any = None
) -> List[Tuple[int, Any]]:
    """Pair result column positions with the fields bound to them."""
    tagged = binding.tagged()
    pairs = []
    for index, column in enumerate(columns):
        field = tagged.get(column)
        if field is not None:
            pairs.append((index, field))

    if template is not None:
        # Unbound fields keep the template's values
        return pairs
    present = {field.name for _, field in pairs}
    for field in binding.required():
        if field.name not in present:
            raise MappingError(
                f"field '{field.name}' has no default and no bound result column",
                destination=_name(binding.destination),
            )
    return pairs


def _build_record(
    binding: Binding, pairs: List[Tuple[int, Any]], row: Sequence[Any], template: Any = None
) -> Any:
    kwargs: Dict[str, Any] = {}
    for index, field in pairs:
        kwargs[field.name] = convert(row[index], field.annotation, column=field.tag)
    try:
        if template is None:
            return binding.destination(**kwargs)
        if dataclasses.is_dataclass(template):
            return dataclasses.replace(template, **kwargs)
        return template.model_copy(update=kwargs)
    except (TypeError, ValueError) as e:
        raise MappingError(
            f"cannot construct destination: {e}", destination=_name(binding.destination)
        ) from e


def _single_column(result: Result) -> None:
    if len(result.columns) != 1:
        raise MappingError(
            f"scalar destination requires exactly one result column, got {len(result.columns)}"
        )


def map_scalar(result: Result, type_: Any = None) -> Any:
    """
    Return the only column of the first row.

    Rows after the first are ignored, as in ``map_one``; add ``limit(1)`` to
    the statement when only one row should be fetched.

    Raises:
        NoResultError: If the result has no rows
        MappingError: If the result does not have exactly one column, or the
            value cannot be converted to ``type_``
    """
    _single_column(result)
    row = result.first()
    if row is None:
        raise NoResultError("query returned no rows")
    return convert(row[0], type_, column=result.columns[0])


def map_one(result: Result, destination: Any) -> Any:
    """
    Map the first row of ``result`` into ``destination``.

    Rows after the first are ignored.

    Args:
        result: Tabular result
        destination: A dataclass or pydantic model type, a scalar type, or a
            dataclass/pydantic instance. An instance is used as a template:
            the returned copy has its tagged fields replaced by the row's
            values and every other field left as it was.

    Raises:
        NoResultError: If the result has no rows
        MappingError: If the destination is unsupported or a value cannot be
            converted
    """
    binding, template = _resolve(destination)
    if binding is None:
        return map_scalar(result, destination)

    pairs = _column_index(result.columns, binding, template)
    row = result.first()
    if row is None:
        raise NoResultError("query returned no rows", destination=_name(binding.destination))
    return _build_record(binding, pairs, row, template)


def map_all(result: Result, destination: Any) -> List[Any]:
    """
    Map every row of ``result`` into a new list, preserving row order.

    ``destination`` is handled as in ``map_one``; with a record instance each
    row produces its own copy of it. An empty result gives an empty list.
    """
    binding, template = _resolve(destination)
    if binding is None:
        _single_column(result)
        column = result.columns[0]
        return [convert(row[0], destination, column=column) for row in result.rows]

    pairs = _column_index(result.columns, binding, template)
    items = [_build_record(binding, pairs, row, template) for row in result.rows]
    logger.debug(
        "mapping.rows_mapped",
        destination=_name(binding.destination),
        row_count=len(items),
        bound_columns=len(pairs),
        ignored_columns=len(result.columns) - len(pairs),
    )
    return items


__all__ = ["convert", "map_scalar", "map_one", "map_all"]
