"""
Field-to-column bindings for record types.

A record field is bound to a result column through a ``db`` tag:

    >>> @dataclass
    ... class User:
    ...     id: int = db_field("id", default=0)
    ...     name: str = db_field("name", default="")
    ...     contacts: list = field(default_factory=list)   # untagged, ignored

Pydantic models carry the same tag in ``json_schema_extra``:

    >>> class User(BaseModel):
    ...     id: int = Field(0, json_schema_extra={"db": "id"})

Bindings are resolved once per destination type and cached, so a malformed
record type fails the first time it is used rather than on some later row.
"""

from __future__ import annotations

import dataclasses
import typing
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Dict, Mapping, Optional, Tuple

from pydantic import BaseModel

from sqlaspect.exceptions import BindingError

DB_TAG = "db"


def db_field(column: str, **kwargs: Any) -> Any:
    """
    ``dataclasses.field`` carrying a ``db`` column tag.

    Args:
        column: Result/table column name the field binds to
        **kwargs: Passed through to ``dataclasses.field``
    """
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[DB_TAG] = column
    return dataclasses.field(metadata=metadata, **kwargs)


@dataclass(frozen=True)
class FieldBinding:
    """One field of a record type."""

    name: str
    tag: Optional[str]
    annotation: Any
    has_default: bool

    @property
    def column(self) -> str:
        """Column used when writing values: the tag, else the field name."""
        return self.tag or self.name


@dataclass(frozen=True)
class Binding:
    """Resolved fields of a record type, in declaration order."""

    destination: type
    fields: Tuple[FieldBinding, ...]

    def tagged(self) -> Dict[str, FieldBinding]:
        """Tagged fields keyed by column name."""
        return {f.tag: f for f in self.fields if f.tag}

    def required(self) -> Tuple[FieldBinding, ...]:
        """Tagged fields without a default."""
        return tuple(f for f in self.fields if f.tag and not f.has_default)


def is_record_type(destination: Any) -> bool:
    """True for dataclass types and pydantic model types."""
    if not isinstance(destination, type):
        return False
    return dataclasses.is_dataclass(destination) or issubclass(destination, BaseModel)


def is_named_tuple(value: Any) -> bool:
    """True for ``typing.NamedTuple`` / ``collections.namedtuple`` instances."""
    return isinstance(value, tuple) and hasattr(value, "_asdict")


def _dataclass_fields(destination: type) -> Tuple[FieldBinding, ...]:
    try:
        hints = typing.get_type_hints(destination)
    except NameError as e:
        raise BindingError(
            f"cannot resolve field annotations: {e}", destination=destination.__name__
        ) from e

    bindings = []
    for f in dataclasses.fields(destination):
        if not f.init or f.name.startswith("_"):
            continue
        has_default = (
            f.default is not dataclasses.MISSING
            or f.default_factory is not dataclasses.MISSING
        )
        bindings.append(
            FieldBinding(
                name=f.name,
                tag=f.metadata.get(DB_TAG),
                annotation=hints.get(f.name, Any),
                has_default=has_default,
            )
        )
    return tuple(bindings)


def _model_fields(destination: type) -> Tuple[FieldBinding, ...]:
    bindings = []
    for name, info in destination.model_fields.items():
        if name.startswith("_"):
            continue
        extra = info.json_schema_extra
        tag = extra.get(DB_TAG) if isinstance(extra, dict) else None
        bindings.append(
            FieldBinding(
                name=name,
                tag=tag,
                annotation=info.annotation if info.annotation is not None else Any,
                has_default=not info.is_required(),
            )
        )
    return tuple(bindings)


@lru_cache(maxsize=None)
def binding_for(destination: type) -> Binding:
    """
    Resolve (and cache) the binding of a record type.

    Raises:
        BindingError: If the type is not a record type, or two fields are
            tagged with the same column
    """
    if not is_record_type(destination):
        raise BindingError(
            "destination is not a dataclass or pydantic model",
            destination=getattr(destination, "__name__", repr(destination)),
        )

    if dataclasses.is_dataclass(destination):
        fields = _dataclass_fields(destination)
    else:
        fields = _model_fields(destination)

    seen: Dict[str, str] = {}
    for f in fields:
        if not f.tag:
            continue
        if f.tag in seen:
            raise BindingError(
                f"fields '{seen[f.tag]}' and '{f.name}' are both bound to column '{f.tag}'",
                destination=destination.__name__,
            )
        seen[f.tag] = f.name

    return Binding(destination=destination, fields=fields)


def record_values(record: Any) -> Dict[str, Any]:
    """
    Extract ``column -> value`` pairs from a record or mapping.

    Mappings are returned as a plain dict. Dataclass and pydantic instances
    contribute every public field under its tag (or field name when untagged).
    Named tuples contribute their fields by name. Other objects contribute
    their public instance attributes.

    Raises:
        TypeError: If the record has no extractable fields
    """
    if isinstance(record, Mapping):
        return dict(record)

    record_type = type(record)
    if is_record_type(record_type):
        return {f.column: getattr(record, f.name) for f in binding_for(record_type).fields}

    if is_named_tuple(record):
        return dict(record._asdict())

    if hasattr(record, "__dict__") and not isinstance(record, type):
        return {k: v for k, v in vars(record).items() if not k.startswith("_")}

    raise TypeError(f"cannot extract values from {record_type.__name__}")


__all__ = [
    "DB_TAG",
    "db_field",
    "FieldBinding",
    "Binding",
    "is_record_type",
    "is_named_tuple",
    "binding_for",
    "record_values",
]
