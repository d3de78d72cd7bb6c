"""Statement builders: SELECT, INSERT, UPDATE and DELETE."""

from .base import Statement
from .delete import Delete
from .insert import Insert, insert
from .select import Select, select
from .update import Update

__all__ = [
    "Statement",
    "Select",
    "Insert",
    "Update",
    "Delete",
    "select",
    "insert",
]
