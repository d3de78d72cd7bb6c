"""Execution adapters that hand compiled SQL to a database driver."""

from .executor import Executor

__all__ = ["Executor"]
