"""
SQL generation: expressions, statement builders, dialects and the compiler.

Import the submodules directly (``sqlaspect.sql.operations``,
``sqlaspect.sql.compiler``); the public surface is re-exported from
``sqlaspect``.
"""
