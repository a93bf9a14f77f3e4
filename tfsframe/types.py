"""Type aliases for tfsframe.

This module defines type aliases used throughout the package for clarity
and consistency. The actual data structures are in core.py.
"""

from typing import Union

from .indexer import Indexer

# Type aliases for column, property and row references
ColName = str
"""Alias for column names as declared on the ``*`` line of a TFS file."""

PropName = str
"""Alias for header property names as declared on ``@`` lines."""

RowKey = str
"""Alias for a value of the index column, used for key-based row lookup."""

RowSelector = Union[int, str, Indexer]
"""Anything accepted where a row is selected.

Can be an int for positional access, a string for key-based access through
the row index, or an already built :class:`~tfsframe.indexer.Indexer`.
"""
