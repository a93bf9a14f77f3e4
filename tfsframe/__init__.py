"""tfsframe: typed, column-oriented access to TFS files.

The tfsframe package reads TFS tables (a header of properties, a column
name line, a column type line and whitespace-delimited rows):
- Parsing of TFS files into typed columns
- Text and real cells with checked narrowing
- Cell lookup by row position or by key of an index column
- Element-wise arithmetic on real columns
- Export to pandas
"""

import logging
from importlib import metadata

# Core types and data structures
from .core import DataKind, DataValue, DataVector, DataView

# Errors
from .errors import (
    IndexNotSetError,
    IndexOutOfRangeError,
    LengthMismatchError,
    MalformedHeaderError,
    TfsError,
    TfsIOError,
    TfsParseError,
    TypeMismatchError,
    UnknownColumnError,
    UnknownKeyError,
    UnknownPropertyError,
    WrongVariantError,
)

# Table
from .frame import DataFrame, TfsDataFrame
from .indexer import Indexer, IndexerKind

# Reading
from .parser import ParserOptions, TfsHeader, parse_lines, read_tfs
from .types import ColName, PropName, RowKey, RowSelector

try:
    __version__ = metadata.version("tfsframe")
except metadata.PackageNotFoundError:
    # Fallback for development installs
    __version__ = "0.1.0"

__all__ = [
    # Core types
    "DataKind",
    "DataValue",
    "DataView",
    "DataVector",
    "Indexer",
    "IndexerKind",
    "ColName",
    "PropName",
    "RowKey",
    "RowSelector",
    # Table
    "DataFrame",
    "TfsDataFrame",
    # Reading
    "ParserOptions",
    "TfsHeader",
    "parse_lines",
    "read_tfs",
    # Errors
    "TfsError",
    "TfsIOError",
    "MalformedHeaderError",
    "TfsParseError",
    "UnknownColumnError",
    "UnknownPropertyError",
    "UnknownKeyError",
    "IndexNotSetError",
    "IndexOutOfRangeError",
    "WrongVariantError",
    "TypeMismatchError",
    "LengthMismatchError",
    # Logging
    "get_logger",
]


# Configure package-wide logging
def get_logger(name: str | None = None) -> logging.Logger:
    """Get a logger for the tfsframe package.

    Parameters
    ----------
    name : str | None, optional
        Logger name. If None, uses the package name.

    Returns
    -------
    logging.Logger
        Configured logger instance.
    """
    if name is None:
        name = __name__.split(".")[0]
    return logging.getLogger(name)


# Set up default logging configuration
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
