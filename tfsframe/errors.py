"""Exceptions raised by tfsframe.

Every error derives from :class:`TfsError` and from the closest built-in
exception, so callers may catch either ``TfsError`` or e.g. ``KeyError``.
"""


class TfsError(Exception):
    """Base class for all tfsframe errors."""


class TfsIOError(TfsError, OSError):
    """The TFS file is missing or cannot be read."""


class MalformedHeaderError(TfsError, ValueError):
    """The header is incomplete or inconsistent."""


class TfsParseError(TfsError, ValueError):
    """A token cannot be parsed as its declared type.

    Parameters
    ----------
    message : str
        Description of the failure
    source : str
        File name (or other label) of the input
    line : int
        1-based line number of the offending line
    column : str, optional
        Column or property name the token belongs to
    """

    def __init__(
        self, message: str, source: str, line: int, column: str | None = None
    ) -> None:
        self.source = source
        self.line = line
        self.column = column
        where = f"{source}:{line}"
        if column is not None:
            where += f" [{column}]"
        super().__init__(f"{where}: {message}")


class UnknownColumnError(TfsError, KeyError):
    """No column of that name exists."""

    def __str__(self) -> str:
        return f"column {self.args[0]!r} not in dataframe"


class UnknownPropertyError(TfsError, KeyError):
    """No header property of that name exists."""

    def __str__(self) -> str:
        return f"property {self.args[0]!r} not in header"


class UnknownKeyError(TfsError, KeyError):
    """The key is not present in the row index."""

    def __str__(self) -> str:
        return f"key {self.args[0]!r} not in index"


class IndexNotSetError(TfsError, LookupError):
    """A key-based lookup was attempted before ``set_index``."""


class IndexOutOfRangeError(TfsError, IndexError):
    """An ordinal position lies outside the column."""


class WrongVariantError(TfsError, TypeError):
    """A cell or column was narrowed to a type it does not hold."""


class TypeMismatchError(TfsError, TypeError):
    """An operation was applied to a column of an unsupported type."""


class LengthMismatchError(TfsError, ValueError):
    """Two columns combined element-wise have different lengths."""
