"""The TFS table.

:class:`TfsDataFrame` owns the columns of a TFS file together with its
header properties, and answers cell queries by ordinal position or, once
:meth:`TfsDataFrame.set_index` has been called, by the value of a text
column.
"""

import logging
import os
from collections.abc import Mapping, Sequence
from types import MappingProxyType
from typing import Protocol

import pandas as pd

from .core import DataKind, DataValue, DataVector, DataView
from .errors import (
    IndexNotSetError,
    IndexOutOfRangeError,
    LengthMismatchError,
    MalformedHeaderError,
    TypeMismatchError,
    UnknownColumnError,
    UnknownKeyError,
    UnknownPropertyError,
)
from .indexer import Indexer
from .parser import ParserOptions, read_tfs
from .types import ColName, PropName, RowKey, RowSelector

logger = logging.getLogger(__name__)

# Bounds of the printed preview
PREVIEW_PROPERTIES = 5
PREVIEW_COLUMNS = 5
PREVIEW_ROWS = 5


class DataFrame(Protocol):
    """Contract implemented by all dataframe-like objects."""

    def col(self, column: ColName) -> DataVector:
        """Return the column named ``column``."""
        ...

    def loc(self, row: RowSelector, column: ColName) -> DataView:
        """Return a view of the cell at ``row`` in ``column``."""
        ...


class TfsDataFrame:
    """Column-oriented table read from a TFS file.

    Tables are normally built by :func:`~tfsframe.parser.read_tfs`; the
    constructor takes already typed columns.

    Parameters
    ----------
    names : Sequence[ColName]
        Column names, in file order
    types : Sequence[str]
        Type tags as written on the ``$`` line, parallel to ``names``
    columns : Sequence[DataVector]
        Column data, parallel to ``names``; all columns have the same length
    properties : Mapping[PropName, DataValue], optional
        Header properties

    Examples
    --------
    >>> df = TfsDataFrame.open("twiss.tfs")
    >>> betx0 = df.loc_real(0, "BETX")
    >>> df.set_index("NAME")
    >>> df.loc_real("BPM1", "BETX") == betx0
    True
    """

    def __init__(
        self,
        names: Sequence[ColName],
        types: Sequence[str],
        columns: Sequence[DataVector],
        properties: Mapping[PropName, DataValue] | None = None,
    ) -> None:
        if not (len(names) == len(types) == len(columns)):
            raise MalformedHeaderError(
                f"{len(names)} names, {len(types)} types and {len(columns)} "
                "columns do not line up"
            )
        self._names: list[ColName] = list(names)
        self._types: list[str] = list(types)
        self._columns: list[DataVector] = list(columns)
        self._column_headers: dict[ColName, int] = {
            name: i for i, name in enumerate(self._names)
        }
        if len(self._column_headers) != len(self._names):
            raise MalformedHeaderError(f"duplicate column names in {self._names}")
        lengths = {len(c) for c in self._columns}
        if len(lengths) > 1:
            raise LengthMismatchError(
                f"columns differ in length: "
                f"{dict(zip(self._names, map(len, self._columns)))}"
            )
        self._properties: dict[PropName, DataValue] = dict(properties or {})
        self._index: dict[RowKey, int] = {}
        self._index_column: ColName | None = None

    @classmethod
    def open(
        cls,
        path: str | os.PathLike,
        *,
        options: ParserOptions | None = None,
        index: ColName | None = None,
    ) -> "TfsDataFrame":
        """Read a TFS file; see :func:`~tfsframe.parser.read_tfs`."""
        return read_tfs(path, options=options, index=index)

    # Shape

    @property
    def row_count(self) -> int:
        """Number of rows, taken from the first column."""
        if not self._columns:
            return 0
        return len(self._columns[0])

    def __len__(self) -> int:
        return self.row_count

    @property
    def width(self) -> int:
        """Number of columns."""
        return len(self._columns)

    @property
    def shape(self) -> tuple[int, int]:
        return self.row_count, self.width

    @property
    def columns(self) -> list[ColName]:
        """Column names in file order."""
        return list(self._names)

    @property
    def column_types(self) -> dict[ColName, str]:
        """Type tag of every column as written in the file."""
        return dict(zip(self._names, self._types))

    def __contains__(self, column: object) -> bool:
        return column in self._column_headers

    # Columns and cells

    def col(self, column: ColName) -> DataVector:
        """Return the column named ``column``.

        Raises
        ------
        UnknownColumnError
            If there is no such column
        """
        try:
            return self._columns[self._column_headers[column]]
        except KeyError:
            raise UnknownColumnError(column) from None

    def __getitem__(self, column: ColName) -> DataVector:
        return self.col(column)

    def _resolve_row(self, row: RowSelector) -> int:
        indexer = Indexer.of(row)
        if indexer.is_ordinal:
            position = indexer.value
            if position < 0 or position >= self.row_count:
                raise IndexOutOfRangeError(
                    f"row {position} out of range for {self.row_count} rows"
                )
            return position
        if self._index_column is None:
            raise IndexNotSetError(
                f"cannot look up key {indexer.value!r}, call set_index first"
            )
        try:
            return self._index[indexer.value]
        except KeyError:
            raise UnknownKeyError(indexer.value) from None

    def loc(self, row: RowSelector, column: ColName) -> DataView:
        """Return a view of one cell.

        Parameters
        ----------
        row : int | str | Indexer
            Ordinal position, or a key of the row index
        column : ColName
            Column name

        Returns
        -------
        DataView
            View of the cell, of the column's kind

        Raises
        ------
        UnknownColumnError
            If there is no such column
        IndexOutOfRangeError
            If an ordinal is outside the table
        IndexNotSetError
            If a key is given but no index has been set
        UnknownKeyError
            If the key is not in the index
        """
        vector = self.col(column)
        return vector.at(self._resolve_row(row))

    def loc_real(self, row: RowSelector, column: ColName) -> float:
        """Like :meth:`loc`, narrowed to a real number."""
        return self.loc(row, column).as_real()

    def loc_text(self, row: RowSelector, column: ColName) -> str:
        """Like :meth:`loc`, narrowed to text."""
        return self.loc(row, column).as_text()

    # Row index

    @property
    def index_column(self) -> ColName | None:
        """Column the row index was built from, or None."""
        return self._index_column

    def set_index(self, column: ColName) -> "TfsDataFrame":
        """Build the row index from a text column.

        Any previous index is discarded. Duplicate values map to their last
        row. Real columns are rejected since floats make poor hash keys.

        Parameters
        ----------
        column : ColName
            Name of a text column

        Returns
        -------
        TfsDataFrame
            ``self``, to allow chaining

        Raises
        ------
        UnknownColumnError
            If there is no such column
        TypeMismatchError
            If the column is a real column
        """
        vector = self.col(column)
        if vector.kind is not DataKind.TEXT:
            raise TypeMismatchError(
                f"column {column!r} is a real column, the index needs text"
            )
        self._index = {key: i for i, key in enumerate(vector.as_text())}
        self._index_column = column
        if len(self._index) != len(vector):
            logger.warning(
                "index column %s has %d duplicate keys, last occurrence wins",
                column,
                len(vector) - len(self._index),
            )
        return self

    def reset_index(self) -> "TfsDataFrame":
        """Drop the row index."""
        self._index = {}
        self._index_column = None
        return self

    def drop_column(self, column: ColName) -> DataVector:
        """Remove a column and return it.

        Positions of the following columns shift down by one. Dropping the
        index column also drops the row index.

        Raises
        ------
        UnknownColumnError
            If there is no such column
        """
        if column not in self._column_headers:
            raise UnknownColumnError(column)
        pos = self._column_headers[column]
        vector = self._columns.pop(pos)
        del self._names[pos]
        del self._types[pos]
        self._column_headers = {name: i for i, name in enumerate(self._names)}
        if column == self._index_column:
            self.reset_index()
        return vector

    # Properties

    @property
    def properties(self) -> Mapping[PropName, DataValue]:
        """Read-only view of the header properties."""
        return MappingProxyType(self._properties)

    def prop(self, name: PropName) -> DataValue:
        """Return the header property ``name``.

        Raises
        ------
        UnknownPropertyError
            If the header has no such property
        """
        try:
            return self._properties[name]
        except KeyError:
            raise UnknownPropertyError(name) from None

    def prop_real(self, name: PropName) -> float:
        """Return a real-valued header property."""
        return self.prop(name).as_real()

    def prop_text(self, name: PropName) -> str:
        """Return a text header property."""
        return self.prop(name).as_text()

    # Export

    def to_pandas(self) -> pd.DataFrame:
        """Copy the table into a pandas DataFrame.

        The index column, if set, becomes the pandas index. Header
        properties are stored in ``DataFrame.attrs``.
        """
        frame = pd.DataFrame(
            {name: vec.to_series() for name, vec in zip(self._names, self._columns)},
            columns=self._names,
        )
        if self._index_column is not None:
            frame = frame.set_index(self._index_column, drop=False)
        frame.attrs.update({k: v.value for k, v in self._properties.items()})
        return frame

    # Display

    def _preview_lines(self) -> list[str]:
        lines = []
        for name, value in list(self._properties.items())[:PREVIEW_PROPERTIES]:
            lines.append(f"@ {name} = {value}")
        if len(self._properties) > PREVIEW_PROPERTIES:
            lines.append(f"@ ... ({len(self._properties)} properties)")

        shown = self._names[:PREVIEW_COLUMNS]
        nrows = min(self.row_count, PREVIEW_ROWS)
        cells = [
            [str(self._columns[i].at(r)) for i in range(len(shown))]
            for r in range(nrows)
        ]
        widths = [
            max([len(name)] + [len(row[i]) for row in cells])
            for i, name in enumerate(shown)
        ]
        header = "  ".join(n.ljust(w) for n, w in zip(shown, widths))
        if self.width > PREVIEW_COLUMNS:
            header += "  ..."
        lines.append(header)
        for row in cells:
            lines.append("  ".join(c.ljust(w) for c, w in zip(row, widths)))
        if self.row_count > PREVIEW_ROWS:
            lines.append("...")
        return lines

    def __str__(self) -> str:
        lines = self._preview_lines()
        lines.append(f"[{self.row_count} rows x {self.width} columns]")
        return "\n".join(lines)

    def __repr__(self) -> str:
        index = f", index={self._index_column!r}" if self._index_column else ""
        return (
            f"TfsDataFrame(rows={self.row_count}, columns={self.width}, "
            f"properties={len(self._properties)}{index})"
        )
