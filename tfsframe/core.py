"""Core types and data structures for tfsframe.

This module defines the fundamental building blocks used throughout the tfsframe package:
- DataKind: The two cell types a TFS file knows about, text and real
- DataValue: An owned single cell, used for header properties
- DataView: A reference to one cell of a column, returned by table lookups
- DataVector: A whole column, stored either as text or as real numbers
"""

import operator
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass
from enum import Enum
from typing import Any

import numpy as np
import pandas as pd

from .errors import (
    IndexOutOfRangeError,
    LengthMismatchError,
    TypeMismatchError,
    WrongVariantError,
)

# Number of elements shown by DataVector.__repr__
PREVIEW_ELEMENTS = 5


class DataKind(Enum):
    """Type tag shared by cells and columns."""

    TEXT = "text"
    REAL = "real"


class _Cell:
    """Narrowing, formatting and comparison shared by DataValue and DataView."""

    kind: DataKind
    value: Any

    @property
    def is_text(self) -> bool:
        return self.kind is DataKind.TEXT

    @property
    def is_real(self) -> bool:
        return self.kind is DataKind.REAL

    def as_text(self) -> str:
        """Return the text payload.

        Raises
        ------
        WrongVariantError
            If the cell holds a real number
        """
        if not self.is_text:
            raise WrongVariantError(f"{self!s} is a real value, not text")
        return self.value

    def as_real(self) -> float:
        """Return the numeric payload.

        Raises
        ------
        WrongVariantError
            If the cell holds text
        """
        if not self.is_real:
            raise WrongVariantError(f"{self!s} is text, not a real value")
        return self.value

    def __str__(self) -> str:
        if self.is_text:
            return f"'{self.value}'"
        return str(self.value)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, _Cell):
            return NotImplemented
        return self.kind is other.kind and self.value == other.value

    def __hash__(self) -> int:
        return hash((self.kind, self.value))


@dataclass(frozen=True, eq=False)
class DataValue(_Cell):
    """An owned cell: a text or a real number.

    Attributes
    ----------
    kind : DataKind
        Which of the two variants this is
    value : str | float
        The payload, ``str`` for text and ``float`` for reals
    """

    kind: DataKind
    value: str | float

    @classmethod
    def text(cls, value: str) -> "DataValue":
        return cls(DataKind.TEXT, str(value))

    @classmethod
    def real(cls, value: float) -> "DataValue":
        return cls(DataKind.REAL, float(value))

    def __repr__(self) -> str:
        return f"DataValue.{self.kind.value}({self.value!r})"


class DataView(_Cell):
    """A non-owning reference to one cell of a :class:`DataVector`.

    The view reads through to the column's storage; use :meth:`to_value`
    to obtain an independent copy.

    Parameters
    ----------
    vector : DataVector
        The column the cell belongs to
    position : int
        Ordinal position of the cell within the column
    """

    __slots__ = ("_vector", "_position")

    def __init__(self, vector: "DataVector", position: int) -> None:
        self._vector = vector
        self._position = position

    @property
    def kind(self) -> DataKind:
        return self._vector.kind

    @property
    def position(self) -> int:
        """Row the view points at."""
        return self._position

    @property
    def value(self) -> str | float:
        return self._vector._value_at(self._position)

    def to_value(self) -> DataValue:
        """Copy the referenced cell into an owned DataValue."""
        return DataValue(self.kind, self.value)

    def __repr__(self) -> str:
        return f"DataView.{self.kind.value}({self.value!r})"


class DataVector:
    """A column: an ordered sequence of either text or real numbers.

    Real columns are backed by a read-only ``numpy.float64`` array, text
    columns by a tuple of strings. The type tag is fixed at construction.
    Build instances with :meth:`text` or :meth:`real`.

    Parameters
    ----------
    kind : DataKind
        Type tag of the column
    data : np.ndarray | tuple[str, ...]
        Storage matching ``kind``
    """

    __slots__ = ("_kind", "_data")

    def __init__(self, kind: DataKind, data: np.ndarray | tuple[str, ...]) -> None:
        if kind is DataKind.REAL:
            if not (
                isinstance(data, np.ndarray)
                and data.dtype == np.float64
                and data.ndim == 1
            ):
                raise TypeError("real columns are stored as a 1-D float64 array")
            if data.flags.writeable:
                data = data.copy()
                data.setflags(write=False)
        elif kind is DataKind.TEXT:
            if not isinstance(data, tuple):
                raise TypeError("text columns are stored as a tuple of str")
            for v in data:
                if not isinstance(v, str):
                    raise TypeError(
                        f"text columns hold str values, got {type(v).__name__}"
                    )
        else:
            raise TypeError(f"unknown column kind {kind!r}")
        self._kind = kind
        self._data = data

    @classmethod
    def text(cls, values: Iterable[str]) -> "DataVector":
        """Build a text column from strings."""
        return cls(DataKind.TEXT, tuple(values))

    @classmethod
    def real(cls, values: Iterable[float] | np.ndarray) -> "DataVector":
        """Build a real column from numbers.

        Strings are rejected, even numeric-looking ones.
        """
        if isinstance(values, np.ndarray):
            if values.dtype.kind not in "biuf":
                raise TypeError(f"real columns hold numbers, got dtype {values.dtype}")
            data = values.astype(np.float64)
        else:
            values = list(values)
            for v in values:
                if isinstance(v, (str, bytes)):
                    raise TypeError(f"real columns hold numbers, got {v!r}")
            data = np.array(values, dtype=np.float64)
        if data.ndim != 1:
            raise ValueError(f"real columns must be 1-D, got shape {data.shape}")
        data.setflags(write=False)
        return cls(DataKind.REAL, data)

    @property
    def kind(self) -> DataKind:
        return self._kind

    @property
    def is_text(self) -> bool:
        return self._kind is DataKind.TEXT

    @property
    def is_real(self) -> bool:
        return self._kind is DataKind.REAL

    def __len__(self) -> int:
        return len(self._data)

    def _value_at(self, position: int) -> str | float:
        if self.is_real:
            return float(self._data[position])
        return self._data[position]

    def at(self, position: int) -> DataView:
        """Return a view of the cell at ``position``.

        Raises
        ------
        IndexOutOfRangeError
            If ``position`` is negative or not smaller than the column length
        """
        if position < 0 or position >= len(self._data):
            raise IndexOutOfRangeError(
                f"position {position} out of range for column of length "
                f"{len(self._data)}"
            )
        return DataView(self, position)

    def __getitem__(self, position: int) -> DataView:
        return self.at(position)

    def __iter__(self) -> Iterator[DataView]:
        for i in range(len(self._data)):
            yield DataView(self, i)

    def as_real(self) -> np.ndarray:
        """Return the read-only array behind a real column.

        Raises
        ------
        WrongVariantError
            If this is a text column
        """
        if not self.is_real:
            raise WrongVariantError("not a RealVector")
        return self._data

    def as_text(self) -> list[str]:
        """Return the values of a text column.

        Raises
        ------
        WrongVariantError
            If this is a real column
        """
        if not self.is_text:
            raise WrongVariantError("not a TextVector")
        return list(self._data)

    def to_series(self, name: str | None = None) -> pd.Series:
        """Copy the column into a pandas Series."""
        if self.is_real:
            return pd.Series(self._data.copy(), name=name, dtype=np.float64)
        return pd.Series(list(self._data), name=name, dtype=object)

    def _combine(
        self,
        other: "DataVector",
        op: Callable[[np.ndarray, np.ndarray], np.ndarray],
        op_name: str,
    ) -> "DataVector":
        if not (self.is_real and other.is_real):
            raise TypeMismatchError(
                f"cannot {op_name} {self._kind.value} and {other.kind.value} "
                "columns, both have to be real"
            )
        if len(self) != len(other):
            raise LengthMismatchError(
                f"cannot {op_name} columns of length {len(self)} and {len(other)}"
            )
        return DataVector.real(op(self._data, other._data))

    def add(self, other: "DataVector") -> "DataVector":
        """Element-wise sum of two real columns of equal length.

        Raises
        ------
        TypeMismatchError
            If either column is a text column
        LengthMismatchError
            If the columns differ in length
        """
        return self._combine(other, operator.add, "add")

    def subtract(self, other: "DataVector") -> "DataVector":
        """Element-wise difference of two real columns of equal length.

        Raises
        ------
        TypeMismatchError
            If either column is a text column
        LengthMismatchError
            If the columns differ in length
        """
        return self._combine(other, operator.sub, "subtract")

    def __add__(self, other: object) -> "DataVector":
        if not isinstance(other, DataVector):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: object) -> "DataVector":
        if not isinstance(other, DataVector):
            return NotImplemented
        return self.subtract(other)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DataVector):
            return NotImplemented
        if self._kind is not other._kind:
            return False
        if self.is_real:
            return bool(np.array_equal(self._data, other._data))
        return self._data == other._data

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        name = "RealVector" if self.is_real else "TextVector"
        shown = [
            repr(self._value_at(i)) for i in range(min(len(self), PREVIEW_ELEMENTS))
        ]
        if len(self) > PREVIEW_ELEMENTS:
            shown.append("...")
        return f"{name}[{len(self)}] {{{', '.join(shown)}}}"
