"""Row selectors.

An :class:`Indexer` decides whether a row is addressed by its ordinal
position or by a key of the row index, so lookup functions can take either
an integer or a string.
"""

from dataclasses import dataclass
from enum import Enum

import numpy as np


class IndexerKind(Enum):
    """The two ways of selecting a row."""

    ORDINAL = "ordinal"
    KEY = "key"


@dataclass(frozen=True)
class Indexer:
    """A row selector: either an ordinal position or a string key.

    No validation happens here; out-of-range positions and unknown keys
    are reported by the table when the selector is used.

    Attributes
    ----------
    kind : IndexerKind
        Whether ``value`` is a position or a key
    value : int | str
        The position or the key
    """

    kind: IndexerKind
    value: int | str

    @classmethod
    def ordinal(cls, position: int) -> "Indexer":
        """Select the row at ``position`` in file order."""
        return cls(IndexerKind.ORDINAL, int(position))

    @classmethod
    def key(cls, key: str) -> "Indexer":
        """Select the row whose index-column value is ``key``."""
        return cls(IndexerKind.KEY, str(key))

    @classmethod
    def of(cls, selector: "int | str | Indexer") -> "Indexer":
        """Normalize an int, a string or an Indexer.

        Parameters
        ----------
        selector : int | str | Indexer
            Integers (numpy integer scalars included) become ordinals,
            strings become keys

        Returns
        -------
        Indexer
            The normalized selector

        Raises
        ------
        TypeError
            If ``selector`` is of any other type (``bool`` included)
        """
        if isinstance(selector, Indexer):
            return selector
        if isinstance(selector, str):
            return cls.key(selector)
        if isinstance(selector, (int, np.integer)) and not isinstance(
            selector, (bool, np.bool_)
        ):
            return cls.ordinal(selector)
        raise TypeError(
            f"row selector must be an int or a str, got {type(selector).__name__}"
        )

    @property
    def is_ordinal(self) -> bool:
        return self.kind is IndexerKind.ORDINAL

    @property
    def is_key(self) -> bool:
        return self.kind is IndexerKind.KEY

    def __str__(self) -> str:
        if self.is_key:
            return repr(self.value)
        return str(self.value)
