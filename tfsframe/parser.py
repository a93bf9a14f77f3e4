"""Reading TFS files.

A TFS file is line oriented. The header holds ``@`` property lines, one
``*`` line with the column names and one ``$`` line with the column types;
every line after the header is a whitespace-delimited data row::

    @ TITLE    %s   "some title"
    @ Q1       %le  62.31
    * NAME     S        BETX
    $ %s       %le      %le
    "BPM1"     0.0      12.5
    "BPM2"     1.0      13.1

Text property values are the tokens after the type tag joined by single
spaces, so runs of whitespace inside a value collapse to one space.
Numbers follow the plain decimal grammar (optional sign, digits, point,
exponent, ``inf``, ``nan``); Python extras such as ``1_000`` are rejected.

The header ends as soon as both a ``*`` and a ``$`` line have been seen, in
either order. Parsing is a single forward pass that either produces a full
:class:`~tfsframe.frame.TfsDataFrame` or raises.
"""

import logging
import os
import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import numpy as np

from .core import DataKind, DataValue, DataVector
from .errors import MalformedHeaderError, TfsIOError, TfsParseError
from .types import ColName, PropName

if TYPE_CHECKING:
    from .frame import TfsDataFrame

logger = logging.getLogger(__name__)

_REAL_RE = re.compile(
    r"[+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf|infinity|nan)",
    re.IGNORECASE | re.ASCII,
)

PROPERTY_MARKER = "@"
NAMES_MARKER = "*"
TYPES_MARKER = "$"


@dataclass(frozen=True)
class ParserOptions:
    """Settings for reading TFS input.

    Attributes
    ----------
    real_tags : frozenset[str], default {"%le"}
        Type tags that declare a real-valued property or column; every
        other tag declares text
    encoding : str, default "utf-8"
        Encoding used when opening files
    quote_char : str, default '"'
        Character stripped, once on each side, from text values
    """

    real_tags: frozenset[str] = field(default_factory=lambda: frozenset({"%le"}))
    encoding: str = "utf-8"
    quote_char: str = '"'

    def kind_of(self, tag: str) -> DataKind:
        """Map a type tag to the kind of value it declares."""
        return DataKind.REAL if tag in self.real_tags else DataKind.TEXT

    def unquote(self, token: str) -> str:
        """Strip one pair of surrounding quote characters."""
        q = self.quote_char
        if len(token) >= 2 and token.startswith(q) and token.endswith(q):
            return token[1:-1]
        return token


@dataclass
class TfsHeader:
    """Everything read before the first data row.

    Attributes
    ----------
    properties : dict[PropName, DataValue]
        Header properties in file order
    names : list[ColName]
        Column names from the ``*`` line
    types : list[str]
        Raw type tags from the ``$`` line
    """

    properties: dict[PropName, DataValue] = field(default_factory=dict)
    names: list[ColName] = field(default_factory=list)
    types: list[str] = field(default_factory=list)

    @property
    def complete(self) -> bool:
        return bool(self.names) and bool(self.types)


def _to_real(token: str) -> float:
    """Convert a numeric token, rejecting literals outside the TFS grammar."""
    if not _REAL_RE.fullmatch(token):
        raise ValueError(f"not a TFS number: {token!r}")
    return float(token)


def _parse_property(
    tokens: list[str],
    header: TfsHeader,
    options: ParserOptions,
    source: str,
    lineno: int,
) -> None:
    """Store one ``@`` line in ``header``.

    Text values keep their tokens but not the whitespace between them: the
    tokens are joined by single spaces before one pair of quotes is removed.
    """
    if len(tokens) < 3:
        raise TfsParseError("property line needs a name and a type tag", source, lineno)
    name, tag, rest = tokens[1], tokens[2], tokens[3:]
    if options.kind_of(tag) is DataKind.REAL:
        if len(rest) != 1:
            raise TfsParseError(
                f"expected one numeric value, got {len(rest)} tokens",
                source,
                lineno,
                name,
            )
        try:
            value = DataValue.real(_to_real(rest[0]))
        except ValueError as exc:
            raise TfsParseError(
                f"invalid number {rest[0]!r}", source, lineno, name
            ) from exc
    else:
        value = DataValue.text(options.unquote(" ".join(rest)))
    if name in header.properties:
        logger.debug("%s:%d: property %s redefined", source, lineno, name)
    header.properties[name] = value


def _parse_header(
    lines: Iterator[tuple[int, str]], options: ParserOptions, source: str
) -> TfsHeader:
    header = TfsHeader()
    for lineno, line in lines:
        tokens = line.split()
        if not tokens:
            continue
        marker = tokens[0]
        if marker == PROPERTY_MARKER:
            _parse_property(tokens, header, options, source, lineno)
        elif marker == NAMES_MARKER:
            header.names.extend(tokens[1:])
        elif marker == TYPES_MARKER:
            header.types.extend(tokens[1:])
        if header.complete:
            return header
    raise MalformedHeaderError(
        f"{source}: reached end of input before both the column names (*) "
        "and column types ($) lines"
    )


def _check_header(header: TfsHeader, source: str) -> None:
    if len(header.names) != len(header.types):
        raise MalformedHeaderError(
            f"{source}: {len(header.names)} column names but "
            f"{len(header.types)} column types"
        )
    seen = set()
    for name in header.names:
        if name in seen:
            raise MalformedHeaderError(f"{source}: duplicate column {name!r}")
        seen.add(name)


def parse_lines(
    lines: Iterable[str],
    *,
    options: ParserOptions | None = None,
    source: str = "<lines>",
) -> "TfsDataFrame":
    """Parse TFS content given as an iterable of lines.

    Parameters
    ----------
    lines : Iterable[str]
        Lines of TFS text, with or without trailing newlines
    options : ParserOptions, optional
        Parser settings; defaults to ``ParserOptions()``
    source : str, default "<lines>"
        Label used in error messages

    Returns
    -------
    TfsDataFrame
        The fully populated table

    Raises
    ------
    MalformedHeaderError
        If the input ends before the header is complete, or the header is
        inconsistent
    TfsParseError
        If a property or a data token cannot be parsed
    """
    from .frame import TfsDataFrame

    options = options or ParserOptions()
    numbered = enumerate(lines, start=1)
    header = _parse_header(numbered, options, source)
    _check_header(header, source)

    kinds = [options.kind_of(t) for t in header.types]
    width = len(header.names)
    buffers: list[list] = [[] for _ in range(width)]
    logger.debug(
        "%s: header done, %d properties, %d columns",
        source,
        len(header.properties),
        width,
    )

    nrows = 0
    for lineno, line in numbered:
        tokens = line.split()
        if not tokens:
            continue
        if len(tokens) != width:
            raise TfsParseError(
                f"expected {width} values, got {len(tokens)}", source, lineno
            )
        for token, kind, buf, name in zip(tokens, kinds, buffers, header.names):
            if kind is DataKind.REAL:
                try:
                    buf.append(_to_real(token))
                except ValueError as exc:
                    raise TfsParseError(
                        f"invalid number {token!r}", source, lineno, name
                    ) from exc
            else:
                buf.append(options.unquote(token))
        nrows += 1

    columns = [
        DataVector.real(np.array(buf, dtype=np.float64))
        if kind is DataKind.REAL
        else DataVector.text(buf)
        for kind, buf in zip(kinds, buffers)
    ]
    logger.debug("%s: parsed %d rows", source, nrows)
    return TfsDataFrame(
        names=header.names,
        types=header.types,
        columns=columns,
        properties=header.properties,
    )


def read_tfs(
    path: str | os.PathLike,
    *,
    options: ParserOptions | None = None,
    index: ColName | None = None,
) -> "TfsDataFrame":
    """Read a TFS file into a TfsDataFrame.

    Parameters
    ----------
    path : str | os.PathLike
        Location of the file
    options : ParserOptions, optional
        Parser settings; defaults to ``ParserOptions()``
    index : ColName, optional
        Text column to build the row index from after reading

    Returns
    -------
    TfsDataFrame
        The fully populated table

    Raises
    ------
    TfsIOError
        If the file is missing or cannot be read
    MalformedHeaderError, TfsParseError
        If the content is not valid TFS
    """
    options = options or ParserOptions()
    source = os.fspath(path)
    try:
        with open(path, encoding=options.encoding) as fh:
            df = parse_lines(fh, options=options, source=source)
    except UnicodeDecodeError as exc:
        raise TfsIOError(f"cannot decode {source}: {exc}") from exc
    except OSError as exc:
        raise TfsIOError(exc.errno, f"cannot read TFS file: {exc.strerror}", source) from exc
    logger.info(
        "Read %s: %d rows x %d columns, %d properties",
        source,
        len(df),
        df.width,
        len(df.properties),
    )
    if index is not None:
        df.set_index(index)
    return df
