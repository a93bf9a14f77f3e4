"""Walk through the tfsframe API on a TFS file.

Usage::

    python examples/tfs/inspect_twiss.py [path/to/file.tfs]

Without an argument the sample file shipped with the tests is used.
"""

import sys
from pathlib import Path

from tfsframe import (
    TfsDataFrame,
    TfsError,
    UnknownKeyError,
    get_logger,
)

# Set up logging
logger = get_logger(__name__)

DEFAULT_FILE = Path(__file__).parents[2] / "tests" / "data" / "test.tfs"


def demo_header(df: TfsDataFrame):
    """Show header properties and columns."""
    logger.info("\n" + "=" * 60)
    logger.info("1. HEADER")
    logger.info("=" * 60)

    for name, value in df.properties.items():
        logger.info(f"  @ {name} = {value}")
    for name, tag in df.column_types.items():
        logger.info(f"  {name}: {tag} -> {df.col(name)!r}")


def demo_lookup(df: TfsDataFrame, index_column: str):
    """Look up cells by position and by key."""
    logger.info("\n" + "=" * 60)
    logger.info("2. CELL LOOKUP")
    logger.info("=" * 60)

    first = df.loc(0, index_column).as_text()
    logger.info(f"\nRow 0 is {first!r}")

    df.set_index(index_column)
    for column in df.columns:
        logger.info(f"  {column}[{first!r}] = {df.loc(first, column)}")

    try:
        df.loc("NOT_A_ROW", index_column)
    except UnknownKeyError as e:
        logger.info(f"\nUnknown keys are reported: {e}")


def demo_arithmetic(df: TfsDataFrame):
    """Combine the first two real columns."""
    logger.info("\n" + "=" * 60)
    logger.info("3. COLUMN ARITHMETIC")
    logger.info("=" * 60)

    real = [c for c in df.columns if df.col(c).is_real]
    if len(real) < 2:
        logger.info("Fewer than two real columns, nothing to combine")
        return
    a, b = real[:2]
    logger.info(f"\n{b} - {a} = {df[b] - df[a]!r}")
    logger.info(f"{b} + {a} = {df[b] + df[a]!r}")


def main(argv: list[str]) -> int:
    """Run all demonstrations."""
    path = Path(argv[1]) if len(argv) > 1 else DEFAULT_FILE
    try:
        df = TfsDataFrame.open(path)
    except TfsError as e:
        logger.error(f"Cannot load {path}: {e}")
        return 1

    logger.info(f"\n{df}")
    demo_header(df)

    text_columns = [c for c in df.columns if df.col(c).is_text]
    if text_columns:
        demo_lookup(df, text_columns[0])
    demo_arithmetic(df)
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))
