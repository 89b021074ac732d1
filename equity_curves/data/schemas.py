"""
Row schema and tabular views of trade records.

**Conceptual**: This module defines the "data contract" between the
simulation engine and whatever consumes its output (a spreadsheet-style sync
table, a notebook, a report). Every record leaves the engine in the same
shape: eight named fields, identified by `itemId`, displayed by `result`.

**Schema philosophy**:
  - Column names are the camelCase names consumers already know.
  - Rows are ordered sequence-major, trade-minor (exactly as generated).
  - Within each sequence, `trade` runs 1..T with no gaps.
  - `itemId` is unique across the whole result.
  - Validation raises SchemaValidationError with actionable messages.

**Teaching note**: Converting to a DataFrame is an in-memory convenience for
inspection and downstream analysis. This module never writes to disk.
"""

from typing import Iterable, List

import pandas as pd

from equity_curves.simulation.equity_curve import TradeRecord


class SchemaValidationError(Exception):
    """
    Raised when a DataFrame does not conform to the equity curve schema.

    **Conceptual**: This exception signals schema violations (missing columns,
    duplicate ids, broken trade numbering) and includes enough context for
    quick remediation.
    """
    pass


# Output columns, in order
EQUITY_CURVE_COLUMNS = [
    'itemId',
    'sequence',
    'trade',
    'result',
    'staticPnl',
    'staticBalance',
    'compoundPnl',
    'compoundBalance',
]

# Row identity and display properties for table consumers
ID_PROPERTY = 'itemId'
DISPLAY_PROPERTY = 'result'
FEATURED_PROPERTIES = [
    'sequence',
    'trade',
    'result',
    'staticPnl',
    'staticBalance',
    'compoundPnl',
    'compoundBalance',
]

RESULT_VALUES = {'Win', 'Loss'}


def records_to_rows(records: Iterable[TradeRecord]) -> List[dict]:
    """
    Convert trade records to external row dicts, preserving order.

    Args:
        records: Trade records as returned by the orchestrator.

    Returns:
        List of dicts keyed by EQUITY_CURVE_COLUMNS.
    """
    return [record.to_row() for record in records]


def records_to_dataframe(records: Iterable[TradeRecord]) -> pd.DataFrame:
    """
    Convert trade records to a pandas DataFrame.

    **Functionally**:
    - One row per record, in generation order, with a fresh RangeIndex.
    - Columns are exactly EQUITY_CURVE_COLUMNS, in that order, even when
      `records` is empty.
    - `result` is a plain string column ("Win"/"Loss").

    Args:
        records: Trade records as returned by the orchestrator.

    Returns:
        DataFrame with the equity curve schema.
    """
    rows = records_to_rows(records)
    return pd.DataFrame(rows, columns=EQUITY_CURVE_COLUMNS)


def validate_equity_curve_frame(
    df: pd.DataFrame,
    context: str | None = None,
) -> None:
    """
    Validate that a DataFrame conforms to the equity curve schema.

    **Functionally**:
      - Checks that all EQUITY_CURVE_COLUMNS are present.
      - Checks that `itemId` values are unique.
      - Checks that `result` only contains "Win" or "Loss".
      - Checks that sequence and trade numbers are positive, and that within
        each sequence the trades are numbered 1..T consecutively in row order.
      - Raises SchemaValidationError with an actionable message on any violation.

    An empty DataFrame with the right columns is valid.

    Args:
        df: DataFrame to validate (usually from records_to_dataframe).
        context: Optional string describing the source, included in error
                 messages for clarity.

    Raises:
        SchemaValidationError: If validation fails.

    Returns:
        None (raises on error, returns on success).
    """
    # Build context prefix for error messages
    ctx = f"{context}: " if context else ""

    # Check 1: All required columns must be present
    missing_cols = set(EQUITY_CURVE_COLUMNS) - set(df.columns)
    if missing_cols:
        raise SchemaValidationError(
            f"{ctx}Missing required columns: {sorted(missing_cols)}. "
            f"Expected columns: {EQUITY_CURVE_COLUMNS}. "
            f"Found columns: {list(df.columns)}."
        )

    if df.empty:
        return

    # Check 2: Row identity must be unique
    duplicated = df[ID_PROPERTY][df[ID_PROPERTY].duplicated()]
    if not duplicated.empty:
        raise SchemaValidationError(
            f"{ctx}Duplicate {ID_PROPERTY} values found: "
            f"{duplicated.unique().tolist()[:5]}."
        )

    # Check 3: Result labels
    bad_results = set(df['result'].unique()) - RESULT_VALUES
    if bad_results:
        raise SchemaValidationError(
            f"{ctx}Invalid result values: {sorted(map(str, bad_results))}. "
            f"Expected one of {sorted(RESULT_VALUES)}."
        )

    # Check 4: Positive sequence and trade numbers
    if (df['sequence'] < 1).any() or (df['trade'] < 1).any():
        raise SchemaValidationError(
            f"{ctx}'sequence' and 'trade' must be positive integers."
        )

    # Check 5: Trades numbered 1..T within each sequence, in row order
    for sequence, group in df.groupby('sequence', sort=False):
        expected = list(range(1, len(group) + 1))
        if group['trade'].tolist() != expected:
            raise SchemaValidationError(
                f"{ctx}Sequence {sequence}: trades must be numbered 1..{len(group)} "
                f"consecutively, got {group['trade'].tolist()[:10]}."
            )
