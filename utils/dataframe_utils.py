"""
=======================================
pandas helpers for VALUES row builders.
=======================================

Turns a DataFrame into a ValueRows builder so a frame can be inserted with
the same marker/value guarantees as hand-written rows.

Example:
    >>> import pandas as pd
    >>> from sql.dml import Insert
    >>> from utils.dataframe_utils import values_from_dataframe
    >>>
    >>> df = pd.DataFrame({'id': [1, 2], 'name': ['a', None]})
    >>> Insert('tb', values_from_dataframe(df)).build()
    ('INSERT INTO tb (id,name) VALUES (?,?),(?,?)', [1, 'a', 2, None])
"""

from typing import Optional, Sequence

import pandas as pd

from core.logger import get_logger
from sql.dml import ValueRows
from sql.exceptions import SQLValidationError

logger = get_logger(__name__)


def values_from_dataframe(
    df: pd.DataFrame,
    columns: Optional[Sequence[str]] = None
) -> ValueRows:
    """
    Build a VALUES clause from DataFrame rows.

    Args:
        df: Source frame; one marker group per row
        columns: Subset and order of columns to use (defaults to all columns)

    Returns:
        ValueRows builder with the column names rendered

    Raises:
        SQLValidationError: If the frame has no rows or no columns
        KeyError: If a requested column is not in the frame
    """
    frame = df if columns is None else df[list(columns)]

    if frame.empty:
        logger.debug(f"Rejected empty DataFrame with shape {frame.shape}")
        raise SQLValidationError(
            f"DataFrame with shape {frame.shape} has no values to insert",
            kind="empty_rows",
            detail={"shape": frame.shape},
        )

    # object dtype yields Python scalars; NaN/NaT become None
    values = frame.astype(object).where(frame.notna(), None)
    rows = values.values.tolist()

    return ValueRows(rows, [str(column) for column in frame.columns])
