"""
==============================
SQL builder exception classes.
==============================

Two kinds of failure can happen while a builder tree is constructed:

- SQLValidationError: the data handed to a builder is unusable (an empty
  IN list, ragged VALUES rows, an UPDATE without assignments). These are
  recoverable and callers are expected to catch them.
- BuilderMisuseError: the calling code is wrong (an unknown join kind, an
  Embed template whose markers do not match its substitutes). It subclasses
  AssertionError and sits outside the SQLBuilderError tree, so a handler
  for bad data never hides a programming bug.

Example:
    >>> from sql.dml import values_builder
    >>> from sql.exceptions import SQLValidationError
    >>>
    >>> try:
    ...     values_builder([[1, 2], [3]])
    ... except SQLValidationError as e:
    ...     print(e.kind)
    row_length_mismatch
"""

from typing import Any, Dict, Optional


class SQLBuilderError(Exception):
    """Base class for recoverable SQL builder errors."""
    pass


class SQLValidationError(SQLBuilderError, ValueError):
    """Exception raised when builder input data fails validation.

    Attributes:
        kind: Short machine-readable reason (e.g. 'row_length_mismatch')
        detail: Extra context about the failure (indexes, lengths)
    """

    def __init__(self, message: str, kind: str, detail: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.kind = kind
        self.detail = detail or {}


class BuilderMisuseError(AssertionError):
    """Exception raised when a builder is used in a way that can never render.

    Signals a bug in the calling code rather than bad runtime data.
    """
    pass
