"""Exception classes for query construction."""


class LuceneQueryError(Exception):
    """Base exception for query-building errors."""

    pass


class InvalidFuzzinessError(LuceneQueryError, ValueError):
    """Raised when a fuzziness lies outside [0, 1)."""

    def __init__(self, fuzziness: float):
        """Initialize with the rejected fuzziness."""
        self.fuzziness = fuzziness
        super().__init__(
            f"Fuzziness must be between 0 (inclusive) and 1 (exclusive), got {fuzziness}"
        )


class InvalidBoostError(LuceneQueryError, ValueError):
    """Raised when a boost factor lies outside (0, 10000000)."""

    def __init__(self, factor: float):
        """Initialize with the rejected boost factor."""
        self.factor = factor
        super().__init__(
            f"Boost factor must be greater than 0 and less than 10000000, got {factor}"
        )


class MissingModifierError(LuceneQueryError, ValueError):
    """Raised when a required modifier or term modifier is absent."""

    def __init__(self, what: str = "modifier"):
        """Initialize with the name of the missing value."""
        self.what = what
        super().__init__(f"The given {what} must not be None")


class InvalidRangeError(LuceneQueryError, ValueError):
    """Raised when a range bound is absent."""

    def __init__(self, start, end):
        """Initialize with the offending bounds."""
        self.start = start
        self.end = end
        super().__init__(f"Invalid range [{start} TO {end}]: both bounds are required")


class QueryLockedError(LuceneQueryError, RuntimeError):
    """Raised when a locked builder receives a mutating call."""

    def __init__(self, message: str = "Query builder has been locked, no changes possible"):
        """Initialize with message."""
        super().__init__(message)


class FieldScopeError(LuceneQueryError, RuntimeError):
    """Raised when a field scope is closed without being opened."""

    def __init__(self, message: str = "end_field() called without an open field"):
        """Initialize with message."""
        super().__init__(message)


class EmptyQueryError(LuceneQueryError, RuntimeError):
    """Raised when the query text is requested from an empty query."""

    def __init__(
        self,
        message: str = "The resulting query is empty, no argument or field was added",
    ):
        """Initialize with message."""
        super().__init__(message)
