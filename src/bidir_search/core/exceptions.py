"""Exception types raised by the search core and the domain layer."""


class InvalidDirectionError(ValueError):
    """Raised when a value that is not a ``Direction`` reaches the core."""
    pass


class SearchInvariantError(AssertionError):
    """Raised when frontier and cost-store bookkeeping disagree."""
    pass


class InvalidStateError(ValueError):
    """Raised when an initial/goal pair is malformed for its domain."""
    pass
