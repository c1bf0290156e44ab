class DomainError(Exception):
    """Base exception for the attendance sheet application."""


class PersistenceError(DomainError):
    """Raised when the store fails (connectivity, constraint violation, timeout).

    The driver exception is kept as ``__cause__``.
    """
