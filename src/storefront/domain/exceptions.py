"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the HTTP and CLI layers can catch them uniformly and map each family to
a status code or a user-friendly message.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """Input is malformed or a business rule was violated."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class ConflictError(DomainException):
    """The request is well-formed but conflicts with current state."""


class InsufficientStockError(ConflictError):
    """Requested quantity exceeds the stock on hand."""


class ProductUnavailableError(ConflictError):
    """The product exists but is not offered for sale."""


class PersistenceError(DomainException):
    """The backing store failed to read or write."""
