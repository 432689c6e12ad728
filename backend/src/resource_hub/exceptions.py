"""Domain exceptions raised by services and stores.

Services raise these to signal business-rule violations or store failures.
Exception handlers in main.py translate them into the standard
error envelope: {"error": {"code": "...", "message": "..."}}.
"""


class DomainError(Exception):
    """Base class for all domain exceptions."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class NotFoundError(DomainError):
    """Raised when a requested entity does not exist or was soft-deleted."""

    def __init__(self, entity: str, identifier: object) -> None:
        self.entity = entity
        self.identifier = identifier
        super().__init__(f"{entity} with id {identifier} not found")


class QueryFailedError(DomainError):
    """Raised when the store fails while counting or fetching listings.

    Retryable from the caller's point of view. Never retried internally.
    """

    def __init__(self, operation: str, kind: str, cause: BaseException | None = None) -> None:
        self.operation = operation
        self.kind = kind
        super().__init__(f"Unable to load {kind} listings ({operation} failed)")
        self.__cause__ = cause


class RankedSearchUnavailable(DomainError):
    """Raised by a store whose ranked text search cannot serve a query.

    Never reaches HTTP callers: the search resolver falls back to substring matching.
    """
