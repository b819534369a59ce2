"""Shared exceptions for service layer operations."""


class NotFoundOrForbiddenError(Exception):
    """
    Raised when a resource does not exist or belongs to another user.

    The two cases are deliberately indistinguishable so that a caller cannot probe
    for the existence of other users' resources. Mapped to HTTP 404.
    """

    def __init__(self, entity_name: str, entity_id: object) -> None:
        self.entity_name = entity_name
        self.entity_id = entity_id
        super().__init__(f"{entity_name} not found")


class ConstraintViolationError(Exception):
    """Raised when the store rejects a write (unique or foreign key constraint)."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class AlreadyExistsError(ConstraintViolationError):
    """Raised when a uniqueness rule would be broken, e.g. a duplicate category name."""

    def __init__(self, entity_name: str, field: str, value: str) -> None:
        self.entity_name = entity_name
        self.field = field
        self.value = value
        super().__init__(f"{entity_name} with this {field} already exists")


class ResourceInUseError(Exception):
    """Raised when a resource cannot be deleted because other rows still reference it."""

    def __init__(self, entity_name: str, entity_id: object, dependents: int) -> None:
        self.entity_name = entity_name
        self.entity_id = entity_id
        self.dependents = dependents
        super().__init__(
            f"{entity_name} is still in use by {dependents} bookmark(s)",
        )


class InvalidCredentialsError(Exception):
    """Raised when a login attempt does not identify a user."""

    def __init__(self) -> None:
        super().__init__("Invalid username or password")
