"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error.

    Carries the offending field so the API can report field violations.
    """

    def __init__(self, message: str, field: str | None = None):
        self.field = field
        self.message = message
        super().__init__(message)


class InvalidValueError(ValidationError):
    """Raised when a vote value is not +1 or -1."""

    def __init__(self, value: object):
        super().__init__(f"Vote value must be 1 or -1, got {value!r}", field="value")


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class UnauthenticatedError(DomainError):
    """Raised when the caller's identity cannot be established."""

    def __init__(self, action: str = "perform this action"):
        super().__init__(f"Authentication required to {action}")


class ForbiddenError(DomainError):
    """Raised when a user touches content they are not allowed to."""

    def __init__(self, resource: str, resource_id: str, user_id: str, action: str):
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(
            f"User {user_id} is not allowed to {action} {resource} {resource_id}"
        )


class ConflictError(DomainError):
    """Raised when a write loses a race on a uniqueness constraint."""

    pass
