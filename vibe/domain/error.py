"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Malformed or out-of-range input."""

    pass


class DuplicateActionError(DomainError):
    """Raised when an action that must be unique is attempted twice.

    Examples: a second rating on the same story, or a second pending
    report from the same reporter.
    """

    pass


class StateConflictError(DomainError):
    """Raised when an entity is not in the state an action requires."""

    def __init__(self, resource: str, resource_id: str, state: str, action: str):
        self.resource = resource
        self.resource_id = resource_id
        self.state = state
        super().__init__(f"Cannot {action} {resource} {resource_id}: it is {state}")


class NotAuthorizedError(DomainError):
    """Raised when a user attempts to edit content they don't own."""

    def __init__(self, resource: str, resource_id: str, user_id: str):
        super().__init__(
            f"User {user_id} is not authorized to edit {resource} {resource_id}"
        )


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")
