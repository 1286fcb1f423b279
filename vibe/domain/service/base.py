"""Base service class for domain services."""


class Service:
    """Base class for all domain services.

    Domain services hold the engagement and moderation rules; they are
    request-scoped and share the request's repositories and transaction.
    """

    pass
