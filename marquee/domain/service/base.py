"""Base service class for domain services."""


class Service:
    """Base class for all domain services.

    Domain services hold business logic that spans several entities or
    repositories, such as an invite transition that also creates a
    relationship and a notification.
    """

    pass
