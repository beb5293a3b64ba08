"""Domain layer errors."""

from marquee.domain.value import InviteErrorKind


class DomainError(Exception):
    """Base domain error."""

    pass


class StoreError(DomainError):
    """Persistent store failed; the surrounding transaction was rolled back."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class InviteError(DomainError):
    """Expected invite failure, reported to callers as a typed result."""

    kind: InviteErrorKind = InviteErrorKind.VALIDATION_ERROR

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class InviteNotFoundError(InviteError):
    kind = InviteErrorKind.NOT_FOUND


class InviteForbiddenError(InviteError):
    kind = InviteErrorKind.FORBIDDEN


class InviteExpiredError(InviteError):
    kind = InviteErrorKind.EXPIRED

    def __init__(self, message: str = "Invite has expired"):
        super().__init__(message)


class AlreadyResolvedError(InviteError):
    kind = InviteErrorKind.ALREADY_RESOLVED


class AlreadyConnectedError(InviteError):
    kind = InviteErrorKind.ALREADY_CONNECTED


class DuplicatePendingInviteError(InviteError):
    """A pending invite already exists for (inviter, kind, target).

    Raised by repositories when the store-level uniqueness constraint trips.
    """

    kind = InviteErrorKind.DUPLICATE_PENDING


class ListNotFoundError(InviteError):
    kind = InviteErrorKind.LIST_NOT_FOUND

    def __init__(self, list_id: str):
        self.list_id = list_id
        super().__init__(f"List not found: {list_id}")


class InviteValidationError(InviteError):
    kind = InviteErrorKind.VALIDATION_ERROR


class InviteCodeCollisionError(DomainError):
    """Generated invite code already exists; the caller regenerates."""

    pass


class NotAuthorizedError(DomainError):
    """Raised when a user attempts to change a relationship they are not part of."""

    def __init__(self, resource: str, resource_id: str, user_id: str):
        super().__init__(
            f"User {user_id} is not authorized to modify {resource} {resource_id}"
        )
