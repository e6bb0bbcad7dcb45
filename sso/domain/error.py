"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")


class MultipleAssociationError(DomainError):
    """Raised when a user already linked to one Xsolla account tries to link another."""

    def __init__(self, user_id: int, existing_xsolla_id: str, xsolla_id: str):
        self.user_id = user_id
        self.existing_xsolla_id = existing_xsolla_id
        self.xsolla_id = xsolla_id
        super().__init__(
            f"User {user_id} is already associated with Xsolla account "
            f"{existing_xsolla_id}, cannot associate {xsolla_id}"
        )


class RegistrationDisabledError(DomainError):
    """Raised when SSO registration is disabled and no local account matches."""

    def __init__(self, provider: str = "Xsolla"):
        self.provider = provider
        super().__init__(f"Registration via {provider} is disabled")


class IdentityConflictError(DomainError):
    """Raised when an Xsolla account is already mapped to a different user."""

    def __init__(self, xsolla_id: str, user_id: int):
        self.xsolla_id = xsolla_id
        self.user_id = user_id
        super().__init__(
            f"Xsolla account {xsolla_id} is already associated with user {user_id}"
        )


class StorageError(DomainError):
    """Raised when the user store or identity map fails."""

    pass


class ValidationEmailError(DomainError):
    """Raised when a validation email cannot be sent."""

    pass


class InvalidConfirmationError(DomainError):
    """Raised for unknown or expired email confirmation codes."""

    pass
