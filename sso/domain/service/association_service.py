"""Association domain service."""

import logfire

from sso.config import Settings
from sso.domain.error import DomainError
from sso.domain.model import Association
from sso.domain.repository import IdentityRepository, UserRepository
from sso.domain.value import UserField, UserId

from .base import Service


class AssociationService(Service):
    """Describes and removes a user's Xsolla association."""

    def __init__(
        self,
        user_repository: UserRepository,
        identity_repository: IdentityRepository,
        settings: Settings,
    ) -> None:
        """Initialize association service.

        Args:
            user_repository: User store
            identity_repository: Xsolla id to user id map
            settings: Application settings (URLs)
        """
        self.user_repository = user_repository
        self.identity_repository = identity_repository
        self.settings = settings

    async def describe_association(self, user_id: UserId) -> Association:
        """Describe whether a user is linked to Xsolla.

        Args:
            user_id: User ID

        Returns:
            Association with profile and deauth URLs if linked,
            otherwise with the login URL
        """
        with logfire.span("association_service.describe_association", user_id=user_id):
            xsolla_id = await self.user_repository.get_field(
                user_id, UserField.XSOLLA_ID
            )
            base_url = self.settings.api.base_url

            if xsolla_id:
                return Association(
                    associated=True,
                    url=f"{self.settings.xsolla.profile_url_base}/{xsolla_id}",
                    deauth_url=f"{base_url}/deauth/xsolla",
                )

            return Association(associated=False, url=f"{base_url}/auth/xsolla")

    async def unlink(self, user_id: UserId) -> UserId:
        """Remove a user's Xsolla association.

        Deletes the identity mapping first, then clears the field on the
        user record. If the second delete fails the mapping is already
        gone; running unlink again finishes the job.

        Args:
            user_id: User ID

        Returns:
            The user ID

        Raises:
            StorageError: If either delete fails
        """
        with logfire.span("association_service.unlink", user_id=user_id):
            try:
                xsolla_id = await self.user_repository.get_field(
                    user_id, UserField.XSOLLA_ID
                )
                if xsolla_id:
                    await self.identity_repository.delete(xsolla_id)
                else:
                    logfire.info("User has no Xsolla association", user_id=user_id)
                await self.user_repository.delete_field(user_id, UserField.XSOLLA_ID)
            except DomainError as e:
                logfire.error(
                    "Could not remove Xsolla identity data",
                    user_id=user_id,
                    error=str(e),
                )
                raise

            logfire.info("Xsolla association removed", user_id=user_id)
            return user_id
