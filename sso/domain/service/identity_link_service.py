"""Identity linking domain service.

Maps a verified Xsolla identity onto a local account:

1. Already logged in: associate the Xsolla account with the current user,
   unless that user is linked to a different Xsolla account.
2. Xsolla account already mapped: returning user, refresh stored tokens.
3. Email matches an existing account: merge into that account, unless it
   is linked to a different Xsolla account.
4. Otherwise: create a new account, unless registration is disabled.

Writes are issued one by one and never compensated here. Whether a
failure part-way through keeps the earlier writes depends on the
repositories: the Postgres ones share the request transaction.
"""

import logfire

from sso.config import XsollaSettings
from sso.domain.error import (
    MultipleAssociationError,
    NotFoundError,
    RegistrationDisabledError,
)
from sso.domain.model import User
from sso.domain.repository import IdentityRepository, UserRepository
from sso.domain.value import ExternalIdentity, UserField, UserId

from .base import Service


class IdentityLinkService(Service):
    """Domain service resolving external identities to local users."""

    def __init__(
        self,
        user_repository: UserRepository,
        identity_repository: IdentityRepository,
        xsolla_settings: XsollaSettings,
    ) -> None:
        """Initialize identity link service.

        Args:
            user_repository: User store
            identity_repository: Xsolla id to user id map
            xsolla_settings: Account policy (auto confirm, registration)
        """
        self.user_repository = user_repository
        self.identity_repository = identity_repository
        self.xsolla_settings = xsolla_settings

    async def resolve(
        self, identity: ExternalIdentity, current_user_id: UserId | None = None
    ) -> User:
        """Resolve an external identity to a local user.

        Args:
            identity: Verified identity from the OAuth client
            current_user_id: Authenticated user making the request, if any

        Returns:
            The linked, merged or newly created user

        Raises:
            MultipleAssociationError: Current user, or the account matched by
                email, is linked to another Xsolla account
            RegistrationDisabledError: No matching account and registration is off
            IdentityConflictError: Xsolla account is mapped to a different user
            StorageError: User store or identity map failed
        """
        if current_user_id is not None and current_user_id > 0:
            return await self.associate(current_user_id, identity)
        return await self.login(identity)

    async def associate(self, user_id: UserId, identity: ExternalIdentity) -> User:
        """Associate an Xsolla account with an already logged-in user."""
        with logfire.span(
            "identity_link_service.associate",
            user_id=user_id,
            xsolla_id=identity.external_id,
        ):
            existing = await self.user_repository.get_field(
                user_id, UserField.XSOLLA_ID
            )

            if existing and existing != identity.external_id:
                logfire.warn(
                    "Association rejected: user already linked",
                    user_id=user_id,
                    existing_xsolla_id=existing,
                    xsolla_id=identity.external_id,
                )
                raise MultipleAssociationError(
                    user_id, existing, identity.external_id
                )

            await self.identity_repository.save(identity.external_id, user_id)
            await self.user_repository.set_field(
                user_id, UserField.XSOLLA_ID, identity.external_id
            )

            logfire.info(
                "Xsolla account associated",
                user_id=user_id,
                xsolla_id=identity.external_id,
            )
            return await self._load(user_id)

    async def login(self, identity: ExternalIdentity) -> User:
        """Log in with an Xsolla identity, merging or creating as needed."""
        with logfire.span(
            "identity_link_service.login", xsolla_id=identity.external_id
        ):
            user_id = await self.identity_repository.find_uid(identity.external_id)

            if user_id is not None:
                await self.store_tokens(
                    user_id, identity.access_token, identity.refresh_token
                )
                logfire.info(
                    "Returning Xsolla user logged in",
                    user_id=user_id,
                    xsolla_id=identity.external_id,
                )
                return await self._load(user_id)

            user_id = await self.user_repository.find_uid_by_email(identity.email)
            if user_id is not None:
                existing = await self.user_repository.get_field(
                    user_id, UserField.XSOLLA_ID
                )
                if existing and existing != identity.external_id:
                    logfire.warn(
                        "Merge rejected: account already linked",
                        user_id=user_id,
                        existing_xsolla_id=existing,
                        xsolla_id=identity.external_id,
                    )
                    raise MultipleAssociationError(
                        user_id, existing, identity.external_id
                    )

                logfire.info(
                    "Merging Xsolla identity into existing account",
                    user_id=user_id,
                    xsolla_id=identity.external_id,
                )
                await self._link_new_identity(user_id, identity, created=False)
                return await self._load(user_id)

            if self.xsolla_settings.disable_registration:
                logfire.warn(
                    "Registration via Xsolla is disabled",
                    xsolla_id=identity.external_id,
                )
                raise RegistrationDisabledError("Xsolla")

            user_id = await self.user_repository.create(
                username=identity.display_name, email=identity.email
            )
            logfire.info(
                "User created from Xsolla identity",
                user_id=user_id,
                xsolla_id=identity.external_id,
            )
            await self._link_new_identity(user_id, identity, created=True)
            return await self._load(user_id)

    async def store_tokens(
        self, user_id: UserId, access_token: str, refresh_token: str | None
    ) -> None:
        """Persist the provider tokens on the user record."""
        logfire.debug("Storing Xsolla tokens", user_id=user_id)
        await self.user_repository.set_field(
            user_id, UserField.XSOLLA_ACCESS_TOKEN, access_token
        )
        await self.user_repository.set_field(
            user_id, UserField.XSOLLA_REFRESH_TOKEN, refresh_token
        )

    async def _link_new_identity(
        self, user_id: UserId, identity: ExternalIdentity, created: bool
    ) -> None:
        await self.identity_repository.save(identity.external_id, user_id)
        await self.user_repository.set_field(
            user_id, UserField.XSOLLA_ID, identity.external_id
        )

        # Merged accounts are never un-confirmed
        auto_confirm = self.xsolla_settings.auto_confirm
        if created or auto_confirm:
            await self.user_repository.set_field(
                user_id, UserField.EMAIL_CONFIRMED, auto_confirm
            )

        if identity.avatar_url:
            await self.user_repository.set_field(
                user_id, UserField.UPLOADED_PICTURE, identity.avatar_url
            )
            await self.user_repository.set_field(
                user_id, UserField.PICTURE, identity.avatar_url
            )

        await self.store_tokens(
            user_id, identity.access_token, identity.refresh_token
        )

    async def _load(self, user_id: UserId) -> User:
        user = await self.user_repository.find_by_id(user_id)
        if not user:
            raise NotFoundError("User", str(user_id))
        return user
