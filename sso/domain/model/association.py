"""Association view shown on the user's profile edit page."""

from typing import Optional

from sso.domain.model.common import DomainModel


class Association(DomainModel):
    """Whether a user is linked to Xsolla, with the matching action URL.

    Linked users get the public profile URL and a deauthorization URL;
    unlinked users get the URL that starts the Xsolla login.
    """

    associated: bool
    url: str
    deauth_url: Optional[str] = None
    name: str = "Xsolla"
    icon: str = "fa-sign-in"
