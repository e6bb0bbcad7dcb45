"""Infrastructure providers."""

# Import bases
from .mailer import MailerProvider
from .persistence import PersistenceProvider
from .xsolla import XsollaProvider

# Import implementations (needed for __subclasses__())
from .mailer import ProdMailerProvider  # noqa: F401
from .persistence import ProdPersistenceProvider  # noqa: F401
from .xsolla import ProdXsollaProvider  # noqa: F401

__all__ = [
    "MailerProvider",
    "PersistenceProvider",
    "ProdMailerProvider",
    "ProdPersistenceProvider",
    "ProdXsollaProvider",
    "XsollaProvider",
]
