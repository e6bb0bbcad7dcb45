"""Xsolla OAuth adapter."""

from .client import (
    MockXsollaOAuthClient,
    RealXsollaOAuthClient,
    XsollaOAuthClient,
    XsollaOAuthError,
)

__all__ = [
    "MockXsollaOAuthClient",
    "RealXsollaOAuthClient",
    "XsollaOAuthClient",
    "XsollaOAuthError",
]
