"""Xsolla association use cases."""

from .deauthorize import DeauthorizeUseCase
from .get_association import GetAssociationUseCase

__all__ = ["DeauthorizeUseCase", "GetAssociationUseCase"]
