"""Base use case."""

from abc import ABC, abstractmethod
from typing import Any


class BaseUseCase(ABC):
    """Base use case for orchestrating domain services.

    Use cases take a request model and return a response model; routes
    translate errors they raise into HTTP responses.
    """

    @abstractmethod
    async def execute(self, request: Any) -> Any:
        pass
