"""Dependency injection container and its FastAPI wiring."""

from contextlib import asynccontextmanager
from typing import AsyncIterator

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from fastapi import FastAPI

from sso.util.di import PROVIDERS, get_provider


def create_container() -> AsyncContainer:
    """Build the production container.

    Every component uses its production provider. Settings are read from
    the environment when first requested.
    """
    providers = [get_provider(base, use_mock=False)() for base in PROVIDERS]
    return make_async_container(*providers, FastapiProvider())


def setup_di(app: FastAPI, container: AsyncContainer) -> None:
    """Attach the container to the app.

    The container is stored on ``app.state.dishka_container`` and closed
    by ``lifespan`` on shutdown.
    """
    setup_dishka(container, app)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Close the container on shutdown, disposing the database engine."""
    yield
    await app.state.dishka_container.close()
