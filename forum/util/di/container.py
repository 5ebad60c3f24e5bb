"""Dependency injection container."""

from dishka import AsyncContainer, make_async_container
from dishka.integrations.fastapi import FastapiProvider, setup_dishka
from fastapi import FastAPI
import logfire

from forum.util.di import PROVIDERS, get_provider


def create_container() -> AsyncContainer:
    """Build the production container.

    Every component uses its production implementation; Settings are read
    from the environment on first use.
    """
    providers = [get_provider(base, use_mock=False)() for base in PROVIDERS]
    return make_async_container(*providers, FastapiProvider())


def setup_di(app: FastAPI, container: AsyncContainer) -> None:
    """Attach ``container`` to ``app``.

    Replaces any container attached earlier (tests swap in their own);
    whichever container is attached last is the one closed on shutdown.
    """
    setup_dishka(container, app)
    logfire.info("Dependency injection configured")


async def close_di(app: FastAPI) -> None:
    """Close the container attached to ``app``, releasing APP-scoped resources."""
    container: AsyncContainer | None = getattr(app.state, "dishka_container", None)
    if container is not None:
        await container.close()
