"""FastAPI application serving a health route."""

from fastapi import FastAPI

from .. import __description__, __version__
from ..config.settings import CheckupSettings, get_settings
from ..core.checkup import Checkup
from ..core.options import CheckupOptions
from ..observability.logging import setup_logging_from_settings
from ..plugins import logging_plugin, system_plugin
from .endpoints import checkup_lifespan, create_health_router


def create_app(
    checkup: Checkup | None = None, settings: CheckupSettings | None = None
) -> FastAPI:
    """Create a standalone health check application.

    Without a ``checkup`` the instance is built from settings with the system
    checker and structlog error reporting. Background checks run for the
    lifetime of the application.
    """
    settings = settings or get_settings()
    setup_logging_from_settings(settings)

    if checkup is None:
        checkup = Checkup(
            CheckupOptions.from_settings(
                settings, plugins=[system_plugin(), logging_plugin()]
            )
        )

    app = FastAPI(
        title=settings.service_name,
        description=__description__,
        version=__version__,
        lifespan=checkup_lifespan(checkup),
    )
    app.include_router(
        create_health_router(
            checkup, path=settings.http_path, debug=settings.http_debug
        )
    )
    return app
