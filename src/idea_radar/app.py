"""FastAPI Application Factory."""

from __future__ import annotations

import logging
import sys

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from idea_radar.api.data import router as data_router
from idea_radar.api.errors import handle_domain_error, handle_request_validation
from idea_radar.api.ideation import router as ideation_router
from idea_radar.api.research import router as research_router
from idea_radar.api.trends import router as trends_router
from idea_radar.config import Settings
from idea_radar.container import ServiceContainer
from idea_radar.domain.exceptions import IdeaRadarError

logger = logging.getLogger(__name__)


def _configure_logging(level: str = "INFO") -> None:
    """Strukturiertes Logging mit Zeitstempel, Level und Modul-Name."""
    log_format = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"

    root = logging.getLogger("idea_radar")
    root.setLevel(level.upper())
    # create_app() kann mehrfach laufen (Tests): nur ein Handler
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(log_format, datefmt=date_format))
        root.addHandler(handler)
    # Verhindert doppelte Log-Eintraege bei uvicorn
    root.propagate = False


def create_app(container: ServiceContainer | None = None) -> FastAPI:
    """Erstellt und konfiguriert die FastAPI-Anwendung.

    Ohne ``container`` wird er aus den Settings gebaut (Produktion);
    Tests reichen einen Container mit Fake-Model und Fake-Trends-Quelle ein.
    """
    settings = container.settings if container is not None else Settings()
    _configure_logging(settings.log_level)
    if container is None:
        container = ServiceContainer.build(settings)

    app = FastAPI(
        title="Idea Radar API",
        description="Marktrecherche, AI-Agent-Ideen und Agent-Configs auf Basis von Gemini.",
        version="0.1.0",
    )
    app.state.container = container

    # CORS (konfigurierbar via CORS_ORIGINS env variable)
    origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(IdeaRadarError, handle_domain_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation)

    app.include_router(research_router)
    app.include_router(ideation_router)
    app.include_router(trends_router)
    app.include_router(data_router)

    @app.on_event("startup")
    async def _log_configuration() -> None:
        logger.info("Store DB: %s", settings.store_db_path)
        # API-Key-Status (maskiert, nie den echten Key loggen)
        logger.info(
            "Gemini: %s (%s)",
            "API Key konfiguriert" if settings.gemini_configured else "nicht konfiguriert",
            settings.gemini_model,
        )
        logger.info(
            "Cron secret: %s", "konfiguriert" if settings.cron_secret else "deaktiviert"
        )
        try:
            purged = await container.research.purge_expired()
        except Exception as e:
            logger.warning("Research cache purge failed: %s", e)
        else:
            logger.info("Research cache: %d expired entries purged", purged)

    @app.on_event("shutdown")
    async def _stop_background_jobs() -> None:
        await container.jobs.shutdown()

    return app
