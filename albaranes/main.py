from typing import Optional

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from albaranes import __version__
from albaranes.api.v1.routers import api_router
from albaranes.core.config import Settings, get_settings
from albaranes.core.error_handlers import register_error_handlers
from albaranes.core.lifespan import lifespan
from albaranes.core.logging_middleware import log_requests
from albaranes.db.session import build_engine, build_session_factory
from albaranes.utils.cors import setup_cors
from albaranes.utils.logger import setup_logging


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings.log_dir, settings.log_level)

    app = FastAPI(
        title="Albaranes API",
        version=__version__,
        description="Gestión de clientes, proyectos y albaranes con firma digital y PDF",
        lifespan=lifespan,
    )

    # --- Estado compartido: configuración y persistencia ---
    app.state.settings = settings
    app.state.engine = build_engine(settings.database_url)
    app.state.session_factory = build_session_factory(app.state.engine)

    # --- Errores, CORS y logging de peticiones ---
    register_error_handlers(app)
    setup_cors(app)
    app.middleware("http")(log_requests)

    # --- Rutas centralizadas ---
    app.include_router(api_router, prefix=settings.api_prefix)

    # --- Ficheros de firmas y PDFs ---
    settings.storage_dir.mkdir(parents=True, exist_ok=True)
    app.mount("/storage", StaticFiles(directory=str(settings.storage_dir)), name="storage")

    return app
