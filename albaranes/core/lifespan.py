from contextlib import asynccontextmanager

from fastapi import FastAPI

from albaranes.core.config import Entornos
from albaranes.db.base import Base
from albaranes.services.storage_service import asegurar_directorios
from albaranes.utils.logger import logger


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Maneja startup/shutdown de la app.

    En development/test crea las tablas directamente; en el resto de
    entornos el esquema lo gestionan las migraciones de Alembic.
    """
    settings = app.state.settings

    # --- Startup ---
    logger.info("🚀 Iniciando API de Albaranes (%s)...", settings.environment)

    if settings.environment in (Entornos.DEVELOPMENT, Entornos.TEST):
        import albaranes.models  # noqa: F401  registra los modelos en Base.metadata
        Base.metadata.create_all(bind=app.state.engine)

    asegurar_directorios(settings)
    logger.info("✅ Startup completado correctamente")

    yield

    # --- Shutdown ---
    logger.info("🛑 Aplicación apagándose...")
    app.state.engine.dispose()
    logger.info("👋 Aplicación cerrada correctamente")
