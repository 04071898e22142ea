# albaranes/core/config.py
from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings


class Entornos:
    """Constantes para los entornos de ejecución."""
    DEVELOPMENT = "development"
    TEST = "test"
    PRODUCTION = "production"


class Settings(BaseSettings):
    # --- Core ---
    environment: str = Field(Entornos.DEVELOPMENT, description="development | test | production")
    api_prefix: str = Field("/api", description="Prefijo común de las rutas de la API")

    # --- Seguridad / JWT ---
    secret_key: str = Field(..., description="Clave secreta para firmar los JWT")
    algorithm: str = Field("HS256")
    access_token_expire_minutes: int = Field(60 * 24 * 30, description="Vigencia del token de acceso")

    # --- Tokens de un solo uso ---
    email_validation_expire_minutes: int = Field(60)
    password_reset_expire_minutes: int = Field(60)
    invitation_expire_days: int = Field(7)

    # --- Base de datos ---
    database_url: str = Field("sqlite:///./albaranes.db")

    # --- CORS ---
    backend_cors_origins: str = Field("", description="Orígenes separados por comas")

    # --- Almacenamiento de ficheros ---
    storage_dir: Path = Field(Path("storage"))
    max_firma_bytes: int = Field(5 * 1024 * 1024, description="Tamaño máximo de la imagen de firma")

    # --- Logging ---
    log_dir: Path = Field(Path("logs"))
    log_level: str = Field("INFO")

    # --- Frontend (enlaces en los emails) ---
    frontend_url: str = Field("http://localhost:3000")

    # --- SMTP ---
    smtp_host: str = Field("smtp.gmail.com")
    smtp_port: int = Field(587)
    smtp_user: str = Field("")
    smtp_password: str = Field("")
    smtp_from_email: str = Field("noreply@albaranes.es")
    smtp_from_name: str = Field("Albaranes - Notificaciones")
    smtp_use_tls: bool = Field(True)
    smtp_timeout: int = Field(30)

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"

    @property
    def firmas_dir(self) -> Path:
        return self.storage_dir / "firmas"

    @property
    def pdfs_dir(self) -> Path:
        return self.storage_dir / "ficheros-generados"

    @property
    def es_produccion(self) -> bool:
        return self.environment == Entornos.PRODUCTION


@lru_cache
def get_settings() -> Settings:
    """Configuración cargada desde variables de entorno (una sola vez por proceso)."""
    return Settings()
