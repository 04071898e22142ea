# albaranes/api/dependencies.py
from fastapi import Request

from albaranes.core.config import Settings
from albaranes.core.security import get_current_usuario  # noqa: F401  re-export para los routers
from albaranes.db.session import get_db  # noqa: F401


def get_app_settings(request: Request) -> Settings:
    """Settings con los que se construyó la aplicación (``create_app``)."""
    return request.app.state.settings
