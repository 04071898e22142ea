# albaranes/services/email_template_service.py
"""
Servicio de renderizado de templates de email con Jinja2.

Templates:
- Validación de email
- Reseteo de contraseña
- Invitación a empresa
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Dict

from jinja2 import Environment, FileSystemLoader, select_autoescape

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent.parent / "templates" / "emails"


class EmailTemplateService:
    """
    Servicio de renderizado de templates de email.

    Usa Jinja2 para renderizar templates HTML.
    """

    def __init__(self, template_dir: Path = TEMPLATE_DIR):
        self.template_dir = template_dir

        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape(["html", "xml"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )

        self.env.filters["date_es"] = self._format_date_es

    def _format_date_es(self, value: datetime) -> str:
        """Formatea una fecha en español."""
        meses = [
            "enero", "febrero", "marzo", "abril", "mayo", "junio",
            "julio", "agosto", "septiembre", "octubre", "noviembre", "diciembre",
        ]
        return f"{value.day} de {meses[value.month - 1]} de {value.year}"

    def _render(self, nombre_template: str, data: Dict[str, Any]) -> str:
        try:
            template = self.env.get_template(nombre_template)
            return template.render(**data)
        except Exception as e:
            logger.error("Error renderizando template %s: %s", nombre_template, e)
            raise

    def render_validacion_email(self, data: Dict[str, Any]) -> str:
        """
        Args:
            data: nombre, enlace, token, minutos_validez
        """
        return self._render("validacion_email.html", data)

    def render_reseteo_password(self, data: Dict[str, Any]) -> str:
        """
        Args:
            data: nombre, enlace, token, minutos_validez
        """
        return self._render("reseteo_password.html", data)

    def render_invitacion_empresa(self, data: Dict[str, Any]) -> str:
        """
        Args:
            data: nombre_invitador, nombre_empresa, enlace, token, expiracion
        """
        return self._render("invitacion_empresa.html", data)
