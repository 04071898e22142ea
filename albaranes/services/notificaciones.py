# albaranes/services/notificaciones.py
"""
Notificaciones por email de alto nivel.

Se programan con ``BackgroundTasks`` después de confirmar el cambio en la
base de datos. Un fallo de envío se registra en el log y nunca llega a la
respuesta HTTP.
"""

import logging
from datetime import datetime
from typing import Any, Dict

from albaranes.core.config import Settings
from albaranes.services.email_service import EmailService
from albaranes.services.email_template_service import EmailTemplateService

logger = logging.getLogger(__name__)


def _enviar(settings: Settings, to_email: str, subject: str, render, data: Dict[str, Any]) -> Dict[str, Any]:
    try:
        html_body = render(EmailTemplateService(), data)
        return EmailService(settings).send_email(to_email=to_email, subject=subject, body_html=html_body)
    except Exception as e:
        logger.error("Error enviando email '%s' a %s: %s", subject, to_email, e)
        return {"success": False, "error": str(e), "destinatario": to_email}


def enviar_email_validacion(settings: Settings, email: str, nombre: str, token: str) -> Dict[str, Any]:
    """
    Envía el enlace de validación de email tras el registro o un cambio de email.

    Returns:
        Dict con resultado del envío
    """
    data = {
        "nombre": nombre,
        "token": token,
        "enlace": f"{settings.frontend_url}/validar-email?token={token}",
        "minutos_validez": settings.email_validation_expire_minutes,
    }
    return _enviar(
        settings, email, "Valida tu email - Albaranes",
        EmailTemplateService.render_validacion_email, data,
    )


def enviar_email_reseteo_password(settings: Settings, email: str, nombre: str, token: str) -> Dict[str, Any]:
    data = {
        "nombre": nombre,
        "token": token,
        "enlace": f"{settings.frontend_url}/reset-password?token={token}",
        "minutos_validez": settings.password_reset_expire_minutes,
    }
    return _enviar(
        settings, email, "Restablecer contraseña - Albaranes",
        EmailTemplateService.render_reseteo_password, data,
    )


def enviar_email_invitacion(
    settings: Settings,
    email: str,
    nombre_invitador: str,
    nombre_empresa: str,
    token: str,
    expiracion: datetime,
) -> Dict[str, Any]:
    data = {
        "nombre_invitador": nombre_invitador,
        "nombre_empresa": nombre_empresa,
        "token": token,
        "enlace": f"{settings.frontend_url}/aceptar-invitacion?token={token}",
        "expiracion": expiracion,
    }
    return _enviar(
        settings, email, f"Invitación para unirte a {nombre_empresa}",
        EmailTemplateService.render_invitacion_empresa, data,
    )
