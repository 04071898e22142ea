# albaranes/services/email_service.py
"""
Envío de emails por SMTP.

Sin credenciales SMTP configuradas el servicio funciona en modo prueba:
registra destinatario y asunto en el log y da el envío por bueno.
"""
import logging
import smtplib
from email.mime.multipart import MIMEMultipart
from email.mime.text import MIMEText
from email.utils import formataddr
from typing import Any, Dict, Optional

from albaranes.core.config import Settings

logger = logging.getLogger(__name__)


class EmailService:

    def __init__(self, settings: Settings):
        self.smtp_host = settings.smtp_host
        self.smtp_port = settings.smtp_port
        self.smtp_user = settings.smtp_user
        self.smtp_password = settings.smtp_password
        self.from_email = settings.smtp_from_email
        self.from_name = settings.smtp_from_name
        self.use_tls = settings.smtp_use_tls
        self.timeout = settings.smtp_timeout

    @property
    def modo_prueba(self) -> bool:
        return not (self.smtp_user and self.smtp_password)

    def _crear_mensaje(self, to_email: str, subject: str, body_html: str, body_text: Optional[str]) -> MIMEMultipart:
        mensaje = MIMEMultipart("alternative")
        mensaje["Subject"] = subject
        mensaje["From"] = formataddr((self.from_name, self.from_email))
        mensaje["To"] = to_email

        if body_text:
            mensaje.attach(MIMEText(body_text, "plain", "utf-8"))
        mensaje.attach(MIMEText(body_html, "html", "utf-8"))
        return mensaje

    def send_email(
        self,
        to_email: str,
        subject: str,
        body_html: str,
        body_text: Optional[str] = None,
    ) -> Dict[str, Any]:
        if self.modo_prueba:
            logger.info("[MODO PRUEBA] Email a: %s | Asunto: %s", to_email, subject)
            return {"success": True, "modo_prueba": True, "destinatario": to_email}

        mensaje = self._crear_mensaje(to_email, subject, body_html, body_text)

        with smtplib.SMTP(self.smtp_host, self.smtp_port, timeout=self.timeout) as server:
            if self.use_tls:
                server.starttls()
            server.login(self.smtp_user, self.smtp_password)
            server.send_message(mensaje)

        logger.info("Email enviado a %s | Asunto: %s", to_email, subject)
        return {"success": True, "modo_prueba": False, "destinatario": to_email}
