# albaranes/services/invitacion_service.py
"""
Invitaciones para unirse a la empresa de otro usuario.

Una invitación nace ``pending`` y pasa a ``accepted`` al aceptarla o a
``expired`` si se intenta aceptar después de su fecha de expiración.
"""
import logging
from datetime import timedelta

from fastapi import BackgroundTasks
from sqlalchemy.orm import Session

from albaranes.core.config import Settings
from albaranes.core.exceptions import PeticionInvalida, TokenInvalido
from albaranes.crud.invitacion import (
    create_invitacion,
    get_invitacion_pendiente,
    get_invitacion_pendiente_por_token,
)
from albaranes.crud.usuario import get_usuario_by_email
from albaranes.models.invitacion import EstadoInvitacion, Invitacion
from albaranes.models.usuario import Usuario
from albaranes.services.notificaciones import enviar_email_invitacion
from albaranes.utils.fechas import ahora
from albaranes.utils.tokens import generar_token

logger = logging.getLogger(__name__)


def _misma_empresa(a: str, b: str) -> bool:
    return a.strip().lower() == b.strip().lower()


def invitar(
    db: Session,
    settings: Settings,
    background_tasks: BackgroundTasks,
    invitador: Usuario,
    email_invitado: str,
) -> Invitacion:
    if not invitador.tiene_empresa:
        raise PeticionInvalida("El usuario que invita debe pertenecer a una empresa.")

    nombre_empresa = invitador.empresa_nombre.strip()

    if email_invitado == invitador.email:
        raise PeticionInvalida("No puedes invitarte a ti mismo a la compañía.")

    if get_invitacion_pendiente(db, email_invitado, nombre_empresa):
        raise PeticionInvalida(
            f"Ya existe una invitación pendiente para {email_invitado} a la empresa {nombre_empresa}."
        )

    invitado = get_usuario_by_email(db, email_invitado)
    if invitado and invitado.tiene_empresa and not _misma_empresa(invitado.empresa_nombre, nombre_empresa):
        raise PeticionInvalida(
            f"El usuario {email_invitado} ya pertenece a la empresa '{invitado.empresa_nombre}'. "
            "No puede ser invitado."
        )

    invitacion = create_invitacion(
        db,
        email_invitado=email_invitado,
        nombre_empresa=nombre_empresa,
        invitador_id=invitador.id,
        token=generar_token(32),
        expiracion=ahora() + timedelta(days=settings.invitation_expire_days),
        estado=EstadoInvitacion.pending,
    )

    background_tasks.add_task(
        enviar_email_invitacion,
        settings,
        email_invitado,
        invitador.nombre,
        nombre_empresa,
        invitacion.token,
        invitacion.expiracion,
    )
    logger.info("Invitación %s enviada a %s para %s", invitacion.id, email_invitado, nombre_empresa)
    return invitacion


def aceptar(db: Session, usuario: Usuario, token: str):
    """
    Acepta la invitación del token para el usuario autenticado.

    Returns:
        (mensaje, usuario actualizado o None si ya pertenecía a la empresa)
    """
    invitacion = get_invitacion_pendiente_por_token(db, token, usuario.email)
    if not invitacion:
        raise TokenInvalido("Invitación no válida, no encontrada o ya no está pendiente.")

    if invitacion.expiracion < ahora():
        invitacion.estado = EstadoInvitacion.expired
        db.commit()
        logger.info("Invitación %s caducada", invitacion.id)
        raise TokenInvalido("La invitación ha caducado.")

    if usuario.tiene_empresa:
        if _misma_empresa(usuario.empresa_nombre, invitacion.nombre_empresa):
            invitacion.estado = EstadoInvitacion.accepted
            db.commit()
            return f"Ya perteneces a la empresa {invitacion.nombre_empresa}.", None
        raise PeticionInvalida(
            f"Ya perteneces a la empresa '{usuario.empresa_nombre}'. No puedes unirte a otra."
        )

    usuario.empresa_nombre = invitacion.nombre_empresa
    if invitacion.invitador:
        usuario.empresa_id = invitacion.invitador.empresa_id
    invitacion.estado = EstadoInvitacion.accepted
    db.commit()
    db.refresh(usuario)

    logger.info("Usuario %s aceptó invitación a la empresa %s", usuario.email, invitacion.nombre_empresa)
    return f"Te has unido exitosamente a la empresa {invitacion.nombre_empresa}.", usuario
