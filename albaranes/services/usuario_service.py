# albaranes/services/usuario_service.py
import logging

from fastapi import BackgroundTasks
from sqlalchemy.orm import Session

from albaranes.core.config import Settings
from albaranes.core.exceptions import NoAutorizado, NoEncontrado, PeticionInvalida
from albaranes.core.security import hash_password, verify_password
from albaranes.crud.usuario import get_usuario, get_usuario_by_email
from albaranes.models.usuario import Usuario
from albaranes.schemas.usuario import CambioPasswordRequest, EmpresaUpdate, UsuarioUpdate
from albaranes.services import ciclo_vida
from albaranes.services.auth_service import emitir_token_validacion
from albaranes.services.notificaciones import enviar_email_validacion

logger = logging.getLogger(__name__)


def actualizar_perfil(
    db: Session,
    settings: Settings,
    background_tasks: BackgroundTasks,
    usuario: Usuario,
    data: UsuarioUpdate,
) -> Usuario:
    token_nuevo = None

    if data.nombre:
        usuario.nombre = data.nombre

    if data.email and data.email.lower() != usuario.email:
        if get_usuario_by_email(db, data.email):
            raise PeticionInvalida("El correo electrónico ya está en uso.")
        usuario.email = data.email.lower()
        usuario.validado = False
        token_nuevo = emitir_token_validacion(usuario, settings)

    # Solo se re-hashea si llega una contraseña nueva
    if data.password:
        usuario.hashed_password = hash_password(data.password)

    db.commit()
    db.refresh(usuario)

    if token_nuevo:
        background_tasks.add_task(enviar_email_validacion, settings, usuario.email, usuario.nombre, token_nuevo)
        logger.info("Email cambiado para usuario %s, pendiente de validación", usuario.id)

    return usuario


def actualizar_empresa(db: Session, usuario: Usuario, data: EmpresaUpdate) -> Usuario:
    for campo, valor in data.dict(exclude_unset=True).items():
        setattr(usuario, f"empresa_{campo}", valor)

    db.commit()
    db.refresh(usuario)
    logger.info("Empresa actualizada para usuario %s", usuario.id)
    return usuario


def cambiar_password(db: Session, usuario: Usuario, data: CambioPasswordRequest) -> None:
    if data.new_password == data.current_password:
        raise PeticionInvalida("La nueva contraseña no puede ser igual a la contraseña actual.")

    if not verify_password(data.current_password, usuario.hashed_password):
        logger.warning("Cambio de contraseña con contraseña actual incorrecta: %s", usuario.email)
        raise NoAutorizado("La contraseña actual es incorrecta.")

    usuario.hashed_password = hash_password(data.new_password)
    db.commit()
    logger.info("Contraseña cambiada para usuario %s", usuario.id)


def eliminar_cuenta(db: Session, usuario: Usuario) -> Usuario:
    return ciclo_vida.marcar(db, usuario, ciclo_vida.BORRADO_USUARIO)


def eliminar_usuario_definitivamente(db: Session, usuario_id: str, solicitante: Usuario) -> None:
    # Sin roles, cada usuario solo puede borrar su propia cuenta
    usuario = get_usuario(db, usuario_id) if usuario_id == solicitante.id else None
    if not usuario:
        raise NoEncontrado("Usuario no encontrado para eliminación física.")
    ciclo_vida.eliminar_definitivamente(db, usuario)
