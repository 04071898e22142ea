# albaranes/services/auth_service.py
"""
Registro, login, validación de email y reseteo de contraseña.

Los tokens de un solo uso (validación y reseteo) se guardan en el propio
usuario junto a su expiración; consumirlos los borra.
"""
import logging
from datetime import timedelta

from fastapi import BackgroundTasks
from sqlalchemy.orm import Session

from albaranes.core.config import Settings
from albaranes.core.exceptions import EstadoInvalido, NoAutorizado, PeticionInvalida, Prohibido, TokenInvalido
from albaranes.core.security import create_access_token, hash_password, verify_password
from albaranes.crud.usuario import (
    create_usuario,
    get_usuario_by_email,
    get_usuario_by_token_reseteo,
    get_usuario_by_token_validacion,
)
from albaranes.models.usuario import Usuario
from albaranes.schemas.auth import LoginRequest, RegistroRequest, ReseteoPasswordRequest
from albaranes.services.notificaciones import enviar_email_reseteo_password, enviar_email_validacion
from albaranes.utils.fechas import ahora
from albaranes.utils.tokens import generar_token

logger = logging.getLogger(__name__)

MENSAJE_RESETEO_GENERICO = (
    "Si tu correo electrónico está registrado, recibirás un enlace para resetear tu contraseña."
)


def emitir_token_validacion(usuario: Usuario, settings: Settings) -> str:
    """Asigna al usuario un nuevo token de validación de email (sin commit)."""
    token = generar_token()
    usuario.token_validacion_email = token
    usuario.expiracion_token_validacion_email = ahora() + timedelta(
        minutes=settings.email_validation_expire_minutes
    )
    return token


def registrar(db: Session, settings: Settings, background_tasks: BackgroundTasks, data: RegistroRequest):
    if get_usuario_by_email(db, data.email):
        raise PeticionInvalida("El usuario ya existe.")

    token = generar_token()
    usuario = create_usuario(
        db,
        nombre=data.nombre,
        email=data.email,
        hashed_password=hash_password(data.password),
        empresa_nombre=data.empresa_nombre,
        validado=False,
        token_validacion_email=token,
        expiracion_token_validacion_email=ahora() + timedelta(minutes=settings.email_validation_expire_minutes),
    )

    background_tasks.add_task(enviar_email_validacion, settings, usuario.email, usuario.nombre, token)
    logger.info("Usuario registrado: %s", usuario.email)

    return usuario, create_access_token(usuario.id, settings)


def login(db: Session, settings: Settings, data: LoginRequest):
    usuario = get_usuario_by_email(db, data.email)
    if not usuario:
        logger.warning("Login fallido, email desconocido: %s", data.email)
        raise NoAutorizado("Credenciales inválidas.")

    # La cuenta eliminada se rechaza antes de comprobar la contraseña
    if usuario.is_deleted:
        logger.warning("Login sobre cuenta eliminada: %s", usuario.email)
        raise Prohibido(
            "Esta cuenta ha sido eliminada. Por favor, contacta al soporte si crees que es un error."
        )

    if not verify_password(data.password, usuario.hashed_password):
        logger.warning("Login fallido, contraseña incorrecta: %s", usuario.email)
        raise NoAutorizado("Credenciales inválidas.")

    logger.info("Login correcto: %s", usuario.email)
    return usuario, create_access_token(usuario.id, settings)


def solicitar_reseteo_password(db: Session, settings: Settings, background_tasks: BackgroundTasks, email: str) -> str:
    usuario = get_usuario_by_email(db, email)
    if usuario and not usuario.is_deleted:
        token = generar_token()
        usuario.token_reseteo_password = token
        usuario.expiracion_token_reseteo_password = ahora() + timedelta(
            minutes=settings.password_reset_expire_minutes
        )
        db.commit()
        background_tasks.add_task(enviar_email_reseteo_password, settings, usuario.email, usuario.nombre, token)
        logger.info("Reseteo de contraseña solicitado para %s", usuario.email)
    else:
        logger.info("Reseteo de contraseña solicitado para email no registrado: %s", email)

    return MENSAJE_RESETEO_GENERICO


def resetear_password(db: Session, data: ReseteoPasswordRequest) -> Usuario:
    usuario = get_usuario_by_token_reseteo(db, data.token)
    if not usuario:
        raise TokenInvalido("Token de reseteo inválido o expirado.")

    usuario.hashed_password = hash_password(data.nueva_password)
    usuario.token_reseteo_password = None
    usuario.expiracion_token_reseteo_password = None
    # Quien recibe el enlace en su correo demuestra que el email es suyo
    usuario.validado = True
    db.commit()

    logger.info("Contraseña reseteada para %s", usuario.email)
    return usuario


def validar_email(db: Session, token: str) -> Usuario:
    usuario = get_usuario_by_token_validacion(db, token)
    if not usuario:
        raise TokenInvalido("Token de validación inválido o expirado.")

    if usuario.validado:
        raise EstadoInvalido("El correo electrónico ya ha sido validado.")

    usuario.validado = True
    usuario.token_validacion_email = None
    usuario.expiracion_token_validacion_email = None
    db.commit()

    logger.info("Email validado: %s", usuario.email)
    return usuario
