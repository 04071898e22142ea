# albaranes/api/v1/routers/auth.py
"""
Router de autenticación: registro, login y reseteo de contraseña.

Son las únicas rutas públicas de la API junto con la validación de email.
"""
from fastapi import APIRouter, BackgroundTasks, Depends, status
from sqlalchemy.orm import Session

from albaranes.api.dependencies import get_app_settings, get_db
from albaranes.core.config import Settings
from albaranes.schemas.auth import (
    LoginRequest,
    RegistroRequest,
    ReseteoPasswordRequest,
    SolicitudReseteoRequest,
    TokenResponse,
)
from albaranes.schemas.common import ErrorResponse, MensajeResponse
from albaranes.services import auth_service

router = APIRouter()


@router.post(
    "/register",
    response_model=TokenResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
    summary="Registrar usuario",
    description="Crea la cuenta, devuelve un JWT y envía el email de validación.",
)
def register(
    payload: RegistroRequest,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    usuario, token = auth_service.registrar(db, settings, background_tasks, payload)
    return TokenResponse(
        message="Usuario registrado exitosamente. Por favor, revisa tu email para validar tu cuenta.",
        token=token,
        usuario=usuario,
    )


@router.post(
    "/login",
    response_model=TokenResponse,
    responses={401: {"model": ErrorResponse}, 403: {"model": ErrorResponse}},
    summary="Login con email y contraseña",
)
def login(
    credentials: LoginRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    usuario, token = auth_service.login(db, settings, credentials)
    return TokenResponse(message="Login exitoso.", token=token, usuario=usuario)


@router.post(
    "/request-password-reset",
    response_model=MensajeResponse,
    summary="Solicitar reseteo de contraseña",
    description="Responde siempre igual, exista o no el email.",
)
def request_password_reset(
    payload: SolicitudReseteoRequest,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
):
    mensaje = auth_service.solicitar_reseteo_password(db, settings, background_tasks, payload.email)
    return MensajeResponse(message=mensaje)


@router.post(
    "/reset-password",
    response_model=MensajeResponse,
    responses={400: {"model": ErrorResponse}},
    summary="Resetear contraseña con token",
)
def reset_password(payload: ReseteoPasswordRequest, db: Session = Depends(get_db)):
    auth_service.resetear_password(db, payload)
    return MensajeResponse(message="Contraseña actualizada exitosamente.")
