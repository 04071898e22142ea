# albaranes/api/v1/routers/usuarios.py
"""
Router del usuario autenticado: perfil, empresa, contraseña, baja e
invitaciones a la empresa.
"""
from typing import List

from fastapi import APIRouter, BackgroundTasks, Depends, status
from sqlalchemy.orm import Session

from albaranes.api.dependencies import get_app_settings, get_current_usuario, get_db
from albaranes.core.config import Settings
from albaranes.crud.invitacion import list_invitaciones_enviadas
from albaranes.models.usuario import Usuario
from albaranes.schemas.common import ErrorResponse, MensajeResponse
from albaranes.schemas.invitacion import (
    AceptacionResponse,
    AceptarInvitacionRequest,
    InvitacionCreadaResponse,
    InvitacionCreate,
    InvitacionRead,
)
from albaranes.schemas.usuario import (
    CambioPasswordRequest,
    EmpresaUpdate,
    PerfilResponse,
    UsuarioRead,
    UsuarioUpdate,
    ValidacionEmailRequest,
)
from albaranes.services import auth_service, invitacion_service, usuario_service

router = APIRouter()


# ==================== PERFIL ====================

@router.get("", response_model=PerfilResponse, summary="Perfil del usuario autenticado")
@router.get("/me", response_model=PerfilResponse, include_in_schema=False)
def get_perfil(current_user: Usuario = Depends(get_current_usuario)):
    return PerfilResponse(message="Perfil obtenido correctamente.", usuario=current_user)


@router.patch(
    "",
    response_model=PerfilResponse,
    responses={400: {"model": ErrorResponse}},
    summary="Actualizar perfil",
    description="Cambiar el email obliga a validarlo de nuevo.",
)
def update_perfil(
    payload: UsuarioUpdate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
    current_user: Usuario = Depends(get_current_usuario),
):
    usuario = usuario_service.actualizar_perfil(db, settings, background_tasks, current_user, payload)
    return PerfilResponse(message="Perfil actualizado exitosamente.", usuario=usuario)


@router.patch("/company", response_model=PerfilResponse, summary="Actualizar empresa asociada")
def update_empresa(
    payload: EmpresaUpdate,
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(get_current_usuario),
):
    usuario = usuario_service.actualizar_empresa(db, current_user, payload)
    return PerfilResponse(message="Empresa asociada actualizada exitosamente.", usuario=usuario)


@router.patch(
    "/change-password",
    response_model=MensajeResponse,
    responses={400: {"model": ErrorResponse}, 401: {"model": ErrorResponse}},
    summary="Cambiar contraseña",
)
def change_password(
    payload: CambioPasswordRequest,
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(get_current_usuario),
):
    usuario_service.cambiar_password(db, current_user, payload)
    return MensajeResponse(message="Contraseña actualizada correctamente.")


@router.put(
    "/validation",
    response_model=MensajeResponse,
    responses={400: {"model": ErrorResponse}},
    summary="Validar email con token",
)
def validar_email(payload: ValidacionEmailRequest, db: Session = Depends(get_db)):
    auth_service.validar_email(db, payload.token)
    return MensajeResponse(message="Correo electrónico validado exitosamente.")


# ==================== BAJA ====================

@router.patch(
    "/me/soft-delete",
    response_model=MensajeResponse,
    responses={400: {"model": ErrorResponse}},
    summary="Eliminar (lógicamente) la propia cuenta",
)
def soft_delete_me(
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(get_current_usuario),
):
    usuario_service.eliminar_cuenta(db, current_user)
    return MensajeResponse(message="Usuario marcado como eliminado correctamente.")


@router.delete(
    "/{usuario_id}/hard-delete",
    response_model=MensajeResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Eliminar la propia cuenta permanentemente",
    description=(
        "Borra el usuario y todo lo que le pertenece (clientes, proyectos, albaranes). "
        "Solo sobre la cuenta autenticada."
    ),
)
def hard_delete_usuario(
    usuario_id: str,
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(get_current_usuario),
):
    usuario_service.eliminar_usuario_definitivamente(db, usuario_id, current_user)
    return MensajeResponse(message=f"Usuario con ID {usuario_id} ha sido eliminado permanentemente.")


# ==================== INVITACIONES ====================

@router.post(
    "/invite-to-company",
    response_model=InvitacionCreadaResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
    summary="Invitar a un usuario a la empresa",
)
def invite_to_company(
    payload: InvitacionCreate,
    background_tasks: BackgroundTasks,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
    current_user: Usuario = Depends(get_current_usuario),
):
    invitacion = invitacion_service.invitar(db, settings, background_tasks, current_user, payload.email_invitado)
    return InvitacionCreadaResponse(
        message=(
            f"Invitación enviada exitosamente a {invitacion.email_invitado} "
            f"para unirse a la empresa {invitacion.nombre_empresa}."
        ),
        invitacion_id=invitacion.id,
    )


@router.post(
    "/accept-company-invitation",
    response_model=AceptacionResponse,
    responses={400: {"model": ErrorResponse}},
    summary="Aceptar invitación a empresa",
)
def accept_company_invitation(
    payload: AceptarInvitacionRequest,
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(get_current_usuario),
):
    mensaje, usuario = invitacion_service.aceptar(db, current_user, payload.token)
    return AceptacionResponse(message=mensaje, usuario=usuario)


@router.get(
    "/invitations",
    response_model=List[InvitacionRead],
    summary="Invitaciones enviadas por el usuario",
)
def list_invitations(
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(get_current_usuario),
):
    return list_invitaciones_enviadas(db, current_user.id)
