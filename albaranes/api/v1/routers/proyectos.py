# albaranes/api/v1/routers/proyectos.py
"""
Router de proyectos.

Un proyecto tiene dos ejes independientes: archivado (archive/recover) y
borrado lógico (soft/restore). Ninguno de los dos activa el otro.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from albaranes.api.dependencies import get_current_usuario, get_db
from albaranes.crud.proyecto import list_proyectos
from albaranes.models.usuario import Usuario
from albaranes.schemas.common import ErrorResponse, MensajeResponse
from albaranes.schemas.proyecto import ProyectoCreate, ProyectoRead, ProyectoUpdate
from albaranes.services import proyecto_service

router = APIRouter()

ERRORES = {400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}}


@router.post(
    "",
    response_model=ProyectoRead,
    status_code=status.HTTP_201_CREATED,
    responses=ERRORES,
    summary="Crear proyecto",
)
def create(
    payload: ProyectoCreate,
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(get_current_usuario),
):
    return proyecto_service.crear_proyecto(db, current_user, payload)


@router.get("", response_model=List[ProyectoRead], summary="Listar proyectos")
def list_all(
    cliente_id: Optional[str] = Query(None, alias="clienteId"),
    incluir_archivados: bool = Query(False, alias="includeArchived"),
    incluir_eliminados: bool = Query(False, alias="includeDeleted"),
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(get_current_usuario),
):
    return list_proyectos(
        db,
        current_user.id,
        cliente_id=cliente_id,
        incluir_archivados=incluir_archivados,
        incluir_eliminados=incluir_eliminados,
    )


@router.get("/{proyecto_id}", response_model=ProyectoRead, responses=ERRORES, summary="Obtener proyecto")
def get_one(
    proyecto_id: str,
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(get_current_usuario),
):
    return proyecto_service.obtener_proyecto(db, proyecto_id, current_user)


@router.put("/{proyecto_id}", response_model=ProyectoRead, responses=ERRORES, summary="Actualizar proyecto")
def update(
    proyecto_id: str,
    payload: ProyectoUpdate,
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(get_current_usuario),
):
    return proyecto_service.actualizar_proyecto(db, proyecto_id, current_user, payload)


@router.patch("/{proyecto_id}/archive", response_model=ProyectoRead, responses=ERRORES, summary="Archivar proyecto")
def archive(
    proyecto_id: str,
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(get_current_usuario),
):
    return proyecto_service.archivar_proyecto(db, proyecto_id, current_user)


@router.patch(
    "/{proyecto_id}/recover",
    response_model=ProyectoRead,
    responses=ERRORES,
    summary="Recuperar proyecto archivado",
)
def recover(
    proyecto_id: str,
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(get_current_usuario),
):
    return proyecto_service.recuperar_proyecto(db, proyecto_id, current_user)


@router.delete(
    "/{proyecto_id}/soft",
    response_model=MensajeResponse,
    responses=ERRORES,
    summary="Eliminar proyecto (borrado lógico)",
)
def soft_delete(
    proyecto_id: str,
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(get_current_usuario),
):
    proyecto_service.eliminar_proyecto(db, proyecto_id, current_user)
    return MensajeResponse(message="Proyecto eliminado (soft delete) correctamente.")


@router.patch(
    "/{proyecto_id}/restore",
    response_model=ProyectoRead,
    responses=ERRORES,
    summary="Restaurar proyecto eliminado",
)
def restore(
    proyecto_id: str,
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(get_current_usuario),
):
    return proyecto_service.restaurar_proyecto(db, proyecto_id, current_user)


@router.delete(
    "/{proyecto_id}",
    response_model=MensajeResponse,
    responses=ERRORES,
    summary="Eliminar proyecto permanentemente",
)
def hard_delete(
    proyecto_id: str,
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(get_current_usuario),
):
    proyecto_service.eliminar_proyecto_definitivamente(db, proyecto_id, current_user)
    return MensajeResponse(message="Proyecto eliminado permanentemente.")
