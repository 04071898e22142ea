# albaranes/api/v1/routers/clientes.py
from typing import List

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from albaranes.api.dependencies import get_current_usuario, get_db
from albaranes.crud.cliente import list_clientes
from albaranes.models.usuario import Usuario
from albaranes.schemas.cliente import ClienteCreate, ClienteRead, ClienteUpdate
from albaranes.schemas.common import ErrorResponse, MensajeResponse
from albaranes.services import cliente_service

router = APIRouter()


@router.post(
    "",
    response_model=ClienteRead,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}},
    summary="Crear cliente",
)
def create(
    payload: ClienteCreate,
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(get_current_usuario),
):
    return cliente_service.crear_cliente(db, current_user, payload)


@router.get(
    "",
    response_model=List[ClienteRead],
    summary="Listar clientes",
    description="Clientes del usuario. Los eliminados solo aparecen con includeDeleted=true.",
)
def list_all(
    incluir_eliminados: bool = Query(False, alias="includeDeleted"),
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(get_current_usuario),
):
    return list_clientes(db, current_user.id, incluir_eliminados=incluir_eliminados, skip=skip, limit=limit)


@router.get(
    "/{cliente_id}",
    response_model=ClienteRead,
    responses={404: {"model": ErrorResponse}},
    summary="Obtener cliente",
)
def get_one(
    cliente_id: str,
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(get_current_usuario),
):
    return cliente_service.obtener_cliente(db, cliente_id, current_user)


@router.put(
    "/{cliente_id}",
    response_model=ClienteRead,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    summary="Actualizar cliente",
)
@router.patch("/{cliente_id}", response_model=ClienteRead, include_in_schema=False)
def update(
    cliente_id: str,
    payload: ClienteUpdate,
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(get_current_usuario),
):
    return cliente_service.actualizar_cliente(db, cliente_id, current_user, payload)


@router.delete(
    "/{cliente_id}/soft",
    response_model=MensajeResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    summary="Eliminar cliente (borrado lógico)",
)
def soft_delete(
    cliente_id: str,
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(get_current_usuario),
):
    cliente_service.eliminar_cliente(db, cliente_id, current_user)
    return MensajeResponse(message="Cliente eliminado (soft delete) correctamente.")


@router.patch(
    "/{cliente_id}/recover",
    response_model=ClienteRead,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    summary="Recuperar cliente eliminado",
)
def recover(
    cliente_id: str,
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(get_current_usuario),
):
    return cliente_service.recuperar_cliente(db, cliente_id, current_user)


@router.delete(
    "/{cliente_id}/hard",
    response_model=MensajeResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Eliminar cliente permanentemente",
)
def hard_delete(
    cliente_id: str,
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(get_current_usuario),
):
    cliente_service.eliminar_cliente_definitivamente(db, cliente_id, current_user)
    return MensajeResponse(message="Cliente eliminado permanentemente.")
