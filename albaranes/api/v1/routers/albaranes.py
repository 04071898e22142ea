# albaranes/api/v1/routers/albaranes.py
"""
Router de albaranes: CRUD, borrado lógico, firma y PDF.
"""
from typing import List, Optional

from fastapi import APIRouter, Depends, File, Query, Response, UploadFile, status
from sqlalchemy.orm import Session

from albaranes.api.dependencies import get_app_settings, get_current_usuario, get_db
from albaranes.core.config import Settings
from albaranes.crud.albaran import list_albaranes
from albaranes.models.usuario import Usuario
from albaranes.schemas.albaran import (
    AlbaranCreate,
    AlbaranRead,
    AlbaranUpdate,
    FirmaResponse,
    PdfGuardadoResponse,
)
from albaranes.schemas.common import ErrorResponse, MensajeResponse
from albaranes.services import albaran_service

router = APIRouter()

ERRORES = {400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}}


@router.post(
    "",
    response_model=AlbaranRead,
    status_code=status.HTTP_201_CREATED,
    responses=ERRORES,
    summary="Crear albarán",
    description="El cliente se toma del proyecto; si se indica otro distinto se rechaza.",
)
def create(
    payload: AlbaranCreate,
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(get_current_usuario),
):
    return albaran_service.crear_albaran(db, current_user, payload)


@router.get("", response_model=List[AlbaranRead], summary="Listar albaranes (más recientes primero)")
def list_all(
    proyecto_id: Optional[str] = Query(None, alias="proyectoId"),
    cliente_id: Optional[str] = Query(None, alias="clienteId"),
    incluir_eliminados: bool = Query(False, alias="includeDeleted"),
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(get_current_usuario),
):
    return list_albaranes(
        db,
        current_user.id,
        proyecto_id=proyecto_id,
        cliente_id=cliente_id,
        incluir_eliminados=incluir_eliminados,
    )


@router.get("/{albaran_id}", response_model=AlbaranRead, responses=ERRORES, summary="Obtener albarán")
def get_one(
    albaran_id: str,
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(get_current_usuario),
):
    return albaran_service.obtener_albaran(db, albaran_id, current_user)


@router.put(
    "/{albaran_id}",
    response_model=AlbaranRead,
    responses=ERRORES,
    summary="Actualizar albarán",
    description="Solo en estado Borrador o Emitido.",
)
def update(
    albaran_id: str,
    payload: AlbaranUpdate,
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(get_current_usuario),
):
    return albaran_service.actualizar_albaran(db, albaran_id, current_user, payload)


@router.delete(
    "/{albaran_id}",
    response_model=MensajeResponse,
    responses=ERRORES,
    summary="Eliminar albarán (borrado lógico)",
)
def soft_delete(
    albaran_id: str,
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(get_current_usuario),
):
    albaran_service.eliminar_albaran(db, albaran_id, current_user)
    return MensajeResponse(message="Albarán eliminado exitosamente.")


@router.patch(
    "/{albaran_id}/recover",
    response_model=AlbaranRead,
    responses=ERRORES,
    summary="Recuperar albarán eliminado",
)
def recover(
    albaran_id: str,
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(get_current_usuario),
):
    return albaran_service.recuperar_albaran(db, albaran_id, current_user)


@router.delete(
    "/{albaran_id}/hard",
    response_model=MensajeResponse,
    responses=ERRORES,
    summary="Eliminar albarán permanentemente",
)
def hard_delete(
    albaran_id: str,
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(get_current_usuario),
):
    albaran_service.eliminar_albaran_definitivamente(db, albaran_id, current_user)
    return MensajeResponse(message="Albarán eliminado permanentemente.")


@router.get(
    "/{albaran_id}/download-pdf",
    response_class=Response,
    responses={200: {"content": {"application/pdf": {}}}, 404: {"model": ErrorResponse}},
    summary="Descargar el albarán en PDF",
)
def download_pdf(
    albaran_id: str,
    db: Session = Depends(get_db),
    current_user: Usuario = Depends(get_current_usuario),
):
    nombre, pdf = albaran_service.generar_pdf(db, albaran_id, current_user)
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{nombre}"'},
    )


@router.patch(
    "/{albaran_id}/sign",
    response_model=FirmaResponse,
    responses=ERRORES,
    summary="Firmar albarán",
    description="Recibe la imagen de la firma en el campo multipart `firma`.",
)
def sign(
    albaran_id: str,
    firma: Optional[UploadFile] = File(None),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
    current_user: Usuario = Depends(get_current_usuario),
):
    albaran = albaran_service.firmar_albaran(db, settings, albaran_id, current_user, firma)
    return FirmaResponse(message="Albarán firmado exitosamente.", albaran=albaran)


@router.post(
    "/{albaran_id}/upload-signed-pdf",
    response_model=PdfGuardadoResponse,
    responses=ERRORES,
    summary="Generar y guardar el PDF del albarán firmado",
)
def upload_signed_pdf(
    albaran_id: str,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_app_settings),
    current_user: Usuario = Depends(get_current_usuario),
):
    albaran = albaran_service.guardar_pdf_firmado(db, settings, albaran_id, current_user)
    return PdfGuardadoResponse(
        message="PDF del albarán firmado generado y guardado.",
        ruta_pdf=albaran.ruta_pdf,
        albaran=albaran,
    )
