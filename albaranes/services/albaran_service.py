# albaranes/services/albaran_service.py
"""
Albaranes: alta, edición, borrado y flujo de firma.

Estados:
    Borrador/Emitido --firma--> Firmado --PDF--> Firmado (con ruta_pdf)
    Firmado y Cancelado no se pueden volver a firmar.
    Un albarán Firmado no se puede eliminar (ni lógica ni físicamente).
"""
import logging
from typing import Any, Dict, Optional

from fastapi import UploadFile
from sqlalchemy.orm import Session

from albaranes.core.config import Settings
from albaranes.core.exceptions import EstadoInvalido, NoEncontrado, PeticionInvalida
from albaranes.crud.albaran import create_albaran, get_albaran, update_albaran
from albaranes.crud.proyecto import get_proyecto
from albaranes.models.albaran import Albaran, EstadoAlbaran
from albaranes.models.usuario import Usuario
from albaranes.schemas.albaran import AlbaranCreate, AlbaranUpdate
from albaranes.services import ciclo_vida, storage_service
from albaranes.services.pdf_service import generar_pdf_albaran
from albaranes.utils.fechas import ahora

logger = logging.getLogger(__name__)

NO_ENCONTRADO = "Albarán no encontrado o no pertenece al usuario."
ESTADOS_EDITABLES = (EstadoAlbaran.borrador, EstadoAlbaran.emitido)


def obtener_albaran(db: Session, albaran_id: str, usuario: Usuario, incluir_eliminados: bool = False) -> Albaran:
    albaran = get_albaran(db, albaran_id, usuario.id, incluir_eliminados=incluir_eliminados)
    if not albaran:
        raise NoEncontrado(NO_ENCONTRADO)
    return albaran


def crear_albaran(db: Session, usuario: Usuario, data: AlbaranCreate) -> Albaran:
    proyecto = get_proyecto(db, data.proyecto_id, usuario.id)
    if not proyecto:
        raise NoEncontrado("Proyecto no encontrado o no pertenece al usuario.")

    # El cliente del albarán es siempre el del proyecto
    if data.cliente_id and data.cliente_id != proyecto.cliente_id:
        raise PeticionInvalida("El cliente indicado no coincide con el cliente del proyecto.")

    albaran = create_albaran(db, usuario.id, proyecto.id, proyecto.cliente_id, data)
    logger.info("Albarán %s creado por usuario %s", albaran.id, usuario.id)
    return albaran


def actualizar_albaran(db: Session, albaran_id: str, usuario: Usuario, data: AlbaranUpdate) -> Albaran:
    albaran = obtener_albaran(db, albaran_id, usuario)
    if albaran.estado not in ESTADOS_EDITABLES:
        raise EstadoInvalido(f"No se puede modificar un albarán en estado {albaran.estado.value}.")
    return update_albaran(db, albaran, data)


def _comprobar_no_firmado(albaran: Albaran) -> None:
    if albaran.estado == EstadoAlbaran.firmado:
        raise EstadoInvalido("No se puede eliminar un albarán que ya ha sido firmado.")


def eliminar_albaran(db: Session, albaran_id: str, usuario: Usuario) -> Albaran:
    albaran = obtener_albaran(db, albaran_id, usuario, incluir_eliminados=True)
    _comprobar_no_firmado(albaran)
    return ciclo_vida.marcar(db, albaran, ciclo_vida.BORRADO_ALBARAN)


def recuperar_albaran(db: Session, albaran_id: str, usuario: Usuario) -> Albaran:
    albaran = obtener_albaran(db, albaran_id, usuario, incluir_eliminados=True)
    return ciclo_vida.restaurar(db, albaran, ciclo_vida.BORRADO_ALBARAN)


def eliminar_albaran_definitivamente(db: Session, albaran_id: str, usuario: Usuario) -> None:
    albaran = obtener_albaran(db, albaran_id, usuario, incluir_eliminados=True)
    _comprobar_no_firmado(albaran)
    ciclo_vida.eliminar_definitivamente(db, albaran)


def _commit_o_borrar_fichero(db: Session, settings: Settings, ruta: str) -> None:
    """Si la base de datos no acepta el cambio, el fichero recién guardado sobra."""
    try:
        db.commit()
    except Exception:
        db.rollback()
        storage_service.borrar_fichero(settings, ruta)
        raise


def firmar_albaran(
    db: Session,
    settings: Settings,
    albaran_id: str,
    usuario: Usuario,
    firma: Optional[UploadFile],
) -> Albaran:
    contenido = storage_service.leer_firma(settings, firma)

    albaran = obtener_albaran(db, albaran_id, usuario, incluir_eliminados=True)
    if albaran.estado == EstadoAlbaran.firmado:
        raise EstadoInvalido("Este albarán ya ha sido firmado.")
    if albaran.estado == EstadoAlbaran.cancelado or albaran.eliminado:
        raise EstadoInvalido("No se puede firmar un albarán cancelado o eliminado.")

    albaran.ruta_firma = storage_service.guardar_firma(settings, albaran.id, firma, contenido)
    albaran.estado = EstadoAlbaran.firmado
    albaran.fecha_firma = ahora()
    _commit_o_borrar_fichero(db, settings, albaran.ruta_firma)
    db.refresh(albaran)

    logger.info("Albarán %s firmado por usuario %s. Firma en %s", albaran.id, usuario.id, albaran.ruta_firma)
    return albaran


def snapshot_albaran(albaran: Albaran) -> Dict[str, Any]:
    """Datos del albarán que necesita el PDF, desacoplados del ORM."""
    cliente = albaran.cliente
    proyecto = albaran.proyecto
    return {
        "id": albaran.id,
        "numero_albaran": albaran.numero_albaran,
        "fecha_emision": albaran.fecha_emision,
        "estado": albaran.estado.value,
        "empresa": albaran.usuario.empresa if albaran.usuario else {},
        "cliente": {
            "nombre": cliente.nombre,
            "email": cliente.email,
            "direccion": cliente.direccion_texto,
        } if cliente else None,
        "proyecto": {"nombre": proyecto.nombre} if proyecto else None,
        "lineas": [
            {
                "descripcion": linea.descripcion,
                "cantidad": linea.cantidad,
                "unidad": linea.unidad,
                "precio_unitario": linea.precio_unitario,
                "importe": linea.importe,
            }
            for linea in albaran.lineas
        ],
        "total": albaran.total,
        "fecha_firma": albaran.fecha_firma,
        "observaciones": albaran.observaciones,
    }


def generar_pdf(db: Session, albaran_id: str, usuario: Usuario):
    """Devuelve (nombre de fichero, bytes del PDF) sin guardarlo en disco."""
    albaran = obtener_albaran(db, albaran_id, usuario)
    pdf = generar_pdf_albaran(snapshot_albaran(albaran))
    return f"albaran_{albaran.numero_albaran or albaran.id}.pdf", pdf


def guardar_pdf_firmado(db: Session, settings: Settings, albaran_id: str, usuario: Usuario) -> Albaran:
    albaran = obtener_albaran(db, albaran_id, usuario)
    if albaran.estado != EstadoAlbaran.firmado:
        raise EstadoInvalido("El albarán debe estar firmado antes de poder subir el PDF.")

    pdf = generar_pdf_albaran(snapshot_albaran(albaran))
    albaran.ruta_pdf = storage_service.guardar_pdf(settings, albaran.numero_albaran or albaran.id, pdf)
    _commit_o_borrar_fichero(db, settings, albaran.ruta_pdf)
    db.refresh(albaran)

    logger.info("PDF firmado del albarán %s guardado en %s", albaran.id, albaran.ruta_pdf)
    return albaran
