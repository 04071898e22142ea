# albaranes/services/storage_service.py
"""
Almacenamiento local de ficheros: imágenes de firma y PDFs generados.

Los directorios cuelgan de ``settings.storage_dir`` y se sirven de forma
estática bajo ``/storage``.
"""
import logging
import re
import secrets
import time
from pathlib import Path
from typing import Optional

from fastapi import UploadFile

from albaranes.core.config import Settings
from albaranes.core.exceptions import PeticionInvalida

logger = logging.getLogger(__name__)

EXTENSIONES_IMAGEN = {
    "image/png": ".png",
    "image/jpeg": ".jpg",
    "image/gif": ".gif",
    "image/webp": ".webp",
}


def _epoch_ms() -> int:
    return int(time.time() * 1000)


def asegurar_directorios(settings: Settings) -> None:
    for directorio in (settings.firmas_dir, settings.pdfs_dir):
        directorio.mkdir(parents=True, exist_ok=True)


def ruta_publica(settings: Settings, ruta: Path) -> str:
    """Ruta relativa a ``storage_dir`` tal como se sirve bajo ``/storage``."""
    return "/storage/" + ruta.relative_to(settings.storage_dir).as_posix()


def leer_firma(settings: Settings, firma: Optional[UploadFile]) -> bytes:
    """
    Valida la imagen de firma subida y devuelve su contenido.

    Raises:
        PeticionInvalida: sin fichero, tipo de imagen no admitido o tamaño excesivo.
    """
    if firma is None or not firma.filename:
        raise PeticionInvalida("No se ha subido ningún archivo de firma.")

    # La extensión guardada sale del tipo MIME, nunca del nombre del fichero
    if firma.content_type not in EXTENSIONES_IMAGEN:
        raise PeticionInvalida("Solo se permiten archivos de imagen para la firma.")

    contenido = firma.file.read(settings.max_firma_bytes + 1)
    if len(contenido) > settings.max_firma_bytes:
        raise PeticionInvalida("El archivo de firma supera el tamaño máximo permitido.")
    if not contenido:
        raise PeticionInvalida("El archivo de firma está vacío.")
    return contenido


def guardar_firma(settings: Settings, albaran_id: str, firma: UploadFile, contenido: bytes) -> str:
    settings.firmas_dir.mkdir(parents=True, exist_ok=True)
    extension = EXTENSIONES_IMAGEN[firma.content_type]
    nombre = f"firma-{albaran_id}-{_epoch_ms()}-{secrets.randbelow(10**9)}{extension}"
    destino = settings.firmas_dir / nombre
    destino.write_bytes(contenido)
    logger.info("Firma guardada en %s", destino)
    return ruta_publica(settings, destino)


def guardar_pdf(settings: Settings, referencia: str, contenido: bytes) -> str:
    settings.pdfs_dir.mkdir(parents=True, exist_ok=True)
    referencia = re.sub(r"[^\w.-]", "_", referencia)
    destino = settings.pdfs_dir / f"albaran_firmado_{referencia}_{_epoch_ms()}.pdf"
    destino.write_bytes(contenido)
    logger.info("PDF guardado en %s", destino)
    return ruta_publica(settings, destino)


def borrar_fichero(settings: Settings, ruta: str) -> None:
    """Elimina un fichero guardado a partir de su ruta pública ``/storage/...``."""
    destino = settings.storage_dir / ruta[len("/storage/"):]
    destino.unlink(missing_ok=True)
    logger.warning("Fichero %s eliminado tras un error al guardar", destino)
