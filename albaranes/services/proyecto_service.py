# albaranes/services/proyecto_service.py
"""
Proyectos: alta, edición y sus dos ejes de ciclo de vida independientes
(archivado con estado "Archivado" y borrado lógico).
"""
import logging

from sqlalchemy.orm import Session

from albaranes.core.exceptions import EstadoInvalido, NoEncontrado
from albaranes.crud.albaran import has_albaranes_firmados
from albaranes.crud.cliente import get_cliente
from albaranes.crud.proyecto import create_proyecto, get_proyecto, update_proyecto
from albaranes.models.proyecto import Proyecto
from albaranes.models.usuario import Usuario
from albaranes.schemas.proyecto import ProyectoCreate, ProyectoUpdate
from albaranes.services import ciclo_vida

logger = logging.getLogger(__name__)

NO_ENCONTRADO = "Proyecto no encontrado o no pertenece al usuario."


def obtener_proyecto(
    db: Session,
    proyecto_id: str,
    usuario: Usuario,
    incluir_archivados: bool = False,
    incluir_eliminados: bool = False,
) -> Proyecto:
    proyecto = get_proyecto(
        db,
        proyecto_id,
        usuario.id,
        incluir_archivados=incluir_archivados,
        incluir_eliminados=incluir_eliminados,
    )
    if not proyecto:
        raise NoEncontrado(NO_ENCONTRADO)
    return proyecto


def _comprobar_cliente(db: Session, cliente_id: str, usuario: Usuario, mensaje: str) -> None:
    if not get_cliente(db, cliente_id, usuario.id):
        raise NoEncontrado(mensaje)


def crear_proyecto(db: Session, usuario: Usuario, data: ProyectoCreate) -> Proyecto:
    _comprobar_cliente(db, data.cliente_id, usuario, "Cliente no encontrado o no pertenece al usuario.")
    proyecto = create_proyecto(db, usuario.id, data)
    logger.info("Proyecto %s creado por usuario %s", proyecto.id, usuario.id)
    return proyecto


def actualizar_proyecto(db: Session, proyecto_id: str, usuario: Usuario, data: ProyectoUpdate) -> Proyecto:
    proyecto = obtener_proyecto(db, proyecto_id, usuario)
    if data.cliente_id and data.cliente_id != proyecto.cliente_id:
        _comprobar_cliente(db, data.cliente_id, usuario, "Nuevo cliente no encontrado o no pertenece al usuario.")
    return update_proyecto(db, proyecto, data)


def archivar_proyecto(db: Session, proyecto_id: str, usuario: Usuario) -> Proyecto:
    proyecto = obtener_proyecto(db, proyecto_id, usuario, incluir_archivados=True)
    return ciclo_vida.marcar(db, proyecto, ciclo_vida.ARCHIVO_PROYECTO)


def recuperar_proyecto(db: Session, proyecto_id: str, usuario: Usuario) -> Proyecto:
    proyecto = obtener_proyecto(db, proyecto_id, usuario, incluir_archivados=True)
    return ciclo_vida.restaurar(db, proyecto, ciclo_vida.ARCHIVO_PROYECTO)


def eliminar_proyecto(db: Session, proyecto_id: str, usuario: Usuario) -> Proyecto:
    proyecto = obtener_proyecto(db, proyecto_id, usuario, incluir_archivados=True, incluir_eliminados=True)
    return ciclo_vida.marcar(db, proyecto, ciclo_vida.BORRADO_PROYECTO)


def restaurar_proyecto(db: Session, proyecto_id: str, usuario: Usuario) -> Proyecto:
    proyecto = obtener_proyecto(db, proyecto_id, usuario, incluir_archivados=True, incluir_eliminados=True)
    return ciclo_vida.restaurar(db, proyecto, ciclo_vida.BORRADO_PROYECTO)


def eliminar_proyecto_definitivamente(db: Session, proyecto_id: str, usuario: Usuario) -> None:
    proyecto = obtener_proyecto(db, proyecto_id, usuario, incluir_archivados=True, incluir_eliminados=True)
    # El borrado arrastra sus albaranes y uno firmado no se puede eliminar
    if has_albaranes_firmados(db, usuario.id, proyecto_id=proyecto.id):
        raise EstadoInvalido("No se puede eliminar un proyecto con albaranes firmados.")
    ciclo_vida.eliminar_definitivamente(db, proyecto)
