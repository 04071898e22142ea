# albaranes/services/cliente_service.py
import logging

from sqlalchemy.orm import Session

from albaranes.core.exceptions import EstadoInvalido, NoEncontrado
from albaranes.crud.albaran import has_albaranes_firmados
from albaranes.crud.cliente import create_cliente, get_cliente, update_cliente
from albaranes.models.cliente import Cliente
from albaranes.models.usuario import Usuario
from albaranes.schemas.cliente import ClienteCreate, ClienteUpdate
from albaranes.services import ciclo_vida

logger = logging.getLogger(__name__)

NO_ENCONTRADO = "Cliente no encontrado o no pertenece al usuario."


def obtener_cliente(db: Session, cliente_id: str, usuario: Usuario, incluir_eliminados: bool = False) -> Cliente:
    cliente = get_cliente(db, cliente_id, usuario.id, incluir_eliminados=incluir_eliminados)
    if not cliente:
        raise NoEncontrado(NO_ENCONTRADO)
    return cliente


def crear_cliente(db: Session, usuario: Usuario, data: ClienteCreate) -> Cliente:
    cliente = create_cliente(db, usuario.id, usuario.empresa_id if usuario.tiene_empresa else None, data)
    logger.info("Cliente %s creado por usuario %s", cliente.id, usuario.id)
    return cliente


def actualizar_cliente(db: Session, cliente_id: str, usuario: Usuario, data: ClienteUpdate) -> Cliente:
    cliente = obtener_cliente(db, cliente_id, usuario)
    return update_cliente(db, cliente, data)


def eliminar_cliente(db: Session, cliente_id: str, usuario: Usuario) -> Cliente:
    cliente = obtener_cliente(db, cliente_id, usuario, incluir_eliminados=True)
    return ciclo_vida.marcar(db, cliente, ciclo_vida.BORRADO_CLIENTE)


def recuperar_cliente(db: Session, cliente_id: str, usuario: Usuario) -> Cliente:
    cliente = obtener_cliente(db, cliente_id, usuario, incluir_eliminados=True)
    return ciclo_vida.restaurar(db, cliente, ciclo_vida.BORRADO_CLIENTE)


def eliminar_cliente_definitivamente(db: Session, cliente_id: str, usuario: Usuario) -> None:
    cliente = obtener_cliente(db, cliente_id, usuario, incluir_eliminados=True)
    if has_albaranes_firmados(db, usuario.id, cliente_id=cliente.id):
        raise EstadoInvalido("No se puede eliminar un cliente con albaranes firmados.")
    ciclo_vida.eliminar_definitivamente(db, cliente)
