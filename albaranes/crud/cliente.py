# albaranes/crud/cliente.py
from typing import List, Optional

from sqlalchemy.orm import Session

from albaranes.models.cliente import Cliente
from albaranes.services.ciclo_vida import BORRADO_CLIENTE


def get_cliente(
    db: Session,
    cliente_id: str,
    usuario_id: str,
    incluir_eliminados: bool = False,
) -> Optional[Cliente]:
    query = db.query(Cliente).filter(Cliente.id == cliente_id, Cliente.usuario_id == usuario_id)
    if not incluir_eliminados:
        query = query.filter(BORRADO_CLIENTE.filtro_activos(Cliente))
    return query.first()


def list_clientes(
    db: Session,
    usuario_id: str,
    incluir_eliminados: bool = False,
    skip: int = 0,
    limit: int = 100,
) -> List[Cliente]:
    query = db.query(Cliente).filter(Cliente.usuario_id == usuario_id)
    if not incluir_eliminados:
        query = query.filter(BORRADO_CLIENTE.filtro_activos(Cliente))
    return query.order_by(Cliente.creado_en.desc(), Cliente.nombre).offset(skip).limit(limit).all()


def create_cliente(db: Session, usuario_id: str, empresa_id: Optional[str], data) -> Cliente:
    campos = data.dict(exclude={"direccion"})
    obj = Cliente(**campos, usuario_id=usuario_id, empresa_id=empresa_id, is_deleted=False)
    obj.direccion = data.direccion.dict() if data.direccion else None
    db.add(obj)
    db.commit()
    db.refresh(obj)
    return obj


def update_cliente(db: Session, cliente: Cliente, data) -> Cliente:
    update_data = data.dict(exclude_unset=True)
    if "direccion" in update_data:
        cliente.direccion = update_data.pop("direccion")

    for field, value in update_data.items():
        setattr(cliente, field, value)

    db.commit()
    db.refresh(cliente)
    return cliente
