# albaranes/crud/proyecto.py
from typing import List, Optional

from sqlalchemy.orm import Session

from albaranes.models.proyecto import Proyecto
from albaranes.services.ciclo_vida import ARCHIVO_PROYECTO, BORRADO_PROYECTO


def _aplicar_filtros(query, incluir_archivados: bool, incluir_eliminados: bool):
    if not incluir_archivados:
        query = query.filter(ARCHIVO_PROYECTO.filtro_activos(Proyecto))
    if not incluir_eliminados:
        query = query.filter(BORRADO_PROYECTO.filtro_activos(Proyecto))
    return query


def get_proyecto(
    db: Session,
    proyecto_id: str,
    usuario_id: str,
    incluir_archivados: bool = False,
    incluir_eliminados: bool = False,
) -> Optional[Proyecto]:
    query = db.query(Proyecto).filter(Proyecto.id == proyecto_id, Proyecto.usuario_id == usuario_id)
    return _aplicar_filtros(query, incluir_archivados, incluir_eliminados).first()


def list_proyectos(
    db: Session,
    usuario_id: str,
    cliente_id: Optional[str] = None,
    incluir_archivados: bool = False,
    incluir_eliminados: bool = False,
) -> List[Proyecto]:
    query = db.query(Proyecto).filter(Proyecto.usuario_id == usuario_id)
    if cliente_id:
        query = query.filter(Proyecto.cliente_id == cliente_id)
    query = _aplicar_filtros(query, incluir_archivados, incluir_eliminados)
    return query.order_by(Proyecto.creado_en.desc()).all()


def create_proyecto(db: Session, usuario_id: str, data) -> Proyecto:
    campos = data.dict(exclude_none=True)
    obj = Proyecto(**campos, usuario_id=usuario_id)
    db.add(obj)
    db.commit()
    db.refresh(obj)
    return obj


def update_proyecto(db: Session, proyecto: Proyecto, data) -> Proyecto:
    update_data = data.dict(exclude_unset=True, exclude_none=True)
    for field, value in update_data.items():
        setattr(proyecto, field, value)

    db.commit()
    db.refresh(proyecto)
    return proyecto
