# albaranes/crud/albaran.py
from typing import List, Optional

from sqlalchemy.orm import Session

from albaranes.models.albaran import Albaran, EstadoAlbaran, LineaAlbaran
from albaranes.services.ciclo_vida import BORRADO_ALBARAN


def get_albaran(
    db: Session,
    albaran_id: str,
    usuario_id: str,
    incluir_eliminados: bool = False,
) -> Optional[Albaran]:
    query = db.query(Albaran).filter(Albaran.id == albaran_id, Albaran.usuario_id == usuario_id)
    if not incluir_eliminados:
        query = query.filter(BORRADO_ALBARAN.filtro_activos(Albaran))
    return query.first()


def list_albaranes(
    db: Session,
    usuario_id: str,
    proyecto_id: Optional[str] = None,
    cliente_id: Optional[str] = None,
    incluir_eliminados: bool = False,
) -> List[Albaran]:
    query = db.query(Albaran).filter(Albaran.usuario_id == usuario_id)
    if proyecto_id:
        query = query.filter(Albaran.proyecto_id == proyecto_id)
    if cliente_id:
        query = query.filter(Albaran.cliente_id == cliente_id)
    if not incluir_eliminados:
        query = query.filter(BORRADO_ALBARAN.filtro_activos(Albaran))
    return query.order_by(Albaran.fecha_emision.desc()).all()


def has_albaranes_firmados(
    db: Session,
    usuario_id: str,
    proyecto_id: Optional[str] = None,
    cliente_id: Optional[str] = None,
) -> bool:
    """Incluye los albaranes eliminados lógicamente: siguen en la base de datos."""
    query = db.query(Albaran).filter(Albaran.usuario_id == usuario_id, Albaran.estado == EstadoAlbaran.firmado)
    if proyecto_id:
        query = query.filter(Albaran.proyecto_id == proyecto_id)
    if cliente_id:
        query = query.filter(Albaran.cliente_id == cliente_id)
    return db.query(query.exists()).scalar()


def _construir_lineas(lineas) -> List[LineaAlbaran]:
    return [LineaAlbaran(**linea.dict()) for linea in lineas]


def create_albaran(db: Session, usuario_id: str, proyecto_id: str, cliente_id: str, data) -> Albaran:
    campos = data.dict(exclude={"lineas", "proyecto_id", "cliente_id"}, exclude_none=True)
    obj = Albaran(
        **campos,
        proyecto_id=proyecto_id,
        cliente_id=cliente_id,
        usuario_id=usuario_id,
        lineas=_construir_lineas(data.lineas),
    )
    db.add(obj)
    db.commit()
    db.refresh(obj)
    return obj


def update_albaran(db: Session, albaran: Albaran, data) -> Albaran:
    update_data = data.dict(exclude_unset=True, exclude={"lineas"})
    for field, value in update_data.items():
        setattr(albaran, field, value)

    if data.lineas is not None:
        albaran.lineas = _construir_lineas(data.lineas)

    db.commit()
    db.refresh(albaran)
    return albaran
