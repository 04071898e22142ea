# albaranes/crud/invitacion.py
from typing import List, Optional

from sqlalchemy.orm import Session

from albaranes.models.invitacion import Invitacion, EstadoInvitacion


def get_invitacion_pendiente(db: Session, email_invitado: str, nombre_empresa: str) -> Optional[Invitacion]:
    return (
        db.query(Invitacion)
        .filter(
            Invitacion.email_invitado == email_invitado,
            Invitacion.nombre_empresa == nombre_empresa,
            Invitacion.estado == EstadoInvitacion.pending,
        )
        .first()
    )


def get_invitacion_pendiente_por_token(db: Session, token: str, email_invitado: str) -> Optional[Invitacion]:
    return (
        db.query(Invitacion)
        .filter(
            Invitacion.token == token,
            Invitacion.email_invitado == email_invitado,
            Invitacion.estado == EstadoInvitacion.pending,
        )
        .first()
    )


def list_invitaciones_enviadas(db: Session, invitador_id: str) -> List[Invitacion]:
    return (
        db.query(Invitacion)
        .filter(Invitacion.invitador_id == invitador_id)
        .order_by(Invitacion.creado_en.desc())
        .all()
    )


def create_invitacion(db: Session, **campos) -> Invitacion:
    obj = Invitacion(**campos)
    db.add(obj)
    db.commit()
    db.refresh(obj)
    return obj
