# albaranes/models/invitacion.py
import enum

from sqlalchemy import Column, String, DateTime, Enum, ForeignKey, Index
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from albaranes.db.base import Base
from albaranes.models._tipos import nuevo_id, valores_enum


class EstadoInvitacion(enum.Enum):
    pending = "pending"
    accepted = "accepted"
    expired = "expired"
    rejected = "rejected"


class Invitacion(Base):
    __tablename__ = "invitaciones"
    __table_args__ = (
        Index("ix_invitaciones_email_empresa_estado", "email_invitado", "nombre_empresa", "estado"),
    )

    id = Column(String(36), primary_key=True, default=nuevo_id)
    email_invitado = Column(String(255), nullable=False)
    nombre_empresa = Column(String(255), nullable=False)
    invitador_id = Column(String(36), ForeignKey("usuarios.id", ondelete="CASCADE"), nullable=False)
    token = Column(String(128), nullable=False, unique=True)
    expiracion = Column(DateTime, nullable=False)
    estado = Column(
        Enum(EstadoInvitacion, values_callable=valores_enum, name="estadoinvitacion"),
        default=EstadoInvitacion.pending,
        nullable=False,
    )

    creado_en = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    actualizado_en = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    invitador = relationship("Usuario", back_populates="invitaciones_enviadas")
