# albaranes/models/proyecto.py
import enum

from sqlalchemy import Column, String, Text, Boolean, DateTime, Enum, ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from albaranes.db.base import Base
from albaranes.models._tipos import nuevo_id, valores_enum


class EstadoProyecto(enum.Enum):
    pendiente = "Pendiente"
    en_progreso = "En Progreso"
    completado = "Completado"
    archivado = "Archivado"
    cancelado = "Cancelado"


class Proyecto(Base):
    __tablename__ = "proyectos"

    id = Column(String(36), primary_key=True, default=nuevo_id)
    nombre = Column(String(150), nullable=False)
    descripcion = Column(Text, nullable=True)
    estado = Column(
        Enum(EstadoProyecto, values_callable=valores_enum, name="estadoproyecto"),
        default=EstadoProyecto.pendiente,
        nullable=False,
    )
    cliente_id = Column(String(36), ForeignKey("clientes.id", ondelete="CASCADE"), nullable=False, index=True)
    usuario_id = Column(String(36), ForeignKey("usuarios.id", ondelete="CASCADE"), nullable=False, index=True)

    # Archivado (eje independiente del borrado lógico)
    is_archived = Column(Boolean, default=False, nullable=False)
    archived_at = Column(DateTime, nullable=True)

    # Borrado lógico
    eliminado = Column(Boolean, default=False, nullable=False)
    fecha_eliminacion = Column(DateTime, nullable=True)

    creado_en = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    actualizado_en = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    cliente = relationship("Cliente", back_populates="proyectos", lazy="joined")
    usuario = relationship("Usuario", back_populates="proyectos")
    albaranes = relationship("Albaran", back_populates="proyecto", cascade="all, delete-orphan")
