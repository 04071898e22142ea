# albaranes/models/albaran.py
import enum
from decimal import Decimal

from sqlalchemy import Column, String, Text, Boolean, DateTime, Enum, ForeignKey, Integer, Numeric
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from sqlalchemy.ext.orderinglist import ordering_list

from albaranes.db.base import Base
from albaranes.models._tipos import nuevo_id, valores_enum
from albaranes.utils.fechas import ahora


class EstadoAlbaran(enum.Enum):
    borrador = "Borrador"
    emitido = "Emitido"
    firmado = "Firmado"
    cancelado = "Cancelado"


class Albaran(Base):
    __tablename__ = "albaranes"

    id = Column(String(36), primary_key=True, default=nuevo_id)
    numero_albaran = Column(String(50), nullable=True)
    fecha_emision = Column(DateTime, nullable=False, default=ahora)

    proyecto_id = Column(String(36), ForeignKey("proyectos.id", ondelete="CASCADE"), nullable=False, index=True)
    # Copiado del proyecto al crear el albarán
    cliente_id = Column(String(36), ForeignKey("clientes.id", ondelete="CASCADE"), nullable=False, index=True)
    usuario_id = Column(String(36), ForeignKey("usuarios.id", ondelete="CASCADE"), nullable=False, index=True)

    observaciones = Column(Text, nullable=True)
    estado = Column(
        Enum(EstadoAlbaran, values_callable=valores_enum, name="estadoalbaran"),
        default=EstadoAlbaran.borrador,
        nullable=False,
    )

    # Firma y PDF
    ruta_firma = Column(String(500), nullable=True)
    fecha_firma = Column(DateTime, nullable=True)
    ruta_pdf = Column(String(500), nullable=True)

    # Borrado lógico
    eliminado = Column(Boolean, default=False, nullable=False)
    fecha_eliminacion = Column(DateTime, nullable=True)

    creado_en = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    actualizado_en = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    lineas = relationship(
        "LineaAlbaran",
        back_populates="albaran",
        order_by="LineaAlbaran.orden",
        collection_class=ordering_list("orden"),
        cascade="all, delete-orphan",
        lazy="selectin",
    )
    proyecto = relationship("Proyecto", back_populates="albaranes", lazy="joined")
    cliente = relationship("Cliente", back_populates="albaranes", lazy="joined")
    usuario = relationship("Usuario", back_populates="albaranes", lazy="joined")

    @property
    def total(self) -> Decimal:
        return sum((linea.importe for linea in self.lineas), Decimal("0"))


class LineaAlbaran(Base):
    __tablename__ = "lineas_albaran"

    id = Column(String(36), primary_key=True, default=nuevo_id)
    albaran_id = Column(String(36), ForeignKey("albaranes.id", ondelete="CASCADE"), nullable=False, index=True)
    orden = Column(Integer, nullable=False, default=0)
    descripcion = Column(String(500), nullable=False)
    cantidad = Column(Numeric(12, 3, asdecimal=True), nullable=False, default=1)
    unidad = Column(String(50), nullable=False, default="unidad")
    precio_unitario = Column(Numeric(15, 2, asdecimal=True), nullable=False, default=0)

    albaran = relationship("Albaran", back_populates="lineas")

    @property
    def importe(self) -> Decimal:
        return (Decimal(self.cantidad or 0) * Decimal(self.precio_unitario or 0)).quantize(Decimal("0.01"))
