# albaranes/models/cliente.py
from sqlalchemy import Column, String, Boolean, DateTime, ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from albaranes.db.base import Base
from albaranes.models._tipos import nuevo_id


class Cliente(Base):
    __tablename__ = "clientes"

    id = Column(String(36), primary_key=True, default=nuevo_id)
    nombre = Column(String(100), nullable=False)
    email = Column(String(255), nullable=True)
    telefono = Column(String(20), nullable=True)

    direccion_calle = Column(String(255), nullable=True)
    direccion_ciudad = Column(String(100), nullable=True)
    direccion_codigo_postal = Column(String(20), nullable=True)
    direccion_provincia = Column(String(100), nullable=True)
    direccion_pais = Column(String(100), nullable=True, default="España")

    usuario_id = Column(String(36), ForeignKey("usuarios.id", ondelete="CASCADE"), nullable=False, index=True)
    empresa_id = Column(String(36), nullable=True)

    is_deleted = Column(Boolean, default=False, nullable=False)
    deleted_at = Column(DateTime, nullable=True)

    creado_en = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    actualizado_en = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    usuario = relationship("Usuario", back_populates="clientes")
    proyectos = relationship("Proyecto", back_populates="cliente", cascade="all, delete-orphan")
    albaranes = relationship("Albaran", back_populates="cliente", cascade="all, delete-orphan")

    @property
    def direccion(self) -> dict | None:
        campos = {
            "calle": self.direccion_calle,
            "ciudad": self.direccion_ciudad,
            "codigo_postal": self.direccion_codigo_postal,
            "provincia": self.direccion_provincia,
            "pais": self.direccion_pais,
        }
        if not any(v for k, v in campos.items() if k != "pais"):
            return None
        return campos

    @direccion.setter
    def direccion(self, valor: dict | None):
        valor = valor or {}
        self.direccion_calle = valor.get("calle")
        self.direccion_ciudad = valor.get("ciudad")
        self.direccion_codigo_postal = valor.get("codigo_postal")
        self.direccion_provincia = valor.get("provincia")
        self.direccion_pais = valor.get("pais") or "España"

    @property
    def direccion_texto(self) -> str:
        d = self.direccion
        if not d:
            return ""
        partes = [d["calle"], " ".join(p for p in (d["codigo_postal"], d["ciudad"]) if p), d["provincia"], d["pais"]]
        return ", ".join(p for p in partes if p)
