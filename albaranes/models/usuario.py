# albaranes/models/usuario.py
from sqlalchemy import Column, String, Boolean, DateTime
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from albaranes.db.base import Base
from albaranes.models._tipos import nuevo_id


class Usuario(Base):
    __tablename__ = "usuarios"

    id = Column(String(36), primary_key=True, default=nuevo_id)
    nombre = Column(String(150), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)  # siempre en minúsculas
    hashed_password = Column(String(255), nullable=False)

    # Empresa embebida
    empresa_id = Column(String(36), nullable=False, default=nuevo_id)
    empresa_nombre = Column(String(255), nullable=True)
    empresa_direccion = Column(String(255), nullable=True)
    empresa_cif = Column(String(50), nullable=True)
    empresa_telefono = Column(String(50), nullable=True)
    empresa_email = Column(String(255), nullable=True)
    empresa_web = Column(String(255), nullable=True)

    # Validación de email
    validado = Column(Boolean, default=False, nullable=False)
    token_validacion_email = Column(String(64), nullable=True, index=True)
    expiracion_token_validacion_email = Column(DateTime, nullable=True)

    # Reseteo de contraseña
    token_reseteo_password = Column(String(64), nullable=True, index=True)
    expiracion_token_reseteo_password = Column(DateTime, nullable=True)

    # Borrado lógico
    is_deleted = Column(Boolean, default=False, nullable=False)
    deleted_at = Column(DateTime, nullable=True)

    creado_en = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    actualizado_en = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Relaciones (lo que pertenece al usuario desaparece con él)
    clientes = relationship("Cliente", back_populates="usuario", cascade="all, delete-orphan", lazy="select")
    proyectos = relationship("Proyecto", back_populates="usuario", cascade="all, delete-orphan", lazy="select")
    albaranes = relationship("Albaran", back_populates="usuario", cascade="all, delete-orphan", lazy="select")
    invitaciones_enviadas = relationship(
        "Invitacion", back_populates="invitador", cascade="all, delete-orphan", lazy="select"
    )

    @property
    def empresa(self) -> dict:
        return {
            "id": self.empresa_id,
            "nombre": self.empresa_nombre,
            "direccion": self.empresa_direccion,
            "cif": self.empresa_cif,
            "telefono": self.empresa_telefono,
            "email": self.empresa_email,
            "web": self.empresa_web,
        }

    @property
    def tiene_empresa(self) -> bool:
        return bool(self.empresa_nombre and self.empresa_nombre.strip())
