# albaranes/schemas/proyecto.py
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, validator

from albaranes.models.proyecto import EstadoProyecto
from albaranes.schemas.cliente import ClienteResumen


def _validar_nombre(v):
    if v is None or not v.strip():
        raise ValueError("El nombre del proyecto es obligatorio.")
    v = v.strip()
    if not 3 <= len(v) <= 150:
        raise ValueError("El nombre del proyecto debe tener entre 3 y 150 caracteres.")
    return v


def _validar_estado(v):
    # Archivar solo es posible desde PATCH /projects/{id}/archive
    if v == EstadoProyecto.archivado:
        raise ValueError("Para archivar un proyecto usa la operación de archivado.")
    return v


class ProyectoCreate(BaseModel):
    nombre: str
    descripcion: Optional[str] = None
    estado: Optional[EstadoProyecto] = None
    cliente_id: str

    @validator("nombre")
    def nombre_valido(cls, v):
        return _validar_nombre(v)

    @validator("cliente_id")
    def cliente_obligatorio(cls, v):
        if not v or not v.strip():
            raise ValueError("El ID del cliente es obligatorio para el proyecto.")
        return v.strip()

    @validator("estado")
    def estado_valido(cls, v):
        return _validar_estado(v)


class ProyectoUpdate(BaseModel):
    nombre: Optional[str] = None
    descripcion: Optional[str] = None
    estado: Optional[EstadoProyecto] = None
    cliente_id: Optional[str] = None

    @validator("nombre")
    def nombre_valido(cls, v):
        return _validar_nombre(v)

    @validator("estado")
    def estado_valido(cls, v):
        return _validar_estado(v)


class ProyectoResumen(BaseModel):
    id: str
    nombre: str
    estado: EstadoProyecto

    class Config:
        from_attributes = True


class ProyectoRead(BaseModel):
    id: str
    nombre: str
    descripcion: Optional[str] = None
    estado: EstadoProyecto
    cliente_id: str
    cliente: Optional[ClienteResumen] = None
    usuario_id: str
    is_archived: bool
    archived_at: Optional[datetime] = None
    eliminado: bool
    fecha_eliminacion: Optional[datetime] = None
    creado_en: Optional[datetime] = None

    class Config:
        from_attributes = True
