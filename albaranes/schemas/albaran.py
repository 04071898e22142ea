# albaranes/schemas/albaran.py
from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, Field, validator

from albaranes.models.albaran import EstadoAlbaran
from albaranes.schemas.cliente import ClienteResumen
from albaranes.schemas.proyecto import ProyectoResumen

MENSAJE_LINEAS = "Las líneas son obligatorias y deben ser un array no vacío."


def _validar_estado(v):
    # Un albarán solo pasa a Firmado subiendo la firma
    if v == EstadoAlbaran.firmado:
        raise ValueError("El estado Firmado solo se alcanza firmando el albarán.")
    return v


class LineaAlbaranBase(BaseModel):
    descripcion: str
    cantidad: Decimal = Field(Decimal("1"), ge=0, description="No puede ser negativa")
    unidad: str = "unidad"
    precio_unitario: Decimal = Field(Decimal("0"), ge=0, description="No puede ser negativo")

    @validator("descripcion")
    def descripcion_obligatoria(cls, v):
        if not v or not v.strip():
            raise ValueError("La descripción de cada línea es obligatoria.")
        return v.strip()

    @validator("unidad", pre=True)
    def unidad_por_defecto(cls, v):
        if v is None or (isinstance(v, str) and not v.strip()):
            return "unidad"
        return v.strip() if isinstance(v, str) else v


class LineaAlbaranRead(LineaAlbaranBase):
    importe: Decimal

    class Config:
        from_attributes = True


class AlbaranCreate(BaseModel):
    numero_albaran: Optional[str] = None
    fecha_emision: Optional[datetime] = None
    proyecto_id: str
    cliente_id: Optional[str] = None
    lineas: List[LineaAlbaranBase] = []
    observaciones: Optional[str] = None
    estado: Optional[EstadoAlbaran] = None

    @validator("lineas", always=True)
    def lineas_no_vacias(cls, v):
        if not v:
            raise ValueError(MENSAJE_LINEAS)
        return v

    @validator("estado")
    def estado_valido(cls, v):
        return _validar_estado(v)


class AlbaranUpdate(BaseModel):
    numero_albaran: Optional[str] = None
    fecha_emision: Optional[datetime] = None
    lineas: Optional[List[LineaAlbaranBase]] = None
    observaciones: Optional[str] = None
    estado: Optional[EstadoAlbaran] = None

    @validator("fecha_emision", "estado", pre=True)
    def no_nulos(cls, v):
        # Se pueden omitir, pero no vaciar: son columnas obligatorias
        if v is None:
            raise ValueError("La fecha de emisión y el estado no pueden ser nulos.")
        return v

    @validator("lineas")
    def lineas_no_vacias(cls, v):
        if v is not None and not v:
            raise ValueError(MENSAJE_LINEAS)
        return v

    @validator("estado")
    def estado_valido(cls, v):
        return _validar_estado(v)


class AlbaranRead(BaseModel):
    id: str
    numero_albaran: Optional[str] = None
    fecha_emision: datetime
    proyecto_id: str
    cliente_id: str
    usuario_id: str
    proyecto: Optional[ProyectoResumen] = None
    cliente: Optional[ClienteResumen] = None
    lineas: List[LineaAlbaranRead]
    total: Decimal
    observaciones: Optional[str] = None
    estado: EstadoAlbaran
    ruta_firma: Optional[str] = None
    fecha_firma: Optional[datetime] = None
    ruta_pdf: Optional[str] = None
    eliminado: bool
    fecha_eliminacion: Optional[datetime] = None
    creado_en: Optional[datetime] = None

    class Config:
        from_attributes = True


class FirmaResponse(BaseModel):
    message: str
    albaran: AlbaranRead


class PdfGuardadoResponse(BaseModel):
    message: str
    ruta_pdf: str
    albaran: AlbaranRead
