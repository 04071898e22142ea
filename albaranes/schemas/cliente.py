# albaranes/schemas/cliente.py
import re
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, validator

from albaranes.schemas.common import vacio_a_none

CODIGO_POSTAL_ES = re.compile(r"^(0[1-9]|[1-4]\d|5[0-2])\d{3}$")


class Direccion(BaseModel):
    calle: Optional[str] = None
    ciudad: Optional[str] = None
    codigo_postal: Optional[str] = None
    provincia: Optional[str] = None
    pais: Optional[str] = "España"

    @validator("*", pre=True)
    def recortar(cls, v):
        v = vacio_a_none(v)
        return v.strip() if isinstance(v, str) else v

    @validator("codigo_postal")
    def codigo_postal_valido(cls, v):
        if v and not CODIGO_POSTAL_ES.match(v):
            raise ValueError("Código postal inválido para España.")
        return v


def _validar_nombre(v):
    if v is None or not v.strip():
        raise ValueError("El nombre del cliente es obligatorio.")
    v = v.strip()
    if not 2 <= len(v) <= 100:
        raise ValueError("El nombre del cliente debe tener entre 2 y 100 caracteres.")
    return v


def _validar_telefono(v):
    if v is not None and not 5 <= len(v) <= 20:
        raise ValueError("El teléfono debe tener entre 5 y 20 caracteres.")
    return v


class ClienteBase(BaseModel):
    nombre: str
    email: Optional[EmailStr] = None
    telefono: Optional[str] = None
    direccion: Optional[Direccion] = None

    @validator("email", "telefono", pre=True)
    def opcionales_vacios(cls, v):
        v = vacio_a_none(v)
        return v.strip() if isinstance(v, str) else v

    @validator("nombre")
    def nombre_valido(cls, v):
        return _validar_nombre(v)

    @validator("email")
    def email_minusculas(cls, v):
        return v.lower() if v else v

    @validator("telefono")
    def telefono_valido(cls, v):
        return _validar_telefono(v)


class ClienteCreate(ClienteBase):
    pass


class ClienteUpdate(BaseModel):
    nombre: Optional[str] = None
    email: Optional[EmailStr] = None
    telefono: Optional[str] = None
    direccion: Optional[Direccion] = None

    @validator("email", "telefono", pre=True)
    def opcionales_vacios(cls, v):
        v = vacio_a_none(v)
        return v.strip() if isinstance(v, str) else v

    @validator("nombre")
    def nombre_valido(cls, v):
        return _validar_nombre(v)

    @validator("email")
    def email_minusculas(cls, v):
        return v.lower() if v else v

    @validator("telefono")
    def telefono_valido(cls, v):
        return _validar_telefono(v)


class ClienteResumen(BaseModel):
    id: str
    nombre: str
    email: Optional[str] = None

    class Config:
        from_attributes = True


class ClienteRead(BaseModel):
    id: str
    nombre: str
    email: Optional[str] = None
    telefono: Optional[str] = None
    direccion: Optional[Direccion] = None
    usuario_id: str
    empresa_id: Optional[str] = None
    is_deleted: bool
    deleted_at: Optional[datetime] = None
    creado_en: Optional[datetime] = None

    class Config:
        from_attributes = True
