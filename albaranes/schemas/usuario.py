# albaranes/schemas/usuario.py
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, validator


class EmpresaRead(BaseModel):
    id: Optional[str] = None
    nombre: Optional[str] = None
    direccion: Optional[str] = None
    cif: Optional[str] = None
    telefono: Optional[str] = None
    email: Optional[str] = None
    web: Optional[str] = None


class UsuarioRead(BaseModel):
    id: str
    nombre: str
    email: EmailStr
    validado: bool
    empresa: EmpresaRead
    creado_en: Optional[datetime] = None

    class Config:
        from_attributes = True


class PerfilResponse(BaseModel):
    message: str
    usuario: UsuarioRead


class UsuarioUpdate(BaseModel):
    nombre: Optional[str] = None
    email: Optional[EmailStr] = None
    password: Optional[str] = None

    @validator("nombre")
    def nombre_no_vacio(cls, v):
        if v is not None and not v.strip():
            raise ValueError("El nombre no puede estar vacío.")
        return v.strip() if v else v

    @validator("password")
    def password_minima(cls, v):
        if v is not None and len(v) < 6:
            raise ValueError("La contraseña debe tener al menos 6 caracteres.")
        return v


class EmpresaUpdate(BaseModel):
    """Solo se modifican los campos enviados; se recortan espacios."""
    nombre: Optional[str] = None
    direccion: Optional[str] = None
    cif: Optional[str] = None
    telefono: Optional[str] = None
    email: Optional[str] = None
    web: Optional[str] = None

    @validator("*")
    def recortar(cls, v):
        return v.strip() if isinstance(v, str) else v

    @validator("email")
    def email_minusculas(cls, v):
        return v.lower() if v else v


class CambioPasswordRequest(BaseModel):
    current_password: str
    new_password: str

    @validator("current_password")
    def actual_obligatoria(cls, v):
        if not v:
            raise ValueError("La contraseña actual es obligatoria")
        return v

    @validator("new_password")
    def nueva_valida(cls, v):
        if not v:
            raise ValueError("La nueva contraseña es obligatoria")
        if len(v) < 6:
            raise ValueError("La nueva contraseña debe tener al menos 6 caracteres")
        return v


class ValidacionEmailRequest(BaseModel):
    token: str

    @validator("token")
    def token_no_vacio(cls, v):
        if not v or not v.strip():
            raise ValueError("Token de validación no proporcionado.")
        return v.strip()
