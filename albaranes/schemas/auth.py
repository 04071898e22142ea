# albaranes/schemas/auth.py
from typing import Optional

from pydantic import BaseModel, EmailStr, validator

from albaranes.schemas.usuario import UsuarioRead


class RegistroRequest(BaseModel):
    nombre: str
    email: EmailStr
    password: str
    empresa_nombre: Optional[str] = None

    @validator("nombre")
    def nombre_obligatorio(cls, v):
        if not v or not v.strip():
            raise ValueError("El nombre es obligatorio.")
        return v.strip()

    @validator("email")
    def email_minusculas(cls, v):
        return v.lower()

    @validator("password")
    def password_minima(cls, v):
        if len(v) < 6:
            raise ValueError("La contraseña debe tener al menos 6 caracteres.")
        return v

    @validator("empresa_nombre")
    def empresa_recortada(cls, v):
        return v.strip() or None if v else None


class LoginRequest(BaseModel):
    email: EmailStr
    password: str

    @validator("email")
    def email_minusculas(cls, v):
        return v.lower()

    @validator("password")
    def password_obligatoria(cls, v):
        if not v:
            raise ValueError("La contraseña es obligatoria.")
        return v


class TokenResponse(BaseModel):
    message: str
    token: str
    token_type: str = "bearer"
    usuario: UsuarioRead


class SolicitudReseteoRequest(BaseModel):
    email: EmailStr


class ReseteoPasswordRequest(BaseModel):
    token: str
    nueva_password: str

    @validator("token")
    def token_obligatorio(cls, v):
        if not v or not v.strip():
            raise ValueError("El token es obligatorio.")
        return v.strip()

    @validator("nueva_password")
    def password_minima(cls, v):
        if len(v) < 6:
            raise ValueError("La nueva contraseña debe tener al menos 6 caracteres.")
        return v
