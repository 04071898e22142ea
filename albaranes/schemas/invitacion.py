from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, validator

from albaranes.models.invitacion import EstadoInvitacion
from albaranes.schemas.usuario import UsuarioRead


class InvitacionCreate(BaseModel):
    email_invitado: EmailStr

    @validator("email_invitado")
    def email_minusculas(cls, v):
        return v.lower()


class InvitacionCreadaResponse(BaseModel):
    message: str
    invitacion_id: str


class AceptarInvitacionRequest(BaseModel):
    token: str

    @validator("token")
    def token_obligatorio(cls, v):
        if not v or not v.strip():
            raise ValueError("El token de invitación es requerido.")
        return v.strip()


class AceptacionResponse(BaseModel):
    message: str
    usuario: Optional[UsuarioRead] = None


class InvitacionRead(BaseModel):
    id: str
    email_invitado: str
    nombre_empresa: str
    estado: EstadoInvitacion
    expiracion: datetime
    creado_en: Optional[datetime] = None

    class Config:
        from_attributes = True
