# albaranes/crud/usuario.py
from typing import Optional

from sqlalchemy.orm import Session

from albaranes.models.usuario import Usuario
from albaranes.utils.fechas import ahora


def normalizar_email(email: Optional[str]) -> Optional[str]:
    return email.strip().lower() if email else email


# -----------------------------------------------------
# Obtener usuario por ID
# -----------------------------------------------------
def get_usuario(db: Session, usuario_id: str) -> Optional[Usuario]:
    return db.query(Usuario).filter(Usuario.id == usuario_id).first()


# -----------------------------------------------------
# Obtener usuario por email (insensible a mayúsculas)
# -----------------------------------------------------
def get_usuario_by_email(db: Session, email: str) -> Optional[Usuario]:
    return db.query(Usuario).filter(Usuario.email == normalizar_email(email)).first()


# -----------------------------------------------------
# Tokens de un solo uso (solo si no han expirado)
# -----------------------------------------------------
def get_usuario_by_token_validacion(db: Session, token: str) -> Optional[Usuario]:
    return (
        db.query(Usuario)
        .filter(
            Usuario.token_validacion_email == token,
            Usuario.expiracion_token_validacion_email > ahora(),
        )
        .first()
    )


def get_usuario_by_token_reseteo(db: Session, token: str) -> Optional[Usuario]:
    return (
        db.query(Usuario)
        .filter(
            Usuario.token_reseteo_password == token,
            Usuario.expiracion_token_reseteo_password > ahora(),
        )
        .first()
    )


def create_usuario(db: Session, **campos) -> Usuario:
    obj = Usuario(**campos)
    db.add(obj)
    db.commit()
    db.refresh(obj)
    return obj
