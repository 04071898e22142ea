# albaranes/core/security.py
"""
Seguridad centralizada: hash de contraseñas (passlib/bcrypt) y JWT (python-jose).

``get_current_usuario`` es la dependency que protege todas las rutas
privadas de la API.
"""
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from albaranes.core.config import Settings
from albaranes.core.exceptions import NoAutorizado, Prohibido
from albaranes.crud.usuario import get_usuario
from albaranes.db.session import get_db
from albaranes.models.usuario import Usuario
from albaranes.utils.logger import logger

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    if not hashed_password:
        return False
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(subject: str, settings: Settings, expires_delta: Optional[timedelta] = None) -> str:
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    to_encode = {"sub": str(subject), "exp": expire}
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)


def decode_access_token(token: str, settings: Settings) -> str:
    """Devuelve el id de usuario del token o lanza ``NoAutorizado``."""
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError as exc:
        raise NoAutorizado("No autorizado, token fallido o expirado.") from exc

    usuario_id = payload.get("sub")
    if not usuario_id:
        raise NoAutorizado("No autorizado, token fallido o expirado.")
    return usuario_id


def get_current_usuario(
    request: Request,
    token: Optional[str] = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> Usuario:
    if not token:
        logger.warning("Acceso sin token a %s", request.url.path)
        raise NoAutorizado("No autorizado, no se encontró token.")

    usuario_id = decode_access_token(token, request.app.state.settings)

    usuario = get_usuario(db, usuario_id)
    if not usuario:
        logger.warning("Token válido para un usuario inexistente: %s", usuario_id)
        raise NoAutorizado("No autorizado, usuario no encontrado.")

    if usuario.is_deleted:
        logger.warning("Acceso denegado a cuenta eliminada: %s", usuario.email)
        raise Prohibido("Esta cuenta ha sido desactivada.")

    return usuario
