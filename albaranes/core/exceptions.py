# albaranes/core/exceptions.py
"""
Errores de dominio de la API.

Los servicios lanzan estas excepciones y ``core.error_handlers`` las traduce
a respuestas JSON con el código HTTP correspondiente.
"""
from typing import Any, Dict, List, Optional

from fastapi import status


class ErrorAplicacion(Exception):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    mensaje_defecto = "Ha ocurrido un error en el servidor."

    def __init__(self, mensaje: Optional[str] = None, errores: Optional[List[Dict[str, Any]]] = None):
        self.mensaje = mensaje or self.mensaje_defecto
        self.errores = errores
        super().__init__(self.mensaje)


class ErrorValidacion(ErrorAplicacion):
    """Entrada mal formada o incompleta."""
    status_code = status.HTTP_400_BAD_REQUEST
    mensaje_defecto = "Datos de entrada inválidos."


class PeticionInvalida(ErrorAplicacion):
    status_code = status.HTTP_400_BAD_REQUEST
    mensaje_defecto = "Petición inválida."


class TokenInvalido(ErrorAplicacion):
    """Token de un solo uso inexistente, expirado o ya consumido (indistinguibles)."""
    status_code = status.HTTP_400_BAD_REQUEST
    mensaje_defecto = "Token inválido o expirado."


class EstadoInvalido(ErrorAplicacion):
    """Operación no permitida en el estado actual del registro."""
    status_code = status.HTTP_400_BAD_REQUEST
    mensaje_defecto = "Operación no permitida en el estado actual."


class NoAutorizado(ErrorAplicacion):
    status_code = status.HTTP_401_UNAUTHORIZED
    mensaje_defecto = "No autorizado."


class Prohibido(ErrorAplicacion):
    status_code = status.HTTP_403_FORBIDDEN
    mensaje_defecto = "Acceso prohibido."


class NoEncontrado(ErrorAplicacion):
    status_code = status.HTTP_404_NOT_FOUND
    mensaje_defecto = "Recurso no encontrado."
