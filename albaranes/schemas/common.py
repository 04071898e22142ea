from pydantic import BaseModel
from typing import Any, Dict, List, Optional


class ErrorResponse(BaseModel):
    detail: str
    errors: Optional[List[Dict[str, Any]]] = None


class MensajeResponse(BaseModel):
    message: str


def vacio_a_none(v):
    """Los campos opcionales enviados como cadena vacía se tratan como ausentes."""
    if isinstance(v, str) and not v.strip():
        return None
    return v
