from albaranes.db.base import Base

# Importa modelos para que se registren en Base.metadata
from .usuario import Usuario
from .cliente import Cliente
from .proyecto import Proyecto, EstadoProyecto
from .albaran import Albaran, LineaAlbaran, EstadoAlbaran
from .invitacion import Invitacion, EstadoInvitacion

__all__ = [
    "Usuario",
    "Cliente",
    "Proyecto",
    "EstadoProyecto",
    "Albaran",
    "LineaAlbaran",
    "EstadoAlbaran",
    "Invitacion",
    "EstadoInvitacion",
    "Base",
]
