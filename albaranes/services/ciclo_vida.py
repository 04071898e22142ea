# albaranes/services/ciclo_vida.py
"""
Política de ciclo de vida compartida por Cliente, Proyecto y Albarán.

Cada entidad declara uno o más *ejes* (borrado lógico, archivado): el par
bandera + fecha que lo representa y, opcionalmente, efectos adicionales al
marcar o restaurar (p. ej. el estado "Archivado" de un proyecto).

Contrato común:
    - marcar:     solo sobre un registro no marcado; fija bandera y fecha.
    - restaurar:  solo sobre un registro marcado; limpia bandera y fecha.
    - eliminar_definitivamente: borra la fila, esté o no marcada.

La búsqueda por propietario (y el NoEncontrado correspondiente) la hace el
módulo ``crud`` de cada entidad antes de llegar aquí.
"""
import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

from sqlalchemy.orm import Session

from albaranes.core.exceptions import EstadoInvalido
from albaranes.models.proyecto import EstadoProyecto
from albaranes.utils.fechas import ahora

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EjeCicloVida:
    nombre: str
    campo_flag: str
    campo_fecha: str
    mensaje_ya_marcado: str
    mensaje_no_marcado: str
    al_marcar: Optional[Callable[[Any], None]] = None
    al_restaurar: Optional[Callable[[Any], None]] = None
    marcado_extra: Optional[Callable[[Any], bool]] = None

    def esta_marcado(self, registro) -> bool:
        if getattr(registro, self.campo_flag):
            return True
        return bool(self.marcado_extra and self.marcado_extra(registro))

    def columna(self, modelo):
        return getattr(modelo, self.campo_flag)

    def filtro_activos(self, modelo):
        """Expresión SQL que excluye los registros marcados en este eje."""
        return self.columna(modelo).is_(False)


def marcar(db: Session, registro, eje: EjeCicloVida):
    if eje.esta_marcado(registro):
        raise EstadoInvalido(eje.mensaje_ya_marcado)

    setattr(registro, eje.campo_flag, True)
    setattr(registro, eje.campo_fecha, ahora())
    if eje.al_marcar:
        eje.al_marcar(registro)

    db.commit()
    db.refresh(registro)
    logger.info("%s %s marcado (%s)", type(registro).__name__, registro.id, eje.nombre)
    return registro


def restaurar(db: Session, registro, eje: EjeCicloVida):
    if not eje.esta_marcado(registro):
        raise EstadoInvalido(eje.mensaje_no_marcado)

    setattr(registro, eje.campo_flag, False)
    setattr(registro, eje.campo_fecha, None)
    if eje.al_restaurar:
        eje.al_restaurar(registro)

    db.commit()
    db.refresh(registro)
    logger.info("%s %s restaurado (%s)", type(registro).__name__, registro.id, eje.nombre)
    return registro


def eliminar_definitivamente(db: Session, registro) -> None:
    tipo, registro_id = type(registro).__name__, registro.id
    db.delete(registro)
    db.commit()
    logger.info("%s %s eliminado permanentemente", tipo, registro_id)


# -----------------------------------------------------
# Ejes por entidad
# -----------------------------------------------------

def _archivar_estado(proyecto):
    proyecto.estado = EstadoProyecto.archivado


def _desarchivar_estado(proyecto):
    proyecto.estado = EstadoProyecto.pendiente


def _estado_archivado(proyecto) -> bool:
    return proyecto.estado == EstadoProyecto.archivado


BORRADO_USUARIO = EjeCicloVida(
    nombre="borrado lógico",
    campo_flag="is_deleted",
    campo_fecha="deleted_at",
    mensaje_ya_marcado="La cuenta ya ha sido eliminada lógicamente.",
    mensaje_no_marcado="La cuenta no está eliminada.",
)

BORRADO_CLIENTE = EjeCicloVida(
    nombre="borrado lógico",
    campo_flag="is_deleted",
    campo_fecha="deleted_at",
    mensaje_ya_marcado="El cliente ya está eliminado.",
    mensaje_no_marcado="El cliente no está eliminado (soft delete), no se puede recuperar.",
)

ARCHIVO_PROYECTO = EjeCicloVida(
    nombre="archivado",
    campo_flag="is_archived",
    campo_fecha="archived_at",
    mensaje_ya_marcado="El proyecto ya está archivado.",
    mensaje_no_marcado="El proyecto no está archivado, no se puede recuperar.",
    al_marcar=_archivar_estado,
    al_restaurar=_desarchivar_estado,
    marcado_extra=_estado_archivado,
)

BORRADO_PROYECTO = EjeCicloVida(
    nombre="borrado lógico",
    campo_flag="eliminado",
    campo_fecha="fecha_eliminacion",
    mensaje_ya_marcado="El proyecto ya está eliminado.",
    mensaje_no_marcado="El proyecto no está eliminado, no se puede restaurar.",
)

BORRADO_ALBARAN = EjeCicloVida(
    nombre="borrado lógico",
    campo_flag="eliminado",
    campo_fecha="fecha_eliminacion",
    mensaje_ya_marcado="El albarán ya ha sido eliminado.",
    mensaje_no_marcado="El albarán no está eliminado, no se puede recuperar.",
)
