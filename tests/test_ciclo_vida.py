"""
Tests unitarios de la política de ciclo de vida sobre la sesión de base de datos.
"""
import pytest

from albaranes.core.exceptions import EstadoInvalido
from albaranes.models.cliente import Cliente
from albaranes.models.proyecto import EstadoProyecto, Proyecto
from albaranes.models.usuario import Usuario
from albaranes.services import ciclo_vida


@pytest.fixture
def propietario(db):
    usuario = Usuario(nombre="Carla", email="carla@ejemplo.es", hashed_password="x")
    db.add(usuario)
    db.commit()
    return usuario


@pytest.fixture
def cliente_db(db, propietario):
    cliente = Cliente(nombre="Cliente Uno", usuario_id=propietario.id)
    db.add(cliente)
    db.commit()
    return cliente


def test_marcar_y_restaurar_cliente(db, cliente_db):
    ciclo_vida.marcar(db, cliente_db, ciclo_vida.BORRADO_CLIENTE)
    assert cliente_db.is_deleted is True
    assert cliente_db.deleted_at is not None

    ciclo_vida.restaurar(db, cliente_db, ciclo_vida.BORRADO_CLIENTE)
    assert cliente_db.is_deleted is False
    assert cliente_db.deleted_at is None


def test_marcar_dos_veces(db, cliente_db):
    ciclo_vida.marcar(db, cliente_db, ciclo_vida.BORRADO_CLIENTE)

    with pytest.raises(EstadoInvalido) as exc:
        ciclo_vida.marcar(db, cliente_db, ciclo_vida.BORRADO_CLIENTE)
    assert exc.value.mensaje == "El cliente ya está eliminado."


def test_restaurar_no_marcado(db, cliente_db):
    with pytest.raises(EstadoInvalido):
        ciclo_vida.restaurar(db, cliente_db, ciclo_vida.BORRADO_CLIENTE)


def test_archivado_de_proyecto_cambia_estado(db, propietario, cliente_db):
    proyecto = Proyecto(
        nombre="Nave industrial",
        cliente_id=cliente_db.id,
        usuario_id=propietario.id,
        estado=EstadoProyecto.en_progreso,
    )
    db.add(proyecto)
    db.commit()

    ciclo_vida.marcar(db, proyecto, ciclo_vida.ARCHIVO_PROYECTO)
    assert proyecto.estado == EstadoProyecto.archivado
    assert proyecto.archived_at is not None
    assert proyecto.eliminado is False

    ciclo_vida.restaurar(db, proyecto, ciclo_vida.ARCHIVO_PROYECTO)
    assert proyecto.estado == EstadoProyecto.pendiente
    assert proyecto.is_archived is False


def test_cuenta_de_usuario_eliminada_dos_veces(db, propietario):
    ciclo_vida.marcar(db, propietario, ciclo_vida.BORRADO_USUARIO)

    with pytest.raises(EstadoInvalido) as exc:
        ciclo_vida.marcar(db, propietario, ciclo_vida.BORRADO_USUARIO)
    assert exc.value.mensaje == "La cuenta ya ha sido eliminada lógicamente."


def test_eliminar_definitivamente(db, cliente_db):
    cliente_id = cliente_db.id

    ciclo_vida.eliminar_definitivamente(db, cliente_db)

    assert db.get(Cliente, cliente_id) is None
