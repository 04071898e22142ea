"""
Fixtures comunes: aplicación contra SQLite en memoria, sesión de base de
datos, cliente HTTP y usuarios autenticados.
"""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

import albaranes.models  # noqa: F401
from albaranes.core.config import Entornos, Settings
from albaranes.db.base import Base
from albaranes.main import create_app

PASSWORD = "secreta123"
PNG_FIRMA = b"\x89PNG\r\n\x1a\n" + b"\x00" * 128


@pytest.fixture
def settings(tmp_path) -> Settings:
    return Settings(
        _env_file=None,
        environment=Entornos.TEST,
        secret_key="clave-de-pruebas",
        database_url="sqlite://",
        storage_dir=tmp_path / "storage",
        log_dir=tmp_path / "logs",
        smtp_user="",
        smtp_password="",
        max_firma_bytes=1024,
    )


@pytest.fixture
def app(settings):
    app = create_app(settings)
    Base.metadata.create_all(bind=app.state.engine)
    yield app
    Base.metadata.drop_all(bind=app.state.engine)
    app.state.engine.dispose()


@pytest.fixture
def db(app) -> Session:
    session = app.state.session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


def registrar(client: TestClient, email: str, nombre: str = "Usuario Test", empresa_nombre=None):
    """Registra un usuario y devuelve el JSON de la respuesta."""
    payload = {"nombre": nombre, "email": email, "password": PASSWORD}
    if empresa_nombre:
        payload["empresa_nombre"] = empresa_nombre
    response = client.post("/api/auth/register", json=payload)
    assert response.status_code == 201, response.text
    return response.json()


def auth_headers(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def usuario(client):
    """Usuario con empresa 'Acme' y sus cabeceras de autenticación."""
    data = registrar(client, "ana@acme.es", nombre="Ana López", empresa_nombre="Acme")
    return {"id": data["usuario"]["id"], "email": "ana@acme.es", "headers": auth_headers(data["token"])}


@pytest.fixture
def otro_usuario(client):
    data = registrar(client, "bruno@correo.es", nombre="Bruno Díaz")
    return {"id": data["usuario"]["id"], "email": "bruno@correo.es", "headers": auth_headers(data["token"])}


@pytest.fixture
def cliente(client, usuario):
    response = client.post(
        "/api/clients",
        json={
            "nombre": "Construcciones Norte",
            "email": "compras@norte.es",
            "telefono": "600123123",
            "direccion": {"calle": "Calle Mayor 1", "ciudad": "Madrid", "codigo_postal": "28013"},
        },
        headers=usuario["headers"],
    )
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def proyecto(client, usuario, cliente):
    response = client.post(
        "/api/projects",
        json={"nombre": "Reforma oficinas", "descripcion": "Planta 2", "cliente_id": cliente["id"]},
        headers=usuario["headers"],
    )
    assert response.status_code == 201, response.text
    return response.json()


@pytest.fixture
def albaran(client, usuario, proyecto):
    """Albarán con dos líneas: 10 x 50 y 1 x 120 (total 620)."""
    response = client.post(
        "/api/deliverynotes",
        json={
            "numero_albaran": "ALB-001",
            "proyecto_id": proyecto["id"],
            "lineas": [
                {"descripcion": "Horas de montaje", "cantidad": 10, "unidad": "hora", "precio_unitario": 50},
                {"descripcion": "Material eléctrico", "cantidad": 1, "precio_unitario": 120},
            ],
            "observaciones": "Entrega en obra",
        },
        headers=usuario["headers"],
    )
    assert response.status_code == 201, response.text
    return response.json()


def firmar(client: TestClient, albaran_id: str, headers: dict, contenido: bytes = PNG_FIRMA, tipo: str = "image/png"):
    return client.patch(
        f"/api/deliverynotes/{albaran_id}/sign",
        files={"firma": ("firma.png", contenido, tipo)},
        headers=headers,
    )
