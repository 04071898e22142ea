"""
Tests del perfil del usuario autenticado: datos personales, empresa,
contraseña y bajas (lógica y física).
"""
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from albaranes.models.albaran import Albaran
from albaranes.models.cliente import Cliente
from albaranes.models.usuario import Usuario
from tests.conftest import PASSWORD


class TestPerfil:

    def test_obtener_perfil(self, client: TestClient, usuario):
        for ruta in ("/api/user", "/api/user/me"):
            response = client.get(ruta, headers=usuario["headers"])
            assert response.status_code == 200
            assert response.json()["usuario"]["email"] == usuario["email"]

    def test_cambio_de_email_requiere_nueva_validacion(self, client: TestClient, db: Session, usuario):
        """
        GIVEN: Usuario con email validado
        WHEN: Cambia su email
        THEN:
            - validado pasa a False
            - Se genera un nuevo token de validación
        """
        registro = db.query(Usuario).filter(Usuario.id == usuario["id"]).first()
        registro.validado = True
        db.commit()
        token_anterior = registro.token_validacion_email

        response = client.patch("/api/user", json={"email": "Ana.Nueva@acme.es"}, headers=usuario["headers"])

        assert response.status_code == 200
        assert response.json()["usuario"]["email"] == "ana.nueva@acme.es"
        assert response.json()["usuario"]["validado"] is False

        db.expire_all()
        registro = db.query(Usuario).filter(Usuario.id == usuario["id"]).first()
        assert registro.token_validacion_email != token_anterior

    def test_email_en_uso(self, client: TestClient, usuario, otro_usuario):
        response = client.patch("/api/user", json={"email": otro_usuario["email"]}, headers=usuario["headers"])

        assert response.status_code == 400
        assert response.json()["detail"] == "El correo electrónico ya está en uso."

    def test_cambio_de_nombre_y_password(self, client: TestClient, usuario):
        response = client.patch(
            "/api/user",
            json={"nombre": "Ana María", "password": "clave-nueva"},
            headers=usuario["headers"],
        )
        assert response.status_code == 200
        assert response.json()["usuario"]["nombre"] == "Ana María"

        login = client.post("/api/auth/login", json={"email": usuario["email"], "password": "clave-nueva"})
        assert login.status_code == 200


class TestEmpresa:

    def test_actualizar_empresa_recorta_y_normaliza(self, client: TestClient, usuario):
        response = client.patch(
            "/api/user/company",
            json={"cif": "  B12345678 ", "email": " Info@Acme.ES ", "web": "https://acme.es"},
            headers=usuario["headers"],
        )

        assert response.status_code == 200
        empresa = response.json()["usuario"]["empresa"]
        assert empresa["nombre"] == "Acme"
        assert empresa["cif"] == "B12345678"
        assert empresa["email"] == "info@acme.es"
        assert empresa["web"] == "https://acme.es"


class TestCambioPassword:

    def test_cambio_correcto(self, client: TestClient, usuario):
        response = client.patch(
            "/api/user/change-password",
            json={"current_password": PASSWORD, "new_password": "otra-clave"},
            headers=usuario["headers"],
        )
        assert response.status_code == 200

    def test_password_actual_incorrecta(self, client: TestClient, usuario):
        response = client.patch(
            "/api/user/change-password",
            json={"current_password": "incorrecta", "new_password": "otra-clave"},
            headers=usuario["headers"],
        )
        assert response.status_code == 401

    def test_nueva_igual_a_la_actual(self, client: TestClient, usuario):
        response = client.patch(
            "/api/user/change-password",
            json={"current_password": PASSWORD, "new_password": PASSWORD},
            headers=usuario["headers"],
        )
        assert response.status_code == 400

    def test_errores_de_campo_acumulados(self, client: TestClient, usuario):
        response = client.patch(
            "/api/user/change-password",
            json={"current_password": "", "new_password": "123"},
            headers=usuario["headers"],
        )

        assert response.status_code == 400
        mensajes = {e["mensaje"] for e in response.json()["errors"]}
        assert "La contraseña actual es obligatoria" in mensajes
        assert "La nueva contraseña debe tener al menos 6 caracteres" in mensajes


class TestBajas:

    def test_soft_delete_marca_la_cuenta(self, client: TestClient, db: Session, usuario):
        assert client.patch("/api/user/me/soft-delete", headers=usuario["headers"]).status_code == 200

        registro = db.query(Usuario).filter(Usuario.id == usuario["id"]).first()
        assert registro.is_deleted is True
        assert registro.deleted_at is not None

    def test_hard_delete_borra_lo_que_pertenece_al_usuario(self, client: TestClient, db: Session, usuario, albaran):
        """
        GIVEN: Usuario con cliente, proyecto y albarán
        WHEN: Elimina permanentemente su propia cuenta
        THEN: No queda rastro de él ni de sus datos
        """
        response = client.delete(f"/api/user/{usuario['id']}/hard-delete", headers=usuario["headers"])

        assert response.status_code == 200
        db.expire_all()
        assert db.query(Usuario).filter(Usuario.id == usuario["id"]).first() is None
        assert db.query(Cliente).filter(Cliente.usuario_id == usuario["id"]).count() == 0
        assert db.query(Albaran).filter(Albaran.usuario_id == usuario["id"]).count() == 0

    def test_hard_delete_usuario_inexistente(self, client: TestClient, usuario):
        response = client.delete("/api/user/no-existe/hard-delete", headers=usuario["headers"])
        assert response.status_code == 404

    def test_hard_delete_de_otra_cuenta(self, client: TestClient, db: Session, usuario, otro_usuario, cliente):
        """
        GIVEN: Dos usuarios, el primero con un cliente
        WHEN: El segundo intenta eliminar permanentemente al primero
        THEN:
            - 404, como cualquier recurso ajeno
            - El usuario y sus datos siguen intactos
        """
        response = client.delete(f"/api/user/{usuario['id']}/hard-delete", headers=otro_usuario["headers"])

        assert response.status_code == 404
        assert db.query(Usuario).filter(Usuario.id == usuario["id"]).first() is not None
        assert db.query(Cliente).filter(Cliente.usuario_id == usuario["id"]).count() == 1
        assert client.get("/api/user", headers=usuario["headers"]).status_code == 200
