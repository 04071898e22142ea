"""
Tests de albaranes: alta con líneas, edición según estado, borrado lógico,
firma con imagen y generación del PDF.
"""
from decimal import Decimal
from io import BytesIO

import pytest
from fastapi import UploadFile
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError
from starlette.datastructures import Headers

from albaranes.models.albaran import Albaran, EstadoAlbaran
from albaranes.models.usuario import Usuario
from albaranes.schemas.albaran import MENSAJE_LINEAS
from albaranes.services import albaran_service
from tests.conftest import PNG_FIRMA, firmar


def _crear(client: TestClient, headers, proyecto_id, **extra):
    payload = {
        "proyecto_id": proyecto_id,
        "lineas": [{"descripcion": "Visita técnica", "cantidad": 1, "precio_unitario": 80}],
    }
    payload.update(extra)
    return client.post("/api/deliverynotes", json=payload, headers=headers)


class TestCrearAlbaran:

    def test_albaran_creado_en_borrador(self, client: TestClient, cliente, proyecto, albaran):
        """
        GIVEN: Proyecto activo con su cliente
        WHEN: Se crea un albarán con dos líneas
        THEN:
            - Estado Borrador, cliente tomado del proyecto
            - Importes por línea y total calculados
        """
        assert albaran["estado"] == "Borrador"
        assert albaran["cliente_id"] == cliente["id"]
        assert albaran["proyecto"]["nombre"] == "Reforma oficinas"
        assert [linea["descripcion"] for linea in albaran["lineas"]] == ["Horas de montaje", "Material eléctrico"]
        assert albaran["lineas"][1]["unidad"] == "unidad"
        assert Decimal(albaran["lineas"][0]["importe"]) == Decimal("500")
        assert Decimal(albaran["total"]) == Decimal("620")
        assert albaran["ruta_firma"] is None
        assert albaran["eliminado"] is False

    def test_lineas_vacias(self, client: TestClient, usuario, proyecto):
        response = _crear(client, usuario["headers"], proyecto["id"], lineas=[])

        assert response.status_code == 400
        assert response.json()["detail"] == MENSAJE_LINEAS

    def test_sin_lineas(self, client: TestClient, usuario, proyecto):
        response = client.post(
            "/api/deliverynotes", json={"proyecto_id": proyecto["id"]}, headers=usuario["headers"]
        )
        assert response.status_code == 400
        assert MENSAJE_LINEAS in response.json()["detail"]

    def test_cantidad_negativa(self, client: TestClient, usuario, proyecto):
        response = _crear(
            client, usuario["headers"], proyecto["id"], lineas=[{"descripcion": "X", "cantidad": -1}]
        )
        assert response.status_code == 400

    def test_cliente_distinto_al_del_proyecto(self, client: TestClient, usuario, proyecto):
        otro = client.post("/api/clients", json={"nombre": "Otro Cliente"}, headers=usuario["headers"]).json()

        response = _crear(client, usuario["headers"], proyecto["id"], cliente_id=otro["id"])

        assert response.status_code == 400
        assert response.json()["detail"] == "El cliente indicado no coincide con el cliente del proyecto."

    def test_proyecto_archivado(self, client: TestClient, usuario, proyecto):
        client.patch(f"/api/projects/{proyecto['id']}/archive", headers=usuario["headers"])

        response = _crear(client, usuario["headers"], proyecto["id"])

        assert response.status_code == 404

    def test_proyecto_de_otro_usuario(self, client: TestClient, otro_usuario, proyecto):
        response = _crear(client, otro_usuario["headers"], proyecto["id"])
        assert response.status_code == 404

    def test_no_se_puede_crear_firmado(self, client: TestClient, usuario, proyecto):
        response = _crear(client, usuario["headers"], proyecto["id"], estado="Firmado")
        assert response.status_code == 400


class TestListadoYEdicion:

    def test_listado_mas_recientes_primero(self, client: TestClient, usuario, proyecto):
        headers = usuario["headers"]
        antiguo = _crear(client, headers, proyecto["id"], fecha_emision="2024-01-10T09:00:00").json()
        reciente = _crear(client, headers, proyecto["id"], fecha_emision="2024-03-05T09:00:00").json()

        ids = [a["id"] for a in client.get("/api/deliverynotes", headers=headers).json()]

        assert ids == [reciente["id"], antiguo["id"]]

    def test_filtros_por_proyecto_y_cliente(self, client: TestClient, usuario, cliente, proyecto, albaran):
        headers = usuario["headers"]
        por_proyecto = client.get("/api/deliverynotes", params={"proyectoId": proyecto["id"]}, headers=headers)
        por_cliente = client.get("/api/deliverynotes", params={"clienteId": cliente["id"]}, headers=headers)
        otro = client.get("/api/deliverynotes", params={"clienteId": "inexistente"}, headers=headers)

        assert [a["id"] for a in por_proyecto.json()] == [albaran["id"]]
        assert [a["id"] for a in por_cliente.json()] == [albaran["id"]]
        assert otro.json() == []

    def test_albaran_de_otro_usuario(self, client: TestClient, otro_usuario, albaran):
        response = client.get(f"/api/deliverynotes/{albaran['id']}", headers=otro_usuario["headers"])

        assert response.status_code == 404
        assert response.json()["detail"] == "Albarán no encontrado o no pertenece al usuario."

    def test_actualizar_lineas_recalcula_total(self, client: TestClient, usuario, albaran):
        response = client.put(
            f"/api/deliverynotes/{albaran['id']}",
            json={"lineas": [{"descripcion": "Cableado", "cantidad": 2.5, "unidad": "m", "precio_unitario": 4}]},
            headers=usuario["headers"],
        )

        assert response.status_code == 200
        data = response.json()
        assert len(data["lineas"]) == 1
        assert Decimal(data["total"]) == Decimal("10")
        assert data["numero_albaran"] == "ALB-001"

    def test_actualizar_con_lineas_vacias(self, client: TestClient, usuario, albaran):
        response = client.put(
            f"/api/deliverynotes/{albaran['id']}", json={"lineas": []}, headers=usuario["headers"]
        )
        assert response.status_code == 400

    def test_fecha_y_estado_no_admiten_nulo(self, client: TestClient, usuario, albaran):
        """
        GIVEN: Albarán en Borrador
        WHEN: Se envía fecha_emision o estado a null
        THEN: 400 y el albarán queda como estaba
        """
        headers = usuario["headers"]
        for campo in ("fecha_emision", "estado"):
            response = client.put(f"/api/deliverynotes/{albaran['id']}", json={campo: None}, headers=headers)
            assert response.status_code == 400

        actual = client.get(f"/api/deliverynotes/{albaran['id']}", headers=headers).json()
        assert actual["estado"] == "Borrador"
        assert actual["fecha_emision"] == albaran["fecha_emision"]

    def test_observaciones_se_pueden_vaciar(self, client: TestClient, usuario, albaran):
        response = client.put(
            f"/api/deliverynotes/{albaran['id']}", json={"observaciones": None}, headers=usuario["headers"]
        )

        assert response.status_code == 200
        assert response.json()["observaciones"] is None

    def test_no_se_edita_un_albaran_firmado(self, client: TestClient, usuario, albaran):
        firmar(client, albaran["id"], usuario["headers"])

        response = client.put(
            f"/api/deliverynotes/{albaran['id']}", json={"observaciones": "Cambio"}, headers=usuario["headers"]
        )

        assert response.status_code == 400


class TestBorradoAlbaran:

    def test_soft_delete_y_recover(self, client: TestClient, usuario, albaran):
        headers = usuario["headers"]
        assert client.delete(f"/api/deliverynotes/{albaran['id']}", headers=headers).status_code == 200
        assert client.get("/api/deliverynotes", headers=headers).json() == []
        assert client.get(f"/api/deliverynotes/{albaran['id']}", headers=headers).status_code == 404

        eliminados = client.get("/api/deliverynotes", params={"includeDeleted": "true"}, headers=headers).json()
        assert eliminados[0]["eliminado"] is True

        response = client.patch(f"/api/deliverynotes/{albaran['id']}/recover", headers=headers)
        assert response.status_code == 200
        assert response.json()["eliminado"] is False
        assert response.json()["fecha_eliminacion"] is None

    def test_soft_delete_repetido(self, client: TestClient, usuario, albaran):
        client.delete(f"/api/deliverynotes/{albaran['id']}", headers=usuario["headers"])
        response = client.delete(f"/api/deliverynotes/{albaran['id']}", headers=usuario["headers"])
        assert response.status_code == 400

    def test_recover_de_albaran_activo(self, client: TestClient, usuario, albaran):
        response = client.patch(f"/api/deliverynotes/{albaran['id']}/recover", headers=usuario["headers"])
        assert response.status_code == 400

    def test_albaran_firmado_no_se_elimina(self, client: TestClient, usuario, albaran):
        headers = usuario["headers"]
        firmar(client, albaran["id"], headers)

        soft = client.delete(f"/api/deliverynotes/{albaran['id']}", headers=headers)
        hard = client.delete(f"/api/deliverynotes/{albaran['id']}/hard", headers=headers)

        assert soft.status_code == 400
        assert soft.json()["detail"] == "No se puede eliminar un albarán que ya ha sido firmado."
        assert hard.status_code == 400

    def test_hard_delete(self, client: TestClient, usuario, albaran):
        headers = usuario["headers"]
        assert client.delete(f"/api/deliverynotes/{albaran['id']}/hard", headers=headers).status_code == 200
        assert client.get(
            "/api/deliverynotes", params={"includeDeleted": "true"}, headers=headers
        ).json() == []


class TestFirma:

    def test_firmar_albaran(self, client: TestClient, settings, usuario, albaran):
        """
        GIVEN: Albarán en Borrador
        WHEN: Se sube una imagen PNG como firma
        THEN:
            - Estado Firmado con fecha de firma
            - La imagen queda guardada en el directorio de firmas y servida bajo /storage
        """
        response = firmar(client, albaran["id"], usuario["headers"])

        assert response.status_code == 200
        data = response.json()["albaran"]
        assert data["estado"] == "Firmado"
        assert data["fecha_firma"] is not None
        assert data["ruta_firma"].startswith("/storage/firmas/firma-")
        assert data["ruta_firma"].endswith(".png")

        guardada = settings.storage_dir / data["ruta_firma"][len("/storage/"):]
        assert guardada.read_bytes() == PNG_FIRMA
        assert client.get(data["ruta_firma"]).content == PNG_FIRMA

    def test_sin_fichero(self, client: TestClient, usuario, albaran):
        response = client.patch(f"/api/deliverynotes/{albaran['id']}/sign", headers=usuario["headers"])

        assert response.status_code == 400
        assert response.json()["detail"] == "No se ha subido ningún archivo de firma."

    def test_fichero_no_imagen(self, client: TestClient, usuario, albaran):
        response = firmar(client, albaran["id"], usuario["headers"], contenido=b"hola", tipo="text/plain")

        assert response.status_code == 400
        assert response.json()["detail"] == "Solo se permiten archivos de imagen para la firma."

    def test_fichero_demasiado_grande(self, client: TestClient, usuario, albaran):
        response = firmar(client, albaran["id"], usuario["headers"], contenido=b"\x00" * 2048)
        assert response.status_code == 400

    def test_firmar_dos_veces(self, client: TestClient, usuario, albaran):
        firmar(client, albaran["id"], usuario["headers"])
        response = firmar(client, albaran["id"], usuario["headers"])

        assert response.status_code == 400
        assert response.json()["detail"] == "Este albarán ya ha sido firmado."

    def test_albaran_cancelado_no_se_firma(self, client: TestClient, usuario, albaran):
        client.put(f"/api/deliverynotes/{albaran['id']}", json={"estado": "Cancelado"}, headers=usuario["headers"])

        response = firmar(client, albaran["id"], usuario["headers"])

        assert response.status_code == 400
        assert response.json()["detail"] == "No se puede firmar un albarán cancelado o eliminado."

    def test_albaran_eliminado_no_se_firma(self, client: TestClient, usuario, albaran):
        client.delete(f"/api/deliverynotes/{albaran['id']}", headers=usuario["headers"])
        response = firmar(client, albaran["id"], usuario["headers"])
        assert response.status_code == 400

    def test_albaran_ajeno(self, client: TestClient, otro_usuario, albaran):
        response = firmar(client, albaran["id"], otro_usuario["headers"])
        assert response.status_code == 404

    def test_la_extension_sale_del_tipo_mime(self, client: TestClient, usuario, albaran):
        """
        GIVEN: Un fichero llamado x.html declarado como image/png
        WHEN: Se sube como firma
        THEN: Se guarda con extensión .png y se sirve como imagen, nunca como HTML
        """
        response = client.patch(
            f"/api/deliverynotes/{albaran['id']}/sign",
            files={"firma": ("x.html", b"<script>alert(1)</script>", "image/png")},
            headers=usuario["headers"],
        )

        assert response.status_code == 200
        ruta = response.json()["albaran"]["ruta_firma"]
        assert ruta.endswith(".png")
        assert client.get(ruta).headers["content-type"] == "image/png"

    def test_svg_no_admitido(self, client: TestClient, usuario, albaran):
        response = firmar(client, albaran["id"], usuario["headers"], contenido=b"<svg/>", tipo="image/svg+xml")

        assert response.status_code == 400
        assert response.json()["detail"] == "Solo se permiten archivos de imagen para la firma."


class TestFirmaSinCommit:

    def test_fallo_al_guardar_borra_la_imagen(self, monkeypatch, db, settings, usuario, albaran):
        """
        GIVEN: Una base de datos que rechaza el commit
        WHEN: Se firma el albarán
        THEN:
            - El error se propaga
            - No queda ninguna imagen en el directorio de firmas
            - El albarán sigue sin firmar
        """
        def commit_fallido():
            raise OperationalError("COMMIT", {}, Exception("disco lleno"))

        monkeypatch.setattr(db, "commit", commit_fallido)
        firma = UploadFile(
            file=BytesIO(PNG_FIRMA), filename="firma.png", headers=Headers({"content-type": "image/png"})
        )

        with pytest.raises(OperationalError):
            albaran_service.firmar_albaran(db, settings, albaran["id"], db.get(Usuario, usuario["id"]), firma)

        assert list(settings.firmas_dir.glob("*")) == []
        db.expire_all()
        assert db.get(Albaran, albaran["id"]).estado == EstadoAlbaran.borrador


class TestPdf:

    def test_descargar_pdf(self, client: TestClient, usuario, albaran):
        response = client.get(f"/api/deliverynotes/{albaran['id']}/download-pdf", headers=usuario["headers"])

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/pdf"
        assert 'filename="albaran_ALB-001.pdf"' in response.headers["content-disposition"]
        assert response.content.startswith(b"%PDF")

    def test_descargar_pdf_sin_numero(self, client: TestClient, usuario, proyecto):
        creado = _crear(client, usuario["headers"], proyecto["id"]).json()

        response = client.get(f"/api/deliverynotes/{creado['id']}/download-pdf", headers=usuario["headers"])

        assert response.status_code == 200
        assert f"albaran_{creado['id']}.pdf" in response.headers["content-disposition"]

    def test_guardar_pdf_sin_firmar(self, client: TestClient, usuario, albaran):
        response = client.post(f"/api/deliverynotes/{albaran['id']}/upload-signed-pdf", headers=usuario["headers"])

        assert response.status_code == 400
        assert response.json()["detail"] == "El albarán debe estar firmado antes de poder subir el PDF."

    def test_guardar_pdf_firmado(self, client: TestClient, settings, usuario, albaran):
        headers = usuario["headers"]
        firmar(client, albaran["id"], headers)

        response = client.post(f"/api/deliverynotes/{albaran['id']}/upload-signed-pdf", headers=headers)

        assert response.status_code == 200
        ruta = response.json()["ruta_pdf"]
        assert ruta.startswith("/storage/ficheros-generados/albaran_firmado_ALB-001_")
        assert response.json()["albaran"]["ruta_pdf"] == ruta
        fichero = settings.storage_dir / ruta[len("/storage/"):]
        assert fichero.read_bytes().startswith(b"%PDF")


@pytest.mark.parametrize(
    "metodo, sufijo",
    [
        ("get", ""),
        ("put", ""),
        ("delete", ""),
        ("patch", "/recover"),
        ("delete", "/hard"),
        ("get", "/download-pdf"),
        ("post", "/upload-signed-pdf"),
    ],
)
def test_id_mal_formado_es_404(client: TestClient, usuario, metodo, sufijo):
    kwargs = {"json": {"observaciones": "x"}} if metodo == "put" else {}
    ruta = f"/api/deliverynotes/no-es-un-id{sufijo}"
    response = client.request(metodo, ruta, headers=usuario["headers"], **kwargs)

    assert response.status_code == 404
