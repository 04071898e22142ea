from datetime import datetime
from decimal import Decimal

from albaranes.services.pdf_service import generar_pdf_albaran


def _snapshot(**extra):
    datos = {
        "id": "b2c4",
        "numero_albaran": "ALB-007",
        "fecha_emision": datetime(2024, 5, 2, 10, 30),
        "estado": "Borrador",
        "empresa": {"nombre": "Acme & Hijos", "cif": "B12345678", "direccion": "Calle Sol 3"},
        "cliente": {"nombre": "Cliente <Uno>", "email": "uno@cliente.es", "direccion": "28013 Madrid"},
        "proyecto": {"nombre": "Reforma"},
        "lineas": [
            {
                "descripcion": "Horas",
                "cantidad": Decimal("10"),
                "unidad": "hora",
                "precio_unitario": Decimal("50"),
                "importe": Decimal("500.00"),
            }
        ],
        "total": Decimal("500.00"),
        "fecha_firma": None,
        "observaciones": "Entrega parcial",
    }
    datos.update(extra)
    return datos


def test_pdf_con_lineas():
    pdf = generar_pdf_albaran(_snapshot())
    assert pdf.startswith(b"%PDF")


def test_pdf_sin_lineas_ni_numero():
    pdf = generar_pdf_albaran(_snapshot(numero_albaran=None, lineas=[], total=Decimal("0"), cliente=None))
    assert pdf.startswith(b"%PDF")


def test_pdf_firmado_con_fechas_en_texto():
    pdf = generar_pdf_albaran(
        _snapshot(estado="Firmado", fecha_emision="2024-05-02T10:30:00", fecha_firma=datetime(2024, 5, 3))
    )
    assert pdf.startswith(b"%PDF")
