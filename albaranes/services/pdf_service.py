# albaranes/services/pdf_service.py
"""
Generación del PDF de un albarán con ReportLab (platypus).

Recibe una instantánea en forma de diccionario (ver
``albaran_service.snapshot_albaran``) y devuelve los bytes del documento.
"""
import logging
from datetime import datetime
from decimal import Decimal
from io import BytesIO
from typing import Any, Dict
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER, TA_RIGHT
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

logger = logging.getLogger(__name__)

COLOR_CABECERA = colors.HexColor("#1F3A5F")
COLOR_FILA_ALTERNA = colors.HexColor("#F2F4F7")


def _estilos():
    base = getSampleStyleSheet()
    return {
        "titulo": ParagraphStyle("Titulo", parent=base["Title"], fontSize=22, alignment=TA_CENTER, spaceAfter=6 * mm),
        "subtitulo": ParagraphStyle("Subtitulo", parent=base["Normal"], fontSize=11, spaceAfter=1.5 * mm),
        "campo": ParagraphStyle("Campo", parent=base["Normal"], fontName="Helvetica-Bold", fontSize=10, spaceBefore=3 * mm),
        "texto": ParagraphStyle("Texto", parent=base["Normal"], fontSize=10),
        "celda": ParagraphStyle("Celda", parent=base["Normal"], fontSize=9),
        "firma": ParagraphStyle("Firma", parent=base["Normal"], fontSize=10, alignment=TA_RIGHT),
    }


def _fecha(valor) -> str:
    if not valor:
        return ""
    if isinstance(valor, str):
        valor = datetime.fromisoformat(valor)
    return valor.strftime("%d/%m/%Y")


def _importe(valor) -> str:
    return f"{Decimal(valor or 0):.2f} €"


def _cantidad(valor) -> str:
    return f"{Decimal(valor or 0).normalize():f}"


def _texto(valor) -> str:
    return escape(str(valor)) if valor else ""


def _tabla_lineas(datos: Dict[str, Any], estilos) -> Table:
    filas = [["Descripción", "Cantidad", "Unidad", "Precio", "Importe"]]
    for linea in datos.get("lineas") or []:
        filas.append([
            Paragraph(_texto(linea.get("descripcion")) or "Concepto sin descripción", estilos["celda"]),
            _cantidad(linea.get("cantidad")),
            linea.get("unidad") or "",
            _importe(linea.get("precio_unitario")),
            _importe(linea.get("importe")),
        ])
    filas.append(["", "", "", "TOTAL", _importe(datos.get("total"))])

    tabla = Table(filas, colWidths=[78 * mm, 22 * mm, 22 * mm, 24 * mm, 26 * mm], repeatRows=1)
    estilo = TableStyle([
        ("BACKGROUND", (0, 0), (-1, 0), COLOR_CABECERA),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("FONTSIZE", (0, 0), (-1, -1), 9),
        ("ALIGN", (1, 1), (-1, -1), "RIGHT"),
        ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
        ("LINEBELOW", (0, 0), (-1, -2), 0.25, colors.grey),
        ("FONTNAME", (3, -1), (-1, -1), "Helvetica-Bold"),
        ("LINEABOVE", (3, -1), (-1, -1), 1, COLOR_CABECERA),
    ])
    for i in range(2, len(filas) - 1, 2):
        estilo.add("BACKGROUND", (0, i), (-1, i), COLOR_FILA_ALTERNA)
    tabla.setStyle(estilo)
    return tabla


def generar_pdf_albaran(datos: Dict[str, Any]) -> bytes:
    referencia = datos.get("numero_albaran") or datos.get("id") or "N/A"
    logger.info("Iniciando generación de PDF para albarán %s", referencia)

    try:
        estilos = _estilos()
        buffer = BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=A4,
            leftMargin=18 * mm,
            rightMargin=18 * mm,
            topMargin=18 * mm,
            bottomMargin=18 * mm,
            title=f"Albarán {referencia}",
        )

        empresa = datos.get("empresa") or {}
        cliente = datos.get("cliente") or {"nombre": "Cliente no especificado"}
        proyecto = datos.get("proyecto") or {"nombre": "Proyecto no especificado"}

        story = [
            Paragraph("ALBARÁN", estilos["titulo"]),
            Paragraph(f"Número de Albarán: {_texto(datos.get('numero_albaran')) or 'PENDIENTE'}", estilos["subtitulo"]),
            Paragraph(f"Fecha: {_fecha(datos.get('fecha_emision'))}", estilos["subtitulo"]),
        ]

        if empresa.get("nombre"):
            story.append(Paragraph("Emisor:", estilos["campo"]))
            story.append(Paragraph(_texto(empresa["nombre"]), estilos["texto"]))
            for clave in ("cif", "direccion", "telefono", "email"):
                if empresa.get(clave):
                    story.append(Paragraph(_texto(empresa[clave]), estilos["texto"]))

        story.append(Paragraph("Cliente:", estilos["campo"]))
        story.append(Paragraph(_texto(cliente.get("nombre")) or "N/A", estilos["texto"]))
        if cliente.get("direccion"):
            story.append(Paragraph(_texto(cliente["direccion"]), estilos["texto"]))

        story.append(Paragraph("Proyecto:", estilos["campo"]))
        story.append(Paragraph(_texto(proyecto.get("nombre")) or "N/A", estilos["texto"]))

        story.append(Paragraph("Conceptos:", estilos["campo"]))
        story.append(Spacer(1, 2 * mm))
        if datos.get("lineas"):
            story.append(_tabla_lineas(datos, estilos))
        else:
            story.append(Paragraph("No hay conceptos detallados.", estilos["texto"]))

        story.append(Spacer(1, 12 * mm))
        if datos.get("fecha_firma"):
            story.append(Paragraph(f"Firmado el {_fecha(datos['fecha_firma'])}", estilos["firma"]))
        else:
            story.append(Paragraph("Firma del Cliente:", estilos["firma"]))
        story.append(Spacer(1, 14 * mm))
        story.append(Paragraph("_________________________", estilos["firma"]))

        if datos.get("observaciones"):
            story.append(Paragraph("Observaciones:", estilos["campo"]))
            story.append(Paragraph(_texto(datos["observaciones"]), estilos["texto"]))

        doc.build(story)
        pdf = buffer.getvalue()
    except Exception:
        logger.exception("Error generando PDF para albarán %s", referencia)
        raise

    logger.info("PDF generado para albarán %s. Tamaño: %s bytes", referencia, len(pdf))
    return pdf
