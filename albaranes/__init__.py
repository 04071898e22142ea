"""Albaranes API: clientes, proyectos y albaranes firmados."""

__version__ = "1.0.0"
