import uuid


def nuevo_id() -> str:
    return str(uuid.uuid4())


def valores_enum(enum_cls):
    """Persistir el valor del enum (``"En Progreso"``) y no su nombre."""
    return [e.value for e in enum_cls]
