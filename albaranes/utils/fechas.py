from datetime import datetime, timezone


def ahora() -> datetime:
    """Instante actual en UTC, sin tzinfo (así se guarda en la base de datos)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)
