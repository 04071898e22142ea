import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

LOGGER_NAME = "albaranes"
FORMATO = "[%(asctime)s] %(levelname)s %(name)s: %(message)s"

logger = logging.getLogger(LOGGER_NAME)


def setup_logging(log_dir: Path, level: str = "INFO") -> logging.Logger:
    """
    Configura el logger de la aplicación.

    - Consola: todos los mensajes a partir de ``level``.
    - ``<log_dir>/error.log``: solo ERROR y superiores, con rotación.

    Es idempotente: llamar varias veces no duplica handlers.
    """
    logger.setLevel(level.upper())
    logger.propagate = False

    if getattr(logger, "_configurado", False):
        return logger

    formatter = logging.Formatter(FORMATO)

    consola = logging.StreamHandler()
    consola.setFormatter(formatter)
    logger.addHandler(consola)

    try:
        log_dir.mkdir(parents=True, exist_ok=True)
        fichero = RotatingFileHandler(
            log_dir / "error.log", maxBytes=5 * 1024 * 1024, backupCount=3, encoding="utf-8"
        )
        fichero.setLevel(logging.ERROR)
        fichero.setFormatter(formatter)
        logger.addHandler(fichero)
    except OSError as e:
        logger.warning("No se pudo crear el log de errores en %s: %s", log_dir, e)

    logger._configurado = True
    return logger
