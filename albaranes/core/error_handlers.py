import logging
import traceback

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from albaranes.core.exceptions import ErrorAplicacion

logger = logging.getLogger("albaranes")


def _errores_de_validacion(exc: RequestValidationError):
    errores = []
    for error in exc.errors():
        loc = [str(p) for p in error.get("loc", ()) if p not in ("body", "query", "path", "form")]
        mensaje = error.get("msg", "Valor inválido.")
        # pydantic antepone "Value error, " a los ValueError de los validadores
        if mensaje.startswith("Value error, "):
            mensaje = mensaje[len("Value error, "):]
        errores.append({"campo": ".".join(loc), "mensaje": mensaje})
    return errores


def register_error_handlers(app: FastAPI):
    settings = app.state.settings

    @app.exception_handler(ErrorAplicacion)
    async def app_error_handler(request: Request, exc: ErrorAplicacion):
        if exc.status_code >= 500:
            logger.error("Error %s en %s %s - %s", exc.status_code, request.method, request.url.path, exc.mensaje)
        contenido = {"detail": exc.mensaje}
        if exc.errores:
            contenido["errors"] = exc.errores
        return JSONResponse(status_code=exc.status_code, content=contenido)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        detail = exc.detail
        if exc.status_code == status.HTTP_404_NOT_FOUND and detail == "Not Found":
            detail = f"Ruta no encontrada - {request.url.path}"
        logger.warning("Error HTTP %s en %s - %s", exc.status_code, request.url.path, detail)
        return JSONResponse(
            status_code=exc.status_code,
            content={"detail": detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        errores = _errores_de_validacion(exc)
        logger.info("Error de validación en %s - %s", request.url.path, errores)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "detail": ", ".join(e["mensaje"] for e in errores),
                "errors": errores,
            },
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception("Error 500 en %s %s - %s", request.method, request.url.path, exc)
        contenido = {"detail": str(exc) or "Ha ocurrido un error en el servidor."}
        if not settings.es_produccion:
            contenido["stack"] = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
        return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=contenido)
