from fastapi import APIRouter

from albaranes.api.v1.routers import albaranes, auth, clientes, proyectos, usuarios

# Router principal; el prefijo global (/api) lo pone create_app
api_router = APIRouter()


@api_router.get("/", tags=["Root"])
def read_root():
    return {"message": "Bienvenido a la API de Albaranes"}


api_router.include_router(auth.router, prefix="/auth", tags=["Auth"])
api_router.include_router(usuarios.router, prefix="/user", tags=["Usuario"])
api_router.include_router(clientes.router, prefix="/clients", tags=["Clientes"])
api_router.include_router(proyectos.router, prefix="/projects", tags=["Proyectos"])
api_router.include_router(albaranes.router, prefix="/deliverynotes", tags=["Albaranes"])
