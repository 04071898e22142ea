from typing import Generator

from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool


def build_engine(database_url: str) -> Engine:
    """
    Crea el engine de conexión.

    SQLite en memoria necesita una única conexión compartida (StaticPool)
    para que todas las sesiones vean las mismas tablas.
    """
    if database_url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
        if ":memory:" in database_url or database_url in ("sqlite://", "sqlite:///"):
            kwargs["poolclass"] = StaticPool
        return create_engine(database_url, future=True, **kwargs)

    return create_engine(
        database_url,
        pool_pre_ping=True,  # Verifica la conexión antes de usarla
        pool_size=10,
        max_overflow=20,
        future=True,
    )


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db(request: Request) -> Generator[Session, None, None]:
    """
    Dependency de FastAPI: una sesión por petición, creada a partir de la
    factoría que ``create_app`` deja en ``app.state``.
    """
    db: Session = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()
