from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware


def _parse_origins(origins) -> list[str]:
    if isinstance(origins, str):
        return [o.strip() for o in origins.split(",") if o.strip()]
    return list(origins or [])


def setup_cors(app: FastAPI):
    origins = _parse_origins(app.state.settings.backend_cors_origins)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins or ["*"],
        allow_credentials=bool(origins),
        allow_methods=["*"],
        allow_headers=["*"],
    )
