from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.router import api_router
from infrastructure.logging import get_module_logger
from infrastructure.services import get_settings
from server.lifespan import lifespan
from server.middleware import RequestContextMiddleware

logger = get_module_logger()


def create_app() -> FastAPI:
    settings = get_settings()

    app = FastAPI(lifespan=lifespan)

    allow_origins = (
        ["*"]
        if settings.is_production
        else [
            "http://localhost:8000",
            "http://127.0.0.1:8000",
        ]
    )
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["Content-Language", "X-Correlation-ID"],
    )
    app.add_middleware(RequestContextMiddleware)

    app.include_router(api_router)
    return app


handler = create_app()
