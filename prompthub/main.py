import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from prompthub.api.v1 import api_v1_router
from prompthub.platform.config import settings
from prompthub.platform.errors import register_error_handlers


def create_app() -> FastAPI:
    logging.basicConfig(
        level=str(settings.log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = FastAPI(title="PromptHub API")

    allowed_origins = [o.strip() for o in str(settings.allowed_origins).split(",") if o.strip()]

    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)
    app.include_router(api_v1_router, prefix="/api/v1")
    return app


app = create_app()
