from fastapi import FastAPI

from adroast.api.routes import router
from adroast.config.settings import settings
from adroast.exceptions.handlers import register_exception_handlers
from adroast.middleware.request_context import RequestContextMiddleware
from adroast.shared.logging import setup_logging


def create_app() -> FastAPI:
    setup_logging(settings.log_level)

    app = FastAPI(title="AdRoast", version="0.4.0")
    app.add_middleware(RequestContextMiddleware)
    register_exception_handlers(app)
    app.include_router(router)
    return app


app = create_app()
