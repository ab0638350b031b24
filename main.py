from dotenv import load_dotenv

load_dotenv()

from fastapi import FastAPI

from apis.attribution_api import router as attribution_router
from config.logging_config import setup_logging
from core.infrastructure.lifecycle import lifespan
from core.infrastructure.request_logging_middleware import RequestLoggingMiddleware
from core.metadata import APP_TITLE, VERSION
from exceptions.handlers import setup_exception_handlers


def create_app() -> FastAPI:
    app = FastAPI(title=APP_TITLE, version=VERSION, lifespan=lifespan)

    app.add_middleware(RequestLoggingMiddleware)
    app.include_router(attribution_router)
    setup_exception_handlers(app)

    @app.get("/health")
    async def health_check():
        return {"status": "healthy"}

    return app


setup_logging()
app = create_app()
