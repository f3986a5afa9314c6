from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from pdfstudio import __version__
from pdfstudio.application import SessionService, configure_session_service
from pdfstudio.config import Settings, load_settings
from pdfstudio.core.logging_utils import get_logger, set_console_level
from pdfstudio.infrastructure import TaskExecutor
from pdfstudio.routes import session, tasks


def create_app(settings: Settings | None = None, service: SessionService | None = None) -> FastAPI:
    settings = settings or load_settings()
    set_console_level(settings.log_level)
    if service is None:
        service = SessionService(TaskExecutor.from_settings(settings))
    configure_session_service(service)
    get_logger().info("PDF service base: %s", service.executor.base_url)

    app = FastAPI(title="PDF Studio Session API", version=__version__)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=list(settings.cors_origins),
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(session.router, prefix="/api")
    app.include_router(tasks.router, prefix="/api")

    @app.get("/", include_in_schema=False)
    async def root() -> JSONResponse:
        """Provide a lightweight landing page for container checks."""
        return JSONResponse(
            {
                "message": "PDF Studio Session API",
                "docs": "/docs",
                "session": "/api/session",
            }
        )

    return app


app = create_app()
