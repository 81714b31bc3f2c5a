import logging
import os

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from core.config import Settings, get_settings
from core.database import build_engine, build_session_factory
from core.errors import AppError, Internal, InvalidInput
from models.base import Base
from models import user, project, version  # noqa: F401
from routers import auth_router, project_router, upload_router, render_router

logger = logging.getLogger(__name__)


def _error_response(request: Request, status_code: int, message: str):
    # The public render route speaks plain text, everything else JSON
    if request.url.path.startswith(request.app.state.settings.DEPLOYED_URL_PATH):
        return PlainTextResponse(message, status_code=status_code)
    return JSONResponse({"message": message}, status_code=status_code)


def _register_error_handlers(app: FastAPI):
    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError):
        return _error_response(request, exc.status_code, exc.message)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        message = errors[0].get("msg") if errors else InvalidInput.message
        return _error_response(request, InvalidInput.status_code, message)

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return _error_response(request, exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return _error_response(request, Internal.status_code, Internal.message)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    logging.basicConfig(level=settings.LOG_LEVEL)

    engine = build_engine(settings)
    Base.metadata.create_all(bind=engine)

    app = FastAPI(title="Project Hosting Backend API")
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    _register_error_handlers(app)

    app.include_router(auth_router.router, prefix=settings.API_PREFIX)
    app.include_router(project_router.router, prefix=settings.API_PREFIX)
    app.include_router(upload_router.router, prefix=settings.API_PREFIX)
    app.include_router(render_router.router, prefix=settings.DEPLOYED_URL_PATH)

    # Uploaded files are served as-is
    os.makedirs(settings.UPLOAD_DIR, exist_ok=True)
    app.mount(
        settings.UPLOAD_URL_PATH,
        StaticFiles(directory=settings.UPLOAD_DIR),
        name="uploads",
    )

    @app.get("/")
    def root():
        return {"message": "Project Hosting Backend API Ready"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=app.state.settings.HOST, port=app.state.settings.PORT)
