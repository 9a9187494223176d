# backend/projectmanager/main.py
from contextlib import asynccontextmanager
from datetime import timedelta

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import models
from .api import users, companies, projects, documents, comments
from .auth.middleware import attach_identity
from .auth.tokens import TokenService
from .config import Settings, settings
from .database import build_engine, build_session_factory
from .services.exceptions import ServiceError
from .services.users import UserStore
from .utils.logging import api_logger, configure_logging


def register_exception_handlers(app: FastAPI) -> None:
    """Render every failure as {"message": ..., "error": ...}"""

    @app.exception_handler(ServiceError)
    async def service_error_handler(request: Request, exc: ServiceError):
        log = api_logger.error if exc.status_code >= 500 else api_logger.warning
        log(exc.message, extra={
            "path": request.url.path,
            "method": request.method,
            "status_code": exc.status_code,
            "error": str(exc)
        })
        return JSONResponse(status_code=exc.status_code, content={"message": exc.message, "error": str(exc)})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        error = "; ".join(
            f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg')}"
            for err in exc.errors()
        )
        api_logger.warning("Request validation failed", extra={"path": request.url.path, "error": error})
        return JSONResponse(status_code=400, content={"message": "Invalid request.", "error": error})

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": "Request failed.", "error": exc.detail},
            headers=getattr(exc, "headers", None)
        )

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        # Details stay in the log, the client only learns that something failed
        api_logger.error("Unexpected error", extra={
            "path": request.url.path,
            "method": request.method,
            "error": repr(exc)
        }, exc_info=exc)
        return JSONResponse(status_code=500, content={"message": "Unexpected error.", "error": "Internal server error."})


def create_app(app_settings: Settings = settings) -> FastAPI:
    configure_logging(app_settings)
    engine = build_engine(str(app_settings.DATABASE_URL))
    session_factory = build_session_factory(engine)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Create all tables on startup
        models.Base.metadata.create_all(bind=engine)

        if app_settings.bootstrap_admin_enabled:
            with session_factory() as db:
                UserStore(db, bcrypt_rounds=app_settings.BCRYPT_ROUNDS).ensure_admin(
                    app_settings.ADMIN_USERNAME,
                    app_settings.ADMIN_EMAIL,
                    app_settings.ADMIN_PASSWORD
                )
        yield
        engine.dispose()

    app = FastAPI(title="Project Manager API", lifespan=lifespan)

    app.state.settings = app_settings
    app.state.session_factory = session_factory
    app.state.token_service = TokenService(
        app_settings.JWT_SECRET,
        algorithm=app_settings.JWT_ALGORITHM,
        ttl=timedelta(hours=app_settings.TOKEN_TTL_HOURS)
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # In production, specify your actual frontend URL
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.middleware("http")(attach_identity)

    register_exception_handlers(app)

    # Include routers
    app.include_router(users.router)
    app.include_router(companies.router)
    app.include_router(projects.router)
    app.include_router(documents.router)
    app.include_router(comments.router)

    @app.get("/")
    async def root():
        return {"message": "Project Manager API is running"}

    return app


app = create_app()
