import logging
from datetime import timedelta
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from sqlalchemy.exc import SQLAlchemyError

from alphatrive.config.settings import Settings, get_settings
from alphatrive.core.exceptions import InvalidInput, ServiceError, Unauthenticated
from alphatrive.core.token_service import TokenService
from alphatrive.database.init_db import init_db

logger = logging.getLogger(__name__)

WELCOME_TEXT = "Welcome to Alpha-Trive: Stock Platform"


def setup_logging(level: str = "INFO"):
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


def _error_body(error: str, message: str) -> dict:
    return {"success": False, "error": error, "message": message}


def _describe_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        # drop the leading "body"/"query"/"path"
        location = ".".join(str(p) for p in err.get("loc", ())[1:])
        parts.append(f"{location}: {err.get('msg')}" if location else err.get("msg", ""))
    return "; ".join(parts) or InvalidInput.message


def register_exception_handlers(app: FastAPI):

    @app.exception_handler(ServiceError)
    async def service_error_handler(request: Request, exc: ServiceError):
        headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, Unauthenticated) else None
        return JSONResponse(status_code=exc.status_code, content=_error_body(exc.error, exc.message),
                            headers=headers)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=InvalidInput.status_code,
                            content=_error_body(InvalidInput.error, _describe_validation_errors(exc)))

    @app.exception_handler(SQLAlchemyError)
    async def database_error_handler(request: Request, exc: SQLAlchemyError):
        logger.exception(f"Database error on {request.method} {request.url.path}")
        return JSONResponse(status_code=500, content=_error_body("Internal", "Server error"))

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception(f"Unhandled error on {request.method} {request.url.path}")
        return JSONResponse(status_code=500, content=_error_body("Internal", "Server error"))


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    # process-wide engine, bound once
    init_db(settings.database_url)

    app = FastAPI(title="Alpha-Trive API")
    app.state.settings = settings
    app.state.token_service = TokenService(
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
        expires_in=timedelta(minutes=settings.token_expire_minutes),
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    # routers
    from alphatrive.api import auth, users, posts, likes, comments

    app.include_router(auth.auth_router, prefix="/api/auth", tags=["auth"])
    app.include_router(users.user_router, prefix="/api/user", tags=["user"])
    app.include_router(posts.post_router, prefix="/api/posts", tags=["posts"])
    app.include_router(likes.like_router, prefix="/api/posts", tags=["likes"])
    app.include_router(comments.comment_router, prefix="/api/posts", tags=["comments"])

    @app.get("/", response_class=PlainTextResponse)
    def root():
        return WELCOME_TEXT

    logger.info(f"Application created with {settings!r}")
    return app
