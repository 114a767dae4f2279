import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from easyride import __version__
from easyride.core.config import get_settings, setup_logging
from easyride.infrastructure.database.session import dispose_engine, init_db
from easyride.interfaces.http.api import create_api_router
from easyride.schemas import HealthResponse

logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_db()
    yield
    await dispose_engine()


async def storage_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception("Storage failure on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


def create_app() -> FastAPI:
    setup_logging(settings)

    app = FastAPI(
        title=settings.project_name,
        description="EasyRide shuttle wallet recharge and ledger service",
        version=__version__,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(SQLAlchemyError, storage_error_handler)
    app.include_router(create_api_router(settings.api_prefix))

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(version=__version__)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "easyride.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.server.reload,
    )
