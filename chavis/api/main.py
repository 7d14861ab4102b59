"""
FastAPI application for the CHAVIS knowledge desk.
"""

from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .chat import router as chat_router
from .deps import AppServices, ensure_services, get_services
from .knowledge import router as knowledge_router
from .schemas import HealthResponse
from ..core.config import CORS_ORIGINS, REINDEX_ON_STARTUP, VERSION, debug_enabled, validate_config
from ..core.db import health_check
from ..core.errors import NotFoundError, UpstreamGenerationFailure, ValidationError
from ..core.reconcile import find_drift, rebuild_index
from ..util.logging import logger

GENERATION_ERROR = "답변 생성 중 오류가 발생했습니다."
GENERATION_ERROR_DETAIL = "답변 생성 서비스(Ollama)가 실행 중인지 확인해 주세요."


def create_app(services: AppServices = None, reindex_on_startup: bool = REINDEX_ON_STARTUP) -> FastAPI:
    """
    Build the application.

    Args:
        services: Prebuilt services; built from configuration on first use when omitted
        reindex_on_startup: Rebuild the vector projection from the knowledge store at startup
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        for issue in validate_config():
            logger.warning(f"Configuration issue: {issue}")

        current = ensure_services(app)
        if reindex_on_startup:
            await rebuild_index(current.store, current.index)
        else:
            report = find_drift(current.store, current.index)
            if not report.in_sync:
                logger.warning(
                    f"Search index out of sync at startup ({len(report.missing)} missing, "
                    f"{len(report.orphaned)} orphaned); POST /knowledge/reindex to rebuild it"
                )

        logger.log_operation("server.startup", "ready", {"version": VERSION})
        yield

    app = FastAPI(
        title="CHAVIS Knowledge Desk API",
        version=VERSION,
        description="Keyword-first question answering over curated organizational knowledge",
        docs_url="/docs" if debug_enabled() else None,
        redoc_url="/redoc" if debug_enabled() else None,
        lifespan=lifespan,
    )
    app.state.services = services

    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = [
            {"field": ".".join(str(part) for part in err.get("loc", ())[1:]), "message": err.get("msg")}
            for err in exc.errors()
        ]
        return JSONResponse(status_code=400, content={"error": "invalid request body", "detail": errors})

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError):
        return JSONResponse(status_code=400, content={"error": str(exc)})

    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        return JSONResponse(status_code=404, content={"error": str(exc)})

    @app.exception_handler(UpstreamGenerationFailure)
    async def generation_failure_handler(request: Request, exc: UpstreamGenerationFailure):
        content = {"error": GENERATION_ERROR, "detail": GENERATION_ERROR_DETAIL}
        if debug_enabled():
            content["debug"] = str(exc)
        return JSONResponse(status_code=500, content=content)

    @app.get("/health", response_model=HealthResponse)
    async def health_check_endpoint(services: AppServices = Depends(get_services)):
        """Check system health."""
        db_health = health_check(services.store.db_path)
        return HealthResponse(
            status="healthy" if db_health else "unhealthy",
            version=VERSION,
            db_health=db_health,
            knowledge_count=services.store.count(),
            unanswered_count=services.unanswered.count(),
            vector_documents=len(services.index.document_ids()),
            generator_available=await services.generator.health_check(),
        )

    app.include_router(chat_router, tags=["chat"])
    app.include_router(knowledge_router, tags=["knowledge"])

    return app


app = create_app()
