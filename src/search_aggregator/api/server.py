"""
HTTP API Server for the search aggregator.

Endpoints (also mounted under /api for existing frontends):
    GET /search?q=...               ranked results from all providers
    GET /export?q=...&format=...    same results as a json/csv/xml/xlsx download
    GET /health                     liveness probe

Error Response Format:
    400: {"error": "..."}
    500: {"error": "...", "details": "..."}
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, Dict, Optional

from fastapi import APIRouter, FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel

from ..application.search import SearchAggregator
from ..config import Settings
from ..container import ApplicationContainer
from ..core.exceptions import (
    AggregationError,
    InvalidParameterError,
    InvalidQueryError,
    SearchAggregatorError,
    ValidationError,
)
from ..exports import MEDIA_TYPES, SUPPORTED_FORMATS, export_results
from ..infrastructure.cache import wall_clock_ms

logger = logging.getLogger(__name__)

GENERIC_ERROR = "An error occurred while searching"


# Pydantic models for API responses
class SearchResultModel(BaseModel):
    """One ranked result."""
    id: str
    source: str
    title: str
    snippet: str
    score: float
    url: str
    metadata: Dict[str, Any] = {}


class SearchResponse(BaseModel):
    """Response model for /search."""
    query: str
    results: list[SearchResultModel]
    timestamp: int
    cached: bool


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    timestamp: int


class ErrorResponse(BaseModel):
    """Client error response."""
    error: str


class ServerErrorResponse(BaseModel):
    """Unexpected failure response."""
    error: str
    details: str


router = APIRouter()


def get_aggregator(request: Request) -> SearchAggregator:
    return request.app.state.aggregator


def _require_query(q: Optional[str]) -> str:
    if q is None or not q.strip():
        raise InvalidQueryError(q)
    return q


@router.get(
    "/search",
    response_model=SearchResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Missing or blank query"},
        500: {"model": ServerErrorResponse, "description": "Aggregation failed"},
    },
)
async def search(
    request: Request,
    q: Optional[str] = Query(default=None, description="Free-text search query"),
):
    """
    Search all providers and return one ranked list.

    Fresh responses are cached for a few minutes; ``cached`` tells whether
    this response came from the cache.
    """
    query = _require_query(q)
    response = await get_aggregator(request).aggregate(query)
    return response.to_dict()


@router.get(
    "/export",
    responses={
        200: {"description": "File download"},
        400: {"model": ErrorResponse, "description": "Missing query or unknown format"},
        500: {"model": ServerErrorResponse, "description": "Aggregation failed"},
    },
)
async def export(
    request: Request,
    q: Optional[str] = Query(default=None, description="Free-text search query"),
    format: str = Query(default="json", description="json, csv, xml or xlsx"),
):
    """Download the ranked results for a query in the requested format."""
    query = _require_query(q)
    fmt = format.lower()
    if fmt not in SUPPORTED_FORMATS:
        raise InvalidParameterError("format", format, f"one of {', '.join(SUPPORTED_FORMATS)}")

    response = await get_aggregator(request).aggregate(query)
    content = export_results(response.results, fmt)

    filename = f"search-results-{wall_clock_ms()}.{fmt}"
    return Response(
        content=content,
        media_type=MEDIA_TYPES[fmt],
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint."""
    return HealthResponse(status="ok", timestamp=wall_clock_ms())


def setup_exception_handlers(app: FastAPI) -> None:
    """Map aggregator errors onto the documented JSON error bodies."""

    @app.exception_handler(ValidationError)
    async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
        logger.info(f"Rejected request to {request.url.path}: {exc}")
        return JSONResponse(status_code=400, content={"error": str(exc)})

    @app.exception_handler(AggregationError)
    async def aggregation_error_handler(request: Request, exc: AggregationError) -> JSONResponse:
        logger.error(f"Search error: {exc.details}")
        return JSONResponse(status_code=500, content=exc.to_dict())

    @app.exception_handler(SearchAggregatorError)
    async def app_error_handler(request: Request, exc: SearchAggregatorError) -> JSONResponse:
        logger.error(f"Search error: {exc}")
        return JSONResponse(status_code=500, content={"error": GENERIC_ERROR, "details": str(exc)})

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(f"Unhandled error on {request.url.path}: {exc}")
        return JSONResponse(
            status_code=500,
            content={"error": GENERIC_ERROR, "details": str(exc) or type(exc).__name__},
        )


def create_app(
    aggregator: Optional[SearchAggregator] = None,
    settings: Optional[Settings] = None,
) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        aggregator: Pre-built aggregator (tests); built from settings if None.
        settings: Runtime settings; read from the environment if None.

    Returns:
        Configured FastAPI instance.
    """
    if aggregator is None:
        container = ApplicationContainer()
        container.config.from_dict((settings or Settings.from_env()).to_dict())
        aggregator = container.aggregator()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager."""
        logger.info(f"Search aggregator ready with {len(aggregator.sources)} providers")
        yield
        logger.info("Search aggregator shutting down")
        await aggregator.close()

    app = FastAPI(
        title="Search Aggregator API",
        description="Ranked search across Wikipedia, Hacker News, Open Library and GitHub.",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.aggregator = aggregator

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["*"],
    )

    setup_exception_handlers(app)
    app.include_router(router)
    app.include_router(router, prefix="/api")

    return app


def run_api_server(settings: Optional[Settings] = None) -> None:
    """
    Run the HTTP API server with uvicorn.

    Args:
        settings: Runtime settings; read from the environment if None.
    """
    import uvicorn

    settings = settings or Settings.from_env()
    app = create_app(settings=settings)

    logger.info(f"Starting HTTP API server on {settings.host}:{settings.port}")
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())
