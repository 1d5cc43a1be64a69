"""FastAPI application entry point."""

import uuid
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from recipeindex.config import get_settings
from recipeindex.database import Base, create_engine, create_session_factory
from recipeindex.ingest.connectors import (
    LLMClient,
    LLMIngredientExtractor,
    LLMNutritionLookup,
    LLMUnitConverter,
)
from recipeindex.logging_config import LoggingContext, configure_logging, get_logger
from recipeindex.pipeline.service import RecipeIndexingPipeline, RecipeIngestionService
from recipeindex.routers import ingestion_router, recipes_router
from recipeindex.schemas import ErrorResponse
from recipeindex.storage import (
    RecipeIngredientIndex,
    RedisReverseIndex,
    SqlIngredientIndex,
    SqlNutritionSummaryStore,
    SqlRecipeStore,
    StoreError,
    create_redis_client,
)

settings = get_settings()

# Configure logging on module load
configure_logging(log_level=settings.log_level, json_format=not settings.is_development)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Build the collaborators on startup and release them on shutdown."""
    logger.info("Starting RecipeIndex API")

    engine = create_engine(settings)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables initialized")

    session_factory = create_session_factory(engine)
    redis_client = create_redis_client(settings)
    llm_client = LLMClient(settings)

    reverse_index = RedisReverseIndex(redis_client, prefix=settings.reverse_index_prefix)
    recipe_store = SqlRecipeStore(session_factory)
    summary_store = SqlNutritionSummaryStore(session_factory)
    pipeline = RecipeIndexingPipeline(
        extractor=LLMIngredientExtractor(llm_client),
        nutrition=LLMNutritionLookup(llm_client),
        converter=LLMUnitConverter(llm_client),
        index_store=RecipeIngredientIndex(SqlIngredientIndex(session_factory), reverse_index),
        summary_store=summary_store,
    )

    app.state.session_factory = session_factory
    app.state.reverse_index = reverse_index
    app.state.recipe_store = recipe_store
    app.state.summary_store = summary_store
    app.state.ingestion_service = RecipeIngestionService(recipe_store, pipeline)

    yield

    logger.info("Shutting down RecipeIndex API")
    await llm_client.close()
    await redis_client.aclose()
    await engine.dispose()


app = FastAPI(
    title="RecipeIndex API",
    description="Recipe ingestion with per-serving nutrition and an ingredient index",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def request_context(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    """Bind a request id into the logging context and echo it back."""
    request_id = request.headers.get("X-Request-ID") or uuid.uuid4().hex
    with LoggingContext(request_id=request_id):
        response = await call_next(request)
    response.headers["X-Request-ID"] = request_id
    return response


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report request validation errors as a failure payload."""
    messages = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        messages.append(f"{location}: {error.get('msg')}" if location else str(error.get("msg")))
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=ErrorResponse(error="; ".join(messages)).model_dump(),
    )


@app.exception_handler(StoreError)
async def store_error_handler(request: Request, exc: StoreError) -> JSONResponse:
    """Report storage failures as a failure payload."""
    logger.error(f"Store error on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ErrorResponse(error=str(exc)).model_dump(),
    )


app.include_router(ingestion_router)
app.include_router(recipes_router)


@app.get("/health")
async def health_check() -> dict:
    """Basic health check endpoint."""
    return {"status": "ok", "service": "recipeindex-api"}


@app.get("/")
async def root() -> dict:
    """Root endpoint with API information."""
    return {
        "name": "RecipeIndex API",
        "version": "0.1.0",
        "docs": "/docs",
        "health": "/health",
    }
