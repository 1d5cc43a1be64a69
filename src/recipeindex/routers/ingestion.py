"""API route for recipe ingestion."""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from recipeindex.logging_config import get_logger
from recipeindex.pipeline.models import InvalidRecipeError
from recipeindex.pipeline.service import RecipeIngestionService
from recipeindex.routers.dependencies import get_ingestion_service
from recipeindex.schemas import ErrorResponse, IngestionResponse, RecipeSubmission

logger = get_logger(__name__)

router = APIRouter(tags=["ingestion"])


@router.post(
    "/ingest",
    response_model=IngestionResponse,
    responses={
        422: {"model": ErrorResponse, "description": "Invalid recipe"},
        500: {"model": ErrorResponse, "description": "Ingestion failed"},
    },
)
async def ingest_recipe(
    submission: RecipeSubmission,
    service: RecipeIngestionService = Depends(get_ingestion_service),
) -> IngestionResponse | JSONResponse:
    """
    Ingest a recipe.

    Stores the recipe, indexes each ingredient with its nutrition and stores
    a per-serving nutrition summary. Partial ingredient indexing is possible
    when a store write fails part-way through.
    """
    logger.info(f"Received recipe '{submission.name}' with {len(submission.ingredients)} ingredients")

    try:
        recipe_id = await service.ingest(submission)
    except InvalidRecipeError as e:
        logger.warning(f"Rejected recipe '{submission.name}': {e}")
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content=ErrorResponse(error=str(e)).model_dump(),
        )
    except Exception as e:
        logger.exception(f"Error processing recipe '{submission.name}': {e}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=ErrorResponse(error=str(e)).model_dump(),
        )

    return IngestionResponse(recipe_id=recipe_id)
