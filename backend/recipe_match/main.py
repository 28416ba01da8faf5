"""
FastAPI application entry point and endpoint definitions.

This module initializes the FastAPI application and defines the API routes
of the ingredient-matching recipe search system.

Responsibilities:
- Initialize FastAPI application with CORS and error handling
- Wire the matching engine from one immutable scoring configuration
- Define search, score, generate and adapt endpoints
- Map service failures to HTTP error responses
"""

from fastapi import FastAPI, HTTPException, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
import logging

from recipe_match.config import settings
from recipe_match.models.ingredient import ScoreResult
from recipe_match.models.recipe import (
    AdaptedRecipe,
    AdaptRecipeRequest,
    GenerateRecipesResponse,
    RecipeGenerationRequest,
    RecipeSearchRequest,
    RecipeSearchResponse,
    ScoreRecipeRequest,
)
from recipe_match.services.recipe_generator import RecipeGenerationError, RecipeGenerator
from recipe_match.services.recipe_search import RecipeSearchService
from recipe_match.services.recipe_store import RecipeStoreService
from recipe_match.services.scoring_config import ScoringConfig

logger = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """
    Initialize and configure the FastAPI application.

    Sets up:
    - CORS middleware for frontend communication
    - Exception handler for consistent error responses
    - Application metadata

    Returns:
        FastAPI: Configured FastAPI application instance
    """
    app = FastAPI(
        title="Recipe Match API",
        description="Find recipes you can cook with the ingredients you have",
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc"
    )

    # Configure CORS to allow frontend communication
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost:3000", "http://localhost:5173", "http://localhost:8080", "http://127.0.0.1:5173"],  # React / Vite dev servers
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Global exception handler for consistent error responses
    @app.exception_handler(Exception)
    async def global_exception_handler(request, exc):
        """
        Handle all uncaught exceptions with consistent error format.

        Args:
            request: The incoming request object
            exc: The exception that was raised

        Returns:
            JSONResponse: Formatted error response
        """
        logger.error(f"Unhandled exception: {str(exc)}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "detail": "Internal server error occurred",
                "error": str(exc)
            }
        )

    return app


# Initialize FastAPI application
app = create_app()

# Initialize service layer instances
scoring_config = ScoringConfig.from_settings(settings)
recipe_store = RecipeStoreService()
search_service = RecipeSearchService.from_config(scoring_config, recipe_store)

# Initialize recipe generator (if configured)
recipe_generator = None
if settings.GEMINI_API_KEY:
    try:
        recipe_generator = RecipeGenerator(
            api_key=settings.GEMINI_API_KEY,
            model=settings.LLM_MODEL,
            max_tokens=settings.LLM_MAX_TOKENS,
            parser=search_service.parser,
        )
        logger.info("Recipe generator initialized (Gemini)")
    except Exception as e:
        logger.warning(f"Failed to initialize recipe generator: {e}")
        recipe_generator = None
else:
    logger.info("Recipe generator disabled (no GEMINI_API_KEY)")


def _require_generator() -> RecipeGenerator:
    if recipe_generator is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Recipe generation is not configured. Set GEMINI_API_KEY in your .env file."
        )
    return recipe_generator


@app.get("/")
async def root():
    """
    Root endpoint for health check.

    Returns:
        dict: API status and version information
    """
    return {
        "message": "Recipe Match API",
        "version": "1.0.0",
        "status": "running"
    }


@app.get("/health")
def health_check():
    """
    Health check endpoint for monitoring and deployment.

    Returns:
        dict: Service health status including store connectivity and configuration
    """
    store_configured = recipe_store.is_configured
    store_available = recipe_store.check_availability()

    warnings = []
    if not store_configured:
        warnings.append("Recipe store URL not configured - search will be unavailable")
    elif not store_available:
        warnings.append("Recipe store not responding - check connectivity")
    if recipe_generator is None:
        warnings.append("Recipe generation disabled - GEMINI_API_KEY not set")

    return {
        "status": "healthy",
        "service": "recipe-match-api",
        "configuration": {
            "recipe_store_url": settings.RECIPE_STORE_URL or None,
            "recipe_store_api_key_configured": bool(settings.RECIPE_STORE_API_KEY),
            "recipe_pool_limit": settings.RECIPE_POOL_LIMIT,
            "min_score_threshold": scoring_config.min_score_threshold,
            "require_key_ingredient": scoring_config.require_key_ingredient,
            "generation_enabled": recipe_generator is not None,
        },
        "connectivity": {
            "recipe_store_available": store_available,
        },
        "warnings": warnings if warnings else None
    }


@app.post("/recipes/search", response_model=RecipeSearchResponse)
def search_recipes(request: RecipeSearchRequest) -> RecipeSearchResponse:
    """
    Find recipes the user can cook with their ingredients.

    1. Fetches a bounded pool of candidate recipes from the store
    2. Drops recipes over the time budget or outside the skill level
    3. Scores each recipe by weighted ingredient coverage
    4. Filters by minimum score and key-ingredient coverage
    5. Ranks best first, preferring fewer missing ingredients on near ties

    A store outage is not an error: the response comes back empty with
    ``unavailable`` set.
    """
    logger.info(f"Search request with ingredients: {request.ingredients}")
    return search_service.search(request)


@app.post("/recipes/score", response_model=ScoreResult)
def score_recipe(request: ScoreRecipeRequest) -> ScoreResult:
    """
    Score one caller-supplied recipe against the given ingredients.

    No store access; useful for previewing how a recipe would rank.
    """
    result = search_service.score_recipe(
        request.recipe,
        request.ingredients,
        request.pantry_ingredients,
    )
    logger.info(f"Scored '{request.recipe.title}': {result.score}")
    return result


@app.post("/recipes/generate", response_model=GenerateRecipesResponse)
def generate_recipes(request: RecipeGenerationRequest) -> GenerateRecipesResponse:
    """
    Generate new recipes around the user's ingredients with Gemini.

    Raises:
        HTTPException: 503 if generation is not configured, 502 if the
                       model returns unusable output
    """
    generator = _require_generator()
    try:
        recipes = generator.generate_recipes(request)
    except RecipeGenerationError as e:
        logger.error(f"Recipe generation failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Failed to generate recipes: {str(e)}"
        )
    return GenerateRecipesResponse(recipes=recipes)


@app.post("/recipes/adapt", response_model=AdaptedRecipe)
def adapt_recipe(request: AdaptRecipeRequest) -> AdaptedRecipe:
    """
    Rework a recipe around the ingredients the user has.

    Raises:
        HTTPException: 503 if generation is not configured, 502 if the
                       model returns unusable output
    """
    generator = _require_generator()
    try:
        return generator.adapt_recipe(request)
    except RecipeGenerationError as e:
        logger.error(f"Recipe adaptation failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Failed to adapt recipe: {str(e)}"
        )


if __name__ == "__main__":
    import uvicorn

    # Run the application
    # For development only - use uvicorn command in production
    uvicorn.run(
        "recipe_match.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info"
    )
