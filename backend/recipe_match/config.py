"""
Application configuration.

This module defines the application settings using a Pydantic model
populated from environment variables, with type validation.
"""

from pathlib import Path

from pydantic import BaseModel, Field, field_validator
from typing import Optional
import os
from dotenv import load_dotenv

# Load .env from backend directory (works regardless of cwd when running uvicorn)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(dotenv_path=_env_path)


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Settings(BaseModel):
    """
    Application configuration settings.

    Can be configured via environment variables or .env file.
    Environment variable names match the attribute names.

    Attributes:
        RECIPE_STORE_URL: Base URL of the hosted recipe store (PostgREST)
        RECIPE_STORE_API_KEY: API key for the recipe store
        RECIPE_TABLE: Table holding candidate recipes
        RECIPE_POOL_LIMIT: Maximum candidate recipes fetched per search
        API_TIMEOUT: Request timeout in seconds
        MIN_SCORE_THRESHOLD: Minimum match score for a recipe to be shown
        REQUIRE_KEY_INGREDIENT: At least one key ingredient must be covered
        REQUIRE_QUERY_MATCH: A key/important ingredient must come from the search list
        ALL_KEYS_BONUS: Bonus points when every key ingredient is covered
        PANTRY_MATCH_WEIGHT: Share of points earned through pantry staples
        SUBSTITUTION_PREFIX_FALLBACK: Look up substitutes by name prefix
        DEFAULT_MIN_RESULTS: Results requested when the client gives none
        DEFAULT_MAX_TIME: Time budget in minutes when the client gives none
        GEMINI_API_KEY: API key for recipe generation (optional)
        LLM_MODEL: Gemini model used for generation
        LLM_MAX_TOKENS: Maximum tokens per generation response
        LOG_LEVEL: Logging level (DEBUG/INFO/WARNING/ERROR)
    """

    # Recipe store
    RECIPE_STORE_URL: str = Field(
        default_factory=lambda: os.getenv("RECIPE_STORE_URL", ""),
        description="Base URL of the hosted recipe store"
    )

    RECIPE_STORE_API_KEY: Optional[str] = Field(
        default_factory=lambda: os.getenv("RECIPE_STORE_API_KEY"),
        description="API key for the hosted recipe store"
    )

    RECIPE_TABLE: str = Field(
        default_factory=lambda: os.getenv("RECIPE_TABLE", "recipes"),
        description="Table holding candidate recipes"
    )

    RECIPE_POOL_LIMIT: int = Field(
        default_factory=lambda: int(os.getenv("RECIPE_POOL_LIMIT", "200")),
        ge=1,
        le=1000,
        description="Maximum number of candidate recipes fetched per search"
    )

    API_TIMEOUT: int = Field(
        default_factory=lambda: int(os.getenv("API_TIMEOUT", "10")),
        ge=1,
        le=60,
        description="API request timeout in seconds"
    )

    # Scoring
    MIN_SCORE_THRESHOLD: float = Field(
        default_factory=lambda: float(os.getenv("MIN_SCORE_THRESHOLD", "40")),
        ge=0.0,
        le=100.0,
        description="Minimum match score for a recipe to be shown"
    )

    REQUIRE_KEY_INGREDIENT: bool = Field(
        default_factory=lambda: _env_bool("REQUIRE_KEY_INGREDIENT", True),
        description="Require at least one key ingredient to be covered"
    )

    REQUIRE_QUERY_MATCH: bool = Field(
        default_factory=lambda: _env_bool("REQUIRE_QUERY_MATCH", False),
        description="Require a key/important ingredient from the search list, not only the pantry"
    )

    ALL_KEYS_BONUS: float = Field(
        default_factory=lambda: float(os.getenv("ALL_KEYS_BONUS", "10")),
        ge=0.0,
        le=100.0,
        description="Bonus points when every key ingredient is covered"
    )

    PANTRY_MATCH_WEIGHT: float = Field(
        default_factory=lambda: float(os.getenv("PANTRY_MATCH_WEIGHT", "1.0")),
        ge=0.0,
        le=1.0,
        description="Share of points earned through pantry staples"
    )

    SUBSTITUTION_PREFIX_FALLBACK: bool = Field(
        default_factory=lambda: _env_bool("SUBSTITUTION_PREFIX_FALLBACK", False),
        description="Look up substitutes by leading name prefix when the full name is unknown"
    )

    # Search defaults
    DEFAULT_MIN_RESULTS: int = Field(
        default_factory=lambda: int(os.getenv("DEFAULT_MIN_RESULTS", "5")),
        ge=1,
        le=50,
        description="Number of results when the request does not say"
    )

    DEFAULT_MAX_TIME: int = Field(
        default_factory=lambda: int(os.getenv("DEFAULT_MAX_TIME", "60")),
        ge=1,
        le=1440,
        description="Time budget in minutes when the request does not say"
    )

    # Gemini LLM Configuration
    GEMINI_API_KEY: Optional[str] = Field(
        default_factory=lambda: os.getenv("GEMINI_API_KEY"),
        description="Google Gemini API key for recipe generation"
    )

    LLM_MODEL: str = Field(
        default_factory=lambda: os.getenv("LLM_MODEL", "gemini-2.0-flash"),
        description="Gemini model to use for recipe generation"
    )

    LLM_MAX_TOKENS: int = Field(
        default=4096,
        ge=256,
        le=16384,
        description="Maximum tokens per LLM response"
    )

    # Logging Configuration
    LOG_LEVEL: str = Field(
        default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"),
        description="Logging level (DEBUG/INFO/WARNING/ERROR)"
    )

    @field_validator('LOG_LEVEL')
    @classmethod
    def validate_log_level(cls, v):
        """Ensure log level is valid."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(
                f"LOG_LEVEL must be one of: {', '.join(valid_levels)}"
            )
        return v_upper

    @field_validator('RECIPE_STORE_URL')
    @classmethod
    def validate_url(cls, v):
        """Ensure URLs are properly formatted (empty means not configured)."""
        if not v:
            return ""
        if not v.startswith(('http://', 'https://')):
            raise ValueError("URL must start with http:// or https://")
        return v.rstrip('/')  # Remove trailing slash

    model_config = {"validate_default": True}


# Create global settings instance
settings = Settings()


# Configure logging based on settings
def configure_logging():
    """Configure application logging based on settings."""
    import logging

    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    logger = logging.getLogger(__name__)
    logger.info(f"Logging configured at {settings.LOG_LEVEL} level")
    logger.info(f"Recipe store URL: {settings.RECIPE_STORE_URL or '(not configured)'}")
    logger.info(f"Recipe pool limit: {settings.RECIPE_POOL_LIMIT}")
    logger.info(f"Recipe generation: {'Enabled' if settings.GEMINI_API_KEY else 'Disabled (no GEMINI_API_KEY)'}")


# Initialize logging on import
configure_logging()
