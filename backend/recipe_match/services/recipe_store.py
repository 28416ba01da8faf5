"""
Hosted recipe store client.

Fetches a bounded page of candidate recipes from the hosted database's REST
interface (PostgREST-style: ``GET {base}/rest/v1/{table}?select=*&limit=N``).
The page size is capped by RECIPE_POOL_LIMIT because scoring cost grows with
every candidate.

Failures after retries are raised as RecipeStoreError; callers turn that
into a "search unavailable" result.
"""

import time
import requests
import logging
from typing import Dict, List, Optional

from pydantic import ValidationError

from recipe_match.config import settings
from recipe_match.models.recipe import RecipeRecord

# Configure logging
logger = logging.getLogger(__name__)


class RecipeStoreError(Exception):
    """Raised when the recipe store cannot return a usable page."""


class RecipeStoreService:
    """
    Service class for reading candidate recipes from the hosted store.

    Attributes:
        base_url: Base URL of the store
        table: Table holding recipes
        timeout: Request timeout in seconds
        pool_limit: Upper bound on recipes per fetch
        max_retries: Maximum number of retry attempts for failed requests
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_key: Optional[str] = None,
        table: Optional[str] = None,
        timeout: Optional[int] = None,
        pool_limit: Optional[int] = None,
    ):
        """Initialize recipe store service with configuration."""
        self.base_url = (base_url if base_url is not None else settings.RECIPE_STORE_URL).rstrip("/")
        self.api_key = api_key if api_key is not None else settings.RECIPE_STORE_API_KEY
        self.table = table or settings.RECIPE_TABLE
        self.timeout = timeout or settings.API_TIMEOUT
        self.pool_limit = pool_limit or settings.RECIPE_POOL_LIMIT
        self.max_retries = 3
        self.retry_delay = 1  # seconds

        logger.info(
            f"Recipe store service initialized with base URL: {self.base_url or '(not configured)'} "
            f"(table: {self.table}, pool_limit: {self.pool_limit})"
        )
        if not self.api_key:
            logger.warning("Recipe store API key is NOT configured! Set RECIPE_STORE_API_KEY in .env file")

    @property
    def is_configured(self) -> bool:
        return bool(self.base_url)

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.api_key:
            headers["apikey"] = self.api_key
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    def _make_request(self, params: Dict, retry_count: int = 0):
        """
        Make HTTP GET request to the recipe table with retry logic.

        Timeouts, connection errors and 5xx responses are retried with
        exponential backoff; 4xx responses are not.

        Args:
            params: Query parameters as dictionary
            retry_count: Current retry attempt number (for internal use)

        Returns:
            Parsed JSON response

        Raises:
            RecipeStoreError: If the request ultimately fails
        """
        url = f"{self.base_url}/rest/v1/{self.table}"

        try:
            logger.info(f"Making recipe store request to {url} with params: {params}")
            response = requests.get(
                url,
                params=params,
                timeout=self.timeout,
                headers=self._headers(),
            )
            logger.info(f"Recipe store response status: {response.status_code}")
            response.raise_for_status()
            return response.json()

        except requests.exceptions.JSONDecodeError as e:
            raise RecipeStoreError(f"Recipe store returned invalid JSON: {e}") from e

        except requests.exceptions.Timeout:
            logger.warning(f"Request timeout for {url}")
            return self._handle_retry(params, retry_count, "timeout")

        except requests.exceptions.ConnectionError:
            logger.warning(f"Connection error for {url}")
            return self._handle_retry(params, retry_count, "connection_error")

        except requests.exceptions.HTTPError as e:
            status_code = e.response.status_code if e.response is not None else None
            logger.error(f"HTTP error for {url}: Status {status_code if status_code else 'unknown'}")
            if status_code and 400 <= status_code < 500:
                raise RecipeStoreError(
                    f"Recipe store rejected the request with status {status_code}"
                ) from e
            return self._handle_retry(params, retry_count, "http_error")

        except requests.exceptions.RequestException as e:
            logger.error(f"Request failed for {url}: {str(e)}")
            return self._handle_retry(params, retry_count, "request_exception")

    def _handle_retry(self, params: Dict, retry_count: int, reason: str):
        """Retry with exponential backoff, or give up with RecipeStoreError."""
        if retry_count >= self.max_retries:
            logger.error(f"Recipe store request failed after {retry_count} retries ({reason})")
            raise RecipeStoreError(f"Recipe store unavailable ({reason})")

        wait = self.retry_delay * (2 ** retry_count)
        logger.info(f"Retrying recipe store request in {wait}s (attempt {retry_count + 1}, reason: {reason})")
        time.sleep(wait)
        return self._make_request(params, retry_count + 1)

    def fetch_recipe_pool(self, limit: Optional[int] = None) -> List[RecipeRecord]:
        """
        Fetch one page of candidate recipes.

        Rows that fail validation are skipped with a warning so one bad
        record does not sink the search.

        Args:
            limit: Requested page size, capped at pool_limit

        Returns:
            List[RecipeRecord]: Candidate recipes

        Raises:
            RecipeStoreError: If the store is not configured, unreachable,
                              or returns something other than a list
        """
        if not self.is_configured:
            raise RecipeStoreError("Recipe store URL is not configured")

        page_size = min(limit or self.pool_limit, self.pool_limit)
        data = self._make_request({"select": "*", "limit": page_size})

        if not isinstance(data, list):
            raise RecipeStoreError(
                f"Unexpected recipe store payload: {type(data).__name__}"
            )

        recipes: List[RecipeRecord] = []
        for row in data[:page_size]:
            try:
                recipes.append(RecipeRecord.model_validate(row))
            except ValidationError as e:
                row_id = row.get("id") if isinstance(row, dict) else None
                logger.warning(f"Skipping malformed recipe row {row_id}: {e.error_count()} errors")

        logger.info(f"Fetched {len(recipes)} candidate recipes (page size {page_size})")
        return recipes

    def check_availability(self) -> bool:
        """Return True when the store answers a one-row query."""
        if not self.is_configured:
            return False
        try:
            response = requests.get(
                f"{self.base_url}/rest/v1/{self.table}",
                params={"select": "id", "limit": 1},
                timeout=self.timeout,
                headers=self._headers(),
            )
            return response.status_code == 200
        except requests.exceptions.RequestException as e:
            logger.warning(f"Recipe store availability check failed: {e}")
            return False
