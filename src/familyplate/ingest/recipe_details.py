"""Client for the recipe details service."""

from typing import Any

import httpx
from tenacity import (
    RetryError,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from familyplate.config import get_settings
from familyplate.logging_config import get_logger

logger = get_logger(__name__)


class RecipeDetailsError(Exception):
    """Raised when a recipe's details cannot be fetched."""

    def __init__(self, message: str, status_code: int | None = None, recipe_id: str | None = None):
        super().__init__(message)
        self.status_code = status_code
        self.recipe_id = recipe_id


class RecipeDetailsClient:
    """Fetches ingredient lists for recipes that were planned without them."""

    BACKOFF_BASE = 0.5
    BACKOFF_MAX = 8

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        settings = get_settings()
        self.base_url = (base_url or settings.recipe_api_base_url).rstrip("/")
        self.timeout = timeout or settings.recipe_api_timeout
        self.max_retries = max_retries or settings.recipe_api_max_retries
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=httpx.Timeout(self.timeout),
                headers={
                    "Accept": "application/json",
                    "User-Agent": "FamilyPlate/1.0",
                },
                transport=self._transport,
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "RecipeDetailsClient":
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def _request(self, path: str) -> httpx.Response:
        """Make a GET request, retrying timeouts and network errors."""
        client = await self._get_client()

        @retry(
            retry=retry_if_exception_type((httpx.TimeoutException, httpx.NetworkError)),
            stop=stop_after_attempt(self.max_retries),
            wait=wait_exponential(multiplier=self.BACKOFF_BASE, max=self.BACKOFF_MAX),
            reraise=True,
        )
        async def _do_request() -> httpx.Response:
            return await client.get(path)

        try:
            return await _do_request()
        except httpx.InvalidURL as e:
            logger.error(f"Invalid recipe URL: {path!r}")
            raise RecipeDetailsError(f"Invalid recipe URL: {e}") from e
        except (RetryError, httpx.HTTPError) as e:
            logger.error(f"Request failed after {self.max_retries} attempts: {path}")
            raise RecipeDetailsError(f"Request failed after {self.max_retries} attempts: {e}") from e

    async def get_ingredients(self, recipe_id: str) -> list[str]:
        """
        Fetch the ingredient lines of a recipe.

        Args:
            recipe_id: The recipe identifier.

        Returns:
            Ingredient lines, possibly empty.

        Raises:
            RecipeDetailsError: If the service cannot be reached or answers with an error.
        """
        try:
            response = await self._request(f"/recipes/{recipe_id}")
        except RecipeDetailsError as e:
            e.recipe_id = recipe_id
            raise

        if response.status_code >= 400:
            detail = response.text[:200] if response.text else "No details"
            logger.warning(f"Recipe details {recipe_id} returned {response.status_code}: {detail}")
            raise RecipeDetailsError(
                f"Recipe details request failed with status {response.status_code}",
                status_code=response.status_code,
                recipe_id=recipe_id,
            )

        try:
            data = response.json()
        except ValueError as e:
            raise RecipeDetailsError(
                "Recipe details response is not JSON", recipe_id=recipe_id
            ) from e

        ingredients = data.get("ingredients") if isinstance(data, dict) else None
        if not isinstance(ingredients, list):
            return []
        return [str(line) for line in ingredients if line and str(line).strip()]
