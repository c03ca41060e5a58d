"""
Edamam connector for the Recipe Search API v2.

This connector interfaces with https://api.edamam.com/api/recipes/v2 using requests to
fetch public recipe search results and normalize them into NormalizedRecipe.

The connector:
- Builds the first request with type=public, q=<query>, app_id and app_key
  (plus optional health/diet filters from configuration)
- Follows the server-provided _links.next.href for subsequent pages
- Sends the Edamam-Account-User header only when an account user is configured
- Raises RecipeAPIError on non-2xx responses, malformed JSON and transport failures

Credentials come from EdamamConfig (see recipe_roulette.config). The connector never
retries; the caller decides what a failure means.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional
from urllib.parse import urlsplit

import requests

from recipe_roulette.config import EdamamConfig
from recipe_roulette.models import NormalizedRecipe

from .base import BaseRecipeConnector, RecipeAPIError, SearchPage

logger = logging.getLogger(__name__)

EDAMAM_SEARCH_URL = "https://api.edamam.com/api/recipes/v2"
ACCOUNT_USER_HEADER = "Edamam-Account-User"


def _text(value: Any, default: str) -> str:
    if value is None:
        return default
    return value if isinstance(value, str) else str(value)


def normalize_recipe(raw: Any) -> Optional[NormalizedRecipe]:
    """
    Normalize an Edamam recipe payload (the "recipe" object inside a hit).

    Args:
        raw: The recipe payload; may be None or any other non-mapping value

    Returns:
        NormalizedRecipe with defaults for every missing field, or None when there
        is no recipe payload at all. Never raises.

    Examples:
        >>> normalize_recipe({"label": "Greek Salad"}).url
        '#'
        >>> normalize_recipe(None) is None
        True
    """
    if not isinstance(raw, Mapping):
        return None

    image = raw.get("image")
    return NormalizedRecipe(
        title=_text(raw.get("label"), "Untitled"),
        image=_text(image, "") if image else "",
        url=_text(raw.get("url"), "#"),
        source=_text(raw.get("source"), ""),
    )


def _safe_url(url: str) -> str:
    """Strip the query string (it carries app_key) before logging."""
    parts = urlsplit(url)
    return f"{parts.scheme}://{parts.netloc}{parts.path}"


class EdamamConnector(BaseRecipeConnector):
    """
    Connector for the Edamam Recipe Search API v2.

    Uses a requests.Session so the account header and connection pool are shared
    across the pages of one search.
    """
    provider = "edamam"

    def __init__(
        self,
        config: EdamamConfig,
        session: Optional[requests.Session] = None,
        base_url: str = EDAMAM_SEARCH_URL,
    ) -> None:
        """
        Initialize the Edamam connector.

        Args:
            config: Edamam configuration; credentials must already be validated
            session: Optional requests session (a new one is created if not provided)
            base_url: Search endpoint (overridable for tests and sandboxes)
        """
        self.config = config
        self.base_url = base_url
        self.session = session or requests.Session()

    def build_headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.config.account_user:
            headers[ACCOUNT_USER_HEADER] = self.config.account_user
        return headers

    def build_params(self, query: str) -> List[tuple]:
        """
        Build query parameters for the first search request.

        A list of pairs is used because health and diet filters repeat the same key.
        """
        params: List[tuple] = [
            ("type", "public"),
            ("q", query or ""),
            ("app_id", self.config.app_id or ""),
            ("app_key", self.config.app_key or ""),
        ]
        params.extend(("health", value) for value in self.config.health)
        params.extend(("diet", value) for value in self.config.diet)
        return params

    def fetch_first_page(self, query: str) -> SearchPage:
        return self._get(self.base_url, params=self.build_params(query))

    def fetch_next_page(self, next_url: str) -> SearchPage:
        # The next link already carries the full query string, credentials included
        return self._get(next_url)

    def normalize_hit(self, hit: Any) -> Optional[NormalizedRecipe]:
        if not isinstance(hit, Mapping):
            return None
        return normalize_recipe(hit.get("recipe"))

    def _get(self, url: str, params: Optional[List[tuple]] = None) -> SearchPage:
        logger.debug("Edamam connector: GET %s", _safe_url(url))
        try:
            response = self.session.get(
                url,
                params=params,
                headers=self.build_headers(),
                timeout=self.config.timeout_seconds,
            )
        except requests.exceptions.Timeout as e:
            raise RecipeAPIError(
                f"Request to Edamam timed out after {self.config.timeout_seconds:.0f}s"
            ) from e
        except requests.exceptions.RequestException as e:
            raise RecipeAPIError(f"Could not reach Edamam: {e}") from e

        if not 200 <= response.status_code < 300:
            logger.warning(
                "Edamam connector: %s returned HTTP %d", _safe_url(url), response.status_code
            )
            raise RecipeAPIError(f"HTTP {response.status_code}", status_code=response.status_code)

        try:
            data = response.json()
        except ValueError as e:
            raise RecipeAPIError(f"Invalid JSON from Edamam: {e}") from e

        return self._parse_page(data)

    @staticmethod
    def _parse_page(data: Any) -> SearchPage:
        """Pull hits and the next-page link out of a decoded response body."""
        if not isinstance(data, Mapping):
            return SearchPage(hits=[], next_url=None)

        hits = data.get("hits")
        if not isinstance(hits, list):
            hits = []

        next_url = None
        links = data.get("_links")
        if isinstance(links, Mapping):
            next_link = links.get("next")
            if isinstance(next_link, Mapping):
                next_url = next_link.get("href") or None

        return SearchPage(hits=hits, next_url=next_url)
