"""
Base connector abstract class for recipe search providers.

A connector knows how to talk to one provider: how to build the first search request,
how to fetch a single results page, and how to turn one raw hit into a NormalizedRecipe.
The bounded multi-page loop lives in recipe_roulette.search so every provider gets the
same page and pool-size caps.
"""

from abc import ABC, abstractmethod
from typing import Any, List, Optional

from recipe_roulette.models import NormalizedRecipe


class RecipeSearchError(RuntimeError):
    """Base class for failures while fetching recipes from a provider."""
    pass


class RecipeAPIError(RecipeSearchError):
    """
    Raised when a provider request fails.

    This covers:
    - Non-success HTTP status (status_code is set)
    - Response bodies that are not valid JSON
    - Transport failures (connection refused, timeouts)
    """

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class SearchPage:
    """One page of raw results plus the provider's link to the next page (None on the last page)."""

    __slots__ = ("hits", "next_url")

    def __init__(self, hits: List[Any], next_url: Optional[str] = None) -> None:
        self.hits = hits
        self.next_url = next_url

    def __repr__(self) -> str:
        return f"SearchPage(hits={len(self.hits)}, next_url={self.next_url!r})"


class BaseRecipeConnector(ABC):
    """
    Abstract base class for all recipe search connectors.

    Attributes:
        provider: String identifier for the provider (e.g., "edamam")
    """
    provider: str

    @abstractmethod
    def fetch_first_page(self, query: str) -> SearchPage:
        """
        Fetch the first results page for a query.

        Args:
            query: Free-text search query; may be empty

        Returns:
            SearchPage with the raw hits and the next-page link

        Raises:
            RecipeAPIError: If the request fails or the body cannot be parsed
        """
        pass

    @abstractmethod
    def fetch_next_page(self, next_url: str) -> SearchPage:
        """
        Follow a next-page link returned by a previous page.

        Raises:
            RecipeAPIError: If the request fails or the body cannot be parsed
        """
        pass

    @abstractmethod
    def normalize_hit(self, hit: Any) -> Optional[NormalizedRecipe]:
        """
        Map one raw hit into a NormalizedRecipe.

        Returns:
            NormalizedRecipe, or None when the hit carries no recipe payload.
            Must never raise.
        """
        pass
