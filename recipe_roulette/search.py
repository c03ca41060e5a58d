"""
Pool builder: gathers recipes across several result pages for one query.

This module provides the core fetch-and-pool functionality that:
- Validates that Edamam credentials are configured before touching the network
- Fetches the first page, then follows server-provided next-page links
- Stops at MAX_PAGES requests, once MAX_RESULTS raw hits are gathered, or when pages run out
- Normalizes every hit and drops hits without a recipe payload

The pool is built fresh on every search and is not deduplicated: the same recipe on two
pages appears twice. An empty list is a valid result (no recipes for that query); the
presenter decides how to surface it.

Search flow: Streamlit -> RandomPresenter.search() -> build_pool() -> EdamamConnector -> NormalizedRecipe
"""

import logging
from typing import Any, List, Optional

from recipe_roulette.config import EdamamConfig
from recipe_roulette.models import NormalizedRecipe

from .connectors.base import BaseRecipeConnector
from .connectors.edamam_connector import EdamamConnector

logger = logging.getLogger(__name__)

# Keep request count reasonable to bound latency and API quota usage
MAX_PAGES = 5
# Target pool size, checked between pages only
MAX_RESULTS = 80


def collect_hits(
    connector: BaseRecipeConnector,
    query: str,
    max_pages: int = MAX_PAGES,
    max_results: int = MAX_RESULTS,
) -> List[Any]:
    """
    Collect raw hits by following next-page links.

    A page is fetched only while there is a next link, fewer than max_pages pages have
    been fetched, and fewer than max_results hits have been gathered. The last page is
    kept whole, so the result can exceed max_results.

    Args:
        connector: Connector used to fetch pages
        query: Search query string
        max_pages: Maximum number of requests
        max_results: Target number of raw hits

    Returns:
        Raw hits in page arrival order, then within-page order

    Raises:
        RecipeAPIError: On the first failing page; hits from earlier pages are discarded
    """
    hits: List[Any] = []
    pages = 0
    next_url: Optional[str] = None

    while pages < max_pages and len(hits) < max_results:
        if pages == 0:
            page = connector.fetch_first_page(query)
        else:
            page = connector.fetch_next_page(next_url)
        pages += 1
        hits.extend(page.hits)
        logger.debug(
            "%s: page %d returned %d hits (%d total)", connector.provider, pages, len(page.hits), len(hits)
        )
        next_url = page.next_url
        if not next_url:
            break

    return hits


def build_pool(
    query: str,
    config: EdamamConfig,
    connector: Optional[BaseRecipeConnector] = None,
    max_pages: int = MAX_PAGES,
    max_results: int = MAX_RESULTS,
) -> List[NormalizedRecipe]:
    """
    Build a pool of normalized recipes for a query.

    Args:
        query: Search query string (e.g., "salad"); empty is passed through to the API
        config: Edamam configuration
        connector: Optional connector (defaults to an EdamamConnector for config)
        max_pages: Maximum number of page requests (default: 5)
        max_results: Target pool size before normalization (default: 80)

    Returns:
        List of NormalizedRecipe, possibly empty

    Raises:
        ConfigError: If EDAMAM_APP_ID or EDAMAM_APP_KEY is missing (no request is made)
        RecipeAPIError: If any page request fails
    """
    config.validate_credentials()

    if connector is None:
        connector = EdamamConnector(config)

    logger.info("Building recipe pool for query=%r via %s", query, connector.provider)
    hits = collect_hits(connector, query, max_pages=max_pages, max_results=max_results)

    recipes: List[NormalizedRecipe] = []
    dropped = 0
    for hit in hits:
        recipe = connector.normalize_hit(hit)
        if recipe is None:
            dropped += 1
            continue
        recipes.append(recipe)

    if dropped:
        logger.debug("Dropped %d hits without a recipe payload", dropped)
    logger.info("Recipe pool for query=%r has %d recipes", query, len(recipes))
    return recipes
