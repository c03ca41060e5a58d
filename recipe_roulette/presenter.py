"""
Random presenter: owns the recipe pool and the currently shown recipe.

The presenter is UI-agnostic. The Streamlit page keeps one instance per browser session
(see streamlit_app/utils/state.py) and reads its properties to decide what to render.

State:
- query: last submitted search text
- pool: recipes from the last successful search
- index: position of the shown recipe in pool (0 <= index < len(pool) when pool is non-empty)
- state: FetchState (IDLE before the first search)
- error: user-facing message, set only in the ERROR state

Overlapping searches: every search gets a generation number from begin_search(). Only the
most recent generation may apply its result; an older search that finishes later is
discarded, so the latest submitted query always wins.
"""

import logging
import random
from typing import Callable, List, Optional

from recipe_roulette.config import DEFAULT_QUERY, ConfigError
from recipe_roulette.connectors.base import RecipeSearchError
from recipe_roulette.models import FetchState, NormalizedRecipe

logger = logging.getLogger(__name__)

NO_RESULTS_MESSAGE = "No recipes found for that query."

PoolBuilder = Callable[[str], List[NormalizedRecipe]]
# Returns a uniform integer in [0, n)
RandRange = Callable[[int], int]


class RandomPresenter:
    """
    Drives the pool builder and picks a random recipe from the result.

    Args:
        pool_builder: Callable that takes a query and returns normalized recipes
        default_query: Query used by mount() and as the initial input value
        randrange: Uniform random integer provider, injectable for tests
    """

    def __init__(
        self,
        pool_builder: PoolBuilder,
        default_query: str = DEFAULT_QUERY,
        randrange: Optional[RandRange] = None,
    ) -> None:
        self._pool_builder = pool_builder
        self._randrange = randrange or random.randrange
        self.default_query = default_query
        self.query = default_query
        self.pool: List[NormalizedRecipe] = []
        self.index = 0
        self.state = FetchState.IDLE
        self.error: Optional[str] = None
        self._generation = 0
        self._mounted = False

    @property
    def current(self) -> Optional[NormalizedRecipe]:
        """Recipe at the current index, or None when the pool is empty."""
        if not self.pool:
            return None
        return self.pool[self.index]

    @property
    def pool_size(self) -> int:
        return len(self.pool)

    @property
    def is_loading(self) -> bool:
        return self.state is FetchState.LOADING

    @property
    def can_shuffle(self) -> bool:
        return not self.is_loading and bool(self.pool)

    @property
    def mounted(self) -> bool:
        """Whether a search has been started in this session."""
        return self._mounted

    def mount(self) -> bool:
        """
        Run the initial search with the default query, once.

        Returns:
            True if this call triggered the search, False on later calls
        """
        if self._mounted:
            return False
        self.search(self.default_query)
        return True

    def search(self, query: str) -> None:
        """
        Fetch a fresh pool for query and pick a random recipe from it.

        Never raises: every failure ends in the ERROR state with a message, and the
        previous pool is kept so the user still sees something.
        """
        self.run_search(self.begin_search(query))

    def begin_search(self, query: str) -> int:
        """
        Enter the LOADING state for a new search.

        Callers that render between the two steps (the Streamlit page draws its
        disabled controls here) follow up with run_search(token).

        Returns:
            Generation token to pass to run_search(), complete_search() or fail_search()
        """
        self._mounted = True
        self._generation += 1
        self.query = query
        self.state = FetchState.LOADING
        self.error = None
        logger.debug("Search #%d started for query=%r", self._generation, query)
        return self._generation

    def run_search(self, token: int) -> None:
        """
        Call the pool builder for the query started by begin_search() and apply the outcome.

        Every failure is converted into a message; nothing propagates to the page.
        """
        query = self.query
        try:
            recipes = self._pool_builder(query)
        except (ConfigError, RecipeSearchError) as e:
            self.fail_search(token, str(e))
        except Exception as e:
            logger.error("Unexpected error while searching for %r: %s", query, e, exc_info=True)
            self.fail_search(token, str(e) or e.__class__.__name__)
        else:
            self.complete_search(token, recipes)

    def complete_search(self, token: int, recipes: List[NormalizedRecipe]) -> bool:
        """
        Apply a finished search.

        Pool and index are replaced together. An empty result clears the pool and
        reports NO_RESULTS_MESSAGE.

        Returns:
            False if the search was superseded and its result discarded
        """
        if self._is_stale(token):
            return False

        if not recipes:
            self.pool = []
            self.index = 0
            self._set_error(NO_RESULTS_MESSAGE)
            return True

        pool = list(recipes)
        self.pool = pool
        self.index = self._randrange(len(pool))
        self.state = FetchState.READY
        return True

    def fail_search(self, token: int, message: str) -> bool:
        """
        Record a failed search. The pool and index are left unchanged.

        Returns:
            False if the search was superseded and its failure discarded
        """
        if self._is_stale(token):
            return False
        self._set_error(message)
        return True

    def shuffle(self) -> None:
        """
        Show another random recipe from the current pool without fetching.

        No-op on an empty pool. With more than one recipe the same index is never
        picked twice in a row: a repeated draw advances to the next position.
        """
        if not self.pool:
            return
        size = len(self.pool)
        next_index = self._randrange(size)
        if size > 1 and next_index == self.index:
            next_index = (next_index + 1) % size
        self.index = next_index

    def _is_stale(self, token: int) -> bool:
        if token != self._generation:
            logger.debug("Discarding result of superseded search #%d (current #%d)", token, self._generation)
            return True
        return False

    def _set_error(self, message: str) -> None:
        self.state = FetchState.ERROR
        self.error = message
