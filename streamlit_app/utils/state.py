"""
Presenter State Management Module.

This module wraps Streamlit's session_state to keep one RandomPresenter per browser
session. The Edamam configuration is read once per process and shared by every session.

Button clicks go through on_click callbacks, which Streamlit runs before the next script
run. "Search" only queues the query (PENDING_SEARCH_KEY); the page then starts the search,
draws the controls disabled, and runs the fetch. "New Random" shuffles right away.

# NOTE: session_state lives only as long as the browser session. Refreshing the page
    starts a new session, which triggers a fresh initial search.
"""

from functools import partial
from typing import Optional

import streamlit as st

from recipe_roulette.config import EdamamConfig
from recipe_roulette.presenter import RandomPresenter
from recipe_roulette.search import build_pool

# Session state keys
PRESENTER_KEY = "recipe_presenter"
QUERY_INPUT_KEY = "recipe_query_input"
PENDING_SEARCH_KEY = "recipe_pending_search"


@st.cache_resource
def get_config() -> EdamamConfig:
    """
    Read the Edamam configuration from the environment, once per process.

    Returns:
        Immutable EdamamConfig shared by all sessions
    """
    return EdamamConfig.from_env()


def get_presenter() -> RandomPresenter:
    """
    Get the session's RandomPresenter, creating it on first use.

    Returns:
        RandomPresenter bound to build_pool with the process-wide configuration
    """
    if PRESENTER_KEY not in st.session_state:
        config = get_config()
        st.session_state[PRESENTER_KEY] = RandomPresenter(
            pool_builder=partial(build_pool, config=config),
            default_query=config.default_query,
        )
    return st.session_state[PRESENTER_KEY]


def request_search() -> None:
    """on_click callback for "Search": queue the text currently in the query input."""
    st.session_state[PENDING_SEARCH_KEY] = st.session_state.get(QUERY_INPUT_KEY, "")


def take_pending_search() -> Optional[str]:
    """
    Pop the query queued by request_search().

    Returns:
        Queued query (may be empty), or None when no search was requested
    """
    return st.session_state.pop(PENDING_SEARCH_KEY, None)


def shuffle_recipe() -> None:
    """on_click callback for "New Random"."""
    get_presenter().shuffle()


def init_query_input(query: str) -> None:
    """Seed the query input with the presenter's query before the widget is created."""
    if QUERY_INPUT_KEY not in st.session_state:
        st.session_state[QUERY_INPUT_KEY] = query
