"""
Random Recipe - Streamlit Frontend Main Entry Point.

Fetches several pages of Edamam search results, then shows ONE random recipe
(image + title + link). "New Random" re-picks from the same pool without fetching again.

Run:
    streamlit run streamlit_app/app.py

Note: For production, proxy Edamam calls through a backend so the app key is never
exposed to the browser. This app calls Edamam from the Streamlit server process.
"""

import sys
from pathlib import Path

# Ensure the streamlit_app directory is in the Python path
# This allows `ui` and `utils` imports to work regardless of how the app is run
streamlit_app_dir = Path(__file__).parent
if str(streamlit_app_dir) not in sys.path:
    sys.path.insert(0, str(streamlit_app_dir))

# Add project root to path so we can import recipe_roulette without installing it
project_root = streamlit_app_dir.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

# Import config early to load .env file before any other code accesses environment variables
import recipe_roulette.config  # noqa: F401

import streamlit as st

from utils.state import (
    QUERY_INPUT_KEY,
    get_config,
    get_presenter,
    init_query_input,
    request_search,
    shuffle_recipe,
    take_pending_search,
)
from ui.styles import load_global_styles
from ui.layout import page_header, search_controls, pool_indicator, recipe_card
from ui.feedback import show_error, show_empty_state, working_spinner

# Page configuration - must be called before any other Streamlit commands
st.set_page_config(
    page_title="Random Recipe",
    page_icon="🥗",
    layout="centered",
)

load_global_styles()

page_header(
    "Random Recipe",
    subtitle="Fetches multiple pages from Edamam, then shows <strong>one random recipe</strong> (image + title + link).",
)

presenter = get_presenter()
init_query_input(presenter.query)

# A search starts from the "Search" callback, or from the first page load of the session
pending_query = take_pending_search()
if pending_query is None and not presenter.mounted:
    pending_query = presenter.default_query
# A run stopped mid-search leaves the presenter LOADING; start that query again
if pending_query is None and presenter.is_loading:
    pending_query = presenter.query
token = presenter.begin_search(pending_query) if pending_query is not None else None

search_controls(
    QUERY_INPUT_KEY,
    loading=presenter.is_loading,
    can_shuffle=presenter.can_shuffle,
    on_search=request_search,
    on_shuffle=shuffle_recipe,
)

if token is not None:
    with working_spinner("Searching…"):
        presenter.run_search(token)
    # Redraw with the controls enabled again
    st.rerun()

pool_indicator(presenter.pool_size)

if presenter.error:
    missing = get_config().missing_credentials()
    hint = "Set them in a .env file at the project root and restart the app." if missing else None
    show_error(presenter.error, hint=hint)

current = presenter.current
if current is None:
    show_empty_state(
        "Search for anything, then click <strong>New Random</strong> to shuffle through the pool."
    )
else:
    recipe_card(current)
