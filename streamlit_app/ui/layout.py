"""
Layout primitives for the Random Recipe page.

Provides the page header, the search controls row and the recipe card.
"""

from html import escape
from typing import Callable, Optional
from urllib.parse import urlsplit
import streamlit as st

from recipe_roulette.models import NormalizedRecipe

SAFE_URL_SCHEMES = ("http", "https")


def safe_link(url: str, fallback: str = "#") -> str:
    """
    Return url if it is an http(s) link, otherwise fallback.

    Recipe URLs come from the API and end up in raw HTML, so anything else
    (javascript:, data:, relative paths) is replaced.

    Examples:
        >>> safe_link("https://example.com/soup")
        'https://example.com/soup'
        >>> safe_link("javascript:alert(1)")
        '#'
    """
    try:
        parts = urlsplit(url.strip())
    except ValueError:
        return fallback
    if parts.scheme.lower() in SAFE_URL_SCHEMES and parts.netloc:
        return url.strip()
    return fallback


def page_header(title: str, subtitle: Optional[str] = None) -> None:
    """
    Render the page header with title and optional subtitle.

    Args:
        title: Main page title
        subtitle: Optional subtitle/description text (HTML allowed)
    """
    st.markdown('<div class="rr-page-header">', unsafe_allow_html=True)
    st.markdown(f"# {title}")
    if subtitle:
        st.markdown(f'<div class="subtitle">{subtitle}</div>', unsafe_allow_html=True)
    st.markdown('</div>', unsafe_allow_html=True)


def search_controls(
    input_key: str,
    loading: bool,
    can_shuffle: bool,
    on_search: Callable[[], None],
    on_shuffle: Callable[[], None],
) -> None:
    """
    Render the search form: query input, Search and New Random buttons.

    Clicks are handled by the callbacks, which Streamlit runs before the next script run,
    so the page can draw this form disabled while the resulting search is in flight.

    Args:
        input_key: Session state key of the query input
        loading: Whether a search is in flight (disables both buttons)
        can_shuffle: Whether New Random is available
        on_search: Callback for "Search"
        on_shuffle: Callback for "New Random"
    """
    with st.form("recipe_search_form", clear_on_submit=False, border=False):
        col_input, col_search, col_shuffle = st.columns([4, 1, 1], vertical_alignment="bottom")
        with col_input:
            st.text_input(
                "Search term",
                key=input_key,
                placeholder="Search term (e.g., salad, chicken, quinoa)",
                label_visibility="collapsed",
            )
        with col_search:
            st.form_submit_button(
                "Searching…" if loading else "Search",
                type="primary",
                disabled=loading,
                use_container_width=True,
                on_click=on_search,
            )
        with col_shuffle:
            st.form_submit_button(
                "New Random",
                disabled=loading or not can_shuffle,
                use_container_width=True,
                on_click=on_shuffle,
            )


def pool_indicator(pool_size: int) -> None:
    """Show how many recipes are in the pool (nothing when the pool is empty)."""
    if pool_size:
        st.markdown(
            f'<span class="rr-count" title="Number of recipes in pool">{pool_size} in pool</span>',
            unsafe_allow_html=True,
        )


def recipe_card(recipe: NormalizedRecipe) -> None:
    """
    Render one recipe: image (or a "No image" placeholder), title, outbound link and source tag.

    Args:
        recipe: Recipe to render
    """
    title = escape(recipe.title)
    url = escape(safe_link(recipe.url), quote=True)
    image = safe_link(recipe.image, fallback="") if recipe.image else ""

    if image:
        image_html = (
            f'<a href="{url}" target="_blank" rel="noopener noreferrer" aria-label="Open recipe: {title}">'
            f'<img class="rr-img" src="{escape(image, quote=True)}" alt="{title}" loading="lazy"/>'
            '</a>'
        )
    else:
        image_html = '<div class="rr-img rr-no-image">No image</div>'

    source_html = f'<span class="rr-source">{escape(recipe.source)}</span>' if recipe.source else ""

    st.markdown(
        f"""
        <article class="rr-card">
            {image_html}
            <div class="rr-card-body">
                <h2 class="rr-title">{title}</h2>
                <div class="rr-row">
                    <a class="rr-link-btn" href="{url}" target="_blank" rel="noopener noreferrer"
                       aria-label="Open recipe: {title}">Open Recipe ↗</a>
                    {source_html}
                </div>
            </div>
        </article>
        """,
        unsafe_allow_html=True,
    )
