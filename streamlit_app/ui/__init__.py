"""
UI Styling and Components Module.

This module provides global CSS styling and reusable UI components
for the Random Recipe Streamlit page.
"""

from ui.styles import load_global_styles
from ui.layout import page_header, search_controls, pool_indicator, recipe_card
from ui.feedback import show_error, show_empty_state, working_spinner

__all__ = [
    "load_global_styles",
    "page_header",
    "search_controls",
    "pool_indicator",
    "recipe_card",
    "show_error",
    "show_empty_state",
    "working_spinner",
]
