"""
Standardized feedback utilities for error, empty, and loading states.
"""

from contextlib import contextmanager
from typing import Optional
import streamlit as st


def show_error(message: str, hint: Optional[str] = None) -> None:
    """
    Display the error banner with optional hint.

    Args:
        message: Error message to display
        hint: Optional hint text to help users resolve the issue
    """
    st.error(f"**Error:** {message}")
    if hint:
        st.caption(f"💡 {hint}")


def show_empty_state(message: str) -> None:
    """
    Display the dashed empty-state box shown when there is no recipe to render.

    Args:
        message: Empty state text (HTML allowed)
    """
    st.markdown(f'<div class="rr-empty">{message}</div>', unsafe_allow_html=True)


@contextmanager
def working_spinner(label: str = "Loading …"):
    """
    Context manager wrapper for the loading spinner.

    Usage:
        with working_spinner("Searching…"):
            presenter.run_search(token)
    """
    with st.spinner(label):
        yield
