"""
Global CSS Styling for the Random Recipe viewer.

This module provides load_global_styles() to inject the page, card and empty-state styling.
"""

import streamlit as st


def load_global_styles() -> None:
    """
    Inject global CSS styles.

    This function:
    - Narrows the content column to a single-card width
    - Styles the recipe card, its image and the "No image" placeholder
    - Styles the outbound link button, source tag and pool counter
    - Styles the dashed empty-state box
    """
    css = """
    <style>
        .block-container {
            max-width: 760px !important;
            padding-top: 2rem !important;
        }

        h1 {
            font-size: 1.75rem !important;
            font-weight: 650 !important;
            margin: 0 !important;
        }

        .rr-page-header .subtitle {
            color: #5b5b5b;
            margin-top: 0.4rem;
            margin-bottom: 1rem;
        }

        .rr-count {
            color: #6b7280;
            font-size: 0.75rem;
        }

        /* Recipe card */
        .rr-card {
            width: 300px;
            margin: 1.25rem auto 0 auto;
            background: #fff;
            border-radius: 16px;
            overflow: hidden;
            box-shadow: 0 1px 3px rgba(0, 0, 0, 0.08);
        }

        .rr-img {
            width: 100%;
            aspect-ratio: 4 / 3;
            object-fit: cover;
            display: block;
        }

        .rr-no-image {
            display: grid;
            place-items: center;
            background: #f0f2f5;
            color: #777;
        }

        .rr-card-body {
            padding: 12px;
        }

        .rr-title {
            font-size: 1.125rem !important;
            line-height: 1.35 !important;
            margin: 0 !important;
            font-weight: 650 !important;
        }

        .rr-row {
            margin-top: 10px;
            display: flex;
            align-items: center;
            gap: 10px;
        }

        .rr-link-btn {
            display: inline-flex;
            align-items: center;
            padding: 8px 10px;
            border-radius: 10px;
            background: #2f66f5;
            color: #fff !important;
            text-decoration: none !important;
        }

        .rr-source {
            color: #6b7280;
            font-size: 0.75rem;
        }

        /* Empty state */
        .rr-empty {
            margin-top: 1.5rem;
            padding: 1.5rem;
            border: 1px dashed #cbd5e1;
            border-radius: 16px;
            background: #fff;
            text-align: center;
            color: #475569;
        }
    </style>
    """
    st.markdown(css, unsafe_allow_html=True)
