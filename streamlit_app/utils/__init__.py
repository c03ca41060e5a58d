"""
Utility modules for the Streamlit frontend.

This package contains:
- state: Session state wiring for the recipe presenter
"""
