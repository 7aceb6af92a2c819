"""
App Module - Streamlit GUI for Catalog Assistant.
=================================================

Provides a web chat page for asking questions about ACFI courses.

Components:
- streamlit_app: Main Streamlit application

Usage:
    Run with: streamlit run src/catalog_assistant/app/streamlit_app.py
    Or use: catalog-assistant gui
"""

# Note: Streamlit app is run directly, not imported

__all__ = []
