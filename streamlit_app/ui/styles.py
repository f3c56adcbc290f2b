"""
Global CSS Styling for Recipe Studio.

This module provides load_global_styles() to inject consistent styling
across the app. Focuses on typography, spacing and the upload form layout.
"""

import streamlit as st


def load_global_styles() -> None:
    """
    Inject global CSS styles for the Recipe Studio app.

    This function:
    - Imports Google Fonts (Nunito) for friendly typography
    - Sets global styles for headings, buttons and inputs
    - Keeps the content width comfortable on large screens
    - Tightens spacing between ingredient rows
    """
    css = """
    <style>
        @import url('https://fonts.googleapis.com/css2?family=Nunito:wght@400;600;700&display=swap');

        html, body, [class*="css"] {
            font-family: 'Nunito', 'sans serif' !important;
        }

        h1, h2, h3, h4, h5, h6 {
            font-weight: 600 !important;
            letter-spacing: 0.02em !important;
        }

        /* Buttons - rounded pills */
        .stButton > button {
            border-radius: 50px !important;
            box-shadow: 0 2px 6px rgba(244, 133, 82, 0.15) !important;
            transition: all 0.3s ease !important;
            font-weight: 600 !important;
            padding: 0.5rem 1.25rem !important;
        }

        .stButton > button:hover {
            box-shadow: 0 3px 10px rgba(244, 133, 82, 0.25) !important;
            transform: translateY(-1px) !important;
        }

        /* Ingredient rows sit close together */
        [data-testid="stTextInput"] {
            margin-bottom: -0.5rem !important;
        }

        /* Main app container: consistent width & spacing */
        .main .block-container {
            max-width: 1200px !important;
            padding-top: 1.5rem !important;
            padding-bottom: 2.5rem !important;
        }

        [data-testid="stSidebar"] {
            padding-top: 1rem !important;
        }
    </style>
    """
    st.markdown(css, unsafe_allow_html=True)
