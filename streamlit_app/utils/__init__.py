"""
Utility modules for the Streamlit frontend.

This package contains:
- session: Session ID, recipe form and current page kept in st.session_state
- sample_recipes: Static recipes standing in for search results
"""
