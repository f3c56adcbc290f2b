"""
UI Styling and Feedback Module.

This module provides global CSS styling and the message helpers
for the Recipe Studio Streamlit app.
"""

from ui.feedback import show_error, show_message, set_message, clear_message
from ui.styles import load_global_styles

__all__ = [
    "load_global_styles",
    "show_error",
    "show_message",
    "set_message",
    "clear_message",
]
