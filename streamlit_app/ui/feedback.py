"""
Standardized feedback utilities for consistent error, success and empty states.

The recipe form reports through a single message slot: showing a new message
replaces whatever was shown before.
"""

from typing import Optional

import streamlit as st

MESSAGE_SLOT_KEY = "form_message"


def set_message(text: str, kind: str = "success") -> None:
    """Replace the current form message. kind is "success" or "error"."""
    st.session_state[MESSAGE_SLOT_KEY] = (kind, text)


def clear_message() -> None:
    st.session_state.pop(MESSAGE_SLOT_KEY, None)


def show_message() -> None:
    """Render the current form message, if any."""
    entry = st.session_state.get(MESSAGE_SLOT_KEY)
    if not entry:
        return
    kind, text = entry
    if kind == "error":
        show_error(text)
    else:
        st.success(f"✅ {text}")


def show_error(message: str, hint: Optional[str] = None) -> None:
    """
    Display a standardized error message with optional hint.

    Args:
        message: Main error message to display
        hint: Optional hint text to help users resolve the issue
    """
    st.error(f"⚠️ {message}")
    if hint:
        st.caption(f"💡 {hint}")


def show_empty_state(title: str, subtitle: Optional[str] = None) -> None:
    """
    Display a standardized empty state.

    Args:
        title: Main empty state title
        subtitle: Optional subtitle/description text
    """
    st.info(f"📭 **{title}**")
    if subtitle:
        st.caption(subtitle)
