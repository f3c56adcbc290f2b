"""
Render boundary used by the recipe form and the pagination panel.

The core never manipulates a display tree. It produces markup strings and
hands them to an object satisfying MarkupRenderer. MarkupDocument is the
in-memory implementation used by the API and the tests: it keeps the markup
inserted into each named container, which elements are hidden, and the
event handlers bound to elements.

Positions follow insertAdjacentHTML naming: "afterbegin" and "beforeend".
"""

import html
import logging
from typing import Any, Callable, Dict, List, Protocol, Set, Tuple

logger = logging.getLogger(__name__)

AFTERBEGIN = "afterbegin"
BEFOREEND = "beforeend"

Handler = Callable[..., Any]


class MarkupRenderer(Protocol):
    """What the form and pagination components need from a rendering substrate."""

    def insert_markup(self, container: str, position: str, markup: str) -> None: ...

    def clear(self, container: str) -> None: ...

    def set_hidden(self, element: str, hidden: bool) -> None: ...

    def bind(self, container: str, element: str, event: str, callback: Handler) -> None: ...


def icon_ref(icons_url: str, name: str) -> str:
    """Build an icon sprite reference, e.g. 'img/icons.svg#icon-arrow-left'."""
    return f"{icons_url}#icon-{name}"


def attr(value: Any) -> str:
    """Escape a value for use inside a double-quoted HTML attribute."""
    if value is None:
        return ""
    return html.escape(str(value), quote=True)


class MarkupDocument:
    """
    In-memory render target.

    Bindings belong to the container whose markup created the bound element,
    so clearing a container drops them along with the markup.
    """

    def __init__(self, hidden: Set[str] | None = None):
        self._fragments: Dict[str, List[str]] = {}
        self._hidden: Set[str] = set(hidden or ())
        self._bindings: Dict[Tuple[str, str, str], List[Handler]] = {}

    def insert_markup(self, container: str, position: str, markup: str) -> None:
        fragments = self._fragments.setdefault(container, [])
        if position == AFTERBEGIN:
            fragments.insert(0, markup)
        elif position == BEFOREEND:
            fragments.append(markup)
        else:
            raise ValueError(f"Unsupported insert position: {position!r}")

    def clear(self, container: str) -> None:
        self._fragments[container] = []
        for key in [k for k in self._bindings if k[0] == container]:
            del self._bindings[key]

    def set_hidden(self, element: str, hidden: bool) -> None:
        if hidden:
            self._hidden.add(element)
        else:
            self._hidden.discard(element)

    def is_hidden(self, element: str) -> bool:
        return element in self._hidden

    def bind(self, container: str, element: str, event: str, callback: Handler) -> None:
        self._bindings.setdefault((container, element, event), []).append(callback)

    def handlers(self, element: str, event: str) -> List[Handler]:
        """All callbacks bound to element for event, across containers."""
        found: List[Handler] = []
        for (_, bound_element, bound_event), callbacks in self._bindings.items():
            if bound_element == element and bound_event == event:
                found.extend(callbacks)
        return found

    def dispatch(self, element: str, event: str, *args: Any) -> List[Any]:
        """Invoke every handler bound to element for event and collect results."""
        callbacks = self.handlers(element, event)
        logger.debug("Dispatching %s on %s to %d handler(s)", event, element, len(callbacks))
        return [callback(*args) for callback in callbacks]

    def fragments(self, container: str) -> List[str]:
        return list(self._fragments.get(container, []))

    def markup(self, container: str) -> str:
        return "".join(self._fragments.get(container, []))
