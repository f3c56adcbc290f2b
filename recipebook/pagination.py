"""
Pagination view-model for search results.

Pure functions that decide, from (result_count, page_size, current_page),
which navigation controls to show, and a small panel component that renders
them and turns clicks into page-change callbacks.

Rules:
- page_count = ceil(result_count / page_size)
- One page or none: no controls at all
- Otherwise always an indicator "current/total", a previous button unless on
  the first page and a next button unless on the last page
- Order is always previous, indicator, next

A current page beyond the last page (stale page after the result set
shrank) is clamped to the last page before controls are computed.
"""

import logging
from typing import Any, Callable, List, Mapping, Optional, Sequence, TypeVar

from .models import PaginationControl, PaginationState, PaginationView
from .render import AFTERBEGIN, MarkupRenderer, attr, icon_ref

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_RESULTS_PER_PAGE = 10
DEFAULT_ICONS_URL = "img/icons.svg"

PAGINATION_CONTAINER = "pagination"
CONTROL_CLASS = "btn--inline"

PageChangeHandler = Callable[[int], Any]


def page_count(result_count: int, page_size: int) -> int:
    """Ceiling division of results over page size."""
    if page_size < 1:
        raise ValueError("page_size must be at least 1")
    return -(-result_count // page_size)


def clamp_page(page: int, pages: int) -> int:
    """Clamp page into 1..pages (1 when there are no pages)."""
    if pages <= 0:
        return 1
    return max(1, min(page, pages))


def build_pagination(state: PaginationState) -> PaginationView:
    """
    Compute which controls apply to state.

    Args:
        state: Result count, page size and current page

    Returns:
        PaginationView; empty when everything fits on one page
    """
    pages = state.page_count
    current = clamp_page(state.current_page, pages)

    if pages <= 1:
        return PaginationView(page_count=pages, current_page=current)

    previous = None
    if current > 1:
        previous = PaginationControl(
            kind="prev",
            target_page=current - 1,
            label=f"Page {current - 1}",
            icon="arrow-left",
        )

    next_control = None
    if current < pages:
        next_control = PaginationControl(
            kind="next",
            target_page=current + 1,
            label=f"Page {current + 1}",
            icon="arrow-right",
        )

    return PaginationView(
        page_count=pages,
        current_page=current,
        indicator=f"{current}/{pages}",
        previous=previous,
        next=next_control,
    )


def paginate(items: Sequence[T], page: int = 1, page_size: int = DEFAULT_RESULTS_PER_PAGE) -> List[T]:
    """
    Items shown on a page, using the same clamping as build_pagination.

    Args:
        items: All results
        page: 1-based page number
        page_size: Results per page
    """
    current = clamp_page(page, page_count(len(items), page_size))
    start = (current - 1) * page_size
    return list(items[start:start + page_size])


def generate_control_markup(control: PaginationControl, icons_url: str = DEFAULT_ICONS_URL) -> str:
    icon = f"""
        <svg class="search__icon">
          <use href="{icon_ref(icons_url, control.icon)}"></use>
        </svg>"""
    label = f"""
        <span>{attr(control.label)}</span>"""
    body = icon + label if control.kind == "prev" else label + icon
    return f"""
      <button data-goto="{control.target_page}" class="{CONTROL_CLASS} pagination__btn--{control.kind}">{body}
      </button>
    """


def generate_pagination_markup(view: PaginationView, icons_url: str = DEFAULT_ICONS_URL) -> str:
    """Markup for a computed view; empty string when there is nothing to show."""
    if view.is_empty:
        return ""

    parts: List[str] = []
    if view.previous is not None:
        parts.append(generate_control_markup(view.previous, icons_url))
    parts.append(f'<span class="pagination__pages">{attr(view.indicator)}</span>')
    if view.next is not None:
        parts.append(generate_control_markup(view.next, icons_url))
    return "\n".join(parts)


def resolve_target_page(path: Sequence[Mapping[str, Any]]) -> Optional[int]:
    """
    Target page of the nearest control in a click path.

    Args:
        path: Attributes of the clicked element and its ancestors, innermost
              first (e.g. [{"tag": "span"}, {"class": "btn--inline ...",
              "data-goto": "3"}, ...])

    Returns:
        The control's data-goto value, or None if no control was clicked
    """
    for element in path:
        classes = str(element.get("class", "")).split()
        if CONTROL_CLASS not in classes:
            continue
        try:
            return int(element.get("data-goto"))
        except (TypeError, ValueError):
            logger.debug("Pagination control without a usable data-goto: %r", element)
            return None
    return None


class PaginationPanel:
    """
    Renders pagination controls into a container and delegates clicks.

    A single click handler is bound on the container; it resolves the
    nearest control ancestor of the click target and calls the page-change
    callback with that control's target page. Re-rendering for the new page
    is left to the caller.
    """

    def __init__(self, renderer: MarkupRenderer, icons_url: str = DEFAULT_ICONS_URL):
        self._renderer = renderer
        self._icons_url = icons_url
        self._handler: Optional[PageChangeHandler] = None
        renderer.bind("page", PAGINATION_CONTAINER, "click", self.handle_click)

    def render(self, state: PaginationState) -> str:
        markup = generate_pagination_markup(build_pagination(state), self._icons_url)
        self._renderer.clear(PAGINATION_CONTAINER)
        if markup:
            self._renderer.insert_markup(PAGINATION_CONTAINER, AFTERBEGIN, markup)
        return markup

    def bind_handler(self, event: str, callback: PageChangeHandler) -> None:
        if event != "click":
            raise ValueError(f"Unsupported pagination event: {event!r}")
        self._handler = callback

    def handle_click(self, path: Sequence[Mapping[str, Any]]) -> Optional[int]:
        target = resolve_target_page(path)
        if target is None:
            return None
        logger.debug("Pagination control clicked, going to page %d", target)
        if self._handler is not None:
            self._handler(target)
        return target
