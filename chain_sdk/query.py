"""
Cursor based paging over Chain Core list endpoints.
"""
import logging
from typing import Any, ClassVar, Iterator, List, Optional

from pydantic import Field, PrivateAttr

from .context import Context
from .models import ChainModel

logger = logging.getLogger(__name__)


class Query(ChainModel):
    """
    Cursor sent to a list endpoint.

    Only the fields that were set are sent; the server returns the cursor
    for the following page as ``next``.
    """
    filter: Optional[str] = None
    filter_params: Optional[List[Any]] = None
    after: Optional[str] = None
    start_time: Optional[int] = None
    end_time: Optional[int] = None
    timeout: Optional[int] = None
    order: Optional[str] = None


class BaseQueryBuilder:
    """Accumulates query fields common to every list endpoint."""

    def __init__(self):
        self.next = Query()

    def set_filter(self, filter: str) -> "BaseQueryBuilder":
        """Set the filter expression, e.g. "inputs(account_alias=$1)"."""
        self.next.filter = filter
        return self

    def add_filter_parameter(self, param: Any) -> "BaseQueryBuilder":
        """Append a value for the next $N placeholder in the filter."""
        if self.next.filter_params is None:
            self.next.filter_params = []
        self.next.filter_params.append(param)
        return self

    def set_filter_parameters(self, params: List[Any]) -> "BaseQueryBuilder":
        self.next.filter_params = list(params)
        return self

    def set_after(self, after: str) -> "BaseQueryBuilder":
        """Start listing after the given cursor position."""
        self.next.after = after
        return self


class PagedItems(ChainModel):
    """
    One page of results from a list endpoint.

    Subclasses set ``endpoint`` and narrow the type of ``items``. A page
    keeps the context it was fetched with so that the following page can
    be requested. Errors are never retried here.
    """
    endpoint: ClassVar[str]

    items: List[Any] = Field(default_factory=list)
    next: Query = Field(default_factory=Query)
    last_page: bool = False

    _context: Optional[Context] = PrivateAttr(default=None)

    def set_context(self, context: Context) -> None:
        self._context = context

    def get_page(self) -> "PagedItems":
        """
        Fetch the page described by this page's ``next`` cursor.

        Returns:
            The fetched page, bound to the same context

        Raises:
            ValueError: If the page has no context
            ChainError: Any error raised by the request
        """
        if self._context is None:
            raise ValueError("Page is not bound to a Context")

        page = self._context.request(self.endpoint, self.next.to_payload(), type(self))
        page.set_context(self._context)
        logger.debug(f"Fetched {len(page.items)} items from {self.endpoint} (last_page={page.last_page})")
        return page

    def iter_items(self) -> Iterator[Any]:
        """
        Iterate over the items of this page and every following page.

        Pages are fetched lazily; iteration stops at the last page or at the
        first empty page.
        """
        page = self
        while True:
            yield from page.items
            if page.last_page or not page.items:
                return
            page = page.get_page()
