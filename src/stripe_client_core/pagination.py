"""Lazy, forward-only iteration over list endpoints.

Example:
    ```python
    cursor = client.list("checkout/sessions", Session, params={"limit": 10})
    async for session in cursor:
        print(session.id)
    ```

A cursor is single-use: it remembers the last id it yielded, so iterating it
again continues where it stopped. Re-issue the list call to start over. A
cursor must not be advanced from two tasks at once.
"""

import logging
from collections import deque
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from stripe_client_core.errors.exceptions import MalformedResponseError
from stripe_client_core.options import RequestOptions
from stripe_client_core.stripe_object import ListObject, StripeObject

if TYPE_CHECKING:
    from stripe_client_core.client import StripeClient

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=StripeObject)


class ListCursor(Generic[T]):
    """Async iterator over every item of a list endpoint.

    Pages are fetched on demand. After the buffered page is consumed, exactly
    one follow-up request is made with ``starting_after`` set to the id of the
    last item yielded; a page with ``has_more`` false ends iteration.
    If that last item has no id while ``has_more`` is true, iteration stops
    with :class:`MalformedResponseError` rather than refetching the same page.
    """

    def __init__(
        self,
        client: "StripeClient",
        endpoint: str,
        item_shape: type[T],
        params: Mapping[str, Any] | None = None,
        options: RequestOptions | Mapping[str, Any] | None = None,
    ):
        self._client = client
        self._endpoint = endpoint
        self._item_shape = item_shape
        self._params = dict(params or {})
        self._options = options
        self._page: ListObject[T] | None = None
        self._buffer: deque[T] = deque()
        self._last_id: str | None = self._params.get("starting_after")
        self._last_item_has_id = True
        self._done = False

    @property
    def last_id(self) -> str | None:
        return self._last_id

    async def first_page(self) -> ListObject[T]:
        """Fetch (once) and return the first page envelope."""
        if self._page is None:
            await self._fetch()
        return self._page

    async def _fetch(self) -> None:
        params = dict(self._params)
        if self._last_id is not None:
            params["starting_after"] = self._last_id

        logger.debug(f"Fetching page of {self._endpoint} (starting_after={self._last_id})")
        self._page = await self._client.list_page(
            self._endpoint, self._item_shape, params=params, options=self._options
        )
        self._buffer.extend(self._page.data)

        if not self._page.data:
            # An empty page cannot move the cursor forward
            self._done = True

    def __aiter__(self) -> "ListCursor[T]":
        return self

    async def __anext__(self) -> T:
        if self._page is None:
            await self._fetch()

        if not self._buffer:
            if self._done or not self._page.has_more:
                self._done = True
                raise StopAsyncIteration
            if not self._last_item_has_id:
                self._done = True
                raise MalformedResponseError(
                    f"Cannot request the next page of {self._endpoint}: the last item returned has no id"
                )
            await self._fetch()
            if not self._buffer:
                raise StopAsyncIteration

        item = self._buffer.popleft()
        item_id = getattr(item, "id", None)
        self._last_item_has_id = isinstance(item_id, str) and bool(item_id)
        if self._last_item_has_id:
            self._last_id = item_id
        return item

    async def to_list(self, limit: int | None = None) -> list[T]:
        """Collect items into a list, stopping after ``limit`` if given."""
        items: list[T] = []
        async for item in self:
            items.append(item)
            if limit is not None and len(items) >= limit:
                break
        return items
