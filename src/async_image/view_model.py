"""
Presentation state holder.

Owns a single LoadingState value, drives the fetch use case, and publishes
every state change to subscribed observers (the view layer).
"""

from __future__ import annotations

import asyncio
from collections.abc import Callable

import httpx
from loguru import logger

from .config import settings
from .errors import FetchError
from .models import CachingPolicy, Failure, Loading, LoadingState, Success
from .use_case import ImageFetchUseCase

StateObserver = Callable[[LoadingState], None]


class ImageViewModel:
    """Loading state for one image view.

    The state starts at Loading. Each fetch ends in exactly one Success or
    Failure; a new fetch returns to Loading first.
    """

    def __init__(self, use_case: ImageFetchUseCase | None = None):
        self._use_case = use_case or ImageFetchUseCase()
        self._state: LoadingState = Loading()
        self._observers: list[StateObserver] = []
        self._task: asyncio.Task[None] | None = None

    @property
    def state(self) -> LoadingState:
        """Current loading state."""
        return self._state

    def subscribe(self, observer: StateObserver) -> Callable[[], None]:
        """
        Register an observer called with every new state.

        Returns:
            A function that removes the observer
        """
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    def _publish(self, state: LoadingState) -> None:
        self._state = state
        for observer in list(self._observers):
            try:
                observer(state)
            except Exception as e:
                logger.error("State observer {!r} raised: {}", observer, e)

    async def fetch_image(
        self,
        caching_policy: CachingPolicy | None = None,
        url: str | httpx.URL | None = None,
    ) -> None:
        """
        Run one fetch and publish its outcome.

        Args:
            caching_policy: Retention policy (defaults to settings.default_caching_policy)
            url: Image URL
        """
        policy = caching_policy or settings.default_caching_policy
        if not isinstance(self._state, Loading):
            self._publish(Loading())

        try:
            image = await self._use_case.fetch_image(url, policy)
        except FetchError as e:
            logger.debug("Image fetch failed ({}): {}", e.kind.value, e)
            self._publish(Failure(error=e))
        else:
            self._publish(Success(image=image))

    def start(
        self,
        caching_policy: CachingPolicy | None = None,
        url: str | httpx.URL | None = None,
    ) -> asyncio.Task[None]:
        """
        Schedule a fetch as a task, cancelling any fetch still in flight.

        Must be called from a running event loop.
        """
        if self._task is not None and not self._task.done():
            self._task.cancel()
        self._task = asyncio.create_task(self.fetch_image(caching_policy, url))
        return self._task

    async def cancel(self) -> None:
        """Cancel the in-flight fetch, if any, and wait for it to unwind."""
        task, self._task = self._task, None
        if task is None or task.done():
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            logger.debug("Image fetch cancelled")


async def load_image(
    url: str | httpx.URL | None,
    caching_policy: CachingPolicy | None = None,
    use_case: ImageFetchUseCase | None = None,
) -> LoadingState:
    """
    Fetch an image and return the final loading state.

    Args:
        url: Image URL
        caching_policy: Retention policy (defaults to settings.default_caching_policy)
        use_case: Optional use case to run the fetch with

    Returns:
        Success or Failure
    """
    view_model = ImageViewModel(use_case)
    await view_model.fetch_image(caching_policy, url)
    return view_model.state
