"""
Interception of the dining site's internal menu request.

The coordinator registers a Playwright route for the menu API once the page
has loaded and before any UI step. The first matching request is claimed: the
real response is fetched, turned into a digest, rendered and delivered, and
then handed to the page unchanged. The run awaits a one-shot completion
signal that the route handler releases when it is done, whatever the outcome.

Usage:
    coordinator = InterceptionCoordinator(sender, recipient_id, pattern, "Dinner", stations)
    await coordinator.arm(page)
    ...  # UI steps that trigger the request
    await coordinator.wait(timeout=60)
    await coordinator.disarm()
"""

import asyncio
import logging
from typing import Any, Awaitable, Optional, Protocol, Sequence, Union

from playwright.async_api import Error as PlaywrightError

from .exceptions import DiningBotError, InterceptionTimeout, MalformedPayload
from .extractor import extract
from .menu_models import StationSpec, parse_menu_document
from .render import DEFAULT_GREETING, compose_menu_message

logger = logging.getLogger(__name__)


class Sender(Protocol):
    def send(self, recipient_id: int, text: str) -> Awaitable[None]:
        ...


class CompletionSignal:
    """
    Single-use rendezvous between one producer and one consumer.

    ``release`` may be called exactly once; ``wait`` returns once it has been.
    Must be created inside a running event loop.
    """

    def __init__(self):
        self._future: asyncio.Future = asyncio.get_running_loop().create_future()

    @property
    def released(self) -> bool:
        return self._future.done()

    def release(self) -> None:
        if self._future.done():
            raise RuntimeError("Completion signal already released")
        self._future.set_result(None)

    async def wait(self, timeout: Optional[float] = None) -> None:
        await asyncio.wait_for(asyncio.shield(self._future), timeout)


class InterceptionCoordinator:
    """Owns the menu-request route hook for one page"""

    def __init__(
        self,
        sender: Sender,
        recipient_id: int,
        url_pattern: str,
        period_name: str,
        stations: Sequence[StationSpec],
        greeting: str = DEFAULT_GREETING,
    ):
        self.sender = sender
        self.recipient_id = recipient_id
        self.url_pattern = url_pattern
        self.period_name = period_name
        self.stations = tuple(stations)
        self.greeting = greeting
        self._page: Any = None
        self._signal: Optional[CompletionSignal] = None
        self._claimed = False

    @property
    def armed(self) -> bool:
        return self._page is not None

    @property
    def completed(self) -> bool:
        return self._signal is not None and self._signal.released

    async def arm(self, page) -> None:
        """Register the route hook. Must run after page load and before the UI steps."""
        if self._page is not None:
            raise RuntimeError("Interception coordinator is already armed")
        self._signal = CompletionSignal()
        await page.route(self.url_pattern, self._handle_route)
        self._page = page
        logger.info(f"Armed menu interception for {self.url_pattern}")

    async def disarm(self) -> None:
        if self._page is None:
            return
        page, self._page = self._page, None
        try:
            await page.unroute(self.url_pattern, self._handle_route)
        except PlaywrightError as e:
            logger.debug(f"Failed to remove menu route: {e}")

    async def wait(self, timeout: Optional[float] = None) -> None:
        """Block until the intercepted response has been fully processed"""
        if self._signal is None:
            raise RuntimeError("Interception coordinator was never armed")
        try:
            await self._signal.wait(timeout)
        except asyncio.TimeoutError as e:
            raise InterceptionTimeout(
                f"No menu response intercepted within {timeout}s"
            ) from e

    async def _handle_route(self, route) -> None:
        if self._claimed:
            logger.info(f"Passing through additional menu request {route.request.url}")
            await route.continue_()
            return
        self._claimed = True
        logger.info(f"Intercepted request {route.request.url}")
        resolved = False
        try:
            response = await route.fetch()
            try:
                body = await response.text()
                await self.process_payload(body)
            finally:
                await route.fulfill(response=response)
                resolved = True
        except PlaywrightError as e:
            logger.error(f"Failed to load intercepted menu response: {e}")
        except Exception:
            logger.exception("Failed to process intercepted menu response")
        finally:
            if not resolved:
                await self._abort(route)
            self._signal.release()

    async def _abort(self, route) -> None:
        # An unresolved route keeps the page's request pending until teardown.
        try:
            await route.abort()
        except PlaywrightError as e:
            logger.debug(f"Failed to abort menu route: {e}")

    async def process_payload(self, body: Union[bytes, str]) -> Optional[str]:
        """
        Parse, extract, render and deliver one menu payload.

        Returns:
            The message text when it was delivered, otherwise None
        """
        try:
            document = parse_menu_document(body)
        except MalformedPayload as e:
            logger.error(f"Failed to parse menu: {e}")
            return None

        digest = extract(document, self.period_name, self.stations)
        message = compose_menu_message(digest, self.greeting)

        try:
            await self.sender.send(self.recipient_id, message)
        except DiningBotError as e:
            logger.error(f"Failed to send message: {e}")
            return None
        return message
