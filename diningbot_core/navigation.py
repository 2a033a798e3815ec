"""
Navigation sequence that provokes the dining site into requesting its menu.

    LOADED -> NO_MENU_DETECTED
    LOADED -> MEAL_PERIOD_SELECTING -> MEAL_PERIOD_CONFIRMING -> SETTLED

The page is loaded by ``load`` and driven by ``interact``; ``run`` does both.
A missing element at any transition raises NavigationFailed tagged with the
step name. There are no retries here; a failed run is retried as a whole.
"""

import logging
from enum import Enum
from typing import List, Optional

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from .config import SiteSelectors
from .exceptions import NavigationFailed

logger = logging.getLogger(__name__)


class NavigationState(Enum):
    LOADED = "loaded"
    NO_MENU_DETECTED = "no_menu_detected"
    MEAL_PERIOD_SELECTING = "meal_period_selecting"
    MEAL_PERIOD_CONFIRMING = "meal_period_confirming"
    SETTLED = "settled"


class NavigationSequencer:
    def __init__(
        self,
        site_url: str,
        period_name: str,
        no_menu_text: str,
        selectors: SiteSelectors = SiteSelectors(),
        element_timeout_ms: int = 15000,
        settle_timeout_ms: int = 30000,
    ):
        self.site_url = site_url
        self.period_name = period_name
        self.no_menu_text = no_menu_text
        self.selectors = selectors
        self.element_timeout_ms = element_timeout_ms
        self.settle_timeout_ms = settle_timeout_ms
        self.state: Optional[NavigationState] = None
        self.history: List[NavigationState] = []

    def _enter(self, state: NavigationState) -> NavigationState:
        logger.debug(f"Navigation state: {state.value}")
        self.state = state
        self.history.append(state)
        return state

    async def run(self, page) -> NavigationState:
        """Drive ``page`` to a terminal state and return it"""
        await self.load(page)
        return await self.interact(page)

    async def interact(self, page) -> NavigationState:
        """UI steps on an already loaded page, from no-menu detection to settle"""
        if await self.no_menu_published(page):
            logger.info("No meals available")
            return self._enter(NavigationState.NO_MENU_DETECTED)

        await self._click(page, self.selectors.meal_selection_button, "open_meal_selector")
        self._enter(NavigationState.MEAL_PERIOD_SELECTING)

        meal_input = await self._require(page, self.selectors.meal_input, "enter_meal_period")
        try:
            await meal_input.fill(self.period_name)
            await page.keyboard.press("Enter")
        except PlaywrightError as e:
            raise NavigationFailed("enter_meal_period", str(e)) from e
        self._enter(NavigationState.MEAL_PERIOD_CONFIRMING)

        await self._click(page, self.selectors.done_button, "confirm_meal_period")
        await self._settle(page)
        return self._enter(NavigationState.SETTLED)

    async def load(self, page) -> None:
        try:
            await page.goto(self.site_url, wait_until="load")
        except PlaywrightError as e:
            raise NavigationFailed("load", str(e)) from e
        logger.info(f"Connected to page {self.site_url}")
        self._enter(NavigationState.LOADED)

    async def no_menu_published(self, page) -> bool:
        """True when the menu wrapper holds the fixed "no menus" sentence.

        A wrapper without a paragraph is the normal case, not an error.
        """
        wrapper = await self._require(page, self.selectors.menu_wrapper, "detect_no_menu")
        try:
            paragraph = await wrapper.query_selector("p")
            if paragraph is None:
                return False
            text = await paragraph.text_content()
        except PlaywrightError as e:
            raise NavigationFailed("detect_no_menu", str(e)) from e
        return (text or "").strip() == self.no_menu_text

    async def _require(self, page, selector: str, step: str):
        try:
            element = await page.wait_for_selector(selector, timeout=self.element_timeout_ms)
        except PlaywrightError as e:
            raise NavigationFailed(step, f"element '{selector}' not found: {e}") from e
        if element is None:
            raise NavigationFailed(step, f"element '{selector}' not found")
        return element

    async def _click(self, page, selector: str, step: str) -> None:
        element = await self._require(page, selector, step)
        try:
            await element.click()
        except PlaywrightError as e:
            raise NavigationFailed(step, str(e)) from e

    async def _settle(self, page) -> None:
        try:
            await page.wait_for_load_state("networkidle", timeout=self.settle_timeout_ms)
        except PlaywrightTimeoutError:
            logger.warning(f"Page did not settle within {self.settle_timeout_ms}ms")
