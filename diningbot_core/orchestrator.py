"""
Session orchestration: one complete menu run.

    open session -> new page -> load page -> arm interception -> UI steps
        -> NO_MENU_DETECTED: send the fixed notice
        -> SETTLED: await the interception's completion signal
    -> disarm and tear down (always)
"""

import logging
from enum import Enum
from typing import Awaitable, Callable, Optional

from .browser_setup import BrowserSession, open_browser_session
from .config import Config
from .exceptions import DeliveryFailed
from .interception import InterceptionCoordinator, Sender
from .navigation import NavigationSequencer, NavigationState
from .render import NO_MEALS_NOTICE
from .retry import run_with_retries
from .telegram import TelegramClient

logger = logging.getLogger(__name__)

SessionFactory = Callable[[Config], Awaitable[BrowserSession]]


class RunOutcome(Enum):
    MENU_PROCESSED = "menu_processed"
    NO_MENU = "no_menu"


class SessionOrchestrator:
    """Composes navigation and interception into one run"""

    def __init__(
        self,
        config: Config,
        sender: Sender,
        session_factory: SessionFactory = open_browser_session,
    ):
        self.config = config
        self.sender = sender
        self.session_factory = session_factory

    def build_coordinator(self) -> InterceptionCoordinator:
        return InterceptionCoordinator(
            sender=self.sender,
            recipient_id=self.config.personal_id,
            url_pattern=self.config.menu_api_pattern,
            period_name=self.config.period_name,
            stations=self.config.stations,
        )

    def build_sequencer(self) -> NavigationSequencer:
        return NavigationSequencer(
            site_url=self.config.site_url,
            period_name=self.config.period_name,
            no_menu_text=self.config.no_menu_text,
            selectors=self.config.selectors,
            element_timeout_ms=self.config.element_timeout_ms,
            settle_timeout_ms=self.config.settle_timeout_ms,
        )

    async def run(self) -> RunOutcome:
        """
        Execute one run.

        Raises:
            NavigationFailed: a required UI element was missing
            InterceptionTimeout: the menu request never arrived
        """
        logger.info("Running handler")
        session = await self.session_factory(self.config)
        try:
            page = await session.new_page()
            sequencer = self.build_sequencer()
            await sequencer.load(page)
            # Menu requests issued while the page loads carry the default
            # period, so the hook goes in only after load and before any UI step.
            coordinator = self.build_coordinator()
            await coordinator.arm(page)
            try:
                state = await sequencer.interact(page)
                if state is NavigationState.NO_MENU_DETECTED:
                    await self._send_notice(NO_MEALS_NOTICE)
                    return RunOutcome.NO_MENU
                await coordinator.wait(timeout=self.config.interception_timeout)
                return RunOutcome.MENU_PROCESSED
            finally:
                await coordinator.disarm()
        finally:
            await session.close()
            logger.info("Finished running handler")

    async def _send_notice(self, text: str) -> None:
        try:
            await self.sender.send(self.config.personal_id, text)
        except DeliveryFailed as e:
            logger.error(f"Failed to send message: {e}")


async def run_daily_menu(
    config: Config,
    max_attempts: Optional[int] = None,
    sender: Optional[Sender] = None,
) -> bool:
    """Run the pipeline with bounded retries; True once any attempt succeeds"""
    if sender is None:
        sender = TelegramClient(config.telegram_bot_token, api_base=config.telegram_api_base)
    orchestrator = SessionOrchestrator(config, sender)
    attempts = max_attempts if max_attempts is not None else config.max_attempts
    return await run_with_retries(orchestrator.run, max_attempts=attempts)
