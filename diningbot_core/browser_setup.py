#!/usr/bin/env python3
import logging
import subprocess
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

from .config import Config

logger = logging.getLogger(__name__)

CHROME_ARGS = [
    "--no-sandbox",
    "--disable-dev-shm-usage",
    "--disable-blink-features=AutomationControlled",
]


@dataclass
class BrowserSession:
    """One Playwright browser session, owned by a single run"""
    playwright: Any
    browser: Any
    context: Any

    async def new_page(self):
        return await self.context.new_page()

    async def close(self) -> None:
        """Tear down context, browser and driver; failures are logged, not raised"""
        for name, closer in (
            ("context", self.context.close),
            ("browser", self.browser.close),
            ("playwright", self.playwright.stop),
        ):
            try:
                await closer()
            except Exception as e:
                logger.warning(f"Failed to close {name}: {e}")


def _ensure_playwright_browsers():
    """Check if Playwright's Chromium is installed, install it if missing."""
    cache_dir = Path.home() / ".cache" / "ms-playwright"
    chromium_dirs = list(cache_dir.glob("chromium*")) if cache_dir.exists() else []
    for d in chromium_dirs:
        if (d / "chrome-linux" / "chrome").exists() or \
           (d / "chrome-linux" / "headless_shell").exists():
            return

    logger.info("Playwright browsers not found. Installing chromium...")
    try:
        result = subprocess.run(
            [sys.executable, "-m", "playwright", "install", "chromium"],
            capture_output=True,
            text=True,
            timeout=300,
        )
        if result.returncode == 0:
            logger.info("Playwright chromium installed")
        else:
            logger.warning(f"Playwright install warning: {result.stderr[:200]}")
    except subprocess.TimeoutExpired:
        logger.warning("Playwright install timed out, continuing anyway")
    except OSError as e:
        logger.warning(f"Failed to auto-install Playwright: {e}")


def launch_args(config: Config) -> Dict[str, Any]:
    """Chromium launch options for host and docker modes"""
    args: Dict[str, Any] = {
        "headless": bool(config.headless),
        "args": list(CHROME_ARGS),
    }
    if config.browser_mode == "docker":
        # Container images ship their own chromium build
        args["executable_path"] = config.chromium_path
        args["headless"] = True
    return args


async def open_browser_session(config: Config) -> BrowserSession:
    """
    Start Playwright and open a fresh browser context.

    Modes:
        host   - launch Playwright's bundled Chromium
        docker - launch the system Chromium at ``config.chromium_path``
        remote - attach to a running Chromium over CDP at ``config.remote_browser_url``
    """
    from playwright.async_api import async_playwright

    if config.browser_mode == "host":
        _ensure_playwright_browsers()

    playwright = await async_playwright().start()
    try:
        if config.browser_mode == "remote":
            logger.info(f"Connecting to remote browser at {config.remote_browser_url}")
            browser = await playwright.chromium.connect_over_cdp(config.remote_browser_url)
        else:
            browser = await playwright.chromium.launch(**launch_args(config))
        context = await browser.new_context(
            viewport={"width": 1366, "height": 900},
            locale="en-US",
            timezone_id="America/Phoenix",
        )
    except Exception:
        await playwright.stop()
        raise
    context.set_default_timeout(config.element_timeout_ms)
    logger.info(f"Browser session opened ({config.browser_mode} mode)")
    return BrowserSession(playwright=playwright, browser=browser, context=context)
