import pytest
from unittest.mock import AsyncMock, MagicMock

from diningbot_core.browser_setup import CHROME_ARGS, BrowserSession, launch_args
from diningbot_core.config import Config


def test_host_launch_args():
    args = launch_args(Config(headless=False))
    assert args["headless"] is False
    assert args["args"] == CHROME_ARGS
    assert "executable_path" not in args


def test_docker_launch_args_use_system_chromium():
    args = launch_args(Config(browser_mode="docker", headless=False, chromium_path="/usr/bin/chromium"))
    assert args["executable_path"] == "/usr/bin/chromium"
    assert args["headless"] is True
    assert "--no-sandbox" in args["args"]


@pytest.mark.asyncio
async def test_session_close_tears_everything_down():
    playwright, browser, context = MagicMock(), MagicMock(), MagicMock()
    context.close = AsyncMock()
    browser.close = AsyncMock()
    playwright.stop = AsyncMock()

    await BrowserSession(playwright, browser, context).close()

    context.close.assert_awaited_once()
    browser.close.assert_awaited_once()
    playwright.stop.assert_awaited_once()


@pytest.mark.asyncio
async def test_session_close_continues_after_failure():
    playwright, browser, context = MagicMock(), MagicMock(), MagicMock()
    context.close = AsyncMock(side_effect=RuntimeError("already closed"))
    browser.close = AsyncMock()
    playwright.stop = AsyncMock()

    await BrowserSession(playwright, browser, context).close()

    browser.close.assert_awaited_once()
    playwright.stop.assert_awaited_once()


@pytest.mark.asyncio
async def test_new_page_comes_from_context():
    context = MagicMock()
    context.new_page = AsyncMock(return_value="page")
    session = BrowserSession(MagicMock(), MagicMock(), context)
    assert await session.new_page() == "page"
