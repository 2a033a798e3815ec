"""
diningbot_core package: menu extraction pipeline for the dining bot

Drives a headless browser to make the dining site request its menu,
intercepts that response, folds it into a per-station digest and delivers
it over Telegram.

Usage:
    from diningbot_core import load_config, run_daily_menu

    config = load_config().validate()
    asyncio.run(run_daily_menu(config))
"""
from .config import Config, SiteSelectors, load_config
from .exceptions import (
    ConfigError,
    DeliveryFailed,
    DiningBotError,
    InterceptionTimeout,
    MalformedPayload,
    NavigationFailed,
)
from .extractor import extract, parse_calories, strip_parentheticals
from .menu_models import Dish, MenuDigest, MenuDocument, StationDigest, StationSpec, parse_menu_document
from .render import compose_menu_message, render_digest
from .interception import CompletionSignal, InterceptionCoordinator
from .navigation import NavigationSequencer, NavigationState
from .orchestrator import RunOutcome, SessionOrchestrator, run_daily_menu
from .telegram import TelegramClient

__version__ = "1.0.0"

__all__ = [
    # Config
    "Config",
    "SiteSelectors",
    "load_config",
    # Errors
    "DiningBotError",
    "ConfigError",
    "MalformedPayload",
    "NavigationFailed",
    "DeliveryFailed",
    "InterceptionTimeout",
    # Extraction
    "MenuDocument",
    "MenuDigest",
    "StationDigest",
    "StationSpec",
    "Dish",
    "parse_menu_document",
    "extract",
    "strip_parentheticals",
    "parse_calories",
    "render_digest",
    "compose_menu_message",
    # Browser pipeline
    "CompletionSignal",
    "InterceptionCoordinator",
    "NavigationSequencer",
    "NavigationState",
    "SessionOrchestrator",
    "RunOutcome",
    "run_daily_menu",
    "TelegramClient",
]
