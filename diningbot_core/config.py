#!/usr/bin/env python3
"""
Application configuration

Built once at startup by ``load_config`` (``.env`` + environment, then any
explicit overrides such as CLI flags) and passed by reference to the
orchestrator, delivery client and HTTP listener.
"""

import os
from dataclasses import dataclass, replace
from typing import Any, Optional, Tuple

from dotenv import find_dotenv, load_dotenv

from .exceptions import ConfigError
from .menu_models import StationSpec

BROWSER_MODES = ("host", "docker", "remote")

DEFAULT_SITE_URL = "https://asu.campusdish.com/DiningVenues/Tempe-Campus/Barrett-Dining-Center"
DEFAULT_MENU_API_PATTERN = "https://asu.campusdish.com/api/menu/GetMenus**"
DEFAULT_NO_MENU_TEXT = "There are currently no menus available for this meal period and date."
DEFAULT_STATIONS = "Home Zone 1,True Balance,Soup Station"
DEFAULT_NO_TOTAL_STATIONS = "Soup Station"


@dataclass(frozen=True)
class SiteSelectors:
    """CSS selectors for the meal-period controls on the dining page"""
    menu_wrapper: str = ".MenuWrapperDaily"
    meal_selection_button: str = "button.DateMealFilterButton"
    meal_input: str = "#aria-meal-input"
    done_button: str = ".Done"


@dataclass(frozen=True)
class Config:
    """Application configuration"""
    telegram_bot_token: str = ""
    personal_id: Optional[int] = None
    browser_mode: str = "host"
    as_server: bool = False
    port: int = 8080
    site_url: str = DEFAULT_SITE_URL
    menu_api_pattern: str = DEFAULT_MENU_API_PATTERN
    period_name: str = "Dinner"
    stations: Tuple[StationSpec, ...] = (
        StationSpec("Home Zone 1"),
        StationSpec("True Balance"),
        StationSpec("Soup Station", show_total=False),
    )
    no_menu_text: str = DEFAULT_NO_MENU_TEXT
    selectors: SiteSelectors = SiteSelectors()
    headless: bool = True
    chromium_path: str = "/usr/bin/chromium-browser"
    remote_browser_url: str = "http://localhost:9222"
    element_timeout_ms: int = 15000
    settle_timeout_ms: int = 30000
    interception_timeout: float = 60.0
    max_attempts: int = 5
    telegram_api_base: str = "https://api.telegram.org"
    debug: bool = False

    def validate(self) -> "Config":
        if not self.telegram_bot_token:
            raise ConfigError("Telegram bot token is required")
        if self.personal_id is None:
            raise ConfigError("Telegram personal ID is required")
        if self.browser_mode not in BROWSER_MODES:
            raise ConfigError(f"Invalid browser mode: {self.browser_mode}")
        if self.max_attempts < 1:
            raise ConfigError("max_attempts must be at least 1")
        if not self.stations:
            raise ConfigError("At least one station is required")
        return self

    def with_overrides(self, **overrides: Any) -> "Config":
        """Copy with every non-None override applied"""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


def _bool(value: str) -> bool:
    return value.strip().lower() in ("true", "1", "yes")


def _int(name: str, value: Optional[str]) -> Optional[int]:
    if value is None or value.strip() == "":
        return None
    try:
        return int(value)
    except ValueError as e:
        raise ConfigError(f"{name} must be an integer, got {value!r}") from e


def _float(name: str, value: str) -> float:
    try:
        return float(value)
    except ValueError as e:
        raise ConfigError(f"{name} must be a number, got {value!r}") from e


def parse_stations(names: str, no_total: str = "") -> Tuple[StationSpec, ...]:
    """Build the station allow-list from comma-separated names"""
    hidden = {n.strip() for n in no_total.split(",") if n.strip()}
    return tuple(
        StationSpec(name, show_total=name not in hidden)
        for name in (n.strip() for n in names.split(","))
        if name
    )


def load_config(**overrides: Any) -> Config:
    """
    Read configuration from ``.env`` and the process environment.

    Args:
        **overrides: Field values that take precedence (None means "not given")

    Returns:
        Config (not yet validated)
    """
    load_dotenv(find_dotenv(usecwd=True))
    env = os.getenv
    cfg = Config(
        telegram_bot_token=env("TELEGRAM_BOT_TOKEN", ""),
        personal_id=_int("TELEGRAM_PERSONAL_ID", env("TELEGRAM_PERSONAL_ID")),
        browser_mode=env("BROWSER_MODE", "host").lower(),
        as_server=_bool(env("AS_SERVER", "false")),
        port=_int("PORT", env("PORT")) or 8080,
        site_url=env("DININGBOT_SITE_URL", DEFAULT_SITE_URL),
        menu_api_pattern=env("DININGBOT_MENU_API_PATTERN", DEFAULT_MENU_API_PATTERN),
        period_name=env("DININGBOT_PERIOD", "Dinner"),
        stations=parse_stations(
            env("DININGBOT_STATIONS", DEFAULT_STATIONS),
            env("DININGBOT_NO_TOTAL_STATIONS", DEFAULT_NO_TOTAL_STATIONS),
        ),
        no_menu_text=env("DININGBOT_NO_MENU_TEXT", DEFAULT_NO_MENU_TEXT),
        headless=_bool(env("DININGBOT_HEADLESS", "true")),
        chromium_path=env("DININGBOT_CHROMIUM_PATH", "/usr/bin/chromium-browser"),
        remote_browser_url=env("DININGBOT_REMOTE_BROWSER_URL", "http://localhost:9222"),
        element_timeout_ms=_int("DININGBOT_ELEMENT_TIMEOUT_MS", env("DININGBOT_ELEMENT_TIMEOUT_MS")) or 15000,
        settle_timeout_ms=_int("DININGBOT_SETTLE_TIMEOUT_MS", env("DININGBOT_SETTLE_TIMEOUT_MS")) or 30000,
        interception_timeout=_float("DININGBOT_INTERCEPTION_TIMEOUT", env("DININGBOT_INTERCEPTION_TIMEOUT", "60")),
        max_attempts=_int("DININGBOT_MAX_ATTEMPTS", env("DININGBOT_MAX_ATTEMPTS")) or 5,
        telegram_api_base=env("TELEGRAM_API_BASE", "https://api.telegram.org"),
        debug=_bool(env("DININGBOT_DEBUG", "false")),
    )
    return cfg.with_overrides(**overrides)
