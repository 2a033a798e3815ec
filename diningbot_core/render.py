#!/usr/bin/env python3
"""Render a MenuDigest as Telegram HTML text"""

import html
from typing import List

from .menu_models import Dish, MenuDigest, StationDigest

DEFAULT_GREETING = "Good afternoon! Here are the dishes for today:"
NO_MEALS_NOTICE = "No meals available"


def render_dish(dish: Dish) -> str:
    line = f"— {html.escape(dish.name)}"
    if dish.calories_text:
        line += f" ({html.escape(dish.calories_text)} cal)"
    return line


def render_station(station: StationDigest) -> str:
    header = html.escape(station.name)
    total = station.display_total
    if total is not None:
        header += f" ({total} cal)"
    lines: List[str] = [f"<b>{header}</b>"]
    lines.extend(render_dish(dish) for dish in station.dishes)
    return "\n".join(lines) + "\n"


def render_digest(digest: MenuDigest) -> str:
    """Station blocks in digest order, separated by a blank line"""
    return "\n".join(render_station(station) for station in digest.stations)


def compose_menu_message(digest: MenuDigest, greeting: str = DEFAULT_GREETING) -> str:
    return f"{greeting}\n\n{render_digest(digest)}"
