"""
Menu extraction

Folds a MenuDocument into a per-station digest for one meal period.
Pure transformation: no I/O, no formatting.
"""

import logging
import re
from typing import Dict, Optional, Sequence

from .menu_models import Dish, MenuDigest, MenuDocument, StationDigest, StationSpec

logger = logging.getLogger(__name__)

# Non-nested, greedy to the last ")" on the line.
_PARENTHETICAL = re.compile(r"\(.*\)")
_CALORIES = re.compile(r"\d+", re.ASCII)


def strip_parentheticals(name: str) -> str:
    """Remove ``(...)`` annotations from a dish name and trim whitespace"""
    return _PARENTHETICAL.sub("", name).strip()


def parse_calories(text: str) -> Optional[int]:
    """Parse a calorie string as a non-negative integer; None if it isn't one"""
    if _CALORIES.fullmatch(text or ""):
        return int(text)
    return None


def resolve_period_id(document: MenuDocument, period_name: str) -> Optional[str]:
    """ID of the first period named exactly ``period_name``, or None if absent"""
    for period in document.periods:
        if period.name == period_name:
            return period.period_id
    return None


def build_station_registry(
    document: MenuDocument,
    period_id: str,
    allowed_names: Sequence[str],
) -> Dict[str, str]:
    """Map station id -> allow-listed station name for one period.

    Rows are applied in document order, so a later row for the same id wins.
    """
    allowed = set(allowed_names)
    registry: Dict[str, str] = {}
    for station in document.stations:
        if station.period_id != period_id:
            continue
        if station.name in allowed:
            registry[station.station_id] = station.name
    return registry


def extract(
    document: MenuDocument,
    target_period_name: str,
    station_allow_list: Sequence[StationSpec],
) -> MenuDigest:
    """
    Build the digest for ``target_period_name``.

    Args:
        document: Parsed menu payload
        target_period_name: Period to report on (exact, case-sensitive match)
        station_allow_list: Stations to report, in output order

    Returns:
        MenuDigest with one entry per allow-listed station, even when empty
    """
    digest = MenuDigest(period_name=target_period_name)
    by_name: Dict[str, StationDigest] = {}
    for spec in station_allow_list:
        if spec.name in by_name:
            continue
        station = StationDigest(name=spec.name, show_total=spec.show_total)
        by_name[spec.name] = station
        digest.stations.append(station)

    period_id = resolve_period_id(document, target_period_name)
    if period_id is None:
        # Site may not have published the period yet; report every station empty.
        logger.info(f"No period named '{target_period_name}' in menu document")
        return digest
    logger.debug(f"Resolved period '{target_period_name}' to id {period_id}")

    registry = build_station_registry(
        document, period_id, [spec.name for spec in station_allow_list]
    )

    for entry in document.products:
        if entry.period_id != period_id:
            continue
        station_name = registry.get(entry.station_id)
        if station_name is None:
            continue
        calories = parse_calories(entry.product.calories)
        station = by_name[station_name]
        station.dishes.append(Dish(
            name=strip_parentheticals(entry.product.marketing_name),
            calories_text=entry.product.calories.strip(),
            calories=calories,
        ))
        station.total_calories += calories or 0

    logger.info(f"Extracted {digest.dish_count} dishes across {len(digest.stations)} stations")
    return digest
