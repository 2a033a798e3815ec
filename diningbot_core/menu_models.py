"""
Menu document model

Typed view of the payload returned by the dining site's internal
``GetMenus`` call, plus the normalized digest produced from it.

Wire shape::

    {"Menu": {
        "MenuPeriods":  [{"PeriodId": "...", "Name": "Dinner"}],
        "MenuStations": [{"PeriodId": "...", "StationId": "...", "Name": "..."}],
        "MenuProducts": [{"PeriodId": "...", "StationId": "...",
                          "Product": {"MarketingName": "...",
                                      "ShortDescription": "...",
                                      "Calories": "450"}}]
    }}

IDs are opaque strings scoped per period. Calories arrive as strings and may
be empty or non-numeric.
"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union

from .exceptions import MalformedPayload


@dataclass(frozen=True)
class MenuPeriod:
    period_id: str
    name: str


@dataclass(frozen=True)
class MenuStation:
    period_id: str
    station_id: str
    name: str


@dataclass(frozen=True)
class Product:
    marketing_name: str
    short_description: str
    calories: str


@dataclass(frozen=True)
class MenuProduct:
    period_id: str
    station_id: str
    product: Product


@dataclass(frozen=True)
class MenuDocument:
    """One intercepted menu response. Immutable once parsed."""
    periods: Tuple[MenuPeriod, ...] = ()
    stations: Tuple[MenuStation, ...] = ()
    products: Tuple[MenuProduct, ...] = ()


@dataclass(frozen=True)
class StationSpec:
    """An allow-listed station and whether its header carries a calorie total"""
    name: str
    show_total: bool = True


@dataclass(frozen=True)
class Dish:
    name: str
    calories_text: str = ""
    calories: Optional[int] = None


@dataclass
class StationDigest:
    name: str
    show_total: bool = True
    dishes: List[Dish] = field(default_factory=list)
    total_calories: int = 0

    @property
    def display_total(self) -> Optional[int]:
        """Total to show next to the station header, or None"""
        if self.show_total and self.total_calories > 0:
            return self.total_calories
        return None


@dataclass
class MenuDigest:
    period_name: str
    stations: List[StationDigest] = field(default_factory=list)

    def station(self, name: str) -> Optional[StationDigest]:
        for station in self.stations:
            if station.name == name:
                return station
        return None

    @property
    def dish_count(self) -> int:
        return sum(len(s.dishes) for s in self.stations)


def _text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, (int, float)):
        return str(value)
    raise MalformedPayload(f"Expected a scalar value, got {type(value).__name__}")


def _entries(menu: Dict[str, Any], key: str) -> List[Dict[str, Any]]:
    raw = menu.get(key)
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise MalformedPayload(f"'Menu.{key}' is not a list")
    for idx, entry in enumerate(raw):
        if not isinstance(entry, dict):
            raise MalformedPayload(f"'Menu.{key}[{idx}]' is not an object")
    return raw


def _product(raw: Any) -> Product:
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise MalformedPayload("'Product' is not an object")
    return Product(
        marketing_name=_text(raw.get("MarketingName")),
        short_description=_text(raw.get("ShortDescription")),
        calories=_text(raw.get("Calories")),
    )


def parse_menu_document(payload: Union[bytes, str]) -> MenuDocument:
    """
    Parse a raw menu payload.

    Args:
        payload: Response body as bytes or text

    Returns:
        MenuDocument with periods, stations and products in document order

    Raises:
        MalformedPayload: if the payload is not JSON or lacks the ``Menu`` envelope
    """
    if isinstance(payload, (bytes, bytearray)):
        try:
            payload = payload.decode("utf-8")
        except UnicodeDecodeError as e:
            raise MalformedPayload(f"Payload is not valid UTF-8: {e}") from e
    try:
        data = json.loads(payload)
    except (TypeError, ValueError) as e:
        raise MalformedPayload(f"Payload is not valid JSON: {e}") from e

    if not isinstance(data, dict):
        raise MalformedPayload("Payload is not a JSON object")
    menu = data.get("Menu")
    if not isinstance(menu, dict):
        raise MalformedPayload("Payload is missing the 'Menu' object")

    periods = tuple(
        MenuPeriod(period_id=_text(p.get("PeriodId")), name=_text(p.get("Name")))
        for p in _entries(menu, "MenuPeriods")
    )
    stations = tuple(
        MenuStation(
            period_id=_text(s.get("PeriodId")),
            station_id=_text(s.get("StationId")),
            name=_text(s.get("Name")),
        )
        for s in _entries(menu, "MenuStations")
    )
    products = tuple(
        MenuProduct(
            period_id=_text(p.get("PeriodId")),
            station_id=_text(p.get("StationId")),
            product=_product(p.get("Product")),
        )
        for p in _entries(menu, "MenuProducts")
    )
    return MenuDocument(periods=periods, stations=stations, products=products)
