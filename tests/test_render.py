import json

from diningbot_core.extractor import extract
from diningbot_core.menu_models import Dish, MenuDigest, StationDigest, parse_menu_document
from diningbot_core.render import (
    DEFAULT_GREETING,
    compose_menu_message,
    render_digest,
    render_dish,
    render_station,
)

from conftest import DINNER_PAYLOAD, STATIONS, menu_payload


def test_render_dinner_scenario():
    digest = extract(parse_menu_document(json.dumps(DINNER_PAYLOAD)), "Dinner", STATIONS)
    assert render_digest(digest) == (
        "<b>Home Zone 1 (450 cal)</b>\n"
        "— Grilled Chicken (450 cal)\n"
        "\n"
        "<b>True Balance (300 cal)</b>\n"
        "— Rice Bowl (300 cal)\n"
        "\n"
        "<b>Soup Station</b>\n"
    )


def test_render_empty_digest_lists_every_station():
    payload = menu_payload(periods=[("P0", "Lunch")])
    digest = extract(parse_menu_document(json.dumps(payload)), "Dinner", STATIONS)
    assert render_digest(digest) == (
        "<b>Home Zone 1</b>\n\n<b>True Balance</b>\n\n<b>Soup Station</b>\n"
    )


def test_soup_station_header_never_has_total():
    station = StationDigest("Soup Station", show_total=False, total_calories=210,
                            dishes=[Dish("Minestrone", "210", 210)])
    assert render_station(station) == "<b>Soup Station</b>\n— Minestrone (210 cal)\n"


def test_dish_without_calorie_text_has_no_suffix():
    assert render_dish(Dish("Bread")) == "— Bread"


def test_non_numeric_calories_shown_as_text():
    assert render_dish(Dish("Tacos", "varies")) == "— Tacos (varies cal)"


def test_names_are_html_escaped():
    station = StationDigest("Mac & Cheese <Bar>", dishes=[Dish("Fish & Chips", "500", 500)],
                            total_calories=500)
    assert render_station(station) == (
        "<b>Mac &amp; Cheese &lt;Bar&gt; (500 cal)</b>\n— Fish &amp; Chips (500 cal)\n"
    )


def test_compose_menu_message_prefixes_greeting():
    digest = MenuDigest("Dinner", stations=[StationDigest("Home Zone 1")])
    message = compose_menu_message(digest)
    assert message == f"{DEFAULT_GREETING}\n\n<b>Home Zone 1</b>\n"
    assert compose_menu_message(digest, "Hi").startswith("Hi\n\n")
