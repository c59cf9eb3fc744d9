"""Jinja2 rendering of dashboard fragments."""
from functools import lru_cache
from typing import List, Union

from jinja2 import Environment, FileSystemLoader, select_autoescape

from dashboard.config import TEMPLATES_DIR
from dashboard.models.weather import CurrentConditions, ForecastDay
from dashboard.services.rendering import (
    format_number,
    get_weather_emoji_from_code,
    get_weather_icon,
)


@lru_cache()
def get_environment() -> Environment:
    """Get cached template environment."""
    env = Environment(
        loader=FileSystemLoader(str(TEMPLATES_DIR)),
        autoescape=select_autoescape(["html"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )
    env.filters["num"] = format_number
    return env


def render_conditions_panel(current: CurrentConditions, aqi: Union[int, str]) -> str:
    """Main conditions panel for the response element."""
    return get_environment().get_template("panel.html").render(
        current=current,
        icon=get_weather_icon(current.condition_text),
        aqi=aqi,
    )


def render_message(message: str) -> str:
    """Fixed error or status message block."""
    return get_environment().get_template("message.html").render(message=message)


def render_forecast_cards(days: List[ForecastDay]) -> str:
    """Cards for the 7-day forecast strip."""
    cards = [
        {
            "icon": get_weather_emoji_from_code(day.weather_code),
            "weekday": day.weekday,
            "high": f"{day.high_c:.1f}°C",
            "low": f"{day.low_c:.1f}°C",
        }
        for day in days
    ]
    return get_environment().get_template("forecast.html").render(cards=cards)


def render_forecast_unavailable(message: str) -> str:
    return get_environment().get_template("forecast_unavailable.html").render(message=message)
