"""ASGI entrypoint for the city wellbeing API."""

from city_wellbeing.api.app import create_app
from city_wellbeing.containers import build_container

app = create_app(build_container())
