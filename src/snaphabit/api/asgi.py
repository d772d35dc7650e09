"""ASGI entrypoint for the SnapHabit API."""

from snaphabit.api.app import create_app
from snaphabit.containers import build_container

app = create_app(build_container())
