"""ASGI app serving food lookup, nutrition scoring and meal logging.

The catalog source and meal backend are wired from environment settings.
"""

from health_tracker.api.app import create_app
from health_tracker.containers import build_container

app = create_app(build_container())
