from collections.abc import Callable
from datetime import datetime

from shopfloor.core.config import settings

Clock = Callable[[], datetime]


def plant_now() -> datetime:
    """Current time as an aware datetime in the plant time zone."""
    return datetime.now(settings.plant_tz)
