"""Plant shift definitions and the wall-clock shift resolver."""

from datetime import datetime, time

from ...shared.base import ValueObject
from .enums import ShiftCode


class ShiftDefinition(ValueObject):
    """One plant shift; `end_time` of 00:00 means midnight of the next day."""

    code: ShiftCode
    name: str
    start_time: time
    end_time: time

    def contains_hour(self, hour: int) -> bool:
        """Half-open membership test: start hour inclusive, end hour exclusive."""
        start = self.start_time.hour
        end = self.end_time.hour or 24
        return start <= hour < end


SHIFTS: tuple[ShiftDefinition, ...] = (
    ShiftDefinition(
        code=ShiftCode.A, name="A Vardiyası", start_time=time(8), end_time=time(16)
    ),
    ShiftDefinition(
        code=ShiftCode.B, name="B Vardiyası", start_time=time(16), end_time=time(0)
    ),
    ShiftDefinition(
        code=ShiftCode.C, name="C Vardiyası", start_time=time(0), end_time=time(8)
    ),
)


def resolve_shift(moment: int | time | datetime) -> ShiftCode:
    """
    Map a wall-clock moment to its shift code.

    Args:
        moment: An hour of day (0-23), a time, or a datetime already expressed
            in plant local time.

    Returns:
        The code of the shift that contains the hour. Boundary hours belong to
        the shift that starts at that hour.

    Raises:
        ValueError: If an integer hour is outside 0-23
    """
    hour = moment if isinstance(moment, int) else moment.hour
    if not 0 <= hour <= 23:
        raise ValueError(f"Hour must be within 0-23, got {hour}")

    for shift in SHIFTS:
        if shift.contains_hour(hour):
            return shift.code

    raise ValueError(f"No shift covers hour {hour}")


def list_shifts(now: datetime) -> tuple[tuple[ShiftDefinition, ...], ShiftCode]:
    """Return every shift definition together with the shift current at `now`."""
    return SHIFTS, resolve_shift(now)
