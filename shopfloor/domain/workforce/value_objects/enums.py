"""Domain enums for workforce tracking."""

from enum import Enum


class ActivityKind(str, Enum):
    """Kind of a recorded worker action on a work order."""

    START = "START"
    STOP = "STOP"
    RESUME = "RESUME"
    FINISH = "FINISH"

    @property
    def erp_code(self) -> str:
        """Process type code stored in the ERP activity table."""
        return _ERP_CODES[self]

    @property
    def label_tr(self) -> str:
        return _LABELS[self][0]

    @property
    def label_en(self) -> str:
        return _LABELS[self][1]

    @classmethod
    def parse(cls, value: str | None) -> "ActivityKind | None":
        """Return the matching kind, or None for unknown values."""
        if value is None:
            return None
        try:
            return cls(value)
        except ValueError:
            return None

    @classmethod
    def from_erp_code(cls, code: str) -> "ActivityKind | None":
        for kind, erp_code in _ERP_CODES.items():
            if erp_code == code:
                return kind
        return None


_ERP_CODES = {
    ActivityKind.START: "BAS",
    ActivityKind.STOP: "DUR",
    ActivityKind.RESUME: "DEV",
    ActivityKind.FINISH: "BIT",
}

_LABELS = {
    ActivityKind.START: ("Başla", "Start"),
    ActivityKind.STOP: ("Dur", "Stop"),
    ActivityKind.RESUME: ("Devam", "Resume"),
    ActivityKind.FINISH: ("Bitir", "Finish"),
}


class ActivityAction(str, Enum):
    """Action a worker requests; each one appends an event of one kind."""

    START = "start"
    STOP = "stop"
    RESUME = "resume"
    FINISH = "finish"

    @property
    def kind(self) -> ActivityKind:
        return ActivityKind[self.name]


class WorkerStatus(str, Enum):
    """Bucket a worker falls into on a machine card."""

    ASSIGNED = "assigned"
    PAUSED = "paused"
    AVAILABLE = "available"


class ShiftCode(str, Enum):
    """Plant shift codes."""

    A = "A"
    B = "B"
    C = "C"


class ShiftFilter(str, Enum):
    """Shift filter accepted by the team view."""

    A = "A"
    B = "B"
    C = "C"
    ALL = "all"
