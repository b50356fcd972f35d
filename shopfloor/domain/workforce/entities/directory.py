"""Directory records: workers, machines, work orders and pause reasons."""

from pydantic import Field

from ...shared.base import ValueObject

IDLE_POOL_MACHINE_ID = "UNASSIGNED"
IDLE_POOL_MACHINE_NAME = "Boşta"


def parse_assignee_codes(raw: str | None) -> frozenset[str]:
    """
    Parse a comma-separated login code list into a set.

    Elements are trimmed and empty elements dropped, so membership is an
    exact element match: "20" is in "20, 200,300" while "2" is not.
    """
    if not raw:
        return frozenset()
    return frozenset(code.strip() for code in raw.split(",") if code.strip())


class Worker(ValueObject):
    """
    A shop-floor worker.

    `login_code` is the credential used for machine authorization and is
    distinct from `worker_id`. `assigned_machine_id` is the station the worker
    is currently placed on by plant administration; None means idle pool.
    Inactive workers have left the plant and are kept only so that their
    past activity still resolves.
    """

    worker_id: str = Field(min_length=1)
    full_name: str
    login_code: str = Field(min_length=1)
    assigned_machine_id: str | None = None
    active: bool = True

    @property
    def is_idle(self) -> bool:
        return not self.assigned_machine_id


class Machine(ValueObject):
    """A production resource with its default and secondary assignees."""

    machine_id: str = Field(min_length=1)
    machine_name: str
    default_assignee_code: str | None = None
    secondary_assignee_codes: str | None = None

    @property
    def secondary_codes(self) -> frozenset[str]:
        return parse_assignee_codes(self.secondary_assignee_codes)


class WorkOrder(ValueObject):
    """Minimal work order reference used to validate activity actions."""

    work_order_id: str
    doc_num: str | None = None
    item_code: str | None = None


class PauseReason(ValueObject):
    """A predefined reason a worker gives when stopping work."""

    code: str
    name: str
