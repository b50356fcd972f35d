"""
Authorization Resolver

Decides which machines a worker may act on. A worker is authorized for a
machine when their login code is the machine's default assignee or an exact
element of its secondary assignee list. Both query directions below reuse the
same predicate.

Authorization is independent of current assignment: who may use a machine is
not who is stationed there right now (`Worker.assigned_machine_id`).
"""

from ...shared.base import ValueObject
from ..entities.directory import Machine, Worker
from .collation import SortKey, default_sort_key


class AuthorizedMachine(ValueObject):
    machine: Machine
    is_default: bool


class AuthorizedWorker(ValueObject):
    worker: Worker
    is_default: bool


def is_default_assignee(login_code: str, machine: Machine) -> bool:
    return bool(machine.default_assignee_code) and (
        login_code.strip() == machine.default_assignee_code.strip()
    )


def is_authorized(login_code: str, machine: Machine) -> bool:
    """Membership predicate shared by every authorization query."""
    code = login_code.strip()
    if not code:
        return False
    return is_default_assignee(code, machine) or code in machine.secondary_codes


def machines_for_worker(
    login_code: str, machines: list[Machine], sort_key: SortKey = default_sort_key
) -> list[AuthorizedMachine]:
    """All machines a worker may use, default machine first, then by name."""
    authorized = [
        AuthorizedMachine(
            machine=machine, is_default=is_default_assignee(login_code, machine)
        )
        for machine in machines
        if is_authorized(login_code, machine)
    ]
    authorized.sort(
        key=lambda item: (
            not item.is_default,
            sort_key(item.machine.machine_name),
            item.machine.machine_id,
        )
    )
    return authorized


def workers_for_machine(
    machine: Machine, workers: list[Worker], sort_key: SortKey = default_sort_key
) -> list[AuthorizedWorker]:
    """All workers authorized for a machine, default assignee first, then by name."""
    authorized = [
        AuthorizedWorker(
            worker=worker, is_default=is_default_assignee(worker.login_code, machine)
        )
        for worker in workers
        if is_authorized(worker.login_code, machine)
    ]
    authorized.sort(
        key=lambda item: (
            not item.is_default,
            sort_key(item.worker.full_name),
            item.worker.worker_id,
        )
    )
    return authorized
