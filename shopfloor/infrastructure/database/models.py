"""
SQLModel table definitions for the shop-floor read side.

The tables mirror the ERP records the service reads: machine resources,
employees with their current station, production work orders, the pause
reason catalogue and the activity user-defined table. Activity rows keep the
ERP column layout, with the process type stored as its ERP code and the event
time split into a calendar date and an HHMM integer.
"""

from datetime import date

from sqlmodel import Field, SQLModel


class MachineRecord(SQLModel, table=True):
    """Machine resource table."""

    __tablename__ = "machines"

    res_code: str = Field(primary_key=True, max_length=50)
    res_name: str = Field(max_length=100, index=True)
    res_type: str = Field(default="M", max_length=1)
    default_emp: str | None = Field(None, max_length=50)
    second_emp: str | None = Field(None, max_length=254)


class WorkerRecord(SQLModel, table=True):
    """Employee table with login code and current station."""

    __tablename__ = "workers"

    emp_id: str = Field(primary_key=True, max_length=50)
    first_name: str = Field(max_length=50)
    last_name: str = Field(default="", max_length=50)
    login_code: str = Field(max_length=50, unique=True, index=True)
    main_station: str | None = Field(None, max_length=50)
    active: bool = Field(default=True, index=True)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


class WorkOrderRecord(SQLModel, table=True):
    """Production order table."""

    __tablename__ = "work_orders"

    doc_entry: str = Field(primary_key=True, max_length=50)
    doc_num: str | None = Field(None, max_length=50)
    item_code: str | None = Field(None, max_length=50)


class PauseReasonRecord(SQLModel, table=True):
    """Pause reason catalogue table."""

    __tablename__ = "pause_reasons"

    code: str = Field(primary_key=True, max_length=50)
    name: str = Field(max_length=100)


class ActivityEventRecord(SQLModel, table=True):
    """
    Activity log table.

    `doc_entry` is the autoincrement row number and orders events that share
    a timestamp. `code` is the event identity exposed to clients.
    """

    __tablename__ = "activity_events"

    doc_entry: int | None = Field(default=None, primary_key=True)
    code: str = Field(max_length=50, unique=True, index=True)
    name: str = Field(max_length=100)
    u_work_order: str = Field(max_length=50, index=True)
    u_res_code: str = Field(max_length=50)
    u_emp_id: str = Field(max_length=50, index=True)
    u_proc_type: str = Field(max_length=10)
    u_start: date = Field(index=True)
    u_start_time: int = Field(ge=0, le=2359)
    u_break_code: str | None = Field(None, max_length=50)
    u_aciklama: str | None = Field(None, max_length=254)
