"""
Create the read-side tables and seed the pause reason catalogue.

Run with `python -m shopfloor.scripts.init_db`. Existing rows are left alone.
"""

from sqlmodel import Session

from shopfloor.core.db import engine, init_db
from shopfloor.core.observability import get_logger, setup_structured_logging
from shopfloor.infrastructure.database.models import PauseReasonRecord

logger = get_logger(__name__)

DEFAULT_PAUSE_REASONS = {
    "1": "Mola",
    "2": "Yemek",
    "3": "Arıza",
    "4": "Malzeme bekleme",
    "5": "Kalıp / takım değişimi",
    "6": "Kalite kontrol",
}


def seed_pause_reasons(session: Session) -> int:
    added = 0
    for code, name in DEFAULT_PAUSE_REASONS.items():
        if session.get(PauseReasonRecord, code) is None:
            session.add(PauseReasonRecord(code=code, name=name))
            added += 1
    session.commit()
    return added


def main() -> None:
    setup_structured_logging()
    init_db(engine)
    with Session(engine) as session:
        added = seed_pause_reasons(session)
    logger.info("Database initialized", pause_reasons_added=added)


if __name__ == "__main__":
    main()
