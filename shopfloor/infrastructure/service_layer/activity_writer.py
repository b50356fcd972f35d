"""Activity event writer backed by the ERP Service Layer."""

import uuid
from datetime import tzinfo

from shopfloor.core.observability import get_logger
from shopfloor.domain.shared.exceptions import GatewayError, WriteRejectedError
from shopfloor.domain.workforce.entities.activity_event import (
    ActivityEvent,
    ActivityEventDraft,
)
from shopfloor.domain.workforce.repositories import ActivityEventWriter
from shopfloor.infrastructure.erp_encoding import encode_payload

from .client import ServiceLayerClient

logger = get_logger(__name__)


class ServiceLayerActivityWriter(ActivityEventWriter):
    """Appends activity events as rows of the ERP activity user-defined object."""

    def __init__(self, client: ServiceLayerClient, entity: str, tz: tzinfo):
        self._client = client
        self._entity = entity
        self._tz = tz

    async def append(self, draft: ActivityEventDraft) -> ActivityEvent:
        code = str(uuid.uuid4())
        payload = encode_payload(draft, code, self._tz)
        try:
            created = await self._client.create(self._entity, payload)
        except GatewayError as e:
            logger.error(
                "activity_write_rejected",
                code=code,
                status_code=e.status_code,
                error=e.message,
            )
            raise WriteRejectedError(e.message, e.status_code) from e

        return ActivityEvent.from_draft(
            draft,
            event_id=str(created.get("Code") or code),
            sequence=int(created.get("DocEntry") or 0),
        )
