"""Request store: inserts and raw fetches against foms_requests."""
import logging
from datetime import datetime, timezone
from typing import Callable, Optional

from sqlalchemy.orm import Session

from foms.models.domain import FomsRequest
from foms.models.enums import StatusCode
from foms.services.search_text import refresh_search_text

logger = logging.getLogger(__name__)


def as_utc_naive(value: datetime) -> datetime:
    """Stored datetimes are naive UTC; convert aware values to match."""
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


class RequestStore:
    """
    Owns every insert into foms_requests.

    The clock is injectable so tests can control creation order.
    """

    def __init__(self, db: Session, clock: Callable[[], datetime] = datetime.utcnow):
        self.db = db
        self.clock = clock

    def get(self, request_id: str) -> Optional[FomsRequest]:
        return self.db.query(FomsRequest).filter(FomsRequest.id == request_id).first()

    def create_request(
        self,
        requested_datetime: datetime,
        requestor_name: str,
        requestor_org: str,
        requestor_phone: str,
        facility: str,
        description: str,
        contact: str,
        poc_phone: str,
        dfl_code: Optional[str] = None,
        restoration: Optional[str] = None,
        scheduled: Optional[str] = None
    ) -> str:
        """
        Create a new request in Requested status.

        create_datetime comes from the store's clock, never the caller.
        Returns the new id.
        """
        request = FomsRequest(
            create_datetime=self.clock(),
            requested_datetime=as_utc_naive(requested_datetime),
            requestor_name=requestor_name,
            requestor_org=requestor_org,
            requestor_phone=requestor_phone,
            facility=facility,
            description=description,
            contact=contact,
            poc_phone=poc_phone,
            dfl_code=dfl_code,
            restoration=restoration,
            scheduled=scheduled,
            status_code=StatusCode.REQUESTED.value
        )
        self.insert(request)

        logger.info("Created request %s for %s", request.id, request.facility)
        return request.id

    def insert(self, request: FomsRequest) -> FomsRequest:
        """Insert a fully built row, computing its search text first."""
        if request.create_datetime is None:
            request.create_datetime = self.clock()
        refresh_search_text(request)
        self.db.add(request)
        self.db.commit()
        self.db.refresh(request)
        return request
