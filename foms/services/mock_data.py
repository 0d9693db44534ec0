"""Demo data: five synthetic requests per catalog status."""
import logging
from datetime import datetime, timedelta
from typing import Callable, Optional

from sqlalchemy.orm import Session

from foms.auth import Identity
from foms.models.domain import FomsRequest
from foms.models.enums import StatusCode
from foms.services.errors import AuthorizationError
from foms.services.request_store import RequestStore
from foms.services.status_catalog import StatusCatalog

logger = logging.getLogger(__name__)

MOCK_COUNT_PER_STATUS = 5

MOCK_REQUESTOR_NAMES = [
    "Jane Smith",
    "Marcus Chen",
    "Elena Rodriguez",
    "David Park",
    "Sarah Williams",
]
MOCK_ORGS = [
    "North Valley EMS",
    "Metro Fire Rescue",
    "County Emergency Services",
    "Rural Health Coalition",
    "City Fire Dept",
]
MOCK_FACILITIES = [
    "Memorial Hospital ER",
    "Valley Medical Center",
    "Central Trauma Unit",
    "Westside Urgent Care",
    "Regional Health ER",
]
MOCK_DESCRIPTIONS = [
    "After-hours facility access for equipment pickup",
    "Scheduled training session in main bay",
    "Emergency drill coordination",
    "Quarterly inspection and maintenance",
    "Night shift handoff and supply restock",
]
MOCK_CONTACTS = [
    "Dr. Amy Foster",
    "Nurse James Lee",
    "Ops Manager Kate Brown",
    "Shift Lead Tom Davis",
    "Admin Maria Garcia",
]
MOCK_PHONE = "(555) 123-4567"
MOCK_DFL_CODES = ["DFL-100", "DFL-101", None, "DFL-102", None]
MOCK_DENIAL_REASONS = [
    "Insufficient documentation provided.",
    "Requested time slot not available.",
    "Facility at capacity for that date.",
    "Required approval from medical director missing.",
    "Duplicate request on file.",
]


def build_mock_request(status_code: str, index: int, now: datetime) -> FomsRequest:
    """
    Build one synthetic request. Pools are cycled by index.

    Requested times are spread back from now by index and status so the
    date filters have something to bite on.
    """
    i = index % len(MOCK_REQUESTOR_NAMES)
    hours_back = index + ord(status_code[0])
    return FomsRequest(
        create_datetime=now - timedelta(minutes=index),
        requested_datetime=now - timedelta(hours=hours_back),
        requestor_name=MOCK_REQUESTOR_NAMES[i],
        requestor_org=MOCK_ORGS[i],
        requestor_phone=MOCK_PHONE,
        facility=MOCK_FACILITIES[i],
        description=MOCK_DESCRIPTIONS[i],
        contact=MOCK_CONTACTS[i],
        poc_phone=MOCK_PHONE,
        dfl_code=MOCK_DFL_CODES[i],
        restoration="Yes" if index % 2 == 0 else None,
        scheduled="No" if index % 2 == 1 else None,
        status_code=status_code,
        denied_description=MOCK_DENIAL_REASONS[i] if status_code == StatusCode.DENIED.value else None
    )


def seed_mock_requests(
    db: Session,
    identity: Optional[Identity],
    clock: Callable[[], datetime] = datetime.utcnow
) -> int:
    """
    Insert MOCK_COUNT_PER_STATUS requests for every catalog status.

    Seeds the catalog first when it is empty. Requires a signed-in caller.
    Returns the number of requests inserted.
    """
    if identity is None:
        logger.warning("Refused mock data seeding: not signed in")
        raise AuthorizationError("Unauthorized: must be signed in to generate mock data.")

    catalog = StatusCatalog(db)
    if catalog.is_empty():
        catalog.seed()

    store = RequestStore(db, clock=clock)
    now = clock()
    inserted = 0
    for status in catalog.list():
        for _ in range(MOCK_COUNT_PER_STATUS):
            store.insert(build_mock_request(status.status_code, inserted, now))
            inserted += 1

    logger.info("Seeded %d mock requests for %s", inserted, identity.subject)
    return inserted
