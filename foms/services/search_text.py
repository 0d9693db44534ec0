"""
Search-text denormalization.

A request's textual fields are concatenated into one blob that the keyword
search runs against. Every write path that touches one of these fields
must go through refresh_search_text so the blob never goes stale.
"""
from typing import Optional

from foms.models.domain import FomsRequest

# Field order of the blob
SEARCH_TEXT_FIELDS = (
    "requestor_name",
    "requestor_org",
    "requestor_phone",
    "facility",
    "description",
    "contact",
    "dfl_code",
    "restoration",
    "scheduled",
    "denied_description",
)


def build_search_text(
    requestor_name: str,
    requestor_org: str,
    requestor_phone: str,
    facility: str,
    description: str,
    contact: str,
    dfl_code: Optional[str] = None,
    restoration: Optional[str] = None,
    scheduled: Optional[str] = None,
    denied_description: Optional[str] = None
) -> str:
    """
    Join the trimmed non-blank fields with single spaces, in fixed order.

    Deterministic: the same inputs always produce the same string.
    """
    parts = [
        requestor_name,
        requestor_org,
        requestor_phone,
        facility,
        description,
        contact,
        dfl_code,
        restoration,
        scheduled,
        denied_description,
    ]
    return " ".join(part.strip() for part in parts if part and part.strip())


def refresh_search_text(request: FomsRequest) -> str:
    """Recompute and store the blob from the row's current field values."""
    request.search_text = build_search_text(
        **{field: getattr(request, field) for field in SEARCH_TEXT_FIELDS}
    )
    return request.search_text
