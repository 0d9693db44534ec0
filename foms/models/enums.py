"""Enums for FOMS - the valid status codes and listing strategies."""
from enum import Enum


class StatusCode(str, Enum):
    """The four request statuses. No other codes are allowed on a request."""
    REQUESTED = "R"
    DENIED = "D"
    CANCELLED = "C"
    APPROVED = "A"

    @property
    def label(self) -> str:
        return STATUS_LABELS[self]


# Seed order for the status catalog
STATUS_LABELS = {
    StatusCode.REQUESTED: "Requested",
    StatusCode.DENIED: "Denied",
    StatusCode.CANCELLED: "Cancelled",
    StatusCode.APPROVED: "Approved",
}


class SearchStrategy(str, Enum):
    """How a request listing is retrieved, chosen from the filters present."""
    SEARCH = "search"
    STATUS_AND_RANGE = "status_and_range"
    STATUS_ONLY = "status_only"
    RANGE_ONLY = "range_only"
    DEFAULT = "default"


BADGE_VARIANTS = {
    StatusCode.REQUESTED.value: "requested",
    StatusCode.APPROVED.value: "approved",
    StatusCode.DENIED.value: "denied",
    StatusCode.CANCELLED.value: "cancelled",
}


def status_badge_variant(status_code: str) -> str:
    """Badge style for a status code; unknown codes get the neutral style."""
    return BADGE_VARIANTS.get(status_code, "secondary")
