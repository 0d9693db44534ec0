"""
Request listing.

Picks one of five retrieval strategies from the filters present and returns
one keyset-paginated page, each row enriched with its status label.

Strategy priority (first match wins):
1. SEARCH            - non-blank keyword query, optionally narrowed to a status
2. STATUS_AND_RANGE  - status plus at least one requested-date bound
3. STATUS_ONLY       - status alone
4. RANGE_ONLY        - requested-date bound(s) alone
5. DEFAULT           - newest created first
"""
import base64
import binascii
import hashlib
import json
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, List, Optional, Tuple

from sqlalchemy import and_, or_
from sqlalchemy.orm import Query, Session

from foms.models.domain import FomsRequest
from foms.models.enums import SearchStrategy, status_badge_variant
from foms.services.errors import ValidationError
from foms.services.request_store import as_utc_naive
from foms.services.status_catalog import StatusCatalog

logger = logging.getLogger(__name__)

DEFAULT_PAGE_SIZE = 12


@dataclass
class ListFilters:
    status_code: Optional[str] = None
    date_from: Optional[datetime] = None
    date_to: Optional[datetime] = None
    search_query: Optional[str] = None

    @property
    def has_search(self) -> bool:
        return bool(self.search_query and self.search_query.strip())

    @property
    def has_status(self) -> bool:
        return self.status_code is not None

    @property
    def has_date_range(self) -> bool:
        return self.date_from is not None or self.date_to is not None

    def fingerprint(self) -> str:
        """Short digest of the filter values, as the listing interprets them."""
        values = [
            self.status_code,
            as_utc_naive(self.date_from).isoformat() if self.date_from is not None else None,
            as_utc_naive(self.date_to).isoformat() if self.date_to is not None else None,
            " ".join(self.search_query.lower().split()) if self.has_search else None,
        ]
        raw = json.dumps(values).encode("utf-8")
        return hashlib.sha256(raw).hexdigest()[:16]


def select_strategy(filters: ListFilters) -> SearchStrategy:
    """Pure: which retrieval strategy the filters call for."""
    if filters.has_search:
        return SearchStrategy.SEARCH
    if filters.has_status and filters.has_date_range:
        return SearchStrategy.STATUS_AND_RANGE
    if filters.has_status:
        return SearchStrategy.STATUS_ONLY
    if filters.has_date_range:
        return SearchStrategy.RANGE_ONLY
    return SearchStrategy.DEFAULT


# Column each strategy orders by (descending, id as tie-breaker)
SORT_COLUMNS = {
    SearchStrategy.SEARCH: FomsRequest.create_datetime,
    SearchStrategy.STATUS_AND_RANGE: FomsRequest.requested_datetime,
    SearchStrategy.STATUS_ONLY: FomsRequest.requested_datetime,
    SearchStrategy.RANGE_ONLY: FomsRequest.requested_datetime,
    SearchStrategy.DEFAULT: FomsRequest.create_datetime,
}


class EnrichedRequest:
    """A stored request plus its status label and badge style. Reads through to the row."""

    def __init__(self, request: FomsRequest, status_value: str):
        self.request = request
        self.status_value = status_value
        self.status_badge = status_badge_variant(request.status_code)

    def __getattr__(self, name):
        # Only reached for names not set on the wrapper itself
        if name == "request":
            raise AttributeError(name)
        return getattr(self.request, name)


@dataclass
class RequestPage:
    page: List[EnrichedRequest]
    is_done: bool
    continue_cursor: str


def encode_cursor(
    strategy: SearchStrategy,
    filters: ListFilters,
    sort_value: datetime,
    request_id: str
) -> str:
    raw = json.dumps({
        "s": strategy.value,
        "f": filters.fingerprint(),
        "k": sort_value.isoformat(),
        "id": request_id,
    })
    return base64.urlsafe_b64encode(raw.encode("utf-8")).decode("ascii")


def decode_cursor(
    cursor: str,
    strategy: SearchStrategy,
    filters: ListFilters
) -> Tuple[datetime, str]:
    """
    Unpack a continuation cursor into (sort value, id).

    The cursor must have been produced by the same filters; a listing whose
    filters change between pages starts over without a cursor.
    """
    try:
        data = json.loads(base64.urlsafe_b64decode(cursor.encode("ascii")))
        cursor_strategy = SearchStrategy(data["s"])
        cursor_filters = str(data["f"])
        sort_value = datetime.fromisoformat(data["k"])
        request_id = str(data["id"])
    except (binascii.Error, UnicodeError, ValueError, KeyError, TypeError):
        raise ValidationError("Invalid pagination cursor.")

    if cursor_strategy != strategy or cursor_filters != filters.fingerprint():
        raise ValidationError("Pagination cursor does not match the current filters.")
    return sort_value, request_id


def _like_pattern(term: str) -> str:
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class RequestQueryRouter:
    """Read side of the request store."""

    def __init__(
        self,
        db: Session,
        catalog: Optional[StatusCatalog] = None,
        default_page_size: int = DEFAULT_PAGE_SIZE
    ):
        self.db = db
        self.catalog = catalog or StatusCatalog(db)
        self.default_page_size = default_page_size

    def _base_query(self, strategy: SearchStrategy, filters: ListFilters) -> Query:
        query = self.db.query(FomsRequest)

        if strategy == SearchStrategy.SEARCH:
            for term in filters.search_query.split():
                query = query.filter(
                    FomsRequest.search_text.ilike(_like_pattern(term), escape="\\")
                )
            if filters.has_status:
                query = query.filter(FomsRequest.status_code == filters.status_code)
            return query

        if strategy in (SearchStrategy.STATUS_AND_RANGE, SearchStrategy.STATUS_ONLY):
            query = query.filter(FomsRequest.status_code == filters.status_code)

        if strategy in (SearchStrategy.STATUS_AND_RANGE, SearchStrategy.RANGE_ONLY):
            # Missing bounds are open-ended; both bounds are inclusive
            if filters.date_from is not None:
                query = query.filter(
                    FomsRequest.requested_datetime >= as_utc_naive(filters.date_from)
                )
            if filters.date_to is not None:
                query = query.filter(
                    FomsRequest.requested_datetime <= as_utc_naive(filters.date_to)
                )

        return query

    def list_requests(
        self,
        filters: Optional[ListFilters] = None,
        cursor: Optional[str] = None,
        page_size: Optional[int] = None
    ) -> RequestPage:
        """
        One page of requests for the given filters.

        Pagination is keyset-based on (sort column, id), so rows inserted
        between page fetches never repeat or push already returned rows
        onto the next page.
        """
        filters = filters or ListFilters()
        if page_size is None:
            page_size = self.default_page_size
        if page_size < 1:
            raise ValidationError("Page size must be at least 1.")

        strategy = select_strategy(filters)
        sort_column = SORT_COLUMNS[strategy]
        query = self._base_query(strategy, filters)

        if cursor:
            sort_value, last_id = decode_cursor(cursor, strategy, filters)
            query = query.filter(
                or_(
                    sort_column < sort_value,
                    and_(sort_column == sort_value, FomsRequest.id < last_id)
                )
            )

        rows = (
            query.order_by(sort_column.desc(), FomsRequest.id.desc())
            .limit(page_size + 1)
            .all()
        )
        is_done = len(rows) <= page_size
        rows = rows[:page_size]

        continue_cursor = ""
        if not is_done:
            last = rows[-1]
            continue_cursor = encode_cursor(
                strategy, filters, getattr(last, sort_column.key), last.id
            )

        logger.debug(
            "Listed %d requests via %s (done=%s)", len(rows), strategy.value, is_done
        )
        labels = self.catalog.label_map()
        return RequestPage(
            page=[self._enrich(row, labels) for row in rows],
            is_done=is_done,
            continue_cursor=continue_cursor
        )

    def get_request(self, request_id: str) -> Optional[EnrichedRequest]:
        """The enriched request, or None when the id does not exist."""
        row = self.db.query(FomsRequest).filter(FomsRequest.id == request_id).first()
        if row is None:
            return None
        return EnrichedRequest(row, self.catalog.label_for(row.status_code))

    @staticmethod
    def _enrich(row: FomsRequest, labels: Dict[str, str]) -> EnrichedRequest:
        return EnrichedRequest(row, labels.get(row.status_code, row.status_code))
