"""Status catalog: the code -> label lookup every listing is enriched with."""
import logging
from typing import Dict, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from foms.models.domain import FomsStatus
from foms.models.enums import STATUS_LABELS

logger = logging.getLogger(__name__)


class StatusCatalog:
    """Repository over the foms_status table."""

    def __init__(self, db: Session):
        self.db = db

    def list(self) -> List[FomsStatus]:
        """All status rows in insertion order."""
        return self.db.query(FomsStatus).order_by(FomsStatus.id).all()

    def label_map(self) -> Dict[str, str]:
        return {row.status_code: row.label for row in self.list()}

    def find(self, status_code: str) -> Optional[FomsStatus]:
        return self.db.query(FomsStatus).filter(FomsStatus.status_code == status_code).first()

    def label_for(self, status_code: str) -> str:
        """Display label for a code; unknown codes display verbatim."""
        row = self.find(status_code)
        return row.label if row else status_code

    def is_empty(self) -> bool:
        return self.db.query(FomsStatus.id).first() is None

    def seed(self) -> int:
        """
        Insert the fixed status rows that are not there yet.

        Idempotent by code. Returns the number of rows inserted. A concurrent
        seeder that wins the race for a code trips the unique constraint on
        status_code; that insert is skipped rather than duplicated.
        """
        inserted = 0
        for code, label in STATUS_LABELS.items():
            if self.find(code.value):
                continue

            self.db.add(FomsStatus(status_code=code.value, label=label))
            try:
                self.db.commit()
            except IntegrityError:
                self.db.rollback()
                logger.warning("Status %s was seeded concurrently, skipping", code.value)
                continue
            inserted += 1

        if inserted:
            logger.info("Seeded %d status catalog rows", inserted)
        return inserted
