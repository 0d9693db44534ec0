"""
Approve/deny transitions for requests.

All status changes MUST go through StatusTransition so the denial reason
and the search text stay consistent with the status.
"""
import logging
from typing import Optional

from sqlalchemy.orm import Session

from foms.auth import Identity
from foms.models.domain import FomsRequest
from foms.models.enums import StatusCode
from foms.services.errors import AuthorizationError, NotFoundError, ValidationError
from foms.services.search_text import refresh_search_text

logger = logging.getLogger(__name__)


class StatusTransition:
    """Validates and applies status changes on a single request."""

    def __init__(self, db: Session):
        self.db = db

    def update_status(
        self,
        identity: Optional[Identity],
        request_id: str,
        status_code: str,
        denied_description: Optional[str] = None
    ) -> FomsRequest:
        """
        Set a request's status, e.g. approve ("A") or deny ("D").

        Rules:
        - The caller must be signed in
        - The request must exist
        - Denying requires a non-blank reason
        - The trimmed reason is kept only when denying; any other target clears it
        - The search text is recomputed on every transition

        The prior status is not checked: any status can be overwritten.
        """
        if identity is None:
            logger.warning("Refused status change on %s: not signed in", request_id)
            raise AuthorizationError("Unauthorized: must be signed in to approve or deny.")

        request = self.db.query(FomsRequest).filter(FomsRequest.id == request_id).first()
        if request is None:
            raise NotFoundError("FOMS request not found.")

        try:
            target = StatusCode(status_code)
        except ValueError:
            raise ValidationError(f"Unknown status code: {status_code!r}")

        reason = denied_description.strip() if denied_description is not None else None
        if target == StatusCode.DENIED and not reason:
            raise ValidationError("Denial reason is required when denying.")

        request.status_code = target.value
        # A denial reason lives only on denied requests
        request.denied_description = reason if target == StatusCode.DENIED else None
        refresh_search_text(request)

        self.db.commit()
        self.db.refresh(request)

        logger.info(
            "Request %s set to %s by %s", request.id, target.value, identity.subject
        )
        return request
