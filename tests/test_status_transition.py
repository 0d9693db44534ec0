"""Tests for approve/deny transitions."""
import pytest

from foms.models.domain import FomsRequest
from foms.services.errors import AuthorizationError, NotFoundError, ValidationError
from foms.services.status_transition import StatusTransition


def _stored(db_session, request_id):
    db_session.expire_all()
    return db_session.query(FomsRequest).filter(FomsRequest.id == request_id).first()


class TestAuthorization:

    @pytest.mark.parametrize("target", ["A", "D", "C", "R"])
    def test_signed_out_caller_is_always_refused(self, db_session, make_request, target):
        """INVARIANT: no identity, no transition - whatever the target status."""
        request_id = make_request()

        with pytest.raises(AuthorizationError):
            StatusTransition(db_session).update_status(
                None, request_id, target, denied_description="Some reason"
            )

        assert _stored(db_session, request_id).status_code == "R"


class TestValidation:

    def test_unknown_id_is_not_found(self, db_session, identity):
        with pytest.raises(NotFoundError):
            StatusTransition(db_session).update_status(identity, "no-such-id", "A")

    @pytest.mark.parametrize("reason", [None, "", "   "])
    def test_deny_without_reason_is_refused(self, db_session, make_request, identity, reason):
        """INVARIANT: denial needs a non-blank reason and leaves status untouched otherwise."""
        request_id = make_request()

        with pytest.raises(ValidationError):
            StatusTransition(db_session).update_status(
                identity, request_id, "D", denied_description=reason
            )

        stored = _stored(db_session, request_id)
        assert stored.status_code == "R"
        assert stored.denied_description is None

    def test_unknown_status_code_is_refused(self, db_session, make_request, identity):
        request_id = make_request()

        with pytest.raises(ValidationError):
            StatusTransition(db_session).update_status(identity, request_id, "X")


class TestApplyTransition:

    def test_approve(self, db_session, make_request, identity):
        request_id = make_request()

        StatusTransition(db_session).update_status(identity, request_id, "A")

        stored = _stored(db_session, request_id)
        assert stored.status_code == "A"
        assert stored.denied_description is None

    def test_deny_stores_trimmed_reason_and_refreshes_search_text(
        self, db_session, make_request, identity
    ):
        request_id = make_request()

        StatusTransition(db_session).update_status(
            identity, request_id, "D", denied_description="  Missing paperwork  "
        )

        stored = _stored(db_session, request_id)
        assert stored.status_code == "D"
        assert stored.denied_description == "Missing paperwork"
        assert stored.search_text.endswith(" Missing paperwork")

    def test_prior_status_is_not_checked(self, db_session, make_request, identity):
        """An approved request can still be denied afterwards."""
        request_id = make_request()
        transition = StatusTransition(db_session)

        transition.update_status(identity, request_id, "A")
        transition.update_status(identity, request_id, "D", denied_description="Revoked")

        assert _stored(db_session, request_id).status_code == "D"

    def test_creation_time_is_unchanged(self, db_session, make_request, identity):
        request_id = make_request()
        created = _stored(db_session, request_id).create_datetime

        StatusTransition(db_session).update_status(identity, request_id, "A")

        assert _stored(db_session, request_id).create_datetime == created


class TestDenialReasonOnlyWhenDenied:
    """INVARIANT: a denial reason is present if and only if the request is Denied."""

    def test_approving_a_denied_request_clears_the_reason(self, db_session, make_request, identity):
        request_id = make_request()
        transition = StatusTransition(db_session)
        transition.update_status(identity, request_id, "D", denied_description="Missing paperwork")

        transition.update_status(identity, request_id, "A")

        stored = _stored(db_session, request_id)
        assert stored.status_code == "A"
        assert stored.denied_description is None
        assert "Missing paperwork" not in stored.search_text

    def test_reason_passed_with_approval_is_ignored(self, db_session, make_request, identity):
        request_id = make_request()

        StatusTransition(db_session).update_status(
            identity, request_id, "A", denied_description="looks fine"
        )

        stored = _stored(db_session, request_id)
        assert stored.denied_description is None
        assert "looks fine" not in stored.search_text
