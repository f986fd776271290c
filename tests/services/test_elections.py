import pytest

from campusvote.models import Election
from campusvote.services.elections import ElectionService
from campusvote.services.errors import ConflictError, NotFoundError, ValidationError


def test_election_lifecycle(db_session):
    service = ElectionService(db_session)

    election = service.create_election("  Cultural Secretary  ", "Annual fest lead")
    assert election.title == "Cultural Secretary"
    assert election.status == Election.DRAFT
    assert service.is_election_active() is False

    service.activate_election(election.id)
    assert service.get_active_election().id == election.id
    assert election.activated_at is not None

    service.close_election(election.id)
    assert election.status == Election.CLOSED
    assert election.closed_at is not None
    assert service.get_active_election() is None

    with pytest.raises(ConflictError):
        service.activate_election(election.id)


def test_only_one_election_may_be_active(db_session, active_election):
    service = ElectionService(db_session)
    second = service.create_election("Hostel Warden Rep")

    with pytest.raises(ConflictError):
        service.activate_election(second.id)

    db_session.expire_all()
    assert db_session.get(Election, second.id).status == Election.DRAFT

    # Re-activating the active election is a no-op.
    assert service.activate_election(active_election.id).is_active


def test_close_requires_active_election(db_session, draft_election):
    with pytest.raises(ConflictError):
        ElectionService(db_session).close_election(draft_election.id)


def test_missing_and_invalid_elections(db_session):
    service = ElectionService(db_session)

    with pytest.raises(ValidationError):
        service.create_election("   ")
    with pytest.raises(NotFoundError):
        service.get_election(12345)
    with pytest.raises(NotFoundError):
        service.activate_election(12345)


def test_list_elections(db_session, active_election, draft_election):
    titles = {election.title for election in ElectionService(db_session).list_elections()}

    assert titles == {active_election.title, draft_election.title}
