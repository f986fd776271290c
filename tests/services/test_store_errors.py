import pytest
from sqlalchemy.exc import OperationalError

from campusvote.models import Election
from campusvote.services.admins import AdminService
from campusvote.services.candidates import CandidateService
from campusvote.services.elections import ElectionService
from campusvote.services.errors import NotFoundError, TransientStoreFailure
from campusvote.services.voters import VoterService
from campusvote.services.voting import TallyStore, VoteLedger


def gone_away(*args, **kwargs):
    raise OperationalError("SELECT", {}, Exception("server has gone away"))


@pytest.fixture()
def store_down(db_session, monkeypatch):
    monkeypatch.setattr(db_session, "get", gone_away)
    monkeypatch.setattr(db_session, "query", gone_away)
    return db_session


def test_lookups_raise_transient_failure(candidate, voter, active_election, store_down):
    with pytest.raises(TransientStoreFailure):
        CandidateService(store_down).approve_candidate(candidate.id)
    with pytest.raises(TransientStoreFailure):
        CandidateService(store_down).list_candidates(active_election.id)
    with pytest.raises(TransientStoreFailure):
        ElectionService(store_down).get_election(active_election.id)
    with pytest.raises(TransientStoreFailure):
        ElectionService(store_down).get_active_election()
    with pytest.raises(TransientStoreFailure):
        VoterService(store_down).get_voter(voter.id)
    with pytest.raises(TransientStoreFailure):
        VoterService(store_down).voter_exists(voter.roll_number)
    with pytest.raises(TransientStoreFailure):
        AdminService(store_down).authenticate_admin("returning_officer", "ballot-box-9")


def test_tally_and_ledger_reads_raise_transient_failure(candidate, active_election, store_down):
    tally = TallyStore(store_down, mode="cached")
    ledger = VoteLedger(store_down)

    with pytest.raises(TransientStoreFailure):
        tally.get_tally(candidate.id)
    with pytest.raises(TransientStoreFailure):
        tally.get_total_votes(active_election.id)
    with pytest.raises(TransientStoreFailure) as excinfo:
        tally.counts_for_election(active_election.id)
    with pytest.raises(TransientStoreFailure):
        ledger.list_by_election(active_election.id)
    with pytest.raises(TransientStoreFailure):
        ledger.count_by_candidate(candidate.id)

    assert excinfo.value.retryable is True
    assert isinstance(excinfo.value.__cause__, OperationalError)


def test_not_found_leaves_the_callers_work_staged(db_session):
    pending = Election(title="Hostel Committee", status=Election.DRAFT)
    db_session.add(pending)

    with pytest.raises(NotFoundError):
        CandidateService(db_session).get_candidate(999)

    assert pending in db_session
