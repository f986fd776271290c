import pytest

from campusvote.services.candidates import CandidateService
from campusvote.services.errors import ConflictError, NotFoundError, ValidationError
from campusvote.services.voting import VoteAdmission


def test_register_and_approve_candidate(db_session, active_election):
    service = CandidateService(db_session)

    zara = service.register_candidate(
        active_election.id, "C020", "Zara Khan", department="Law", symbol_filename="lamp.png"
    )
    ivan = service.register_candidate(active_election.id, "C021", "Ivan Roy")

    assert zara.is_approved is False
    assert zara.vote_count == 0
    assert [c.name for c in service.list_candidates()] == ["Ivan Roy", "Zara Khan"]
    assert [c.id for c in service.list_pending(active_election.id)] == [ivan.id, zara.id]

    service.approve_candidate(zara.id)

    assert [c.id for c in service.list_approved()] == [zara.id]
    assert [c.id for c in service.list_pending()] == [ivan.id]


def test_register_candidate_validation(db_session, active_election):
    service = CandidateService(db_session)

    with pytest.raises(ValidationError):
        service.register_candidate(active_election.id, "", "No Roll")
    with pytest.raises(NotFoundError):
        service.register_candidate(777, "C030", "Nobody")


def test_update_candidate(db_session, candidate):
    service = CandidateService(db_session)

    updated = service.update_candidate(candidate.id, name=" Asha R. ", department="Maths")
    assert updated.name == "Asha R."
    assert updated.department == "Maths"

    with pytest.raises(ValidationError):
        service.update_candidate(candidate.id, vote_count=99)
    with pytest.raises(ValidationError):
        service.update_candidate(candidate.id, name="  ")


def test_delete_candidate_refused_once_voted(db_session, voter, candidate, active_election):
    service = CandidateService(db_session)
    VoteAdmission(db_session).cast_vote(voter.id, candidate.id, active_election.id)

    with pytest.raises(ConflictError):
        service.delete_candidate(candidate.id)
    assert service.get_candidate(candidate.id).name == "Asha Rao"


def test_delete_candidate_without_votes(db_session, candidate):
    service = CandidateService(db_session)
    candidate_id = candidate.id

    service.delete_candidate(candidate_id)

    with pytest.raises(NotFoundError):
        service.get_candidate(candidate_id)
