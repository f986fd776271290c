from campusvote.models import Candidate
from campusvote.services.voting import TallyStore, VoteAdmission, tally_election


def test_election_results_tie_between_leaders(db_session, make_voter, active_election):
    alice = Candidate(election_id=active_election.id, roll_number="C1", name="Alice", is_approved=True)
    bob = Candidate(election_id=active_election.id, roll_number="C2", name="Bob", is_approved=True)
    carol = Candidate(election_id=active_election.id, roll_number="C3", name="Carol", is_approved=True)
    pending = Candidate(election_id=active_election.id, roll_number="C4", name="Dan", is_approved=False)
    db_session.add_all([alice, bob, carol, pending])
    db_session.commit()

    # Alice 2, Bob 2, Carol 1 -> tie at the top.
    choices = [("501", bob), ("502", alice), ("503", carol), ("504", alice), ("505", bob)]
    for roll_number, choice in choices:
        voter = make_voter(roll_number)
        VoteAdmission(db_session).cast_vote(voter.id, choice.id, active_election.id)

    result = tally_election(active_election, TallyStore(db_session))

    assert result["total_votes"] == 5
    assert result["top_vote_count"] == 2
    assert result["is_tie"] is True
    assert result["winner"] is None
    assert {candidate.id for candidate in result["winners"]} == {alice.id, bob.id}
    assert [row["candidate"].name for row in result["candidate_results"]] == [
        "Alice",
        "Bob",
        "Carol",
    ]
    assert result["candidate_results"][2]["percent"] == 20.0


def test_election_results_without_votes(db_session, candidate, active_election):
    result = tally_election(active_election, TallyStore(db_session))

    assert result["total_votes"] == 0
    assert result["winners"] == []
    assert result["winner"] is None
    assert result["candidate_results"][0]["percent"] == 0
