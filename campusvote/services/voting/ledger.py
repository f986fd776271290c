from campusvote.models import Vote
from campusvote.services.errors import ConflictError, DuplicateVote
from campusvote.services.store import store_read


class VoteLedger:
    """Append-only record of accepted votes.

    The votes table carries a unique constraint on (voter_id, election_id), so
    the database itself refuses a second vote for the same voter and election
    even when two admissions race past the application check.
    """

    def __init__(self, session):
        self.session = session

    def append(self, vote):
        """Stage ``vote`` in the caller's transaction and return its id.

        The caller owns the transaction. A constraint violation propagates as
        ``IntegrityError``; once the caller has rolled back, ``rejection_for``
        turns it into DuplicateVote.
        """
        self.session.add(vote)
        self.session.flush()
        return vote.id

    def rejection_for(self, voter_id, election_id):
        """Classify a failed append. Call only after the rollback."""
        if self.has_voted(voter_id, election_id):
            return DuplicateVote(
                f"Voter {voter_id} has already voted in election {election_id}."
            )
        return ConflictError("Vote could not be recorded.")

    @store_read("reading vote")
    def get_vote(self, voter_id, election_id):
        return (
            self.session.query(Vote)
            .filter_by(voter_id=voter_id, election_id=election_id)
            .first()
        )

    @store_read("checking ledger")
    def has_voted(self, voter_id, election_id):
        return (
            self.session.query(Vote.id)
            .filter_by(voter_id=voter_id, election_id=election_id)
            .first()
            is not None
        )

    @store_read("listing votes")
    def list_by_election(self, election_id):
        return (
            self.session.query(Vote)
            .filter_by(election_id=election_id)
            .order_by(Vote.voted_at.desc(), Vote.id.desc())
            .all()
        )

    @store_read("listing votes")
    def list_all(self):
        return self.session.query(Vote).order_by(Vote.voted_at.desc(), Vote.id.desc()).all()

    @store_read("counting votes")
    def count_by_candidate(self, candidate_id):
        return self.session.query(Vote).filter_by(candidate_id=candidate_id).count()

    @store_read("counting votes")
    def count_by_election(self, election_id):
        return self.session.query(Vote).filter_by(election_id=election_id).count()

    @store_read("checking ledger")
    def has_votes_for_voter(self, voter_id):
        return self.session.query(Vote.id).filter_by(voter_id=voter_id).first() is not None
