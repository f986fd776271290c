from dataclasses import dataclass
from typing import Any, Optional

from flask import current_app
from sqlalchemy.exc import IntegrityError

from campusvote.models import Candidate, Election, Vote, Voter
from campusvote.services.errors import (
    ConflictError,
    DuplicateVote,
    ElectionNotActive,
    IneligibleCandidate,
    IneligibleVoter,
    ValidationError,
)
from campusvote.services.store import store_errors
from campusvote.services.voting.ledger import VoteLedger
from campusvote.services.voting.tally import TallyStore


@dataclass(frozen=True)
class CastResult:
    accepted: bool
    vote: Optional[Any] = None
    reason: Optional[str] = None
    message: Optional[str] = None

    @classmethod
    def rejected(cls, error):
        return cls(accepted=False, reason=error.code, message=error.message)


class VoteAdmission:
    """Admit at most one vote per voter per election.

    The eligibility checks, the ledger insert, the tally increment and the
    voter's has-voted flag all run in one transaction. Any failure rolls the
    whole unit back, so a vote is never visible without its tally increment.
    """

    def __init__(self, session, ledger=None, tally=None):
        self.session = session
        self.ledger = ledger or VoteLedger(session)
        self.tally = tally or TallyStore(session, ledger=self.ledger)

    def cast_vote(self, voter_id, candidate_id, election_id):
        """Return a CastResult; TransientStoreFailure propagates for the caller to retry."""
        try:
            vote = self.admit(voter_id, candidate_id, election_id)
        except (ValidationError, ConflictError) as exc:
            current_app.logger.info(
                "Vote rejected: voter=%s candidate=%s election=%s reason=%s",
                voter_id,
                candidate_id,
                election_id,
                exc.code,
            )
            return CastResult.rejected(exc)
        return CastResult(accepted=True, vote=vote)

    def admit(self, voter_id, candidate_id, election_id):
        try:
            with store_errors(self.session, "casting vote"):
                vote = self._admit(voter_id, candidate_id, election_id)
        except IntegrityError as exc:
            raise self.ledger.rejection_for(voter_id, election_id) from exc

        current_app.logger.info(
            "Vote accepted: vote=%s voter=%s candidate=%s election=%s",
            vote.id,
            voter_id,
            candidate_id,
            election_id,
        )
        return vote

    def _admit(self, voter_id, candidate_id, election_id):
        # Lock order is election (shared), voter, candidate for every admission.
        election = (
            self.session.query(Election)
            .filter_by(id=election_id)
            .with_for_update(read=True)
            .first()
        )
        if election is None:
            raise ElectionNotActive(f"Election {election_id} does not exist.")
        if not election.is_active:
            raise ElectionNotActive(f"Election {election_id} is not active.")

        voter = (
            self.session.query(Voter)
            .filter_by(id=voter_id)
            .with_for_update()
            .first()
        )
        if voter is None:
            raise IneligibleVoter(f"Voter {voter_id} does not exist.")
        if not voter.is_approved:
            raise IneligibleVoter(f"Voter {voter_id} is not approved.")

        # Locked before the vote insert checks its foreign key.
        candidate = (
            self.session.query(Candidate)
            .filter_by(id=candidate_id)
            .with_for_update()
            .first()
        )
        if candidate is None:
            raise IneligibleCandidate(f"Candidate {candidate_id} does not exist.")
        if candidate.election_id != election.id:
            raise IneligibleCandidate(
                f"Candidate {candidate_id} is not standing in election {election_id}."
            )
        if not candidate.is_approved:
            raise IneligibleCandidate(f"Candidate {candidate_id} is not approved.")

        # Checked against the ledger, not the voter's summary flag.
        if self.ledger.has_voted(voter_id, election_id):
            raise DuplicateVote(
                f"Voter {voter_id} has already voted in election {election_id}."
            )

        self.tally.increment(candidate_id)
        vote = Vote(
            voter_id=voter_id,
            candidate_id=candidate_id,
            election_id=election_id,
        )
        self.ledger.append(vote)
        self.session.query(Voter).filter_by(id=voter_id).update(
            {"has_voted": True}, synchronize_session=False
        )
        # Detached so the commit does not expire the returned vote.
        self.session.expunge(vote)
        self.session.commit()
        return vote
