from flask import current_app
from sqlalchemy import func, update

from campusvote.models import Candidate, Election, Vote
from campusvote.services.errors import NotFoundError
from campusvote.services.store import store_errors, store_read
from campusvote.services.voting.ledger import VoteLedger

TALLY_MODES = ("derived", "cached")


class TallyStore:
    """Per-candidate vote counts.

    In ``derived`` mode every read counts ledger rows, so the ledger is the
    only source of truth. In ``cached`` mode reads come from
    ``Candidate.vote_count``, which vote admission bumps inside the same
    transaction as the ledger insert.
    """

    def __init__(self, session, ledger=None, mode=None):
        if mode is None:
            mode = current_app.config.get("TALLY_MODE", "derived")
        if mode not in TALLY_MODES:
            raise ValueError(f"Unknown tally mode: {mode!r}")
        self.session = session
        self.ledger = ledger or VoteLedger(session)
        self.mode = mode

    def increment(self, candidate_id):
        # Single UPDATE so concurrent increments never read-modify-write.
        result = self.session.execute(
            update(Candidate)
            .where(Candidate.id == candidate_id)
            .values(vote_count=Candidate.vote_count + 1)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount != 1:
            raise NotFoundError(f"Candidate {candidate_id} not found.")

    @store_read("reading tally")
    def get_tally(self, candidate_id):
        vote_count = (
            self.session.query(Candidate.vote_count).filter_by(id=candidate_id).first()
        )
        if vote_count is None:
            raise NotFoundError(f"Candidate {candidate_id} not found.")
        if self.mode == "cached":
            return vote_count[0]
        return self.ledger.count_by_candidate(candidate_id)

    @store_read("reading vote total")
    def get_total_votes(self, election_id):
        if self.session.get(Election, election_id) is None:
            raise NotFoundError(f"Election {election_id} not found.")
        if self.mode == "cached":
            total = (
                self.session.query(func.coalesce(func.sum(Candidate.vote_count), 0))
                .filter(Candidate.election_id == election_id)
                .scalar()
            )
            return int(total)
        return self.ledger.count_by_election(election_id)

    @store_read("reading tallies")
    def counts_for_election(self, election_id):
        """Return ``{candidate_id: count}`` for every candidate of the election."""
        candidates = (
            self.session.query(Candidate.id, Candidate.vote_count)
            .filter(Candidate.election_id == election_id)
            .all()
        )
        if self.mode == "cached":
            return {candidate_id: count for candidate_id, count in candidates}

        counts = {candidate_id: 0 for candidate_id, _ in candidates}
        rows = (
            self.session.query(Vote.candidate_id, func.count(Vote.id))
            .filter(Vote.election_id == election_id)
            .group_by(Vote.candidate_id)
            .all()
        )
        for candidate_id, count in rows:
            if candidate_id in counts:
                counts[candidate_id] = count
        return counts

    def reconcile(self, election_id):
        """Rewrite cached counters from the ledger; return the corrected candidate ids."""
        corrected = []
        with store_errors(self.session, "reconciling tallies"):
            candidates = (
                self.session.query(Candidate)
                .filter(Candidate.election_id == election_id)
                .with_for_update()
                .all()
            )
            for candidate in candidates:
                actual = self.ledger.count_by_candidate(candidate.id)
                if candidate.vote_count != actual:
                    current_app.logger.warning(
                        "Tally drift for candidate %s: cached=%s ledger=%s",
                        candidate.id,
                        candidate.vote_count,
                        actual,
                    )
                    candidate.vote_count = actual
                    corrected.append(candidate.id)
            self.session.commit()
        return corrected
