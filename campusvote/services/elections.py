from datetime import datetime, timezone

from flask import current_app

from campusvote.models import Election
from campusvote.services.errors import ConflictError, NotFoundError, ValidationError
from campusvote.services.store import commit, store_errors, store_read


class ElectionService:
    """Election lifecycle: DRAFT -> ACTIVE -> CLOSED, one ACTIVE at a time."""

    def __init__(self, session):
        self.session = session

    def create_election(self, title, description=None):
        title = (title or "").strip()
        if not title:
            raise ValidationError("Election title is required.")

        election = Election(
            title=title,
            description=(description or "").strip() or None,
            status=Election.DRAFT,
        )
        self.session.add(election)
        commit(self.session, "creating election")
        current_app.logger.info("Election %s created: %s", election.id, election.title)
        return election

    @store_read("loading election")
    def get_election(self, election_id):
        election = self.session.get(Election, election_id)
        if election is None:
            raise NotFoundError(f"Election {election_id} not found.")
        return election

    @store_read("listing elections")
    def list_elections(self):
        return self.session.query(Election).order_by(Election.created_at.desc()).all()

    @store_read("loading active election")
    def get_active_election(self):
        return self.session.query(Election).filter_by(status=Election.ACTIVE).first()

    def is_election_active(self):
        return self.get_active_election() is not None

    def activate_election(self, election_id):
        with store_errors(self.session, "activating election"):
            election = self._lock(election_id)
            if election.status == Election.CLOSED:
                raise ConflictError(f"Election {election_id} is closed and cannot reopen.")
            if election.is_active:
                return election

            other = (
                self.session.query(Election)
                .filter(Election.status == Election.ACTIVE, Election.id != election.id)
                .with_for_update()
                .first()
            )
            if other is not None:
                raise ConflictError(f"Election {other.id} is already active.")

            election.status = Election.ACTIVE
            election.activated_at = datetime.now(timezone.utc)
            self.session.commit()

        current_app.logger.info("Election %s activated", election_id)
        return election

    def close_election(self, election_id):
        with store_errors(self.session, "closing election"):
            # Exclusive lock waits for admissions holding the shared lock.
            election = self._lock(election_id)
            if election.status != Election.ACTIVE:
                raise ConflictError(f"Election {election_id} is not active.")
            election.status = Election.CLOSED
            election.closed_at = datetime.now(timezone.utc)
            self.session.commit()

        current_app.logger.info("Election %s closed", election_id)
        return election

    def _lock(self, election_id):
        election = (
            self.session.query(Election)
            .filter_by(id=election_id)
            .with_for_update()
            .first()
        )
        if election is None:
            raise NotFoundError(f"Election {election_id} not found.")
        return election
