from flask import current_app

from campusvote.models import Candidate, Election, Vote
from campusvote.services.errors import ConflictError, NotFoundError, ValidationError
from campusvote.services.store import commit, store_errors, store_read

EDITABLE_FIELDS = ("name", "department", "photo_path", "description_path")


class CandidateService:
    def __init__(self, session):
        self.session = session

    def register_candidate(
        self,
        election_id,
        roll_number,
        name,
        department=None,
        symbol_filename=None,
        photo_path=None,
        description_path=None,
    ):
        roll_number = (roll_number or "").strip()
        name = (name or "").strip()
        if not roll_number or not name:
            raise ValidationError("Candidate roll number and name are required.")
        with store_errors(self.session, "registering candidate"):
            election = self.session.get(Election, election_id)
        if election is None:
            raise NotFoundError(f"Election {election_id} not found.")

        candidate = Candidate(
            election_id=election_id,
            roll_number=roll_number,
            name=name,
            department=department,
            symbol_filename=symbol_filename,
            photo_path=photo_path,
            description_path=description_path,
            is_approved=False,
            vote_count=0,
        )
        self.session.add(candidate)
        commit(self.session, "registering candidate")
        current_app.logger.info(
            "Candidate %s registered for election %s", candidate.id, election_id
        )
        return candidate

    @store_read("loading candidate")
    def get_candidate(self, candidate_id):
        candidate = self.session.get(Candidate, candidate_id)
        if candidate is None:
            raise NotFoundError(f"Candidate {candidate_id} not found.")
        return candidate

    @store_read("listing candidates")
    def list_candidates(self, election_id=None):
        query = self.session.query(Candidate)
        if election_id is not None:
            query = query.filter_by(election_id=election_id)
        return query.order_by(Candidate.name.asc(), Candidate.id.asc()).all()

    def list_pending(self, election_id=None):
        return [c for c in self.list_candidates(election_id) if not c.is_approved]

    def list_approved(self, election_id=None):
        return [c for c in self.list_candidates(election_id) if c.is_approved]

    def approve_candidate(self, candidate_id):
        candidate = self.get_candidate(candidate_id)
        candidate.is_approved = True
        commit(self.session, "approving candidate")
        current_app.logger.info("Candidate %s approved", candidate_id)
        return candidate

    def update_candidate(self, candidate_id, **fields):
        unknown = set(fields) - set(EDITABLE_FIELDS)
        if unknown:
            raise ValidationError(f"Cannot update fields: {', '.join(sorted(unknown))}")
        if "name" in fields and not (fields["name"] or "").strip():
            raise ValidationError("Candidate name is required.")

        candidate = self.get_candidate(candidate_id)
        for field, value in fields.items():
            setattr(candidate, field, value.strip() if field == "name" else value)
        commit(self.session, "updating candidate")
        return candidate

    def delete_candidate(self, candidate_id):
        with store_errors(self.session, "deleting candidate"):
            candidate = self.get_candidate(candidate_id)
            if self.session.query(Vote.id).filter_by(candidate_id=candidate.id).first():
                raise ConflictError(f"Candidate {candidate_id} has recorded votes.")
            self.session.delete(candidate)
            self.session.commit()
        current_app.logger.info("Candidate %s deleted", candidate_id)
