from flask import current_app
from sqlalchemy.exc import IntegrityError

from campusvote.models import Voter
from campusvote.services.errors import ConflictError, NotFoundError, ValidationError
from campusvote.services.security import generate_voter_id, hash_password, verify_password
from campusvote.services.store import commit, store_errors, store_read
from campusvote.services.voting.ledger import VoteLedger

EDITABLE_FIELDS = ("full_name", "department", "year_of_study", "email")


class VoterService:
    def __init__(self, session, ledger=None):
        self.session = session
        self.ledger = ledger or VoteLedger(session)

    def register_voter(
        self,
        roll_number,
        full_name,
        password,
        department=None,
        year_of_study=None,
        email=None,
    ):
        roll_number = (roll_number or "").strip()
        full_name = (full_name or "").strip()
        if not roll_number or not full_name:
            raise ValidationError("Voter roll number and full name are required.")
        if not password or len(password) < 8:
            raise ValidationError("Password must be at least 8 characters long.")
        if self.voter_exists(roll_number):
            raise ConflictError(f"Roll number {roll_number} is already registered.")

        voter = Voter(
            id=generate_voter_id(roll_number),
            roll_number=roll_number,
            full_name=full_name,
            department=department,
            year_of_study=year_of_study,
            email=(email or "").strip().lower() or None,
            password_hash=hash_password(password),
            is_approved=False,
            has_voted=False,
        )
        self.session.add(voter)
        try:
            commit(self.session, "registering voter")
        except IntegrityError as exc:
            raise ConflictError(f"Roll number {roll_number} is already registered.") from exc

        current_app.logger.info("Voter %s registered", voter.id)
        return voter

    @store_read("authenticating voter")
    def authenticate_voter(self, voter_id, password):
        """Return the approved voter for valid credentials, otherwise None."""
        voter = self.session.get(Voter, voter_id)
        if voter is None or not voter.is_approved:
            return None
        if not verify_password(voter.password_hash, password):
            current_app.logger.info("Failed login for voter %s", voter_id)
            return None
        return voter

    @store_read("loading voter")
    def get_voter(self, voter_id):
        voter = self.session.get(Voter, voter_id)
        if voter is None:
            raise NotFoundError(f"Voter {voter_id} not found.")
        return voter

    @store_read("checking voter")
    def voter_exists(self, roll_number):
        return (
            self.session.query(Voter.id).filter_by(roll_number=roll_number).first()
            is not None
        )

    @store_read("listing voters")
    def list_voters(self):
        return self.session.query(Voter).order_by(Voter.id.asc()).all()

    @store_read("listing voters")
    def list_approved(self):
        return (
            self.session.query(Voter)
            .filter_by(is_approved=True)
            .order_by(Voter.id.asc())
            .all()
        )

    @store_read("listing voters")
    def list_pending(self):
        return (
            self.session.query(Voter)
            .filter_by(is_approved=False)
            .order_by(Voter.id.asc())
            .all()
        )

    def approve_voter(self, voter_id):
        voter = self.get_voter(voter_id)
        voter.is_approved = True
        commit(self.session, "approving voter")
        current_app.logger.info("Voter %s approved", voter_id)
        return voter

    def update_voter(self, voter_id, password=None, **fields):
        unknown = set(fields) - set(EDITABLE_FIELDS)
        if unknown:
            raise ValidationError(f"Cannot update fields: {', '.join(sorted(unknown))}")
        if "full_name" in fields and not (fields["full_name"] or "").strip():
            raise ValidationError("Voter full name is required.")
        if password is not None and len(password) < 8:
            raise ValidationError("Password must be at least 8 characters long.")

        voter = self.get_voter(voter_id)
        for field, value in fields.items():
            setattr(voter, field, value)
        if password is not None:
            voter.password_hash = hash_password(password)
        commit(self.session, "updating voter")
        return voter

    def delete_voter(self, voter_id):
        with store_errors(self.session, "deleting voter"):
            voter = self.get_voter(voter_id)
            if self.ledger.has_votes_for_voter(voter.id):
                raise ConflictError(f"Voter {voter_id} has recorded votes.")
            self.session.delete(voter)
            self.session.commit()
        current_app.logger.info("Voter %s deleted", voter_id)

    def has_voted(self, voter_id, election_id=None):
        """Per-election answer from the ledger; without an election, the summary flag."""
        voter = self.get_voter(voter_id)
        if election_id is None:
            return voter.has_voted
        return self.ledger.has_voted(voter.id, election_id)
