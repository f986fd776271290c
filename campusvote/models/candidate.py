from campusvote.extensions import db


class Candidate(db.Model):
    __tablename__ = "candidates"

    id = db.Column(db.Integer, primary_key=True)
    election_id = db.Column(
        db.Integer, db.ForeignKey("elections.id"), nullable=False, index=True
    )
    roll_number = db.Column(db.String(50), nullable=False)
    name = db.Column(db.String(200), nullable=False)
    department = db.Column(db.String(200), nullable=True)
    symbol_filename = db.Column(db.String(255), nullable=True)
    photo_path = db.Column(db.String(255), nullable=True)
    description_path = db.Column(db.String(255), nullable=True)
    is_approved = db.Column(db.Boolean, nullable=False, default=False)
    # Denormalized; kept equal to the ledger count by vote admission.
    vote_count = db.Column(db.Integer, nullable=False, default=0)

    votes = db.relationship("Vote", backref="candidate", lazy=True)
