from campusvote.extensions import db


class Voter(db.Model):
    __tablename__ = "voters"

    id = db.Column(db.String(50), primary_key=True)
    roll_number = db.Column(db.String(50), unique=True, nullable=False)
    full_name = db.Column(db.String(200), nullable=False)
    department = db.Column(db.String(200), nullable=True)
    year_of_study = db.Column(db.String(20), nullable=True)
    email = db.Column(db.String(200), nullable=True)
    password_hash = db.Column(db.String(255), nullable=False)
    is_approved = db.Column(db.Boolean, nullable=False, default=False)
    # Summary flag only; per-election participation is read from the votes table.
    has_voted = db.Column(db.Boolean, nullable=False, default=False)

    votes = db.relationship("Vote", backref="voter", lazy=True)
