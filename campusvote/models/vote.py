from datetime import datetime, timezone

from campusvote.extensions import db


class Vote(db.Model):
    __tablename__ = "votes"
    __table_args__ = (
        db.UniqueConstraint("voter_id", "election_id", name="uq_votes_voter_election"),
    )

    id = db.Column(db.Integer, primary_key=True)
    voter_id = db.Column(db.String(50), db.ForeignKey("voters.id"), nullable=False)
    candidate_id = db.Column(
        db.Integer, db.ForeignKey("candidates.id"), nullable=False, index=True
    )
    election_id = db.Column(
        db.Integer, db.ForeignKey("elections.id"), nullable=False, index=True
    )
    voted_at = db.Column(
        db.DateTime, nullable=False, default=lambda: datetime.now(timezone.utc)
    )
