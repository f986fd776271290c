from flask import current_app, request

from campusvote.extensions import db
from campusvote.services.elections import ElectionService
from campusvote.services.errors import NotFoundError, TransientStoreFailure
from campusvote.services.store import store_errors
from campusvote.services.voters import VoterService
from campusvote.services.voting import (
    TallyStore,
    VoteAdmission,
    VoteLedger,
    tally_election,
)

REJECTION_STATUS = {"DUPLICATE_VOTE": 409}


def serialize_vote(vote):
    return {
        "id": vote.id,
        "voter_id": vote.voter_id,
        "candidate_id": vote.candidate_id,
        "election_id": vote.election_id,
        "voted_at": vote.voted_at.isoformat(),
    }


def register_voting_routes(app):
    @app.route("/elections/<int:election_id>/votes", methods=["POST"])
    def cast_vote(election_id):
        data = request.get_json(silent=True) or {}
        voter_id = str(data.get("voter_id") or "").strip()
        password = data.get("password") or ""
        candidate_id = data.get("candidate_id")

        if (
            not voter_id
            or not isinstance(candidate_id, int)
            or isinstance(candidate_id, bool)
        ):
            return {"ok": False, "error": "voter_id and candidate_id are required."}, 400

        try:
            with store_errors(db.session, "authenticating voter"):
                voter = VoterService(db.session).authenticate_voter(voter_id, password)
            if voter is None:
                return {"ok": False, "error": "Invalid voter credentials."}, 401

            result = VoteAdmission(db.session).cast_vote(
                voter.id, candidate_id, election_id
            )
        except TransientStoreFailure as exc:
            current_app.logger.error("Vote for election %s not recorded: %s", election_id, exc)
            return {"ok": False, "error": exc.message, "retryable": True}, 503

        if not result.accepted:
            status = REJECTION_STATUS.get(result.reason, 422)
            return {"ok": False, "reason": result.reason, "error": result.message}, status

        return {"ok": True, "vote": serialize_vote(result.vote)}, 201

    @app.route("/elections/<int:election_id>/votes")
    def election_votes(election_id):
        try:
            with store_errors(db.session, "listing votes"):
                ElectionService(db.session).get_election(election_id)
                votes = VoteLedger(db.session).list_by_election(election_id)
        except NotFoundError as exc:
            return {"ok": False, "error": exc.message}, 404
        except TransientStoreFailure as exc:
            return {"ok": False, "error": exc.message, "retryable": True}, 503

        return {"ok": True, "votes": [serialize_vote(vote) for vote in votes]}

    @app.route("/elections/<int:election_id>/results")
    def election_results(election_id):
        try:
            with store_errors(db.session, "tallying election"):
                election = ElectionService(db.session).get_election(election_id)
                result = tally_election(election, TallyStore(db.session))
        except NotFoundError as exc:
            return {"ok": False, "error": exc.message}, 404
        except TransientStoreFailure as exc:
            return {"ok": False, "error": exc.message, "retryable": True}, 503

        return {
            "ok": True,
            "election": {
                "id": election.id,
                "title": election.title,
                "status": election.status,
            },
            "total_votes": result["total_votes"],
            "is_tie": result["is_tie"],
            "top_vote_count": result["top_vote_count"],
            "winner_ids": [candidate.id for candidate in result["winners"]],
            "candidate_results": [
                {
                    "id": row["candidate"].id,
                    "name": row["candidate"].name,
                    "count": row["count"],
                    "percent": row["percent"],
                }
                for row in result["candidate_results"]
            ],
        }

    @app.route("/candidates/<int:candidate_id>/tally")
    def candidate_tally(candidate_id):
        try:
            with store_errors(db.session, "reading tally"):
                count = TallyStore(db.session).get_tally(candidate_id)
        except NotFoundError as exc:
            return {"ok": False, "error": exc.message}, 404
        except TransientStoreFailure as exc:
            return {"ok": False, "error": exc.message, "retryable": True}, 503

        return {"ok": True, "candidate_id": candidate_id, "count": count}
