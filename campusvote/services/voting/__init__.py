from campusvote.services.voting.admission import CastResult, VoteAdmission
from campusvote.services.voting.ledger import VoteLedger
from campusvote.services.voting.results import tally_election
from campusvote.services.voting.tally import TallyStore

__all__ = [
    "CastResult",
    "TallyStore",
    "VoteAdmission",
    "VoteLedger",
    "tally_election",
]
