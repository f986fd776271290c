from campusvote.models.admin import Admin
from campusvote.models.candidate import Candidate
from campusvote.models.election import Election
from campusvote.models.vote import Vote
from campusvote.models.voter import Voter

__all__ = [
    "Admin",
    "Election",
    "Candidate",
    "Voter",
    "Vote",
]
