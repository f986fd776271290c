class CampusVoteError(Exception):
    code = "ERROR"
    retryable = False

    def __init__(self, message=None):
        super().__init__(message or self.code)
        self.message = message or self.code


class NotFoundError(CampusVoteError):
    code = "NOT_FOUND"


class ValidationError(CampusVoteError):
    code = "VALIDATION_ERROR"


class IneligibleVoter(ValidationError):
    code = "INELIGIBLE_VOTER"


class IneligibleCandidate(ValidationError):
    code = "INELIGIBLE_CANDIDATE"


class ElectionNotActive(ValidationError):
    code = "ELECTION_NOT_ACTIVE"


class ConflictError(CampusVoteError):
    code = "CONFLICT"


class DuplicateVote(ConflictError):
    code = "DUPLICATE_VOTE"


class TransientStoreFailure(CampusVoteError):
    """The database could not complete the unit of work; safe to retry."""

    code = "STORE_UNAVAILABLE"
    retryable = True
